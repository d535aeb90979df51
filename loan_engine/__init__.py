"""Simple-interest loan accounting engine."""

__version__ = "0.1.0"
