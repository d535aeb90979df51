"""Custom exception hierarchy for loan-engine."""


class LoanEngineError(Exception):
    """Base exception for all loan-engine errors."""


class InvalidLoanError(LoanEngineError):
    """Raised when a loan snapshot violates its field constraints."""


class InvalidPaymentError(LoanEngineError):
    """Raised when a payment cannot be recorded against a loan."""


class ConfigurationError(LoanEngineError):
    """Raised when configuration is invalid or missing."""
