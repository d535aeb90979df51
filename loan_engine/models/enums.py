"""Enumeration types for loan entities."""

from enum import Enum


class LoanStatus(str, Enum):
    ACTIVE = "active"
    OVERDUE = "overdue"
    DEFAULTED = "defaulted"
    PAID = "paid"


class PaymentFrequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"
    CUSTOM = "custom"
