"""Loan domain models."""

from loan_engine.models.enums import LoanStatus, PaymentFrequency
from loan_engine.models.loan import Loan, Payment, PaymentSplit, validate_loan

__all__ = [
    "Loan",
    "LoanStatus",
    "Payment",
    "PaymentFrequency",
    "PaymentSplit",
    "validate_loan",
]
