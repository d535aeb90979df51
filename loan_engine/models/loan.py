"""Loan and payment models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from loan_engine.exceptions import InvalidLoanError
from loan_engine.models.enums import LoanStatus, PaymentFrequency


@dataclass(frozen=True)
class Loan:
    """Simple-interest loan snapshot.

    Owned by the calling layer. ``status`` and ``next_payment_date`` are
    derived values kept for display; the engine recomputes them from the
    payment history instead of trusting them.
    """

    loan_id: str
    borrower_name: str
    principal: Decimal
    interest_rate: Decimal  # Percentage over the loan's life (10 -> 10%)
    issue_date: date
    due_date: date
    payment_day: int  # Day of month, 1-31
    frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    installments: int | None = None
    next_payment_date: date | None = None
    status: LoanStatus = LoanStatus.ACTIVE
    created_at: datetime | None = None


@dataclass(frozen=True)
class Payment:
    """Recorded payment against a loan (append-only)."""

    payment_id: str
    loan_id: str
    payment_date: date
    amount: Decimal
    principal: Decimal
    interest: Decimal
    notes: str = ""


@dataclass(frozen=True)
class PaymentSplit:
    """Interest and principal components of a payment amount."""

    interest: Decimal = field(default_factory=lambda: Decimal("0"))
    principal: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def total(self) -> Decimal:
        """Sum of both components."""
        return self.interest + self.principal


def validate_loan(loan: Loan) -> Loan:
    """Check a loan snapshot against its field constraints.

    Parameters
    ----------
    loan : Loan
        Loan to validate.

    Returns
    -------
    Loan
        The same loan, for chaining.

    Raises
    ------
    InvalidLoanError
        If any constraint is violated.
    """
    if loan.principal <= 0:
        raise InvalidLoanError(f"Loan {loan.loan_id}: principal must be positive")
    if loan.interest_rate < 0:
        raise InvalidLoanError(f"Loan {loan.loan_id}: interest rate cannot be negative")
    if loan.due_date < loan.issue_date:
        raise InvalidLoanError(f"Loan {loan.loan_id}: due date precedes issue date")
    if not 1 <= loan.payment_day <= 31:
        raise InvalidLoanError(f"Loan {loan.loan_id}: payment day must be between 1 and 31")
    if loan.installments is not None and loan.installments < 1:
        raise InvalidLoanError(f"Loan {loan.loan_id}: installments must be at least 1")
    return loan
