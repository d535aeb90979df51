"""Balance calculators for simple-interest loans.

Interest is computed once on the original principal for the whole life of
the loan, so the total due never shrinks as principal is repaid.
"""

from decimal import Decimal
from typing import Iterable

from loan_engine.models import Loan, Payment

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def total_interest(loan: Loan | None) -> Decimal:
    """Lifetime simple interest owed on a loan."""
    if loan is None:
        return ZERO
    return loan.principal * loan.interest_rate / HUNDRED


def total_due(loan: Loan | None) -> Decimal:
    """Principal plus lifetime interest.

    Parameters
    ----------
    loan : Loan | None
        Loan snapshot; ``None`` yields zero.

    Returns
    -------
    Decimal
        ``principal * (1 + interest_rate / 100)``.
    """
    if loan is None:
        return ZERO
    return loan.principal + total_interest(loan)


def total_paid(payments: Iterable[Payment]) -> Decimal:
    """Sum of cash received across payments."""
    return sum((p.amount for p in payments), ZERO)


def remaining_balance(loan: Loan | None, payments: Iterable[Payment] = ()) -> Decimal:
    """Amount still owed after all payments, never negative."""
    if loan is None:
        return ZERO
    return max(ZERO, total_due(loan) - total_paid(payments))


def remaining_principal(loan: Loan | None, payments: Iterable[Payment] = ()) -> Decimal:
    """Principal not yet repaid, never negative."""
    if loan is None:
        return ZERO
    principal_paid = sum((p.principal for p in payments), ZERO)
    return max(ZERO, loan.principal - principal_paid)


def installment_amount(loan: Loan | None) -> Decimal:
    """Equal share of the total due per installment.

    A loan without a positive installment count is due in one lump sum,
    so the full total due is returned instead of dividing.
    """
    if loan is None:
        return ZERO
    if not loan.installments or loan.installments <= 0:
        return total_due(loan)
    return total_due(loan) / loan.installments
