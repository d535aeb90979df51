"""Interest-first payment distribution."""

from decimal import Decimal
from typing import Iterable

from loan_engine.engine.balance import ZERO, total_interest
from loan_engine.models import Loan, Payment, PaymentSplit


def distribute_payment(
    loan: Loan | None,
    payment_amount: Decimal,
    payments: Iterable[Payment] = (),
    *,
    cumulative: bool = False,
) -> PaymentSplit:
    """Split a payment amount into interest and principal.

    Interest is paid first, capped at the loan's lifetime simple interest;
    whatever remains goes to principal. By default each call measures the
    cap against the full lifetime interest, ignoring interest already
    collected by earlier payments. With ``cumulative=True`` the interest
    recorded in ``payments`` is deducted from the cap first.

    Parameters
    ----------
    loan : Loan | None
        Loan snapshot; ``None`` yields a zero split.
    payment_amount : Decimal
        Cash received.
    payments : Iterable[Payment]
        Earlier payments, only consulted when ``cumulative`` is set.
    cumulative : bool
        Track interest already collected.

    Returns
    -------
    PaymentSplit
        Non-negative interest and principal components.
    """
    if loan is None:
        return PaymentSplit()

    payment_amount = Decimal(str(payment_amount))
    interest_due = total_interest(loan)
    if cumulative:
        collected = sum((p.interest for p in payments), ZERO)
        interest_due = max(ZERO, interest_due - collected)

    interest = max(ZERO, min(payment_amount, interest_due))
    principal = max(ZERO, payment_amount - interest)

    return PaymentSplit(interest=interest, principal=principal)
