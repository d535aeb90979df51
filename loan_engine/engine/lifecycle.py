"""Payment recording and loan refresh.

The engine keeps no state: after each new payment the calling layer
records it with :func:`record_payment`, appends it to the history and
calls :func:`refresh_loan` to obtain the snapshot to persist.
"""

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable

from loan_engine.config import DEFAULT_AFTER_DAYS
from loan_engine.engine.distribution import distribute_payment
from loan_engine.engine.schedule import next_payment_date, resolve_date
from loan_engine.engine.status import determine_status
from loan_engine.exceptions import InvalidPaymentError
from loan_engine.logging import loan_context
from loan_engine.models import Loan, LoanStatus, Payment

logger = logging.getLogger(__name__)


def record_payment(
    loan: Loan,
    amount: Decimal,
    payments: Iterable[Payment] = (),
    payment_date: date | datetime | None = None,
    payment_id: str | None = None,
    *,
    cumulative: bool = False,
    notes: str = "",
) -> Payment:
    """Build a payment record with its interest/principal split.

    Parameters
    ----------
    loan : Loan
        Loan being paid.
    amount : Decimal
        Cash received.
    payments : Iterable[Payment]
        Existing payment history of the loan.
    payment_date : date | datetime | None
        Date received (defaults to today).
    payment_id : str | None
        Identifier to use; a UUID4 hex is generated when omitted.
    cumulative : bool
        Forwarded to :func:`distribute_payment`.
    notes : str
        Free-form note kept on the record.

    Returns
    -------
    Payment
        New payment, not yet part of ``payments``.

    Raises
    ------
    InvalidPaymentError
        If the amount is negative or the history belongs to another loan.
    """
    amount = Decimal(str(amount))
    if amount < 0:
        raise InvalidPaymentError(f"Payment amount cannot be negative: {amount}")

    history = list(payments)
    for previous in history:
        if previous.loan_id != loan.loan_id:
            raise InvalidPaymentError(
                f"Payment {previous.payment_id} belongs to loan {previous.loan_id}, "
                f"not {loan.loan_id}"
            )

    split = distribute_payment(loan, amount, history, cumulative=cumulative)

    payment = Payment(
        payment_id=payment_id or uuid.uuid4().hex,
        loan_id=loan.loan_id,
        payment_date=resolve_date(payment_date),
        amount=amount,
        principal=split.principal,
        interest=split.interest,
        notes=notes,
    )

    logger.debug(
        "Recorded payment %s on loan %s: interest=%s principal=%s",
        payment.payment_id,
        loan.loan_id,
        split.interest,
        split.principal,
        extra=loan_context(
            loan.loan_id,
            payment_id=payment.payment_id,
            amount=amount,
            payment_date=payment.payment_date,
        ),
    )
    return payment


def refresh_loan(
    loan: Loan,
    payments: Iterable[Payment] = (),
    today: date | datetime | None = None,
    *,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> Loan:
    """Return a copy of the loan with derived fields recomputed.

    The next payment date moves to the first payment day after the most
    recent payment; without payments it is kept, or derived from the issue
    date when missing. The status is then derived from the updated
    snapshot, the payment history and ``today``.

    Parameters
    ----------
    loan : Loan
        Loan snapshot as last persisted.
    payments : Iterable[Payment]
        Full payment history, including any payment just recorded.
    today : date | datetime | None
        Reference date (defaults to today).
    default_after_days : int
        Days overdue at which a loan counts as defaulted.

    Returns
    -------
    Loan
        New snapshot to persist.
    """
    today = resolve_date(today)
    history = list(payments)

    if history:
        last_paid = max(p.payment_date for p in history)
        next_due = next_payment_date(
            last_paid + timedelta(days=1), loan.payment_day, loan.frequency
        )
    elif loan.next_payment_date is not None:
        next_due = loan.next_payment_date
    else:
        next_due = next_payment_date(loan.issue_date, loan.payment_day, loan.frequency)

    # Stored status is display-only and must not short-circuit the derivation
    updated = replace(loan, next_payment_date=next_due, status=LoanStatus.ACTIVE)
    status = determine_status(
        updated, history, today, default_after_days=default_after_days
    )

    if status == LoanStatus.PAID:
        return replace(loan, status=status)

    logger.debug(
        "Refreshed loan %s: status=%s next_payment_date=%s",
        loan.loan_id,
        status.value,
        next_due.isoformat(),
        extra=loan_context(
            loan.loan_id,
            status=status.value,
            next_payment_date=next_due,
            payments=len(history),
        ),
    )
    return replace(updated, status=status)
