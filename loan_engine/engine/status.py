"""Loan status derivation.

Status is never stored as a transition history: every call rebuilds it
from the loan snapshot, its payments and the reference date.
"""

import logging
from datetime import date, datetime
from typing import Iterable

from loan_engine.config import DEFAULT_AFTER_DAYS
from loan_engine.engine.balance import remaining_balance
from loan_engine.engine.schedule import resolve_date
from loan_engine.logging import loan_context
from loan_engine.models import Loan, LoanStatus, Payment

logger = logging.getLogger(__name__)


def is_overdue(loan: Loan | None, today: date | datetime | None = None) -> bool:
    """Check whether a loan is past a payment or its final due date.

    Either condition is enough: a past ``next_payment_date`` or a
    reference date after ``due_date``.
    """
    if loan is None or loan.status == LoanStatus.PAID:
        return False

    today = resolve_date(today)

    if loan.next_payment_date is not None and loan.next_payment_date < today:
        return True

    return today > loan.due_date


def days_overdue(loan: Loan | None, today: date | datetime | None = None) -> int:
    """Whole days elapsed since the loan's reference date.

    The reference date is ``next_payment_date`` when set, otherwise
    ``due_date``.

    Parameters
    ----------
    loan : Loan | None
        Loan snapshot.
    today : date | datetime | None
        Reference date (defaults to today).

    Returns
    -------
    int
        Days overdue, zero when not overdue or paid.
    """
    if loan is None or loan.status == LoanStatus.PAID:
        return 0

    today = resolve_date(today)
    check_date = loan.next_payment_date or loan.due_date

    if today > check_date:
        return (today - check_date).days

    return 0


def determine_status(
    loan: Loan | None,
    payments: Iterable[Payment] = (),
    today: date | datetime | None = None,
    *,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> LoanStatus:
    """Derive the status of a loan from its payments and the date.

    Checked in order: fully paid, defaulted (``default_after_days`` or more
    days overdue), overdue, active. A paid loan is never reported overdue
    however late its dates are.

    Parameters
    ----------
    loan : Loan | None
        Loan snapshot; ``None`` is reported as active.
    payments : Iterable[Payment]
        Payment history for the loan.
    today : date | datetime | None
        Reference date (defaults to today).
    default_after_days : int
        Days overdue at which a loan counts as defaulted.

    Returns
    -------
    LoanStatus
        Derived status.
    """
    if loan is None:
        return LoanStatus.ACTIVE

    if remaining_balance(loan, payments) <= 0:
        status = LoanStatus.PAID
    else:
        overdue_days = days_overdue(loan, today)
        if overdue_days >= default_after_days:
            status = LoanStatus.DEFAULTED
        elif overdue_days > 0:
            status = LoanStatus.OVERDUE
        else:
            status = LoanStatus.ACTIVE

    logger.debug(
        "Loan %s derived status %s",
        loan.loan_id,
        status.value,
        extra=loan_context(loan.loan_id, status=status.value),
    )
    return status
