"""Portfolio-level views over many loans."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Mapping, Sequence

from loan_engine.config import DEFAULT_AFTER_DAYS
from loan_engine.engine.balance import (
    ZERO,
    installment_amount,
    remaining_balance,
    total_due,
    total_paid,
)
from loan_engine.engine.schedule import add_months, resolve_date
from loan_engine.engine.status import determine_status
from loan_engine.models import Loan, LoanStatus, Payment


@dataclass(frozen=True)
class UpcomingPayment:
    """A loan with a payment falling inside the lookahead window."""

    loan: Loan
    due_on: date
    days_until: int
    amount: Decimal


@dataclass
class PortfolioSummary:
    """Aggregated figures for a set of loans."""

    loan_count: int = 0
    total_principal: Decimal = ZERO
    total_due: Decimal = ZERO
    total_received: Decimal = ZERO
    total_outstanding: Decimal = ZERO
    status_counts: dict[LoanStatus, int] = field(default_factory=dict)


def _upcoming_due_date(today: date, payment_day: int) -> date:
    """Payment day of this month, or of next month once it has passed.

    Unlike :func:`next_payment_date` the next-month date is never clamped:
    day 30 seen on 31 January falls on 1 March, not 29 February.
    """
    month = today.replace(day=1)
    if today.day > payment_day:
        month = add_months(month, 1)
    return month + timedelta(days=payment_day - 1)


def upcoming_payments(
    loans: Iterable[Loan],
    today: date | datetime | None = None,
    window_days: int = 15,
) -> list[UpcomingPayment]:
    """List active loans with a payment due within ``window_days``.

    The due date is the loan's payment day in the current month, or in the
    following month once that day has passed.

    Parameters
    ----------
    loans : Iterable[Loan]
        Loans to scan; only those stored as active are considered.
    today : date | datetime | None
        Reference date (defaults to today).
    window_days : int
        Lookahead in days, inclusive.

    Returns
    -------
    list[UpcomingPayment]
        Upcoming payments sorted by due date.
    """
    today = resolve_date(today)
    upcoming = []

    for loan in loans:
        if loan.status != LoanStatus.ACTIVE:
            continue

        due_on = _upcoming_due_date(today, loan.payment_day)
        days_until = (due_on - today).days
        if 0 <= days_until <= window_days:
            upcoming.append(
                UpcomingPayment(
                    loan=loan,
                    due_on=due_on,
                    days_until=days_until,
                    amount=installment_amount(loan),
                )
            )

    upcoming.sort(key=lambda u: u.due_on)
    return upcoming


def summarize_portfolio(
    loans: Sequence[Loan],
    payments_by_loan: Mapping[str, Sequence[Payment]] | None = None,
    today: date | datetime | None = None,
    *,
    default_after_days: int = DEFAULT_AFTER_DAYS,
) -> PortfolioSummary:
    """Aggregate balances and derived statuses across loans.

    Parameters
    ----------
    loans : Sequence[Loan]
        Loans in the portfolio.
    payments_by_loan : Mapping[str, Sequence[Payment]] | None
        Payment history keyed by ``loan_id``; missing keys mean no payments.
    today : date | datetime | None
        Reference date (defaults to today).
    default_after_days : int
        Days overdue at which a loan counts as defaulted.

    Returns
    -------
    PortfolioSummary
        Totals plus a count of loans per derived status.
    """
    today = resolve_date(today)
    payments_by_loan = payments_by_loan or {}
    summary = PortfolioSummary()
    counts: Counter[LoanStatus] = Counter()

    for loan in loans:
        payments = payments_by_loan.get(loan.loan_id, ())
        summary.loan_count += 1
        summary.total_principal += loan.principal
        summary.total_due += total_due(loan)
        summary.total_received += total_paid(payments)
        summary.total_outstanding += remaining_balance(loan, payments)
        counts[
            determine_status(loan, payments, today, default_after_days=default_after_days)
        ] += 1

    summary.status_counts = {status: counts.get(status, 0) for status in LoanStatus}
    return summary
