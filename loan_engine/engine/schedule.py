"""Payment date scheduling."""

import calendar
import logging
from datetime import date, datetime, timedelta
from typing import Iterator

from loan_engine.models import PaymentFrequency

logger = logging.getLogger(__name__)

WEEK_STEPS = {
    PaymentFrequency.WEEKLY: 1,
    PaymentFrequency.BIWEEKLY: 2,
}

MONTH_STEPS = {
    PaymentFrequency.MONTHLY: 1,
    PaymentFrequency.QUARTERLY: 3,
    PaymentFrequency.YEARLY: 12,
}


def resolve_date(value: date | datetime | None = None) -> date:
    """Return a plain date, defaulting to today.

    Datetimes are truncated so comparisons never involve time of day.
    """
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def add_months(start_date: date, months: int) -> date:
    """Add months to a date, clamping to the last day of the target month."""
    month = start_date.month - 1 + months
    year = start_date.year + month // 12
    month = month % 12 + 1
    day = min(start_date.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def advance(current: date, frequency: PaymentFrequency | str) -> date:
    """Move a date forward by one period of the given frequency.

    Unknown frequencies, including ``custom``, advance one month.
    """
    try:
        frequency = PaymentFrequency(frequency)
    except ValueError:
        logger.debug("Unrecognized frequency %r, advancing one month", frequency)
        return add_months(current, 1)

    if frequency in WEEK_STEPS:
        return current + timedelta(weeks=WEEK_STEPS[frequency])
    return add_months(current, MONTH_STEPS.get(frequency, 1))


def next_payment_date(
    current_date: date | datetime,
    payment_day: int,
    frequency: PaymentFrequency | str,
) -> date:
    """Compute the next payment date on or after ``current_date``.

    The candidate is ``payment_day`` in the month of ``current_date``; days
    past the end of the month overflow into the next month (31 in April is
    1 May). A candidate strictly before ``current_date`` is advanced by a
    single period. Week-based advances are not re-anchored to
    ``payment_day``, so weekly schedules drift across months.

    Parameters
    ----------
    current_date : date | datetime
        Reference date.
    payment_day : int
        Day of month payments fall on (1-31).
    frequency : PaymentFrequency | str
        Payment cadence.

    Returns
    -------
    date
        Next payment date.
    """
    current = resolve_date(current_date)
    candidate = current.replace(day=1) + timedelta(days=payment_day - 1)

    if candidate < current:
        advanced = advance(candidate, frequency)
        logger.debug(
            "Payment day %s already passed on %s, advanced to %s",
            payment_day,
            current.isoformat(),
            advanced.isoformat(),
        )
        return advanced

    return candidate


def payment_schedule(
    start_date: date | datetime,
    payment_day: int,
    frequency: PaymentFrequency | str,
    count: int,
) -> Iterator[date]:
    """Yield ``count`` consecutive payment dates starting at ``start_date``.

    The first date comes from :func:`next_payment_date`; each later one is
    the previous date advanced by one period, so the schedule is strictly
    increasing.
    """
    if count <= 0:
        return
    due = next_payment_date(start_date, payment_day, frequency)
    yield due
    for _ in range(count - 1):
        due = advance(due, frequency)
        yield due
