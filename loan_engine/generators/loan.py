"""Sample loan and payment history generator."""

import logging
import random
from datetime import date, datetime, timedelta
from decimal import Decimal

from loan_engine.engine import (
    installment_amount,
    payment_schedule,
    record_payment,
    refresh_loan,
    remaining_balance,
)
from loan_engine.engine.schedule import add_months, resolve_date
from loan_engine.generators.base import BaseGenerator
from loan_engine.logging import loan_context
from loan_engine.models import Loan, LoanStatus, Payment, PaymentFrequency

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

# Borrower behaviour and its relative weight in a generated portfolio
PAYMENT_BEHAVIORS = {
    "on_time": 0.60,
    "late": 0.20,
    "stopped": 0.12,
    "paid_off": 0.08,
}


def first_cycle(issue_date: date) -> date:
    """First day of the month after issue; schedules start there."""
    return add_months(issue_date.replace(day=1), 1)


class LoanGenerator(BaseGenerator):
    """Generate sample loans and their payment histories."""

    INTEREST_RATES = [Decimal(r) for r in ("0", "5", "8", "10", "12", "15", "20")]
    INSTALLMENT_COUNTS = [1, 3, 4, 6, 10, 12, 24]

    def generate(self, reference_date: date | datetime | None = None) -> Loan:
        """Generate a loan issued before ``reference_date``.

        Parameters
        ----------
        reference_date : date | datetime | None
            Date the portfolio is observed at (defaults to today).

        Returns
        -------
        Loan
            Loan whose due date is the last date of its payment schedule.
        """
        reference_date = resolve_date(reference_date)
        issue_date = reference_date - timedelta(days=random.randint(30, 540))
        installments = random.choice(self.INSTALLMENT_COUNTS)
        frequency = random.choice(list(PaymentFrequency))
        payment_day = random.randint(1, 28)

        schedule = list(
            payment_schedule(first_cycle(issue_date), payment_day, frequency, installments)
        )

        return Loan(
            loan_id=self.fake.uuid4(),
            borrower_name=self.fake.name(),
            principal=Decimal(random.randint(1, 50) * 1000),
            interest_rate=random.choice(self.INTEREST_RATES),
            issue_date=issue_date,
            due_date=schedule[-1],
            payment_day=payment_day,
            frequency=frequency,
            installments=installments,
            next_payment_date=schedule[0],
            status=LoanStatus.ACTIVE,
            created_at=datetime.combine(issue_date, datetime.min.time()),
        )

    def generate_payments(
        self,
        loan: Loan,
        reference_date: date | datetime | None = None,
        behavior: str = "on_time",
    ) -> list[Payment]:
        """Generate the payments a borrower made up to ``reference_date``.

        Parameters
        ----------
        loan : Loan
            Loan being repaid.
        reference_date : date | datetime | None
            Last date payments can fall on (defaults to today).
        behavior : str
            One of ``PAYMENT_BEHAVIORS``: ``on_time`` pays each installment
            within three days, ``late`` pays 5-40 days late, ``stopped``
            pays the first few installments only, ``paid_off`` settles the
            whole balance shortly after issue.

        Returns
        -------
        list[Payment]
            Payments in date order, split by the engine.
        """
        if behavior not in PAYMENT_BEHAVIORS:
            raise ValueError(f"Unknown payment behavior: {behavior}")

        reference_date = resolve_date(reference_date)
        payments: list[Payment] = []

        if behavior == "paid_off":
            paid_on = min(reference_date, loan.issue_date + timedelta(days=random.randint(1, 30)))
            payments.append(self._pay(loan, remaining_balance(loan), payments, paid_on))
            return payments

        schedule = payment_schedule(
            first_cycle(loan.issue_date), loan.payment_day, loan.frequency, loan.installments or 1
        )
        stop_after = random.randint(1, 3) if behavior == "stopped" else None
        amount = installment_amount(loan).quantize(CENT)

        for number, due_on in enumerate(schedule, start=1):
            if stop_after is not None and number > stop_after:
                break

            if behavior == "late":
                paid_on = due_on + timedelta(days=random.randint(5, 40))
            else:
                paid_on = due_on + timedelta(days=random.randint(0, 3))
            if payments:
                paid_on = max(paid_on, payments[-1].payment_date)
            if paid_on > reference_date:
                break

            outstanding = remaining_balance(loan, payments)
            if outstanding <= 0:
                break
            # Last installment absorbs rounding so the loan closes exactly
            due = outstanding if number == loan.installments else min(amount, outstanding)
            payments.append(self._pay(loan, due, payments, paid_on))

        return payments

    def generate_with_payments(
        self,
        reference_date: date | datetime | None = None,
        behavior: str | None = None,
    ) -> tuple[Loan, list[Payment]]:
        """Generate a loan, its payments, and refresh its derived fields.

        Parameters
        ----------
        reference_date : date | datetime | None
            Observation date (defaults to today).
        behavior : str | None
            Payment behaviour; drawn from ``PAYMENT_BEHAVIORS`` weights
            when omitted.

        Returns
        -------
        tuple[Loan, list[Payment]]
            Refreshed loan snapshot and its payment history.
        """
        reference_date = resolve_date(reference_date)
        if behavior is None:
            behavior = random.choices(
                list(PAYMENT_BEHAVIORS), weights=list(PAYMENT_BEHAVIORS.values()), k=1
            )[0]

        loan = self.generate(reference_date)
        payments = self.generate_payments(loan, reference_date, behavior)
        loan = refresh_loan(loan, payments, reference_date)

        logger.debug(
            "Generated loan %s (%s) with %d payments, status %s",
            loan.loan_id,
            behavior,
            len(payments),
            loan.status.value,
            extra=loan_context(loan.loan_id, behavior=behavior, status=loan.status.value),
        )
        return loan, payments

    def generate_portfolio(
        self,
        num_loans: int,
        reference_date: date | datetime | None = None,
    ) -> tuple[list[Loan], dict[str, list[Payment]]]:
        """Generate ``num_loans`` loans with payment histories keyed by loan id."""
        loans = []
        payments_by_loan = {}
        for _ in range(num_loans):
            loan, payments = self.generate_with_payments(reference_date)
            loans.append(loan)
            payments_by_loan[loan.loan_id] = payments
        return loans, payments_by_loan

    def _pay(self, loan: Loan, amount: Decimal, history: list[Payment], paid_on: date) -> Payment:
        """Record a payment through the engine."""
        return record_payment(
            loan,
            amount,
            history,
            payment_date=paid_on,
            payment_id=self.fake.uuid4(),
            cumulative=True,
        )
