"""Tests for status derivation."""

from dataclasses import replace
from datetime import date, datetime, timedelta

import pytest

from loan_engine.engine import days_overdue, determine_status, is_overdue
from loan_engine.models import Loan, LoanStatus


class TestIsOverdue:
    """Tests for is_overdue."""

    def test_next_payment_in_past(self, sample_loan: Loan, reference_date: date) -> None:
        """A missed next payment makes the loan overdue."""
        loan = replace(sample_loan, next_payment_date=date(2024, 5, 31))
        assert is_overdue(loan, reference_date) is True

    def test_next_payment_today_is_not_overdue(self, sample_loan: Loan, reference_date: date) -> None:
        """A payment due today is not late yet."""
        loan = replace(sample_loan, next_payment_date=reference_date)
        assert is_overdue(loan, reference_date) is False

    def test_past_due_date_with_future_next_payment(self, sample_loan: Loan, reference_date: date) -> None:
        """Either condition is enough."""
        loan = replace(
            sample_loan,
            due_date=date(2024, 5, 1),
            next_payment_date=date(2024, 6, 15),
        )
        assert is_overdue(loan, reference_date) is True

    def test_past_due_date_without_next_payment(self, sample_loan: Loan) -> None:
        """Without a next date the final due date decides."""
        assert is_overdue(sample_loan, date(2025, 1, 1)) is True
        assert is_overdue(sample_loan, date(2024, 12, 31)) is False

    def test_paid_loan_never_overdue(self, sample_loan: Loan) -> None:
        """Loans marked paid are never overdue."""
        loan = replace(sample_loan, status=LoanStatus.PAID, next_payment_date=date(2020, 1, 1))
        assert is_overdue(loan, date(2025, 6, 1)) is False

    def test_absent_loan(self) -> None:
        """A missing loan is not overdue."""
        assert is_overdue(None) is False

    def test_datetime_compared_by_date(self, sample_loan: Loan) -> None:
        """The time of day is ignored."""
        loan = replace(sample_loan, next_payment_date=date(2024, 6, 1))
        assert is_overdue(loan, datetime(2024, 6, 1, 23, 59)) is False

    def test_defaults_to_today(self, sample_loan: Loan) -> None:
        """Omitting the date uses today."""
        future = date.today() + timedelta(days=30)
        loan = replace(sample_loan, next_payment_date=future, due_date=future)
        assert is_overdue(loan) is False


class TestDaysOverdue:
    """Tests for days_overdue."""

    def test_counts_from_next_payment(self, sample_loan: Loan, reference_date: date) -> None:
        """Days are counted from the missed next payment."""
        loan = replace(sample_loan, next_payment_date=reference_date - timedelta(days=10))
        assert days_overdue(loan, reference_date) == 10

    def test_counts_from_due_date_without_next_payment(self, sample_loan: Loan) -> None:
        """Without a next date days are counted from the due date."""
        assert days_overdue(sample_loan, date(2025, 1, 10)) == 10

    def test_next_payment_takes_precedence(self, sample_loan: Loan, reference_date: date) -> None:
        """A future next payment outweighs a past due date."""
        loan = replace(
            sample_loan,
            due_date=date(2024, 5, 1),
            next_payment_date=date(2024, 6, 15),
        )
        assert days_overdue(loan, reference_date) == 0

    def test_not_yet_due(self, sample_loan: Loan, reference_date: date) -> None:
        """Nothing is counted before the reference date."""
        loan = replace(sample_loan, next_payment_date=reference_date + timedelta(days=3))
        assert days_overdue(loan, reference_date) == 0

    def test_paid(self, sample_loan: Loan, reference_date: date) -> None:
        """Paid loans report zero days."""
        loan = replace(sample_loan, status=LoanStatus.PAID, next_payment_date=date(2024, 1, 1))
        assert days_overdue(loan, reference_date) == 0

    def test_absent_loan(self) -> None:
        """A missing loan reports zero days."""
        assert days_overdue(None) == 0


class TestDetermineStatus:
    """Tests for determine_status."""

    def test_active(self, sample_loan: Loan, reference_date: date) -> None:
        """A loan with a future payment is active."""
        loan = replace(sample_loan, next_payment_date=date(2024, 6, 15))
        assert determine_status(loan, [], reference_date) == LoanStatus.ACTIVE

    @pytest.mark.parametrize(
        ("days", "expected"),
        [
            (1, LoanStatus.OVERDUE),
            (10, LoanStatus.OVERDUE),
            (89, LoanStatus.OVERDUE),
            (90, LoanStatus.DEFAULTED),
            (150, LoanStatus.DEFAULTED),
        ],
    )
    def test_default_threshold(
        self, sample_loan: Loan, reference_date: date, days: int, expected: LoanStatus
    ) -> None:
        """Overdue up to 89 days, defaulted from 90."""
        loan = replace(sample_loan, next_payment_date=reference_date - timedelta(days=days))
        assert determine_status(loan, [], reference_date) == expected

    def test_paid_beats_overdue(self, sample_loan: Loan, reference_date: date, make_payment) -> None:
        """A settled balance wins over 120 days of arrears."""
        loan = replace(sample_loan, next_payment_date=reference_date - timedelta(days=120))
        payments = [make_payment("1100", principal="1000", interest="100")]
        assert determine_status(loan, payments, reference_date) == LoanStatus.PAID

    def test_overpaid_is_paid(self, sample_loan: Loan, reference_date: date, make_payment) -> None:
        """Overpayment counts as paid."""
        assert determine_status(sample_loan, [make_payment("2000")], reference_date) == LoanStatus.PAID

    def test_stored_paid_status_with_balance(self, sample_loan: Loan, reference_date: date) -> None:
        """A stale 'paid' flag suppresses the overdue count but not the balance check."""
        loan = replace(
            sample_loan,
            status=LoanStatus.PAID,
            next_payment_date=reference_date - timedelta(days=30),
        )
        assert determine_status(loan, [], reference_date) == LoanStatus.ACTIVE

    def test_custom_threshold(self, sample_loan: Loan, reference_date: date) -> None:
        """The default threshold can be changed per call."""
        loan = replace(sample_loan, next_payment_date=reference_date - timedelta(days=30))
        status = determine_status(loan, [], reference_date, default_after_days=30)
        assert status == LoanStatus.DEFAULTED

    def test_absent_loan(self) -> None:
        """A missing loan is reported as active."""
        assert determine_status(None) == LoanStatus.ACTIVE

    def test_does_not_mutate_inputs(self, sample_loan: Loan, reference_date: date, make_payment) -> None:
        """Neither the loan nor the payments are changed."""
        payments = [make_payment("100")]
        before = list(payments)
        determine_status(sample_loan, payments, reference_date)
        assert payments == before
        assert sample_loan.status == LoanStatus.ACTIVE
