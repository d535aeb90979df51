"""Pytest configuration and fixtures."""

from datetime import date
from decimal import Decimal
from typing import Callable

import pytest

from loan_engine.models import Loan, LoanStatus, Payment, PaymentFrequency


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def reference_date() -> date:
    """Fixed 'today' for date-sensitive calculations."""
    return date(2024, 6, 1)


@pytest.fixture
def sample_loan() -> Loan:
    """1000 at 10% in four monthly installments, due end of 2024."""
    return Loan(
        loan_id="loan-test-001",
        borrower_name="Maria Souza",
        principal=Decimal("1000"),
        interest_rate=Decimal("10"),
        issue_date=date(2024, 1, 1),
        due_date=date(2024, 12, 31),
        payment_day=15,
        frequency=PaymentFrequency.MONTHLY,
        installments=4,
        next_payment_date=None,
        status=LoanStatus.ACTIVE,
    )


@pytest.fixture
def make_payment() -> Callable[..., Payment]:
    """Factory for payment records on ``loan-test-001``."""
    counter = iter(range(1, 1000))

    def _make(
        amount: str,
        principal: str = "0",
        interest: str = "0",
        payment_date: date = date(2024, 2, 15),
        loan_id: str = "loan-test-001",
    ) -> Payment:
        return Payment(
            payment_id=f"pay-test-{next(counter):03d}",
            loan_id=loan_id,
            payment_date=payment_date,
            amount=Decimal(amount),
            principal=Decimal(principal),
            interest=Decimal(interest),
        )

    return _make
