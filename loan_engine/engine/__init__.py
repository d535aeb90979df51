"""Loan accounting engine: pure calculators over loan snapshots."""

from loan_engine.engine.balance import (
    installment_amount,
    remaining_balance,
    remaining_principal,
    total_due,
    total_interest,
    total_paid,
)
from loan_engine.engine.distribution import distribute_payment
from loan_engine.engine.lifecycle import record_payment, refresh_loan
from loan_engine.engine.portfolio import (
    PortfolioSummary,
    UpcomingPayment,
    summarize_portfolio,
    upcoming_payments,
)
from loan_engine.engine.schedule import add_months, next_payment_date, payment_schedule
from loan_engine.engine.status import days_overdue, determine_status, is_overdue

__all__ = [
    "PortfolioSummary",
    "UpcomingPayment",
    "add_months",
    "days_overdue",
    "determine_status",
    "distribute_payment",
    "installment_amount",
    "is_overdue",
    "next_payment_date",
    "payment_schedule",
    "record_payment",
    "refresh_loan",
    "remaining_balance",
    "remaining_principal",
    "summarize_portfolio",
    "total_due",
    "total_interest",
    "total_paid",
    "upcoming_payments",
]
