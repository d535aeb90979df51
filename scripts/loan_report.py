#!/usr/bin/env python3
"""Print a status report for a sample loan portfolio.

Generates loans with realistic payment histories, derives each loan's
balances and status at a reference date, and prints the result as JSON:
- loans: one entry per loan with balances, status and next payment date
- upcoming: active loans with a payment due within the lookahead window
- summary: portfolio totals and counts per status
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_engine.config import EngineConfig
from loan_engine.engine import (
    days_overdue,
    determine_status,
    installment_amount,
    remaining_balance,
    remaining_principal,
    summarize_portfolio,
    total_due,
    upcoming_payments,
)
from loan_engine.exceptions import ConfigurationError
from loan_engine.generators import LoanGenerator
from loan_engine.logging import setup_logging
from loan_engine.models import Loan, Payment
from loan_engine.serialization import serialize_value, to_dict

logger = logging.getLogger(__name__)


def build_report(
    loans: list[Loan],
    payments_by_loan: dict[str, list[Payment]],
    today: date,
    config: EngineConfig,
) -> dict[str, Any]:
    """Derive balances and statuses for every loan.

    Parameters
    ----------
    loans : list[Loan]
        Loans in the portfolio.
    payments_by_loan : dict[str, list[Payment]]
        Payment history keyed by loan id.
    today : date
        Reference date.
    config : EngineConfig
        Status thresholds and display settings.

    Returns
    -------
    dict[str, Any]
        JSON-ready report.
    """
    places = config.display.decimal_places
    threshold = config.status.default_after_days
    rows = []

    for loan in loans:
        payments = payments_by_loan.get(loan.loan_id, [])
        rows.append(
            {
                "loan_id": loan.loan_id,
                "borrower_name": loan.borrower_name,
                "frequency": loan.frequency,
                "total_due": total_due(loan),
                "installment_amount": installment_amount(loan),
                "remaining_balance": remaining_balance(loan, payments),
                "remaining_principal": remaining_principal(loan, payments),
                "payments": len(payments),
                "next_payment_date": loan.next_payment_date,
                "days_overdue": days_overdue(loan, today),
                "status": determine_status(loan, payments, today, default_after_days=threshold),
            }
        )

    upcoming = [
        {
            "loan_id": u.loan.loan_id,
            "borrower_name": u.loan.borrower_name,
            "due_on": u.due_on,
            "days_until": u.days_until,
            "amount": u.amount,
        }
        for u in upcoming_payments(loans, today, config.display.upcoming_window_days)
    ]

    summary = summarize_portfolio(loans, payments_by_loan, today, default_after_days=threshold)

    return {
        "reference_date": today.isoformat(),
        "loans": serialize_value(rows, places),
        "upcoming": serialize_value(upcoming, places),
        "summary": to_dict(summary, places),
    }


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Print a status report for a sample loan portfolio"
    )
    parser.add_argument(
        "--loans",
        type=int,
        default=None,
        help="Number of loans to generate (default: SAMPLE_NUM_LOANS or 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility (default: SEED)",
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Reference date as YYYY-MM-DD (default: REFERENCE_DATE or today)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Indent JSON output",
    )
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default="standard",
        help="Log format (default: standard)",
    )
    args = parser.parse_args()

    try:
        config = EngineConfig.from_env()
    except ConfigurationError as e:
        parser.error(str(e))

    setup_logging(config.log_level, args.log_format, stream=sys.stderr)

    num_loans = args.loans if args.loans is not None else config.sample.num_loans
    seed = args.seed if args.seed is not None else config.seed
    today = args.date or config.reference_date or date.today()

    logger.info("Generating %d loans (seed=%s) as of %s", num_loans, seed, today.isoformat())

    generator = LoanGenerator(seed=seed, locale=config.sample.locale)
    loans, payments_by_loan = generator.generate_portfolio(num_loans, today)
    report = build_report(loans, payments_by_loan, today, config)

    indent = 2 if args.pretty or config.display.pretty_json else None
    print(json.dumps(report, indent=indent, ensure_ascii=False))

    logger.info("Report covers %d loans", len(loans))


if __name__ == "__main__":
    main()
