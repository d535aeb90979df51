"""Sample data generators."""

from loan_engine.generators.base import BaseGenerator
from loan_engine.generators.loan import PAYMENT_BEHAVIORS, LoanGenerator

__all__ = ["BaseGenerator", "LoanGenerator", "PAYMENT_BEHAVIORS"]
