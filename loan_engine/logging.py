"""Logging setup for loan-engine.

Engine modules log at DEBUG and attach the loan they are working on through
``extra=loan_context(...)``. Both formatters render that context: the
standard one as ``key=value`` pairs after the message, the JSON one as
top-level fields.
"""

import logging
import sys
from typing import Any, TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def loan_context(loan_id: str, **fields: Any) -> dict[str, dict[str, Any]]:
    """Build the ``extra`` mapping that tags a log record with a loan.

    Parameters
    ----------
    loan_id : str
        Identifier of the loan the record is about.
    **fields : Any
        Further values to carry (status, payment id, dates...).

    Returns
    -------
    dict[str, dict[str, Any]]
        Value for the ``extra`` argument of a logger call.
    """
    return {"extra": {"loan_id": loan_id, **fields}}


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return getattr(record, "extra", None) or {}


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: TextIO | None = None,
) -> None:
    """Configure logging for loan-engine.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    format_type : str
        Format type: "standard" or "json".
    stream : TextIO | None
        Handler output stream (default stdout). The report script passes
        stderr so its JSON output stays clean.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JsonFormatter() if format_type == "json" else ContextFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("loan_engine").setLevel(log_level)

    # Faker logs locale lookups at DEBUG
    logging.getLogger("faker").setLevel(logging.WARNING)


class ContextFormatter(logging.Formatter):
    """Plain-text formatter that appends the loan context of a record."""

    def __init__(self) -> None:
        super().__init__(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{line} [{pairs}]"


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as one JSON object per line.

        Loan context fields are merged at the top level; dates and Decimals
        are written as strings.
        """
        import json
        from datetime import datetime, timezone

        log_data: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(_context(record))

        return json.dumps(log_data, default=str)
