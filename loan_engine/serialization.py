"""Display boundary: turn engine results into JSON-ready values.

The engine works in full Decimal precision; amounts are only rounded here.
"""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any


def quantize(amount: Decimal, decimal_places: int = 2) -> Decimal:
    """Round an amount half-up to a fixed number of decimal places."""
    return amount.quantize(Decimal(1).scaleb(-decimal_places), rounding=ROUND_HALF_UP)


def to_dict(obj: Any, decimal_places: int = 2) -> dict:
    """Convert a dataclass (or dict) to a JSON-ready dictionary."""
    if is_dataclass(obj):
        return {
            f.name: serialize_value(getattr(obj, f.name), decimal_places) for f in fields(obj)
        }
    elif isinstance(obj, dict):
        return serialize_value(obj, decimal_places)
    else:
        return {"value": str(obj)}


def serialize_value(value: Any, decimal_places: int = 2) -> Any:
    """Serialize a value for JSON output.

    Parameters
    ----------
    value : Any
        Value to convert. Nested dataclasses, dicts, lists and tuples are
        converted recursively.
    decimal_places : int
        Places to keep on Decimal amounts.

    Returns
    -------
    Any
        JSON-compatible value; Decimals become strings.
    """
    if isinstance(value, Decimal):
        return str(quantize(value, decimal_places))
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, (datetime, date)):
        return value.isoformat()
    elif is_dataclass(value) and not isinstance(value, type):
        return to_dict(value, decimal_places)
    elif isinstance(value, dict):
        return {
            serialize_value(k, decimal_places): serialize_value(v, decimal_places)
            for k, v in value.items()
        }
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v, decimal_places) for v in value]
    return value
