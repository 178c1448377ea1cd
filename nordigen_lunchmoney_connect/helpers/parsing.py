"""Parse the loosely typed numeric and date fields of the APIs.

Nordigen and Lunchmoney send amounts either as a number or as a quoted string,
depending on the field and the api version. The models use these parsers as
'before' validators, such that the model fields are always Decimal or date.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from nordigen_lunchmoney_connect.helpers.errors import ParseError

DATE_FORMAT = "%Y-%m-%d"


def _unquote(value: str) -> str:
    return value.strip().strip('"').strip()


def parse_amount(value: Any) -> Decimal:  # noqa: ANN401
    """Parse an amount to a Decimal.

    Accepts Decimals, ints, floats and (quoted) strings. Floats are converted via
    their string representation, to prevent binary rounding noise.
    """
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or value is None:
        msg = f"Could not parse amount {value!r}"
        raise ParseError(msg)
    elif isinstance(value, int | float):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        raw = _unquote(value)
        if "_" in raw:
            msg = f"Could not parse amount {value!r}"
            raise ParseError(msg)
        try:
            amount = Decimal(raw)
        except InvalidOperation as e:
            msg = f"Could not parse amount {value!r}"
            raise ParseError(msg) from e
    else:
        msg = f"Could not parse amount of type {type(value).__name__}"
        raise ParseError(msg)
    if not amount.is_finite():
        msg = f"Amount {value!r} is not a finite number"
        raise ParseError(msg)
    return amount


def parse_date(value: Any) -> date | None:  # noqa: ANN401
    """Parse a YYYY-MM-DD date.

    None and the empty string mean the date is not set, and result in None.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        msg = f"Could not parse date of type {type(value).__name__}"
        raise ParseError(msg)
    raw = _unquote(value)
    if not raw:
        return None
    try:
        return datetime.strptime(raw, DATE_FORMAT).date()  # noqa: DTZ007
    except ValueError as e:
        msg = f"Could not parse date {value!r}, expected {DATE_FORMAT}"
        raise ParseError(msg) from e
