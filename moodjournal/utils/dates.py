"""
Calendar day keys (YYYY-MM-DD) shared by the store and the client.
"""
import re
from datetime import datetime
from typing import Any

from .errors import ValidationError

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def validate_date_key(value: Any) -> str:
    """Return ``value`` if it is a real calendar day in YYYY-MM-DD form."""
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        raise ValidationError("Date must use the YYYY-MM-DD format.")
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Date {value} is not a valid calendar day.") from e
    return value
