"""
Utility functions for the application.
"""
from typing import Any, Dict, Optional
from datetime import date, datetime, timezone
import calendar
import re

YMD_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    """Naive UTC timestamp, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_ymd(value: Any) -> Optional[str]:
    """Return `value` if it is a real calendar day written as YYYY-MM-DD, else None."""
    text = str(value or "")
    if not YMD_PATTERN.match(text):
        return None
    try:
        date.fromisoformat(text)
    except ValueError:
        return None
    return text


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def format_error(code: str, message: str, details: Any = None) -> Dict[str, Any]:
    """Format error response."""
    response = {"error": code, "message": message}
    if details:
        response["details"] = details
    return response
