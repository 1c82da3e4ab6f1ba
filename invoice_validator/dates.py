"""
Date rules for invoices.

All checks that depend on "today" take a ``clock``: any zero-argument
callable returning the current ``datetime``. It defaults to the local system
clock; tests pass a fixed one.
"""

from datetime import datetime
from typing import Callable, Optional

from .models import DateCheck

Clock = Callable[[], datetime]

# Tried after ISO parsing fails; slash dates are month first
FALLBACK_FORMATS = ["%Y/%m/%d", "%d.%m.%Y", "%m/%d/%Y"]


def _to_naive_local(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def parse_date(text: Optional[str]) -> Optional[datetime]:
    """Parse date text into a naive local datetime, or None if it is not a real date."""
    if not text or not text.strip():
        return None
    text = text.strip()

    try:
        return _to_naive_local(datetime.fromisoformat(text))
    except ValueError:
        pass

    for fmt in FALLBACK_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def is_calendar_valid(text: Optional[str]) -> bool:
    return parse_date(text) is not None


def start_of_today(clock: Clock = datetime.now) -> datetime:
    """Midnight at the start of the clock's current day, in the clock's own zone."""
    now = clock()
    return now.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)


def is_past(text: Optional[str], clock: Clock = datetime.now) -> bool:
    """True if the date is strictly before today."""
    value = parse_date(text)
    if value is None:
        return False
    return value < start_of_today(clock)


def is_future(text: Optional[str], clock: Clock = datetime.now) -> bool:
    """True if the date is strictly after the start of today."""
    value = parse_date(text)
    if value is None:
        return False
    return value > start_of_today(clock)


def check_invoice_date(text: Optional[str], clock: Clock = datetime.now) -> DateCheck:
    """Invoice dates must be real calendar dates and must not lie in the future."""
    if not is_calendar_valid(text):
        return DateCheck(is_valid=False, message="Invoice date is not a valid date")

    if is_future(text, clock=clock):
        return DateCheck(is_valid=False, message="Invoice date cannot be in the future")

    return DateCheck(is_valid=True, message="Invoice date is valid")
