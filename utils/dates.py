"""Date parsing and formatting helpers.

Entry dates are stored as naive UTC datetimes, which is what MongoDB hands
back through motor.
"""

from datetime import datetime, timezone
from typing import Optional
from services.errors import InvalidDateFormatError

FALLBACK_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%a %b %d %Y",
    "%b %d %Y",
    "%d %b %Y",
    "%B %d, %Y",
)


def utcnow() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_date(value: str) -> datetime:
    """Parse a user supplied date string into a naive UTC datetime.

    Args:
        value: ISO date or datetime (YYYY-MM-DD, YYYY-MM-DDTHH:MM:SSZ) or one
            of the FALLBACK_FORMATS

    Returns:
        Parsed datetime, converted to UTC and stripped of tzinfo

    Raises:
        InvalidDateFormatError: if no format matches or the UTC conversion
            falls outside the supported years
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateFormatError(str(value))

    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace('Z', '+00:00'))
    except ValueError:
        parsed = None
        for fmt in FALLBACK_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
        if parsed is None:
            raise InvalidDateFormatError(value)

    if parsed.tzinfo is not None:
        try:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        except OverflowError:
            # Offset pushes the instant past year 1 or 9999
            raise InvalidDateFormatError(value)
    return parsed


def parse_optional_date(value: Optional[str]) -> Optional[datetime]:
    """Like parse_date, but treats None and empty strings as absent."""
    if value is None or not str(value).strip():
        return None
    return parse_date(value)


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), datetime.max.time())


def format_date(value: datetime) -> str:
    """Render a date without its time of day."""
    # Year padded to four digits, e.g. "Sat Jun 01 0999"
    return f"{value:%a %b %d} {value.year:04d}"
