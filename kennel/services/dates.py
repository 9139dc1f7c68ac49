"""Date helpers for gestation arithmetic and event timestamps."""
from datetime import date, datetime, time, timedelta
from typing import Optional, Union

from kennel.exceptions import ValidationError

GESTATION_DAYS = 63

DateInput = Union[date, datetime, str]

_DATETIME_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S",
    "%d/%m/%Y",
)


def parse_iso(value: Optional[DateInput]) -> Optional[datetime]:
    """
    Parse a date or datetime given as an object or an ISO string.

    Returns None for empty input or text that matches no known format.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)

    text = value.strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in _DATETIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def require_date(value: Optional[DateInput], field: str) -> date:
    """Parse a required date argument or raise a ValidationError for field."""
    parsed = parse_iso(value)
    if parsed is None:
        if value is None or value == "":
            raise ValidationError({field: "This field is required"})
        raise ValidationError({field: f"Invalid date: {value!r}"})
    return parsed.date()


def to_event_datetime(value: Union[date, datetime]) -> datetime:
    """Event timestamps are datetimes; plain dates become midnight."""
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def calculate_expected_birth(mating_date: DateInput, days: int = GESTATION_DAYS) -> date:
    """
    Expected birth date for a mating.

    Args:
        mating_date: Date of the mating
        days: Gestation length in days

    Returns:
        mating_date + days
    """
    return require_date(mating_date, "mating_date") + timedelta(days=days)


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def today() -> date:
    return date.today()
