"""Utility functions for date manipulation."""

from datetime import date, datetime, time, timedelta

import pytz

from src.common.config.settings import settings


def get_timezone(tz_name: str | None = None):
    """Returns the pytz zone used for calendar-day calculations."""
    return pytz.timezone(tz_name or settings.TIMEZONE)


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(pytz.utc)


def parse_datetime(value: str | datetime | None) -> datetime | None:
    """Parses an ISO datetime string into an aware datetime (naive values are taken as UTC)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt_obj = value
    else:
        try:
            # Handle both Z and +00:00 for UTC
            dt_obj = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except (ValueError, TypeError):
            return None
    if dt_obj.tzinfo is None:
        dt_obj = pytz.utc.localize(dt_obj)
    return dt_obj


def format_datetime_for_storage(dt: datetime | None) -> str | None:
    """Formats a datetime as the UTC ISO string kept in storage."""
    if dt is None:
        return None
    return parse_datetime(dt).astimezone(pytz.utc).isoformat()


def local_date(dt: datetime, tz_name: str | None = None) -> date:
    """Calendar date of an instant in the configured time zone."""
    return parse_datetime(dt).astimezone(get_timezone(tz_name)).date()


def local_today(tz_name: str | None = None) -> date:
    """Today's calendar date in the configured time zone."""
    return now_utc().astimezone(get_timezone(tz_name)).date()


def day_bounds(day: date, tz_name: str | None = None) -> tuple[datetime, datetime]:
    """First and last instant of a calendar day in the configured time zone."""
    tz = get_timezone(tz_name)
    start = tz.localize(datetime.combine(day, time.min))
    end = tz.localize(datetime.combine(day, time.max))
    return start, end


def month_bounds(day: date, tz_name: str | None = None) -> tuple[datetime, datetime]:
    """First and last instant of the calendar month containing ``day``."""
    first = day.replace(day=1)
    next_month = (first + timedelta(days=32)).replace(day=1)
    start, _ = day_bounds(first, tz_name)
    _, end = day_bounds(next_month - timedelta(days=1), tz_name)
    return start, end
