import calendar
import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import tzlocal


def as_aware(dt: datetime, tz=None) -> datetime:
    """ Return aware datetime in tz, if no tz default to UTC """
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:    # Naive datetime → ATTACH UTC (storage tz), then convert to target
        dt = dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(tz or timezone.utc)


def month_day(dt: datetime) -> str:
    """ 'April 14' style text, locale independent """
    return f"{calendar.month_name[dt.month]} {dt.day}"


def local_zone_name() -> str:
    """ The system timezone name e.g. 'Europe/Lisbon' """
    return tzlocal.get_localzone_name() or "UTC"


def resolve_tz(timezone_str) -> ZoneInfo:
    """ Takes a timezone string e.g "Europe/Athens" and returns a ZoneInfo object. """
    if timezone_str:
        try:
            return ZoneInfo(timezone_str)
        except (ZoneInfoNotFoundError, ValueError):
            logging.warning(f"⚠️ Unknown timezone '{timezone_str}', falling back to system local.")
    return ZoneInfo(local_zone_name())
