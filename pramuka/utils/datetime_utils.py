from datetime import datetime, date, time, timedelta
from typing import Callable, Optional, Union
import re
import pytz

from pramuka.config import settings
from pramuka.schemas.archive import ArchiveWindow

REFERENCE_UTC_OFFSET = timedelta(minutes=settings.TIMEZONE_OFFSET_MINUTES)
ARCHIVE_WEEKDAY = settings.ARCHIVE_WEEKDAY
ARCHIVE_CUTOFF = time(settings.ARCHIVE_CUTOFF_HOUR, 0)

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

DAY_NAMES = ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]
MONTH_NAMES = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]
MONTH_SHORT_NAMES = ["Jan", "Feb", "Mar", "Apr", "Mei", "Jun", "Jul", "Agu", "Sep", "Okt", "Nov", "Des"]


def get_reference_timezone(offset: timedelta = REFERENCE_UTC_OFFSET) -> pytz.BaseTzInfo:
    """Fixed-offset reference timezone (Asia/Jakarta has no DST)"""
    return pytz.FixedOffset(int(offset.total_seconds() // 60))


def utc_now() -> datetime:
    """Current time in UTC"""
    return datetime.now(pytz.UTC)


def get_clock() -> Callable[[], datetime]:
    """Dependency returning the clock used by time-gated operations"""
    return utc_now


def to_utc(dt: datetime) -> datetime:
    """Convert to UTC, treating naive values as UTC"""
    if dt.tzinfo is None:
        return pytz.UTC.localize(dt)
    return dt.astimezone(pytz.UTC)


def to_reference_timezone(dt: datetime, offset: timedelta = REFERENCE_UTC_OFFSET) -> datetime:
    """Convert a UTC (or naive UTC) time to the reference timezone"""
    return to_utc(dt).astimezone(get_reference_timezone(offset))


def format_date(dt: Union[datetime, date]) -> str:
    """Format as YYYY-MM-DD"""
    if isinstance(dt, datetime):
        return dt.date().strftime("%Y-%m-%d")
    return dt.strftime("%Y-%m-%d")


def parse_iso_date(date_str: Optional[str]) -> Optional[date]:
    """Parse a zero-padded YYYY-MM-DD string, None when malformed"""
    if not date_str or not ISO_DATE_PATTERN.match(date_str):
        return None
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_local_datetime(date_str: Optional[str], time_str: Optional[str] = None,
                         offset: timedelta = REFERENCE_UTC_OFFSET) -> Optional[datetime]:
    """Parse a local date and optional HH:MM time in the reference timezone, returned in UTC"""
    parsed_date = parse_iso_date(date_str)
    if parsed_date is None:
        return None

    time_value = time_str if time_str else "00:00"
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            parsed_time = datetime.strptime(time_value, fmt).time()
            break
        except ValueError:
            continue
    else:
        return None

    local_dt = get_reference_timezone(offset).localize(datetime.combine(parsed_date, parsed_time))
    return local_dt.astimezone(pytz.UTC)


def get_friday_archive_window(base: Optional[datetime] = None,
                              offset: timedelta = REFERENCE_UTC_OFFSET) -> ArchiveWindow:
    """
    Compute the weekly archive window for an instant.

    The sweep is eligible on Friday from 15:00:00 local time (inclusive).
    The returned range covers the whole local calendar day of ``base``,
    from 00:00:00.000 to 23:59:59.999, expressed in UTC.

    Args:
        base: instant to evaluate, defaults to now; naive values are UTC
        offset: UTC offset of the reference timezone

    Returns:
        ArchiveWindow for the local day of ``base``
    """
    if base is None:
        base = utc_now()

    tz = get_reference_timezone(offset)
    local = to_reference_timezone(base, offset)
    local_date = local.date()

    eligible = local.weekday() == ARCHIVE_WEEKDAY and local.time() >= ARCHIVE_CUTOFF

    range_start = tz.localize(datetime.combine(local_date, time.min)).astimezone(pytz.UTC)
    range_end = tz.localize(datetime.combine(local_date, time(23, 59, 59, 999000))).astimezone(pytz.UTC)

    return ArchiveWindow(
        eligible=eligible,
        iso_date=format_date(local_date),
        range_start_utc=range_start,
        range_end_utc=range_end,
    )


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_archive_full_label(archive_date: Union[date, str]) -> str:
    """e.g. 'Jumat, 03 Mei 2024'"""
    d = _as_date(archive_date)
    return f"{DAY_NAMES[d.weekday()]}, {d.day:02d} {MONTH_NAMES[d.month - 1]} {d.year}"


def format_archive_compact_label(archive_date: Union[date, str]) -> str:
    """e.g. '03 Mei 2024'"""
    d = _as_date(archive_date)
    return f"{d.day:02d} {MONTH_SHORT_NAMES[d.month - 1]} {d.year}"


def format_timestamp_label(dt: Optional[datetime], offset: timedelta = REFERENCE_UTC_OFFSET) -> str:
    """Reference-timezone timestamp, e.g. '03 Mei 2024 pukul 15.30.00'"""
    if dt is None:
        return "-"
    local = to_reference_timezone(dt, offset)
    return (
        f"{local.day:02d} {MONTH_NAMES[local.month - 1]} {local.year} "
        f"pukul {local.hour:02d}.{local.minute:02d}.{local.second:02d}"
    )
