from __future__ import annotations

from datetime import date, datetime, time, timedelta

from ..core.constants import PERIOD_DAYS
from ..core.enums import ReportPeriod
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``2026-02-02T09:00:00``, offsets and ``Z`` allowed)."""
    text = (value or "").strip()
    if text[-1:] in {"Z", "z"}:
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid timestamp (ISO-8601): {value!r}")


def to_local_naive(value: datetime) -> datetime:
    """Offset-aware timestamps become local wall-clock time; naive ones are already local."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def day_bounds(start: date, end: date) -> tuple[datetime, datetime]:
    """Half-open datetime range ``[start 00:00, end+1 00:00)`` covering both dates."""
    return start_of_day(start), start_of_day(end + timedelta(days=1))


def week_bounds(day: date) -> tuple[date, date]:
    """Monday..Sunday week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=PERIOD_DAYS - 1)


def require_period(period_start: date, period_end: date) -> None:
    if period_end < period_start:
        raise ValidationError("period_end must be >= period_start")
    if (period_end - period_start).days + 1 != PERIOD_DAYS:
        raise ValidationError(f"A pay period spans exactly {PERIOD_DAYS} days")


def report_range(period: ReportPeriod, *, today: date) -> tuple[date, date]:
    """Date range for the manager audit views (inclusive)."""
    if period == ReportPeriod.TODAY:
        return today, today
    if period == ReportPeriod.YESTERDAY:
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if period == ReportPeriod.LAST_WEEK:
        return week_bounds(today - timedelta(days=PERIOD_DAYS))
    return week_bounds(today)
