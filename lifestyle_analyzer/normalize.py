"""Normalize loosely-typed spreadsheet rows into canonical tasks.

Every field is resolved independently and malformed values degrade instead of
raising: a row whose date cannot be resolved is dropped, an unreadable start or
end time becomes ``None`` and an unreadable duration becomes 0 minutes.
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Optional

from lifestyle_analyzer.schema import CanonicalTask, RawTaskRow

logger = logging.getLogger(__name__)

# Day zero of spreadsheet date serials. Serial 1 is 1899-12-31.
EXCEL_EPOCH = datetime(1899, 12, 30)
MS_PER_DAY = 24 * 60 * 60 * 1000
MINUTES_PER_DAY = 24 * 60

DEFAULT_CATEGORY = "Uncategorized"

# Indexed by isoweekday() % 7, so 0 is Sunday.
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2})(?::(\d{2}))?\s*(AM|PM)?$", re.IGNORECASE)
_HMS_DURATION_RE = re.compile(r"^(?:(\d{1,2}):)?(\d{1,2}):(\d{2})$")
_FREEFORM_DURATION_RE = re.compile(r"(?:(\d+)\s*h)?\s*(?:(\d+)\s*m)?", re.IGNORECASE)

_TEXT_DATE_FORMATS = (
    "%m/%d/%Y",
    "%m/%d/%y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
    "%Y/%m/%d",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%B %d, %Y",
    "%a %b %d %Y",
    "%A, %B %d, %Y",
)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if _is_number(value):
        return not math.isfinite(value)
    return False


def _clean_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _midnight(day: date) -> datetime:
    return datetime.combine(day, time())


def excel_serial_to_datetime(serial: float) -> datetime:
    """Convert a spreadsheet day-count serial into a timestamp."""

    return EXCEL_EPOCH + timedelta(milliseconds=serial * MS_PER_DAY)


def parse_datetime_text(text: str) -> Optional[datetime]:
    """Best-effort parsing of a free-form date/time string."""

    text = text.strip()
    if not text:
        return None
    if text[-1] in "Zz":
        text = text[:-1] + "+00:00"

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        parsed = None

    if parsed is None:
        for fmt in _TEXT_DATE_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue

    if parsed is not None and parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None)
    return parsed


def normalize_date(value: Any) -> Optional[date]:
    """Resolve the calendar day of a row, or ``None`` when it cannot be read."""

    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if _is_number(value):
        try:
            return excel_serial_to_datetime(float(value)).date()
        except (OverflowError, ValueError):
            return None
    if isinstance(value, str):
        parsed = parse_datetime_text(value)
        return parsed.date() if parsed else None
    return None


def normalize_time(day: date, value: Any) -> Optional[datetime]:
    """Resolve a start/end value to a timestamp on ``day``.

    Numeric values are read as a fraction of ``day`` only; the whole-day part of
    the serial is not re-anchored on the spreadsheet epoch.
    """

    if _is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, time):
        return datetime.combine(day, value)
    if isinstance(value, date):
        return _midnight(value)
    if _is_number(value):
        try:
            return _midnight(day) + timedelta(milliseconds=round(float(value) * MS_PER_DAY))
        except (OverflowError, ValueError):
            return None
    if not isinstance(value, str):
        return None

    text = value.strip()
    match = _CLOCK_RE.match(text)
    if match:
        hour = int(match.group(1))
        minute = int(match.group(2))
        second = int(match.group(3)) if match.group(3) else 0
        meridiem = (match.group(4) or "").upper()
        if meridiem == "PM" and hour < 12:
            hour += 12
        elif meridiem == "AM" and hour == 12:
            hour = 0
        return _midnight(day) + timedelta(hours=hour, minutes=minute, seconds=second)

    return parse_datetime_text(text)


def normalize_duration(value: Any) -> int:
    """Resolve a duration to whole minutes; anything unreadable is 0."""

    if _is_blank(value) or isinstance(value, bool):
        return 0
    if isinstance(value, timedelta):
        return max(0, int(value.total_seconds() // 60))
    if isinstance(value, time):
        return value.hour * 60 + value.minute + value.second // 60
    if _is_number(value):
        return max(0, int(round(float(value) * MINUTES_PER_DAY)))
    if not isinstance(value, str):
        return 0

    text = value.strip()
    match = _HMS_DURATION_RE.match(text)
    if match:
        hours = int(match.group(1)) if match.group(1) else 0
        return hours * 60 + int(match.group(2)) + int(match.group(3)) // 60

    match = _FREEFORM_DURATION_RE.match(text)
    hours = int(match.group(1)) if match.group(1) else 0
    minutes = int(match.group(2)) if match.group(2) else 0
    return hours * 60 + minutes


def day_of_week_name(day: date) -> str:
    return WEEKDAY_NAMES[day.isoweekday() % 7]


def is_weekend(day: date) -> bool:
    return day.isoweekday() % 7 in (0, 6)


def _parse_row(row: RawTaskRow, day: date) -> CanonicalTask:
    return CanonicalTask(
        date=day,
        day_of_week=_clean_text(row.day_of_week) or day_of_week_name(day),
        category=_clean_text(row.category) or DEFAULT_CATEGORY,
        task_name=_clean_text(row.task_name),
        start=normalize_time(day, row.start),
        end=normalize_time(day, row.end),
        duration_minutes=normalize_duration(row.duration),
        comments="" if row.comments is None else str(row.comments),
    )


def parse(rows: Iterable[RawTaskRow]) -> list[CanonicalTask]:
    """Parse raw rows into canonical tasks sorted by day.

    The sort is stable, so tasks sharing a day keep their sheet order.
    """

    tasks: list[CanonicalTask] = []
    dropped = 0
    for index, row in enumerate(rows, start=1):
        day = normalize_date(row.date)
        if day is None:
            dropped += 1
            logger.debug("Row %d: dropping row with unresolvable date %r", index, row.date)
            continue
        tasks.append(_parse_row(row, day))

    if dropped:
        logger.info("Dropped %d row(s) without a usable date", dropped)
    return sorted(tasks, key=lambda task: task.date)
