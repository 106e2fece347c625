"""Core data schema for daily task rows and derived insights."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any, Mapping, Optional, Union

DateValue = Union[str, int, float, date, datetime]
TimeValue = Union[str, int, float, date, datetime, time]
DurationValue = Union[str, int, float, time, timedelta]

SHEET_NAME = "Daily Tasks"

# Spreadsheet header -> RawTaskRow field
COLUMN_FIELDS = {
    "Date": "date",
    "Day Of Week": "day_of_week",
    "Task Category": "category",
    "Task": "task_name",
    "Start": "start",
    "Duration": "duration",
    "End": "end",
    "Comments": "comments",
}


class EmptySheetError(ValueError):
    """Raised when the decoded task sheet contains no rows at all."""


def _header_key(name: Any) -> str:
    return " ".join(str(name).split()).lower()


@dataclass
class RawTaskRow:
    """One undecoded row of the "Daily Tasks" sheet."""

    date: Optional[DateValue]
    day_of_week: Optional[str] = None
    category: Optional[str] = None
    task_name: Optional[str] = None
    start: Optional[TimeValue] = None
    duration: Optional[DurationValue] = None
    end: Optional[TimeValue] = None
    comments: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "RawTaskRow":
        """Build a row from a header-keyed mapping, ignoring unknown columns."""

        loose = {_header_key(key): value for key, value in mapping.items()}
        values = {}
        for header, attr in COLUMN_FIELDS.items():
            if header in mapping:
                values[attr] = mapping[header]
            else:
                values[attr] = loose.get(_header_key(header))
        return cls(**values)


@dataclass(frozen=True)
class CanonicalTask:
    """Normalized task record produced by the parser."""

    date: date
    day_of_week: str
    category: str
    task_name: str
    start: Optional[datetime]
    end: Optional[datetime]
    duration_minutes: int
    comments: str = ""


@dataclass
class PeriodTotals:
    days: int = 0
    totals_by_category: dict[str, int] = field(default_factory=dict)

    def add(self, category: str, minutes: int) -> None:
        self.totals_by_category[category] = self.minutes_for(category) + minutes

    def minutes_for(self, category: str) -> int:
        return self.totals_by_category.get(category, 0)


@dataclass
class Kpis:
    avg_sleep_hours: float = 0.0
    sleep_consistency_std_dev_minutes: int = 0
    avg_work_hours: float = 0.0
    exercise_days_per_week: float = 0.0
    health_vs_work_ratio: float = 0.0


@dataclass
class SleepPoint:
    day: date
    minutes: int


@dataclass
class Insights:
    """Aggregated lifestyle summary handed to the rendering layer."""

    weekday: PeriodTotals
    weekend: PeriodTotals
    kpis: Kpis
    strengths: list[str]
    opportunities: list[str]
    red_flags: list[str]
    sleep_series: list[SleepPoint]

    def to_dict(self) -> dict:
        payload = asdict(self)
        payload["sleep_series"] = [
            {"date": point.day.isoformat(), "minutes": point.minutes} for point in self.sleep_series
        ]
        return payload
