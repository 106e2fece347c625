"""Chart-ready views of computed insights."""

from __future__ import annotations

from typing import Mapping

MAX_PIE_SLICES = 10


def minutes_to_hhmm(minutes: int) -> str:
    sign = "-" if minutes < 0 else ""
    hours, mins = divmod(abs(int(minutes)), 60)
    return f"{sign}{hours}h {mins:02d}m"


def to_pie_data(totals: Mapping[str, int]) -> list[dict]:
    """Top categories by whole hours, largest first."""

    slices = [{"name": name, "value": int(round(minutes / 60))} for name, minutes in totals.items()]
    slices.sort(key=lambda item: item["value"], reverse=True)
    return slices[:MAX_PIE_SLICES]


def to_weekday_weekend_bars(weekday: Mapping[str, int], weekend: Mapping[str, int]) -> list[dict]:
    """One row per category seen in either period, hours per period."""

    categories = list(dict.fromkeys([*weekday, *weekend]))
    return [
        {
            "category": category,
            "weekday_hours": round(weekday.get(category, 0) / 60, 2),
            "weekend_hours": round(weekend.get(category, 0) / 60, 2),
        }
        for category in categories
    ]
