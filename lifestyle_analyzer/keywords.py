"""Keyword sets used to classify categories and task names."""

from __future__ import annotations

from typing import Iterable, Optional

WORK_KEYWORDS = ("work",)

SLEEP_KEYWORDS = ("sleep",)

EXERCISE_KEYWORDS = (
    "exercise",
    "fitness",
    "workout",
    "run",
    "running",
    "jog",
    "cycle",
    "cycling",
    "bike",
    "swim",
    "yoga",
    "gym",
    "strength",
    "weights",
    "lifting",
    "hiit",
    "pilates",
    "crossfit",
    "hike",
    "walking",
    "walk",
)

HEALTH_KEYWORDS = (
    "health",
    "sleep",
    "exercise",
    "fitness",
    "meditation",
    "yoga",
    "gym",
    "workout",
    "run",
    "running",
    "cycle",
    "cycling",
    "bike",
    "swim",
    "strength",
    "weights",
    "lifting",
    "hiit",
    "pilates",
    "crossfit",
    "hike",
    "walking",
    "walk",
)


def matches_any(text: Optional[str], keywords: Iterable[str]) -> bool:
    """Case-insensitive substring test of ``text`` against ``keywords``."""

    if not text:
        return False
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)
