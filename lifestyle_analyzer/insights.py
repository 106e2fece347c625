"""Aggregate canonical tasks into KPIs and rule-based observations."""

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable

import numpy as np

from lifestyle_analyzer.keywords import (
    EXERCISE_KEYWORDS,
    HEALTH_KEYWORDS,
    SLEEP_KEYWORDS,
    WORK_KEYWORDS,
    matches_any,
)
from lifestyle_analyzer.normalize import DEFAULT_CATEGORY, is_weekend
from lifestyle_analyzer.schema import CanonicalTask, Insights, Kpis, PeriodTotals, SleepPoint

MIN_EXERCISE_MINUTES_PER_DAY = 20
DAYS_PER_WEEK = 7

GOOD_SLEEP_HOURS = 7
CONSISTENT_SLEEP_STD_MINUTES = 45
ERRATIC_SLEEP_STD_MINUTES = 60
REGULAR_EXERCISE_DAYS = 3
LOW_EXERCISE_DAYS = 1
MIN_HEALTH_VS_WORK_RATIO = 0.25
MAX_WORK_HOURS = 9


def _sum_minutes(tasks: Iterable[CanonicalTask]) -> int:
    return sum(task.duration_minutes for task in tasks)


def _matches_task(task: CanonicalTask, keywords: tuple[str, ...]) -> bool:
    return matches_any(task.category, keywords) or matches_any(task.task_name, keywords)


def _group_by_day(tasks: Iterable[CanonicalTask]) -> dict[date, list[CanonicalTask]]:
    by_day: dict[date, list[CanonicalTask]] = defaultdict(list)
    for task in tasks:
        by_day[task.date].append(task)
    return {day: by_day[day] for day in sorted(by_day)}


def _category_minutes(day_tasks: list[CanonicalTask]) -> dict[str, int]:
    totals: dict[str, int] = defaultdict(int)
    for task in day_tasks:
        totals[task.category or DEFAULT_CATEGORY] += task.duration_minutes
    return dict(totals)


def _evaluate_rules(
    avg_sleep_minutes: float,
    sleep_std_minutes: float,
    avg_work_minutes: float,
    exercise_days_per_week: float,
    health_vs_work_ratio: float,
) -> tuple[list[str], list[str], list[str]]:
    strengths: list[str] = []
    opportunities: list[str] = []
    red_flags: list[str] = []

    if avg_sleep_minutes >= GOOD_SLEEP_HOURS * 60:
        strengths.append("You average 7+ hours of sleep. Nice!")
    if sleep_std_minutes <= CONSISTENT_SLEEP_STD_MINUTES:
        strengths.append("Sleep schedule is fairly consistent (std dev ≤ 45 min).")
    if exercise_days_per_week >= REGULAR_EXERCISE_DAYS:
        strengths.append("Regular exercise (≥ 3 days/week). Keep it up!")

    if avg_sleep_minutes < GOOD_SLEEP_HOURS * 60:
        opportunities.append("Aim for ~7-9 hours of sleep on most days.")
    if sleep_std_minutes > ERRATIC_SLEEP_STD_MINUTES:
        opportunities.append("Try a steadier bedtime/wake window to reduce sleep variability.")
    if health_vs_work_ratio < MIN_HEALTH_VS_WORK_RATIO:
        opportunities.append("Consider adding short health breaks to balance work intensity.")

    if avg_work_minutes > MAX_WORK_HOURS * 60:
        red_flags.append("Work time exceeds 9h/day on average, watch for burnout.")
    if exercise_days_per_week < LOW_EXERCISE_DAYS:
        red_flags.append("Very low exercise frequency, even short walks help.")

    return strengths, opportunities, red_flags


def analyze(tasks: Iterable[CanonicalTask]) -> Insights:
    """Compute period totals, KPIs, sleep series and observations.

    Rules are evaluated on the unrounded statistics; only the reported KPIs
    are rounded.
    """

    by_day = _group_by_day(tasks)

    weekday = PeriodTotals()
    weekend = PeriodTotals()
    sleep_per_day: list[int] = []
    sleep_series: list[SleepPoint] = []
    total_work_minutes = 0
    total_health_minutes = 0
    exercise_days = 0

    for day, day_tasks in by_day.items():
        period = weekend if is_weekend(day) else weekday
        period.days += 1

        for category, minutes in _category_minutes(day_tasks).items():
            period.add(category, minutes)
            if matches_any(category, WORK_KEYWORDS):
                total_work_minutes += minutes
            if matches_any(category, HEALTH_KEYWORDS):
                total_health_minutes += minutes

        exercise_minutes = _sum_minutes(t for t in day_tasks if _matches_task(t, EXERCISE_KEYWORDS))
        if exercise_minutes >= MIN_EXERCISE_MINUTES_PER_DAY:
            exercise_days += 1

        sleep_minutes = _sum_minutes(t for t in day_tasks if _matches_task(t, SLEEP_KEYWORDS))
        sleep_per_day.append(sleep_minutes)
        sleep_series.append(SleepPoint(day=day, minutes=sleep_minutes))

    day_count = len(by_day)
    sleep_values = np.asarray(sleep_per_day, dtype=float)
    avg_sleep_minutes = float(np.mean(sleep_values)) if day_count else 0.0
    sleep_std_minutes = float(np.std(sleep_values)) if day_count else 0.0
    avg_work_minutes = total_work_minutes / max(1, day_count)
    exercise_days_per_week = exercise_days / max(1, day_count / DAYS_PER_WEEK)
    health_vs_work_ratio = total_health_minutes / total_work_minutes if total_work_minutes else 0.0

    kpis = Kpis(
        avg_sleep_hours=round(avg_sleep_minutes / 60, 2),
        sleep_consistency_std_dev_minutes=int(round(sleep_std_minutes)),
        avg_work_hours=round(avg_work_minutes / 60, 2),
        exercise_days_per_week=round(exercise_days_per_week, 1),
        health_vs_work_ratio=round(health_vs_work_ratio, 2),
    )

    strengths, opportunities, red_flags = _evaluate_rules(
        avg_sleep_minutes,
        sleep_std_minutes,
        avg_work_minutes,
        exercise_days_per_week,
        health_vs_work_ratio,
    )

    return Insights(
        weekday=weekday,
        weekend=weekend,
        kpis=kpis,
        strengths=strengths,
        opportunities=opportunities,
        red_flags=red_flags,
        sleep_series=sleep_series,
    )
