from datetime import date, timedelta

import pytest

from lifestyle_analyzer.insights import analyze
from lifestyle_analyzer.normalize import parse
from lifestyle_analyzer.schema import CanonicalTask, Kpis, RawTaskRow

MONDAY = date(2024, 1, 1)

ADEQUATE_SLEEP = "You average 7+ hours of sleep. Nice!"
CONSISTENT_SLEEP = "Sleep schedule is fairly consistent (std dev ≤ 45 min)."
REGULAR_EXERCISE = "Regular exercise (≥ 3 days/week). Keep it up!"
MORE_SLEEP = "Aim for ~7-9 hours of sleep on most days."
STEADIER_SLEEP = "Try a steadier bedtime/wake window to reduce sleep variability."
HEALTH_BREAKS = "Consider adding short health breaks to balance work intensity."
BURNOUT = "Work time exceeds 9h/day on average, watch for burnout."
LOW_EXERCISE = "Very low exercise frequency, even short walks help."


def task(day, category, minutes, name=""):
    return CanonicalTask(
        date=day,
        day_of_week="",
        category=category,
        task_name=name,
        start=None,
        end=None,
        duration_minutes=minutes,
    )


def days(count, start=MONDAY):
    return [start + timedelta(days=offset) for offset in range(count)]


def test_single_work_day():
    insights = analyze(parse([RawTaskRow(date="2024-01-01", category="Work", duration="8:00:00")]))
    assert insights.weekday.days == 1
    assert insights.weekend.days == 0
    assert insights.weekday.totals_by_category == {"Work": 480}
    assert insights.kpis.avg_work_hours == 8.0
    assert insights.kpis.avg_sleep_hours == 0
    assert [(p.day, p.minutes) for p in insights.sleep_series] == [(MONDAY, 0)]


def test_week_of_steady_sleep():
    rows = [RawTaskRow(date=d.isoformat(), category="Sleep", duration="7:30:00") for d in days(7)]
    insights = analyze(parse(rows))
    assert insights.kpis.avg_sleep_hours == 7.5
    assert insights.kpis.sleep_consistency_std_dev_minutes == 0
    assert ADEQUATE_SLEEP in insights.strengths
    assert CONSISTENT_SLEEP in insights.strengths
    assert MORE_SLEEP not in insights.opportunities
    assert STEADIER_SLEEP not in insights.opportunities
    assert BURNOUT not in insights.red_flags


def test_two_weeks_without_exercise():
    tasks = [task(d, "Work", 480) for d in days(14)]
    insights = analyze(tasks)
    assert insights.kpis.exercise_days_per_week == 0.0
    assert LOW_EXERCISE in insights.red_flags
    assert BURNOUT not in insights.red_flags


def test_weekend_split_and_day_count():
    tasks = [
        task(date(2024, 1, 5), "Work", 300),
        task(date(2024, 1, 5), "Work", 60),
        task(date(2024, 1, 6), "Leisure", 120),
        task(date(2024, 1, 7), "Leisure", 30),
        task(date(2024, 1, 7), "Uncategorized", 15),
    ]
    insights = analyze(tasks)
    assert insights.weekday.days == 1
    assert insights.weekend.days == 2
    assert insights.weekday.totals_by_category == {"Work": 360}
    assert insights.weekend.totals_by_category == {"Leisure": 150, "Uncategorized": 15}
    assert insights.weekend.minutes_for("Work") == 0
    assert insights.weekday.days + insights.weekend.days == len({t.date for t in tasks})


def test_exercise_day_threshold_uses_category_or_task_name():
    tasks = [
        task(date(2024, 1, 1), "Personal", 20, name="Morning run"),
        task(date(2024, 1, 2), "Exercise", 19),
        task(date(2024, 1, 3), "Fitness", 10),
        task(date(2024, 1, 3), "Errands", 10, name="Walk to shop"),
        task(date(2024, 1, 4), "Gym", 45),
    ] + [task(d, "Work", 60) for d in days(7)]
    insights = analyze(tasks)
    assert insights.kpis.exercise_days_per_week == 3.0
    assert REGULAR_EXERCISE in insights.strengths
    assert LOW_EXERCISE not in insights.red_flags


def test_exercise_rate_is_per_week_of_data():
    tasks = [task(d, "Work", 60) for d in days(14)]
    tasks += [task(date(2024, 1, 1), "Yoga", 30), task(date(2024, 1, 9), "Swim", 30)]
    insights = analyze(tasks)
    assert insights.kpis.exercise_days_per_week == 1.0
    assert LOW_EXERCISE not in insights.red_flags


def test_sleep_matched_by_task_name_and_variability():
    tasks = [
        task(date(2024, 1, 1), "Rest", 420, name="Sleep"),
        task(date(2024, 1, 2), "Sleep", 480),
    ]
    insights = analyze(tasks)
    assert insights.kpis.avg_sleep_hours == 7.5
    assert insights.kpis.sleep_consistency_std_dev_minutes == 30
    assert CONSISTENT_SLEEP in insights.strengths


def test_erratic_short_sleep():
    tasks = [task(date(2024, 1, 1), "Sleep", 300), task(date(2024, 1, 2), "Sleep", 480)]
    insights = analyze(tasks)
    assert insights.kpis.avg_sleep_hours == 6.5
    assert insights.kpis.sleep_consistency_std_dev_minutes == 90
    assert insights.strengths == []
    assert insights.opportunities == [MORE_SLEEP, STEADIER_SLEEP, HEALTH_BREAKS]
    assert insights.red_flags == [LOW_EXERCISE]


def test_health_vs_work_ratio_and_burnout():
    tasks = [
        task(date(2024, 1, 1), "Deep Work", 600),
        task(date(2024, 1, 1), "Health", 30),
        task(date(2024, 1, 1), "Meditation", 30),
    ]
    insights = analyze(tasks)
    assert insights.kpis.avg_work_hours == 10.0
    assert insights.kpis.health_vs_work_ratio == 0.1
    assert HEALTH_BREAKS in insights.opportunities
    assert insights.red_flags == [BURNOUT, LOW_EXERCISE]


def test_workout_category_counts_as_work_and_health():
    insights = analyze([task(date(2024, 1, 1), "Workout", 60)])
    assert insights.kpis.avg_work_hours == 1.0
    assert insights.kpis.health_vs_work_ratio == 1.0
    assert HEALTH_BREAKS not in insights.opportunities


def test_ratio_is_zero_without_work():
    insights = analyze([task(date(2024, 1, 1), "Health", 60)])
    assert insights.kpis.health_vs_work_ratio == 0


def test_sleep_series_is_chronological_for_unsorted_input():
    tasks = [
        task(date(2024, 1, 3), "Sleep", 400),
        task(date(2024, 1, 1), "Work", 60),
        task(date(2024, 1, 2), "Sleep", 450),
    ]
    insights = analyze(tasks)
    assert [(p.day.day, p.minutes) for p in insights.sleep_series] == [(1, 0), (2, 450), (3, 400)]


def test_kpi_rounding():
    tasks = [task(d, "Sleep", 425) for d in days(3)] + [task(MONDAY, "Work", 100)]
    insights = analyze(tasks)
    assert insights.kpis.avg_sleep_hours == pytest.approx(7.08)
    assert insights.kpis.avg_work_hours == pytest.approx(0.56)


def test_empty_input_degrades_to_zero():
    insights = analyze([])
    assert insights.weekday.days == 0
    assert insights.weekend.days == 0
    assert insights.kpis == Kpis()
    assert insights.sleep_series == []
    assert insights.strengths == [CONSISTENT_SLEEP]
    assert insights.opportunities == [MORE_SLEEP, HEALTH_BREAKS]
    assert insights.red_flags == [LOW_EXERCISE]


def test_analysis_is_deterministic():
    rows = [
        RawTaskRow(date="2024-01-01", category="Sleep", duration="7:00:00"),
        RawTaskRow(date="2024-01-01", category="Work", duration="9:30:00"),
        RawTaskRow(date="2024-01-06", category="Exercise", duration="1h"),
        RawTaskRow(date=45297, category="Sleep", duration=0.35),
    ]
    assert analyze(parse(rows)) == analyze(parse(rows))
    assert analyze(parse(rows)).to_dict() == analyze(parse(rows)).to_dict()


def test_to_dict_serializes_sleep_series_dates():
    payload = analyze([task(MONDAY, "Sleep", 480)]).to_dict()
    assert payload["sleep_series"] == [{"date": "2024-01-01", "minutes": 480}]
    assert payload["kpis"]["avg_sleep_hours"] == 8.0
    assert payload["weekday"] == {"days": 1, "totals_by_category": {"Sleep": 480}}


def test_zero_duration_tasks_fire_same_rules_as_empty_input():
    insights = analyze([task(d, "Work", 0) for d in days(3)])
    assert insights.strengths == [CONSISTENT_SLEEP]
    assert insights.opportunities == [MORE_SLEEP, HEALTH_BREAKS]
    assert insights.red_flags == [LOW_EXERCISE]


def test_all_strengths_fire_in_order():
    tasks = []
    for d in days(7):
        tasks += [task(d, "Sleep", 480), task(d, "Gym", 30), task(d, "Work", 120)]
    insights = analyze(tasks)
    assert insights.strengths == [ADEQUATE_SLEEP, CONSISTENT_SLEEP, REGULAR_EXERCISE]
    assert insights.opportunities == []
    assert insights.red_flags == []
