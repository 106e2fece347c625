"""Demo script for lifestyle-analyzer."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from lifestyle_analyzer.adapters.csv_adapter import parse
from lifestyle_analyzer.chart_data import minutes_to_hhmm, to_weekday_weekend_bars
from lifestyle_analyzer.pipeline import summarize


def main() -> None:
    rows = parse(str(Path(__file__).with_name("sample_daily_tasks.csv")))
    insights = summarize(rows)
    print("KPIs:", insights.kpis)
    print("Weekday vs weekend:", to_weekday_weekend_bars(
        insights.weekday.totals_by_category, insights.weekend.totals_by_category
    ))
    print("Sleep:", [(p.day.isoformat(), minutes_to_hhmm(p.minutes)) for p in insights.sleep_series])
    print("Strengths:", insights.strengths)
    print("Opportunities:", insights.opportunities)
    print("Red flags:", insights.red_flags)


if __name__ == "__main__":
    main()
