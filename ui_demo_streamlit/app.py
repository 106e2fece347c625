"""Streamlit demo UI for lifestyle-analyzer."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

from lifestyle_analyzer.adapters import csv_adapter, json_adapter, xlsx_adapter
from lifestyle_analyzer.chart_data import minutes_to_hhmm, to_pie_data, to_weekday_weekend_bars
from lifestyle_analyzer.pipeline import summarize
from lifestyle_analyzer.schema import SHEET_NAME, Insights

DEMO_DATASET = "examples/sample_daily_tasks.csv"


def _parse_rows_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix in (".xlsx", ".xlsm"):
        return xlsx_adapter.parse(file_path)
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .xlsx, .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        return _parse_rows_from_path(temp_path)
    finally:
        Path(temp_path).unlink(missing_ok=True)


def build_view(insights: Insights) -> dict[str, Any]:
    """Shape insights into the tables the page renders."""

    return {
        "weekday_pie": to_pie_data(insights.weekday.totals_by_category),
        "weekend_pie": to_pie_data(insights.weekend.totals_by_category),
        "bars": to_weekday_weekend_bars(
            insights.weekday.totals_by_category, insights.weekend.totals_by_category
        ),
        "sleep": [
            {"date": point.day.isoformat(), "minutes": point.minutes, "label": minutes_to_hhmm(point.minutes)}
            for point in insights.sleep_series
        ],
    }


def _chart_or_caption(target, chart: str, data: list[dict], **kwargs) -> None:
    if data:
        getattr(target, chart)(data, **kwargs)
    else:
        target.caption("No data")


def _render_list(st, title: str, items: list[str], placeholder: str) -> None:
    st.write(f"**{title}**")
    for item in items or [placeholder]:
        st.markdown(f"- {item}")


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Lifestyle Analyzer", layout="wide")
    st.title("Lifestyle Analyzer")
    st.caption(f"Upload an Excel file with a sheet named '{SHEET_NAME}' to get a lifestyle summary.")

    with st.sidebar:
        st.header("Input")
        uploaded = st.file_uploader("Upload task sheet", type=["xlsx", "csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=uploaded is None)

    try:
        if uploaded is not None and not use_demo:
            rows = _parse_uploaded(uploaded)
        elif use_demo:
            rows = csv_adapter.parse(DEMO_DATASET)
        else:
            st.info("Upload a task sheet or enable 'Load demo dataset'.")
            return
        insights = summarize(rows)
    except ValueError as exc:
        st.error(f"Upload error: {exc}")
        return

    view = build_view(insights)
    kpis = insights.kpis

    c1, c2, c3 = st.columns(3)
    c1.metric("Sleep", f"{kpis.avg_sleep_hours}h", help=f"Std dev: {kpis.sleep_consistency_std_dev_minutes} min")
    c1.progress(min(1.0, kpis.avg_sleep_hours / 8))
    c2.metric("Work", f"{kpis.avg_work_hours}h", help=f"Health/Work: {kpis.health_vs_work_ratio}")
    c3.metric("Exercise", f"{kpis.exercise_days_per_week}/wk", help="Goal: 3-5 days/week")

    p1, p2 = st.columns(2)
    p1.subheader("Time by Category (Weekdays, h)")
    _chart_or_caption(p1, "bar_chart", view["weekday_pie"], x="name", y="value")
    p2.subheader("Time by Category (Weekends, h)")
    _chart_or_caption(p2, "bar_chart", view["weekend_pie"], x="name", y="value")

    st.subheader("Weekday vs Weekend by Category")
    _chart_or_caption(st, "bar_chart", view["bars"], x="category", y=["weekday_hours", "weekend_hours"])

    st.subheader("Sleep Over Time")
    _chart_or_caption(st, "line_chart", view["sleep"], x="date", y="minutes")

    l1, l2, l3 = st.columns(3)
    with l1:
        _render_list(st, "Strengths", insights.strengths, "We'll highlight strengths once there's enough data.")
    with l2:
        _render_list(st, "Opportunities", insights.opportunities, "Opportunities for improvement will appear here.")
    with l3:
        _render_list(st, "Red Flags", insights.red_flags, "No red flags detected so far.")


if __name__ == "__main__":
    main()
