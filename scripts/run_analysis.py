"""Summarize a "Daily Tasks" workbook (or CSV/JSON export) as JSON."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from lifestyle_analyzer.adapters import csv_adapter, json_adapter, xlsx_adapter
from lifestyle_analyzer.pipeline import summarize


def _load_rows(path: Path):
    suffix = path.suffix.lower()
    if suffix in (".xlsx", ".xlsm"):
        return xlsx_adapter.parse(str(path))
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .xlsx, .csv or .json")


def main() -> int:
    parser = argparse.ArgumentParser(description="Summarize daily task tracking data")
    parser.add_argument("--data", required=True, help="Path to .xlsx/.csv/.json task file")
    parser.add_argument("--output", default="outputs/insights.json", help="Path to write the insights JSON")
    parser.add_argument("--verbose", action="store_true", help="Log dropped rows and parse counts")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        insights = summarize(_load_rows(Path(args.data)))
    except ValueError as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return 1

    report = insights.to_dict()
    print(json.dumps(report, indent=2, ensure_ascii=False))

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    print(f"Saved insights to {output_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
