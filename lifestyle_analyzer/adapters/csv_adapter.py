"""CSV adapter for daily task rows."""

from __future__ import annotations

import csv

from lifestyle_analyzer.schema import RawTaskRow


def parse(file_path: str) -> list[RawTaskRow]:
    """Parse a CSV export of the task sheet; every cell stays text."""

    with open(file_path, newline="", encoding="utf-8-sig") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        rows: list[RawTaskRow] = []
        for row in reader:
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                continue
            rows.append(RawTaskRow.from_mapping(row))
        return rows
