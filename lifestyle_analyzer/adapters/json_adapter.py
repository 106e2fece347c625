"""JSON adapter for daily task rows."""

from __future__ import annotations

import json

from lifestyle_analyzer.schema import RawTaskRow


def _parse_item(item: object, index: int) -> RawTaskRow:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object, got {type(item).__name__}")
    return RawTaskRow.from_mapping(item)


def parse(file_path: str) -> list[RawTaskRow]:
    """Parse a JSON list of sheet rows; numeric serials stay numeric."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
