"""Excel workbook adapter for the "Daily Tasks" sheet."""

from __future__ import annotations

import logging
from zipfile import BadZipFile

import openpyxl
from openpyxl.utils.exceptions import InvalidFileException

from lifestyle_analyzer.schema import SHEET_NAME, RawTaskRow

logger = logging.getLogger(__name__)


def _is_blank_row(values: tuple) -> bool:
    return all(value is None or (isinstance(value, str) and not value.strip()) for value in values)


def parse(file_path: str) -> list[RawTaskRow]:
    """Read the "Daily Tasks" sheet into raw rows keyed by its header row."""

    try:
        workbook = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
    except (InvalidFileException, BadZipFile) as exc:
        raise ValueError("Failed to read the Excel file.") from exc

    try:
        if SHEET_NAME not in workbook.sheetnames:
            raise ValueError(f"Couldn't find a sheet named '{SHEET_NAME}'.")

        values = workbook[SHEET_NAME].iter_rows(values_only=True)
        header = next(values, None)
        if not header:
            return []
        columns = [(index, str(name).strip()) for index, name in enumerate(header) if name is not None]

        rows: list[RawTaskRow] = []
        for row_number, row in enumerate(values, start=2):
            if not row or _is_blank_row(row):
                continue
            record = {name: (row[index] if index < len(row) and row[index] is not None else "") for index, name in columns}
            rows.append(RawTaskRow.from_mapping(record))
        logger.debug("Read %d row(s) from sheet '%s' of %s", len(rows), SHEET_NAME, file_path)
        return rows
    finally:
        workbook.close()
