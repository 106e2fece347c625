"""End-to-end summary of decoded "Daily Tasks" rows."""

from __future__ import annotations

import logging
from typing import Sequence

from lifestyle_analyzer.insights import analyze
from lifestyle_analyzer.normalize import parse
from lifestyle_analyzer.schema import SHEET_NAME, EmptySheetError, Insights, RawTaskRow

logger = logging.getLogger(__name__)


def summarize(rows: Sequence[RawTaskRow]) -> Insights:
    """Parse and analyze decoded sheet rows.

    Raises ``EmptySheetError`` when there are no rows at all. Rows that exist
    but carry no usable date still produce an (empty) summary.
    """

    if not rows:
        raise EmptySheetError(f"The '{SHEET_NAME}' sheet is empty.")

    tasks = parse(rows)
    logger.info("Parsed %d task(s) from %d row(s)", len(tasks), len(rows))
    return analyze(tasks)
