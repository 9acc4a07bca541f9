from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from io import BytesIO
from typing import Any

import numpy as np
import pandas as pd

from ..models.row_data import CellValue, RawRow

"""Workbook reader for the lead import pipeline.

- Only the first sheet is read; other sheets are ignored.
- Row 1 is the header row, unconditionally. Row 2 onwards are data rows.
- Cells keep their native scalar type (str / int / float). Blank cells are
  left out of the row mapping instead of becoming empty strings.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ParseError",
    "SheetData",
    "parse_workbook",
]


class ParseError(Exception):
    """Raised when the bytes are not a readable workbook or the sheet has no header."""


@dataclass(frozen=True)
class SheetData:
    sheet_name: str
    columns: tuple[str, ...]
    rows: tuple[RawRow, ...]


def _read_first_sheet(data: bytes) -> tuple[str, pd.DataFrame]:
    try:
        xls = pd.ExcelFile(BytesIO(data))
    except Exception as e:
        raise ParseError(f"not a readable spreadsheet: {e}") from e
    if not xls.sheet_names:
        raise ParseError("workbook has no sheets")
    name = str(xls.sheet_names[0])
    try:
        # only empty cells become NaN; "NA", "null" etc. stay as text
        df = xls.parse(xls.sheet_names[0], header=None, keep_default_na=False, na_values=[""])
    except Exception as e:
        raise ParseError(f"sheet '{name}' could not be read: {e}") from e
    return name, df


def _cell_value(raw: Any) -> CellValue | None:
    """Convert a pandas cell to the RawRow scalar union (None = blank)."""
    if raw is None:
        return None
    if isinstance(raw, np.datetime64):
        raw = pd.Timestamp(raw)
    elif isinstance(raw, np.generic):
        raw = raw.item()
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return None if pd.isna(raw) else raw
    if isinstance(raw, str):
        return raw if raw != "" else None
    if isinstance(raw, (datetime, date, time)):
        # pandas.NaT is a datetime subclass
        return None if pd.isna(raw) else raw.isoformat()
    return str(raw)


def _header_positions(header: list[Any], sheet_name: str) -> list[tuple[int, str]]:
    positions: list[tuple[int, str]] = []
    seen: set[str] = set()
    for index, raw in enumerate(header):
        value = _cell_value(raw)
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, float) and value.is_integer():
            value = int(value)
        name = str(value).strip()
        if not name:
            continue
        if name in seen:
            logger.warning("sheet=%s duplicate header %r ignored (column %d)", sheet_name, name, index + 1)
            continue
        seen.add(name)
        positions.append((index, name))
    return positions


def parse_workbook(data: bytes) -> SheetData:
    """Decode workbook bytes into the header columns and data rows of the first sheet.

    Steps:
    1. Open the workbook and read the first sheet without a header
    2. Validate at least one row exists (the header)
    3. Take column names from row 1 (blank header cells produce no column)
    4. Convert rows 2+ to RawRow, skipping rows with no values

    Raises:
        ParseError: unreadable workbook, empty sheet, or blank header row
    """
    sheet_name, df = _read_first_sheet(data)
    if df.shape[0] < 1:
        raise ParseError(f"sheet '{sheet_name}' has no header row")

    positions = _header_positions(df.iloc[0].tolist(), sheet_name)
    if not positions:
        raise ParseError(f"sheet '{sheet_name}' header row is blank")

    rows: list[RawRow] = []
    # sheet row numbers are 1-based and the header is row 1
    for row_number, raw in enumerate(df.iloc[1:].itertuples(index=False, name=None), start=2):
        values: dict[str, CellValue] = {}
        for index, column in positions:
            value = _cell_value(raw[index])
            if value is not None:
                values[column] = value
        if not values:
            continue
        rows.append(RawRow(row_number=row_number, values=values))

    logger.debug("sheet=%s columns=%d rows=%d", sheet_name, len(positions), len(rows))
    return SheetData(
        sheet_name=sheet_name,
        columns=tuple(column for _, column in positions),
        rows=tuple(rows),
    )
