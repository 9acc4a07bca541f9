from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from ..models.lead import (
    PRIORITY_VOCABULARY,
    SOURCE_VOCABULARY,
    STAGE_VOCABULARY,
    CandidateRecord,
    VocabularyTable,
)
from ..models.row_data import CellValue, RawRow

"""Record normalization: one RawRow + column mapping -> one CandidateRecord.

Coercion rules per mapped field:
- text fields: string form of the cell
- value: numeric conversion, anything non-numeric becomes 0
- source / stage / priority: lower-cased vocabulary lookup with fallback
Blank or falsy cells ("" / 0 / FALSE) leave the field unset. A row that ends up
without name or phone is rejected (None), silently.
"""

__all__ = [
    "TEXT_FIELDS",
    "VOCABULARIES",
    "is_supplied",
    "to_text",
    "to_number",
    "normalize_row",
]

# field key -> CandidateRecord attribute
TEXT_FIELDS: dict[str, str] = {
    "name": "name",
    "phone": "phone",
    "email": "email",
    "city": "city",
    "projectName": "project_name",
    "notes": "notes",
}

VOCABULARIES: dict[str, VocabularyTable] = {
    "source": SOURCE_VOCABULARY,
    "stage": STAGE_VOCABULARY,
    "priority": PRIORITY_VOCABULARY,
}

# floats at or above this print in exponent form, keep str() there
_MAX_PLAIN_INTEGRAL = 1e21


def is_supplied(value: CellValue | None) -> bool:
    """True for a cell that counts as filled in (not blank, not "", not 0 and not FALSE)."""
    if value is None:
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    return bool(value)


def to_text(value: CellValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    # phone numbers typed as numbers must not gain a trailing ".0"
    if isinstance(value, float) and value.is_integer() and abs(value) < _MAX_PLAIN_INTEGRAL:
        return str(int(value))
    return str(value)


def to_number(value: CellValue) -> int | float:
    """Numeric conversion of a cell; 0 when the cell is not a finite number."""
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if "_" in text:  # float() accepts digit separators, spreadsheets do not
            return 0
        try:
            number = float(text)
        except ValueError:
            return 0
    else:
        number = value
    if isinstance(number, bool):
        return int(number)
    if isinstance(number, int):
        return number
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def normalize_row(
    row: RawRow,
    mapping: Mapping[str, str],
    *,
    record_id: str,
    timestamp: str,
) -> CandidateRecord | None:
    """Build the candidate lead for one row, or None when name/phone are missing.

    System defaults (status, stage, priority, category, subcategory) are the
    CandidateRecord defaults, so a mapped stage/priority overrides them.
    A mapped `status` column is accepted but not copied: imports are active.
    """
    fields: dict[str, Any] = {}
    for field_key, column in mapping.items():
        value = row.get(column)
        if not is_supplied(value):
            continue
        if field_key in TEXT_FIELDS:
            fields[TEXT_FIELDS[field_key]] = to_text(value)
        elif field_key == "value":
            fields["value"] = to_number(value)
        elif field_key in VOCABULARIES:
            fields[field_key] = VOCABULARIES[field_key].resolve(to_text(value))

    if not fields.get("name") or not fields.get("phone"):
        return None
    return CandidateRecord(id=record_id, created_at=timestamp, updated_at=timestamp, **fields)
