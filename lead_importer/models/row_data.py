from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Union

"""RawRow model for the lead import pipeline.

A RawRow is one data row of the first sheet after header processing. Cell
values keep their native scalar type; blank cells are left out of `values`
entirely, so "is this column supplied" is a plain membership check.
"""

__all__ = [
    "CellValue",
    "RawRow",
]

CellValue = Union[str, bool, int, float]


@dataclass(frozen=True)
class RawRow:
    """Logical representation of a single spreadsheet data row.

    `row_number` is the 1-based row in the sheet (the header is row 1, so the
    first data row is 2).
    """
    row_number: int
    values: Mapping[str, CellValue] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # read-only view; rows are never edited after parse
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, column: str) -> CellValue | None:
        return self.values.get(column)

    def __contains__(self, column: object) -> bool:
        return column in self.values
