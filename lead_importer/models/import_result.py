from __future__ import annotations

from dataclasses import dataclass

from .lead import CandidateRecord

"""Import result model for the lead import pipeline.

One ImportResult is produced per processing pass (entering the preview step).
It is replaced, never merged, when the user goes back and processes again.
"""

__all__ = [
    "PREVIEW_LIMIT",
    "ImportResult",
]

PREVIEW_LIMIT = 5  # records shown in the preview table


@dataclass(frozen=True)
class ImportResult:
    """Accepted records plus the aggregate counters of one processing pass.

    Every parsed row ends up in exactly one bucket:
    rejected_count + duplicate_count + len(records) == total_rows

    `total_rows` counts parsed rows, not sheet rows: fully blank rows are
    dropped by the reader and never reach processing.
    """
    records: tuple[CandidateRecord, ...]
    duplicate_count: int  # same identity key as an earlier record
    rejected_count: int  # missing name or phone after normalization
    total_rows: int

    @property
    def imported_count(self) -> int:
        return len(self.records)

    def preview(self, limit: int = PREVIEW_LIMIT) -> tuple[CandidateRecord, ...]:
        return self.records[:limit]
