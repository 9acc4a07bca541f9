from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Protocol

from ..models.import_result import ImportResult
from ..models.lead import CandidateRecord
from ..models.row_data import RawRow
from .deduplicator import dedupe
from .normalizer import normalize_row

"""Row processing for the preview step: normalize every row, then deduplicate.

The pass is a pure function of (rows, mapping, session id, session timestamp),
so entering preview twice for the same session yields an identical result,
record identifiers included.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "RowProgress",
    "make_record_id",
    "process_rows",
]


class RowProgress(Protocol):
    def advance(self, n: int = 1) -> None: ...


def make_record_id(session_id: str, row_index: int) -> str:
    return f"import_{session_id}_{row_index}"


def process_rows(
    rows: Sequence[RawRow],
    mapping: Mapping[str, str],
    *,
    session_id: str,
    timestamp: str,
    progress: RowProgress | None = None,
) -> ImportResult:
    """Normalize and deduplicate all rows of one file.

    Args:
        rows: Parsed data rows in sheet order
        mapping: Frozen field -> column mapping
        session_id: Import session identifier (part of every record id)
        timestamp: Session start, used as created/updated time
        progress: Optional per-row progress hook

    Returns:
        ImportResult with accepted records and rejection counters
    """
    candidates: list[CandidateRecord] = []
    rejected = 0
    for index, row in enumerate(rows):
        record = normalize_row(
            row,
            mapping,
            record_id=make_record_id(session_id, index),
            timestamp=timestamp,
        )
        if progress is not None:
            progress.advance()
        if record is None:
            rejected += 1
            logger.debug("row=%d rejected: name or phone missing", row.row_number)
            continue
        candidates.append(record)

    kept, duplicate_count = dedupe(candidates)
    logger.debug(
        "processed rows=%d imported=%d duplicates=%d rejected=%d",
        len(rows),
        len(kept),
        duplicate_count,
        rejected,
    )
    return ImportResult(
        records=tuple(kept),
        duplicate_count=duplicate_count,
        rejected_count=rejected,
        total_rows=len(rows),
    )
