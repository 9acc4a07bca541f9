from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from ..models.lead import CandidateRecord
from ..models.session import Assignment

"""Commit collaborator: where confirmed leads go after the preview step.

The import core never persists anything itself; it hands the accepted
records and the assignment decision to a collaborator. `JsonLinesCommitter`
writes one CRM payload per line for a downstream loader to pick up.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "CommitCollaborator",
    "JsonLinesCommitter",
]


class CommitCollaborator(Protocol):
    def commit(self, records: Sequence[CandidateRecord], assignment: Assignment) -> int: ...


class JsonLinesCommitter:
    """Appends confirmed leads to a JSON Lines file.

    Each line is the record's CRM payload plus `assignmentMode` and, for
    single assignment, `assignedTo`.
    """

    def __init__(self, output_path: Path) -> None:
        self.output_path = output_path

    def commit(self, records: Sequence[CandidateRecord], assignment: Assignment) -> int:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with self.output_path.open("a", encoding="utf-8") as f:
            for record in records:
                payload = record.to_crm_dict()
                payload["assignmentMode"] = assignment.mode.value
                if assignment.operator_id is not None:
                    payload["assignedTo"] = assignment.operator_id
                f.write(json.dumps(payload, ensure_ascii=False) + "\n")
        logger.debug("committed %d leads to %s", len(records), self.output_path)
        return len(records)
