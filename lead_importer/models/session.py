from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from .import_result import ImportResult
from .row_data import RawRow

"""ImportSession domain model and Step enum for the lead import pipeline.

The session is an immutable value. Every user action produces a new session
through `lead_importer.services.state_machine.transition`; nothing edits a
session in place.
"""

__all__ = [
    "Step",
    "AssignmentMode",
    "Operator",
    "Assignment",
    "ImportSession",
]


class Step(Enum):
    """Import dialog step.

    State transitions: closed -> upload -> mapping -> assignment -> preview -> complete
    (reset returns to upload from anywhere, close returns to closed)
    """
    CLOSED = "closed"
    UPLOAD = "upload"
    MAPPING = "mapping"
    ASSIGNMENT = "assignment"
    PREVIEW = "preview"
    COMPLETE = "complete"


class AssignmentMode(str, Enum):
    AUTO = "auto"  # distributed across callers by the CRM
    SINGLE = "single"  # every lead goes to one chosen caller


@dataclass(frozen=True)
class Operator:
    """A CRM user leads can be assigned to."""
    id: str
    name: str
    role: str


@dataclass(frozen=True)
class Assignment:
    mode: AssignmentMode
    operator_id: str | None = None  # set only for SINGLE


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class ImportSession:
    """Complete state of one import dialog.

    File-scoped fields (everything except `step` and `operators`) are dropped
    on reset so a new file never sees the previous file's data.
    """
    step: Step = Step.CLOSED
    operators: tuple[Operator, ...] = ()  # callers offered for SINGLE assignment
    session_id: str | None = None
    started_at: str | None = None  # ISO8601 UTC, stamped on created/updated
    file_name: str | None = None
    columns: tuple[str, ...] = ()
    rows: tuple[RawRow, ...] = ()
    mapping: Mapping[str, str] = field(default_factory=_empty_mapping)
    assignment: Assignment | None = None
    result: ImportResult | None = None
