from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import uuid4

from ..excel.reader import ParseError, parse_workbook
from ..models.session import Assignment, AssignmentMode, ImportSession, Operator, Step
from .field_mapper import FieldMapper, ValidationError
from .operators import filter_callers
from .orchestrator import RowProgress, process_rows

"""Import state machine: ImportSession x event -> ImportSession.

    closed --Opened--> upload --FileLoaded--> mapping --MappingConfirmed--> assignment
    assignment --AssignmentChosen--> preview --Confirmed--> complete
    preview --WentBack--> assignment --WentBack--> mapping
    any --Reset--> upload        any --Closed--> closed

`transition` is pure: it never reads the clock or the filesystem. Anything
time- or randomness-based (session id, start timestamp) travels on the event.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "TransitionError",
    "Opened",
    "FileLoaded",
    "MappingChanged",
    "MappingConfirmed",
    "AssignmentChosen",
    "WentBack",
    "Confirmed",
    "Reset",
    "Closed",
    "Event",
    "transition",
]


class TransitionError(Exception):
    """Raised when an event is not allowed in the session's current step."""


def _new_session_id() -> str:
    return uuid4().hex[:12]


def _utc_now() -> str:
    return datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class Opened:
    operators: Sequence[Operator] = ()


@dataclass(frozen=True)
class FileLoaded:
    file_name: str
    data: bytes = field(repr=False)
    session_id: str = field(default_factory=_new_session_id)
    started_at: str = field(default_factory=_utc_now)


@dataclass(frozen=True)
class MappingChanged:
    field_key: str
    column: str | None


@dataclass(frozen=True)
class MappingConfirmed:
    pass


@dataclass(frozen=True)
class AssignmentChosen:
    mode: AssignmentMode
    operator_id: str | None = None


@dataclass(frozen=True)
class WentBack:
    pass


@dataclass(frozen=True)
class Confirmed:
    pass


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Closed:
    pass


Event = (
    Opened | FileLoaded | MappingChanged | MappingConfirmed | AssignmentChosen
    | WentBack | Confirmed | Reset | Closed
)


def _require(session: ImportSession, event: object, *steps: Step) -> None:
    if session.step not in steps:
        allowed = ", ".join(s.value for s in steps)
        raise TransitionError(
            f"{type(event).__name__} not allowed in step '{session.step.value}' (expected: {allowed})"
        )


def _load_file(session: ImportSession, event: FileLoaded) -> ImportSession:
    sheet = parse_workbook(event.data)
    if not sheet.rows:
        raise ParseError(f"sheet '{sheet.sheet_name}' has no data rows")
    mapper = FieldMapper(sheet.columns)
    mapper.auto_map()
    logger.debug(
        "file=%s session=%s columns=%s rows=%d",
        event.file_name,
        event.session_id,
        list(sheet.columns),
        len(sheet.rows),
    )
    return ImportSession(
        step=Step.MAPPING,
        operators=session.operators,
        session_id=event.session_id,
        started_at=event.started_at,
        file_name=event.file_name,
        columns=sheet.columns,
        rows=sheet.rows,
        mapping=mapper.mapping,
    )


def _resolve_assignment(session: ImportSession, event: AssignmentChosen) -> Assignment:
    try:
        mode = AssignmentMode(event.mode)
    except ValueError as e:
        raise ValidationError(f"unknown assignment mode: {event.mode!r}") from e
    if mode is AssignmentMode.AUTO:
        return Assignment(mode=mode)
    known = {op.id for op in session.operators}
    if event.operator_id is None or event.operator_id not in known:
        raise ValidationError(f"single assignment needs one of the available callers, got {event.operator_id!r}")
    return Assignment(mode=mode, operator_id=event.operator_id)


def transition(
    session: ImportSession,
    event: Event,
    *,
    progress: RowProgress | None = None,
) -> ImportSession:
    """Apply one event and return the next session.

    Args:
        session: Current session (never modified)
        event: User or system event
        progress: Optional row progress hook used while computing the preview

    Returns:
        The next ImportSession

    Raises:
        TransitionError: event not allowed in the current step
        ParseError: FileLoaded with an unreadable or empty workbook
        ValidationError: required fields unmapped, or invalid single assignment
        MappingError: MappingChanged naming an unknown field or column
    """
    if isinstance(event, Closed):
        return ImportSession()

    if isinstance(event, Reset):
        if session.step is Step.CLOSED:
            return session
        # operators belong to the open dialog, not to the file
        return ImportSession(step=Step.UPLOAD, operators=session.operators)

    if isinstance(event, Opened):
        _require(session, event, Step.CLOSED)
        return ImportSession(step=Step.UPLOAD, operators=filter_callers(event.operators))

    if isinstance(event, FileLoaded):
        _require(session, event, Step.UPLOAD)
        return _load_file(session, event)

    if isinstance(event, MappingChanged):
        _require(session, event, Step.MAPPING)
        mapper = FieldMapper(session.columns, session.mapping)
        mapper.set_mapping(event.field_key, event.column)
        return replace(session, mapping=mapper.mapping)

    if isinstance(event, MappingConfirmed):
        _require(session, event, Step.MAPPING)
        validation = FieldMapper(session.columns, session.mapping).validate()
        if not validation.ok:
            raise ValidationError(
                f"required fields not mapped: {', '.join(validation.missing_required)}",
                missing_required=validation.missing_required,
            )
        return replace(session, step=Step.ASSIGNMENT)

    if isinstance(event, AssignmentChosen):
        _require(session, event, Step.ASSIGNMENT)
        assignment = _resolve_assignment(session, event)
        result = process_rows(
            session.rows,
            session.mapping,
            session_id=session.session_id or "",
            timestamp=session.started_at or "",
            progress=progress,
        )
        return replace(session, step=Step.PREVIEW, assignment=assignment, result=result)

    if isinstance(event, WentBack):
        _require(session, event, Step.PREVIEW, Step.ASSIGNMENT)
        if session.step is Step.PREVIEW:
            return replace(session, step=Step.ASSIGNMENT, assignment=None, result=None)
        return replace(session, step=Step.MAPPING)

    if isinstance(event, Confirmed):
        _require(session, event, Step.PREVIEW)
        return replace(session, step=Step.COMPLETE)

    raise TransitionError(f"unknown event: {event!r}")
