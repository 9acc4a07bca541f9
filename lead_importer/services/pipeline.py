from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from ..models.session import ImportSession, Step
from .commit import CommitCollaborator
from .operators import OperatorDirectory, fetch_operators_safely
from .progress import ProgressTracker
from .state_machine import AssignmentChosen, Closed, Event, FileLoaded, Opened, transition

"""ImportPipeline: the stateful shell around the pure state machine.

Holds the current ImportSession, performs the collaborator I/O (operator
fetch on open, workbook read, commit on confirmation) and dispatches events.
The commit collaborator is called on the preview -> complete edge only.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ImportPipeline",
]


class ImportPipeline:
    """One import dialog instance.

    Only one file import is in flight per pipeline; every call runs to
    completion before returning.
    """

    def __init__(
        self,
        committer: CommitCollaborator,
        operators: OperatorDirectory | None = None,
        *,
        progress_factory: Callable[[int], ProgressTracker] = ProgressTracker,
    ) -> None:
        self._committer = committer
        self._operators = operators
        self._progress_factory = progress_factory
        self._session = ImportSession()
        self.committed_count = 0

    @property
    def session(self) -> ImportSession:
        return self._session

    def open(self) -> ImportSession:
        """Open the dialog: fetch callers once and move to the upload step."""
        operators = fetch_operators_safely(self._operators)
        logger.debug("operators fetched=%d", len(operators))
        return self.dispatch(Opened(operators))

    def load_file(self, path: Path) -> ImportSession:
        """Read a workbook from disk and hand its bytes to the upload step."""
        data = path.read_bytes()
        return self.dispatch(FileLoaded(file_name=path.name, data=data))

    def close(self) -> ImportSession:
        return self.dispatch(Closed())

    def dispatch(self, event: Event) -> ImportSession:
        """Apply an event; on failure the current session is left untouched."""
        previous = self._session
        if isinstance(event, AssignmentChosen):
            with self._progress_factory(len(previous.rows)) as progress:
                session = transition(previous, event, progress=progress)
                if session.result is not None:
                    progress.set_postfix(
                        imported=session.result.imported_count,
                        duplicates=session.result.duplicate_count,
                        rejected=session.result.rejected_count,
                    )
        else:
            session = transition(previous, event)

        if previous.step is Step.PREVIEW and session.step is Step.COMPLETE:
            self.committed_count = self._committer.commit(
                session.result.records,  # type: ignore[union-attr]
                session.assignment,  # type: ignore[arg-type]
            )
            logger.debug("session=%s committed=%d", session.session_id, self.committed_count)
        elif session.step in (Step.UPLOAD, Step.CLOSED):
            self.committed_count = 0

        if session.step is not previous.step:
            logger.debug("step %s -> %s", previous.step.value, session.step.value)
        self._session = session
        return session
