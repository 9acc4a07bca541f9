from __future__ import annotations

from ..models.import_result import ImportResult
from ..models.session import Assignment, AssignmentMode

"""Summary line rendering service for the lead import CLI.

Format:
SUMMARY rows={total} imported={imported} duplicates={dup} rejected={rej} assignment={mode}
where mode is `auto` or `single:<operator id>`.
"""

__all__ = [
    "render_summary_line",
]


def render_summary_line(result: ImportResult, assignment: Assignment | None = None) -> str:
    """Render a SUMMARY line from an ImportResult.

    Examples:
        >>> result = ImportResult(records=(), duplicate_count=1, rejected_count=2, total_rows=3)
        >>> render_summary_line(result)
        'SUMMARY rows=3 imported=0 duplicates=1 rejected=2 assignment=auto'
    """
    if assignment is None or assignment.mode is AssignmentMode.AUTO:
        assignment_str = AssignmentMode.AUTO.value
    else:
        assignment_str = f"{assignment.mode.value}:{assignment.operator_id}"
    return (
        f"SUMMARY rows={result.total_rows} "
        f"imported={result.imported_count} "
        f"duplicates={result.duplicate_count} "
        f"rejected={result.rejected_count} "
        f"assignment={assignment_str}"
    )
