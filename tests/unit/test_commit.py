from __future__ import annotations

import json
from pathlib import Path

from lead_importer.models.lead import CandidateRecord, LeadSource
from lead_importer.models.session import Assignment, AssignmentMode
from lead_importer.services.commit import JsonLinesCommitter


def _record(i: int, **kw) -> CandidateRecord:
    return CandidateRecord(
        id=f"import_s_{i}",
        created_at="2026-01-05T09:30:00.000Z",
        updated_at="2026-01-05T09:30:00.000Z",
        name=f"Lead {i}",
        phone=f"90000000{i:02d}",
        **kw,
    )


def test_commit_writes_one_line_per_record(temp_workdir: Path):
    out = temp_workdir / "out" / "leads.jsonl"
    committer = JsonLinesCommitter(out)

    count = committer.commit([_record(0, source=LeadSource.REFERRAL), _record(1)], Assignment(AssignmentMode.AUTO))

    assert count == 2
    lines = out.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["id"] == "import_s_0"
    assert first["source"] == "referral"
    assert first["assignmentMode"] == "auto"
    assert "assignedTo" not in first


def test_commit_single_assignment_adds_assignee(temp_workdir: Path):
    out = temp_workdir / "leads.jsonl"

    JsonLinesCommitter(out).commit([_record(0)], Assignment(AssignmentMode.SINGLE, "op-1"))

    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["assignmentMode"] == "single"
    assert payload["assignedTo"] == "op-1"


def test_commit_appends(temp_workdir: Path):
    out = temp_workdir / "leads.jsonl"
    committer = JsonLinesCommitter(out)

    committer.commit([_record(0)], Assignment(AssignmentMode.AUTO))
    committer.commit([_record(1)], Assignment(AssignmentMode.AUTO))

    assert len(out.read_text(encoding="utf-8").splitlines()) == 2


def test_commit_nothing(temp_workdir: Path):
    out = temp_workdir / "leads.jsonl"

    assert JsonLinesCommitter(out).commit([], Assignment(AssignmentMode.AUTO)) == 0
    assert out.read_text(encoding="utf-8") == ""
