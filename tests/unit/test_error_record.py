from __future__ import annotations

import json
import re

from lead_importer.models.error_record import ErrorRecord


def test_create_sets_utc_timestamp():
    record = ErrorRecord.create(file="leads.xlsx", step="upload", error_type="PARSE_ERROR", message="bad file")

    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z$", record.timestamp)
    assert record.file == "leads.xlsx"
    assert record.step == "upload"


def test_to_json_line_has_fixed_keys():
    record = ErrorRecord(
        timestamp="2026-01-05T09:30:00Z",
        file="leads.xlsx",
        step="mapping",
        error_type="VALIDATION_ERROR",
        message="required fields not mapped: phone",
    )

    data = json.loads(record.to_json_line())

    assert data == {
        "timestamp": "2026-01-05T09:30:00Z",
        "file": "leads.xlsx",
        "step": "mapping",
        "error_type": "VALIDATION_ERROR",
        "message": "required fields not mapped: phone",
    }


def test_to_json_line_keeps_non_ascii():
    record = ErrorRecord("2026-01-05T09:30:00Z", "लीड्स.xlsx", "upload", "PARSE_ERROR", "x")

    assert "लीड्स.xlsx" in record.to_json_line()
