from __future__ import annotations

import pytest

from lead_importer.models.lead import LeadPriority, LeadSource, LeadStage
from lead_importer.models.row_data import RawRow
from lead_importer.services.normalizer import is_supplied, normalize_row, to_number, to_text

TS = "2026-01-05T09:30:00.000Z"

FULL_MAPPING = {
    "name": "Full Name",
    "phone": "Mobile",
    "email": "Email",
    "city": "City",
    "value": "Budget",
    "source": "Lead Source",
    "stage": "Stage",
    "priority": "Priority",
    "projectName": "Project",
    "notes": "Remarks",
}


def _row(**values) -> RawRow:
    return RawRow(row_number=2, values=values)


@pytest.mark.parametrize(
    "value, expected",
    [(None, False), (float("nan"), False), ("", False), (0, False), (0.0, False), ("0", True), ("x", True), (5, True)],
)
def test_is_supplied(value, expected):
    assert is_supplied(value) is expected


def test_to_text_drops_trailing_zero_for_integral_floats():
    assert to_text(9876543210.0) == "9876543210"
    assert to_text(1.5) == "1.5"
    assert to_text(42) == "42"
    assert to_text("  Pune ") == "  Pune "


@pytest.mark.parametrize(
    "value, expected",
    [
        ("4500000", 4500000),
        (" 12.0 ", 12),
        ("2.75", 2.75),
        ("1.2e6", 1200000),
        ("abc", 0),
        ("1_000", 0),
        ("inf", 0),
        ("nan", 0),
        ("   ", 0),
        (3, 3),
        (2.5, 2.5),
        (7.0, 7),
    ],
)
def test_to_number(value, expected):
    result = to_number(value)
    assert result == expected
    assert type(result) is type(expected)


def test_normalize_row_full_mapping():
    row = _row(**{
        "Full Name": "Asha Patil",
        "Mobile": 9876543210,
        "Email": "asha@example.com",
        "City": "Pune",
        "Budget": "4500000",
        "Lead Source": "Google",
        "Stage": "QUALIFIED",
        "Priority": "hot",
        "Project": "Skyline Towers",
        "Remarks": "call after 6pm",
    })

    record = normalize_row(row, FULL_MAPPING, record_id="import_s1_0", timestamp=TS)

    assert record is not None
    assert record.id == "import_s1_0"
    assert record.created_at == TS
    assert record.updated_at == TS
    assert record.name == "Asha Patil"
    assert record.phone == "9876543210"
    assert record.email == "asha@example.com"
    assert record.city == "Pune"
    assert record.value == 4500000
    assert record.source is LeadSource.GOOGLE_ADS
    assert record.stage is LeadStage.QUALIFIED
    assert record.priority is LeadPriority.HOT
    assert record.project_name == "Skyline Towers"
    assert record.notes == "call after 6pm"


def test_normalize_row_applies_system_defaults():
    row = _row(**{"Full Name": "Ravi", "Mobile": "9123456780"})

    record = normalize_row(row, FULL_MAPPING, record_id="r", timestamp=TS)

    assert record is not None
    assert record.status == "active"
    assert record.stage is LeadStage.NEW
    assert record.priority is LeadPriority.WARM
    assert record.category == "property"
    assert record.subcategory == "india_property"
    assert record.email is None
    assert record.value is None
    assert record.source is None


def test_normalize_row_unknown_tokens_fall_back():
    row = _row(**{
        "Full Name": "Ravi",
        "Mobile": "9123456780",
        "Lead Source": "billboard",
        "Stage": "thinking",
        "Priority": "urgent",
    })

    record = normalize_row(row, FULL_MAPPING, record_id="r", timestamp=TS)

    assert record.source is LeadSource.OTHER
    assert record.stage is LeadStage.NEW
    assert record.priority is LeadPriority.WARM


def test_normalize_row_non_numeric_value_becomes_zero():
    row = _row(**{"Full Name": "Ravi", "Mobile": "9123456780", "Budget": "call me"})

    record = normalize_row(row, FULL_MAPPING, record_id="r", timestamp=TS)

    assert record.value == 0
    assert record.to_crm_dict()["value"] == 0


def test_normalize_row_zero_cell_counts_as_blank():
    row = _row(**{"Full Name": "Ravi", "Mobile": "9123456780", "Budget": 0})

    record = normalize_row(row, FULL_MAPPING, record_id="r", timestamp=TS)

    assert record.value is None


@pytest.mark.parametrize(
    "values",
    [
        {"Mobile": "9123456780"},
        {"Full Name": "Ravi"},
        {"Full Name": "", "Mobile": "9123456780"},
        {"Full Name": "Ravi", "Mobile": 0},
    ],
)
def test_normalize_row_rejects_missing_name_or_phone(values):
    assert normalize_row(_row(**values), FULL_MAPPING, record_id="r", timestamp=TS) is None


def test_normalize_row_ignores_status_column():
    mapping = {"name": "Name", "phone": "Phone", "status": "Status"}
    row = _row(Name="Ravi", Phone="1", Status="closed")

    record = normalize_row(row, mapping, record_id="r", timestamp=TS)

    assert record.status == "active"


def test_normalize_row_ignores_unmapped_columns():
    mapping = {"name": "Name", "phone": "Phone"}
    row = _row(Name="Ravi", Phone="1", City="Pune")

    record = normalize_row(row, mapping, record_id="r", timestamp=TS)

    assert record.city is None


def test_boolean_cells():
    assert is_supplied(False) is False
    assert is_supplied(True) is True
    assert to_text(True) == "true"
    assert to_number(True) == 1
    assert type(to_number(True)) is int


def test_normalize_row_false_name_is_rejected():
    mapping = {"name": "Name", "phone": "Phone"}

    assert normalize_row(_row(Name=False, Phone="9000000001"), mapping, record_id="r", timestamp=TS) is None
    record = normalize_row(_row(Name=True, Phone="9000000002"), mapping, record_id="r", timestamp=TS)
    assert record.name == "true"


def test_normalize_row_stage_tokens():
    mapping = {"name": "Name", "phone": "Phone", "stage": "Stage"}

    won = normalize_row(_row(Name="Ravi", Phone="1", Stage="WON"), mapping, record_id="r1", timestamp=TS)
    unknown = normalize_row(_row(Name="Asha", Phone="2", Stage="unknown_stage"), mapping, record_id="r2", timestamp=TS)

    assert won.stage is LeadStage.WON
    assert unknown.stage is LeadStage.NEW
