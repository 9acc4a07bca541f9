# Shared pytest fixtures
from __future__ import annotations
import logging
import tempfile
from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pandas as pd
import pytest

from lead_importer.logging.init import LOGGER_NAME, reset_logging


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("LEAD_IMPORT_CONFIG", raising=False)
        yield p


@pytest.fixture(autouse=True)
def clean_logging():
    # every test starts with a fresh lead_importer logger bound to its own capsys
    reset_logging()
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
    reset_logging()


def build_workbook(sheets: dict[str, list[list[object]]], engine: str = "openpyxl") -> bytes:
    """Write rows (first row = header) into an in-memory workbook (.xlsx, or .ods with engine="odf")."""
    buf = BytesIO()
    with pd.ExcelWriter(buf, engine=engine) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return buf.getvalue()


@pytest.fixture()
def make_workbook() -> Callable[..., bytes]:
    return build_workbook


@pytest.fixture()
def scenario_rows() -> list[list[object]]:
    return [
        ["Full Name", "Mobile", "City"],
        ["Asha", "98765 43210", "Pune"],
        ["Ravi", "9876543210", "Mumbai"],
        [None, "9998887777", "Delhi"],
    ]


@pytest.fixture()
def leads_xlsx(temp_workdir: Path) -> Path:
    rows = [
        ["Full Name", "Mobile", "Email", "City", "Budget", "Lead Source", "Stage", "Priority", "Remarks"],
        ["Asha Patil", "98765 43210", "asha@example.com", "Pune", 4500000, "Google", "Qualified", "HOT", "site visit"],
        ["Ravi Kumar", "9876543210", "ravi@example.com", "Mumbai", "abc", "facebook", "WON", None, None],
        [None, "9998887777", None, "Delhi", None, None, None, None, None],
        ["Meera Shah", 9123456780, None, "Nashik", "1.2e6", "referral", "unknown_stage", "cold", None],
    ]
    path = temp_workdir / "data" / "leads.xlsx"
    path.write_bytes(build_workbook({"Leads": rows}))
    return path


@pytest.fixture()
def operators_yaml(temp_workdir: Path) -> Path:
    path = temp_workdir / "config" / "operators.yml"
    path.write_text(
        """- id: op-1
  name: Priya
  role: caller
- id: op-2
  name: Arjun
  role: admin
- id: op-3
  name: Kiran
  role: caller
""",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_file: ./data/leads.xlsx
output_file: ./out/leads.jsonl
operators_file: ./config/operators.yml
logs_dir: ./logs
column_mapping:
  notes: Remarks
assignment:
  mode: auto
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
