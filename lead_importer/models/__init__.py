"""Domain models for the lead import pipeline."""

from .config_models import AssignmentConfig, ImportConfig
from .import_result import ImportResult
from .lead import (
    FIELD_KEYS,
    LEAD_FIELDS,
    REQUIRED_FIELDS,
    CandidateRecord,
    FieldSpec,
    LeadPriority,
    LeadSource,
    LeadStage,
)
from .row_data import CellValue, RawRow
from .session import Assignment, AssignmentMode, ImportSession, Operator, Step

__all__ = [
    # Configuration models
    "AssignmentConfig",
    "ImportConfig",
    # Lead schema
    "CandidateRecord",
    "FieldSpec",
    "FIELD_KEYS",
    "LEAD_FIELDS",
    "REQUIRED_FIELDS",
    "LeadPriority",
    "LeadSource",
    "LeadStage",
    # Processing models
    "CellValue",
    "RawRow",
    "ImportResult",
    # Session state
    "Assignment",
    "AssignmentMode",
    "ImportSession",
    "Operator",
    "Step",
]
