from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .session import AssignmentMode

"""Config dataclasses for the lead import CLI.

Filled by `lead_importer.config.loader.load_config` after schema validation.
Paths are kept as strings and resolved relative to the working directory.
"""

__all__ = [
    "AssignmentConfig",
    "ImportConfig",
]


@dataclass(frozen=True)
class AssignmentConfig:
    mode: AssignmentMode = AssignmentMode.AUTO
    operator_id: str | None = None  # required when mode is SINGLE


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for one import run."""
    source_file: str  # workbook to import (first sheet only)
    output_file: str  # JSON Lines file the committed leads are written to
    # field key -> column name (None unmaps a field the auto-mapping picked)
    column_mapping: Mapping[str, str | None] = field(default_factory=dict)
    assignment: AssignmentConfig = field(default_factory=AssignmentConfig)
    operators_file: str | None = None  # YAML/JSON list of CRM users
    logs_dir: str = "./logs"
