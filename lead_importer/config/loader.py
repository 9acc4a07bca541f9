from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import AssignmentConfig, ImportConfig
from ..models.session import AssignmentMode

"""Config loader for the lead import CLI.

Responsibilities:
- Load the YAML config (default config/import.yml)
- Validate it against contracts/config_schema.json
- Apply defaults (auto assignment, ./logs, no explicit column mapping)
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "load_config",
]

DEFAULT_CONFIG_PATH = Path("config/import.yml")

# lead_importer/config/loader.py -> lead_importer/contracts
SCHEMA_PATH = Path(__file__).resolve().parent.parent / "contracts" / "config_schema.json"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or if the
            config data fails validation (missing keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    assignment_raw = data.get("assignment") or {}
    operator_id = assignment_raw.get("operator_id")
    assignment = AssignmentConfig(
        mode=AssignmentMode(assignment_raw.get("mode", AssignmentMode.AUTO.value)),
        operator_id=str(operator_id) if operator_id is not None else None,
    )
    return ImportConfig(
        source_file=data["source_file"],
        output_file=data["output_file"],
        column_mapping=dict(data.get("column_mapping") or {}),
        assignment=assignment,
        operators_file=data.get("operators_file"),
        logs_dir=data.get("logs_dir", "./logs"),
    )
