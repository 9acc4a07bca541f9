from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

import yaml

from ..models.session import Operator

"""Operator list collaborator.

The CRM user list is fetched once per dialog open. Only users carrying the
caller role can receive leads. A failed fetch is not fatal: the import goes
on with an empty list (auto assignment still works).
"""

logger = logging.getLogger(__name__)

__all__ = [
    "CALLER_ROLE",
    "OperatorDirectory",
    "FileOperatorDirectory",
    "filter_callers",
    "fetch_operators_safely",
]

CALLER_ROLE = "caller"


class OperatorDirectory(Protocol):
    def fetch_operators(self) -> list[Operator]: ...


class FileOperatorDirectory:
    """Reads operators from a YAML (or JSON) list of {id, name, role} entries."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def fetch_operators(self) -> list[Operator]:
        data = yaml.safe_load(self.path.read_text(encoding="utf-8")) or []
        if not isinstance(data, list):
            raise ValueError(f"operators file must contain a list: {self.path}")
        return [_to_operator(item) for item in data]


def _to_operator(item: Any) -> Operator:
    if not isinstance(item, dict) or "id" not in item:
        raise ValueError(f"invalid operator entry: {item!r}")
    operator_id = str(item["id"])
    return Operator(
        id=operator_id,
        name=str(item.get("name") or operator_id),
        role=str(item.get("role") or ""),
    )


def filter_callers(operators: Iterable[Operator]) -> tuple[Operator, ...]:
    return tuple(op for op in operators if op.role == CALLER_ROLE)


def fetch_operators_safely(directory: OperatorDirectory | None) -> list[Operator]:
    """Fetch the operator list, degrading to [] when the collaborator fails."""
    if directory is None:
        return []
    try:
        return list(directory.fetch_operators())
    except Exception as e:
        logger.warning("operator list unavailable, continuing without callers: %s", e)
        return []
