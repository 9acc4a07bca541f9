from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from ..models.lead import FIELD_KEYS, LEAD_FIELDS, REQUIRED_FIELDS

"""Field mapping service: target lead field -> source spreadsheet column.

The mapper is a plain lookup table with at most one column per field key.
It does not stop two fields from pointing at the same column; keeping the
choices exclusive is left to whoever presents them.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "MappingError",
    "ValidationError",
    "MappingValidation",
    "FieldMapper",
]


class MappingError(ValueError):
    """Raised for a mapping action naming an unknown field or column."""


class ValidationError(Exception):
    """Raised when a step cannot be left because its input is incomplete."""

    def __init__(self, message: str, missing_required: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.missing_required = tuple(missing_required)


@dataclass(frozen=True)
class MappingValidation:
    ok: bool
    missing_required: tuple[str, ...] = ()


# Common header spellings seen in CRM / ad-platform exports, keyed by the
# normalized header (lower case, alphanumerics only).
COLUMN_ALIASES: dict[str, str] = {
    "fullname": "name",
    "leadname": "name",
    "customername": "name",
    "contactname": "name",
    "mobile": "phone",
    "mobileno": "phone",
    "mobilenumber": "phone",
    "phoneno": "phone",
    "phonenumber": "phone",
    "contactnumber": "phone",
    "emailaddress": "email",
    "emailid": "email",
    "location": "city",
    "budget": "value",
    "amount": "value",
    "leadsource": "source",
    "leadstage": "stage",
    "project": "projectName",
    "remarks": "notes",
    "comments": "notes",
}

_NON_ALNUM = re.compile(r"[^0-9a-z]+")


def _normalize_header(text: str) -> str:
    return _NON_ALNUM.sub("", text.lower())


class FieldMapper:
    """Holds the user's column choice per lead field and checks required fields."""

    def __init__(self, columns: Sequence[str], initial: Mapping[str, str] | None = None) -> None:
        self.columns = tuple(columns)
        self._mapping: dict[str, str] = {}
        for field_key, column in (initial or {}).items():
            self.set_mapping(field_key, column)

    @property
    def mapping(self) -> Mapping[str, str]:
        """Read-only snapshot of the current choices."""
        return MappingProxyType(dict(self._mapping))

    def set_mapping(self, field_key: str, column: str | None) -> None:
        """Choose `column` for `field_key`, replacing any earlier choice. None unmaps."""
        if field_key not in FIELD_KEYS:
            raise MappingError(f"unknown lead field: {field_key!r}")
        if column is None:
            self._mapping.pop(field_key, None)
            return
        if column not in self.columns:
            raise MappingError(f"column {column!r} not found in sheet header")
        self._mapping[field_key] = column

    def validate(self) -> MappingValidation:
        missing = tuple(key for key in REQUIRED_FIELDS if key not in self._mapping)
        return MappingValidation(ok=not missing, missing_required=missing)

    def auto_map(self) -> dict[str, str]:
        """Pre-select a column for every unmapped field whose header matches it.

        A header matches when its normalized form equals the field key, the
        field label, or a known alias. Columns already chosen are not reused.

        Returns:
            The field -> column choices that were added
        """
        taken = set(self._mapping.values())
        candidates: dict[str, str] = {}
        for column in self.columns:
            normalized = _normalize_header(column)
            for spec in LEAD_FIELDS:
                names = {_normalize_header(spec.key), _normalize_header(spec.label)}
                if normalized in names or COLUMN_ALIASES.get(normalized) == spec.key:
                    # first column (in header order) wins
                    candidates.setdefault(spec.key, column)
                    break

        added: dict[str, str] = {}
        for spec in LEAD_FIELDS:
            column = candidates.get(spec.key)
            if column is None or spec.key in self._mapping or column in taken:
                continue
            self._mapping[spec.key] = column
            taken.add(column)
            added[spec.key] = column
        if added:
            logger.debug("auto-mapped fields: %s", added)
        return added
