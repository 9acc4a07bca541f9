from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any

"""Lead domain models: target field schema, vocabularies and CandidateRecord.

The field schema is the fixed contract offered to the mapping step. The three
vocabulary tables turn free-text spreadsheet tokens into canonical enum values
and never fail: an unknown token resolves to the table's fallback.
"""

__all__ = [
    "LeadSource",
    "LeadStage",
    "LeadPriority",
    "FieldSpec",
    "LEAD_FIELDS",
    "FIELD_KEYS",
    "REQUIRED_FIELDS",
    "VocabularyTable",
    "SOURCE_VOCABULARY",
    "STAGE_VOCABULARY",
    "PRIORITY_VOCABULARY",
    "CandidateRecord",
]


class LeadSource(str, Enum):
    WEBSITE = "website"
    GOOGLE_ADS = "google_ads"
    REFERRAL = "referral"
    SOCIAL_MEDIA = "social_media"
    OTHER = "other"


class LeadStage(str, Enum):
    """Sales pipeline stage. New imports start at NEW."""
    NEW = "new"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    WON = "won"
    LOST = "lost"


class LeadPriority(str, Enum):
    HOT = "hot"
    WARM = "warm"
    COLD = "cold"


@dataclass(frozen=True)
class FieldSpec:
    """One entry of the target schema offered to the mapping step."""
    key: str
    label: str
    required: bool = False


LEAD_FIELDS: tuple[FieldSpec, ...] = (
    FieldSpec("name", "Name", required=True),
    FieldSpec("phone", "Phone", required=True),
    FieldSpec("email", "Email"),
    FieldSpec("city", "City"),
    FieldSpec("value", "Lead Value"),
    FieldSpec("source", "Source"),
    FieldSpec("stage", "Stage"),
    FieldSpec("priority", "Priority"),
    FieldSpec("status", "Status"),
    FieldSpec("projectName", "Project Name"),
    FieldSpec("notes", "Notes"),
)

FIELD_KEYS: frozenset[str] = frozenset(spec.key for spec in LEAD_FIELDS)
REQUIRED_FIELDS: tuple[str, ...] = tuple(spec.key for spec in LEAD_FIELDS if spec.required)


@dataclass(frozen=True)
class VocabularyTable:
    """Lower-cased token -> canonical value, with a fallback for unknown tokens."""
    name: str
    tokens: Mapping[str, Enum]
    fallback: Enum

    def resolve(self, raw: str) -> Enum:
        return self.tokens.get(raw.lower(), self.fallback)


def _vocabulary(name: str, tokens: dict[str, Enum], fallback: Enum) -> VocabularyTable:
    # canonical values are always accepted as their own token
    table = {member.value: member for member in type(fallback)}
    table.update(tokens)
    return VocabularyTable(name=name, tokens=MappingProxyType(table), fallback=fallback)


SOURCE_VOCABULARY = _vocabulary(
    "source",
    {
        "website": LeadSource.WEBSITE,
        "google": LeadSource.GOOGLE_ADS,
        "referral": LeadSource.REFERRAL,
        "social": LeadSource.SOCIAL_MEDIA,
        "other": LeadSource.OTHER,
    },
    LeadSource.OTHER,
)
STAGE_VOCABULARY = _vocabulary("stage", {}, LeadStage.NEW)
PRIORITY_VOCABULARY = _vocabulary("priority", {}, LeadPriority.WARM)


# field key -> CRM payload key, for the keys that differ from the attribute name
_CRM_KEYS = {
    "project_name": "projectName",
    "created_at": "createdAt",
    "updated_at": "updatedAt",
}


@dataclass(frozen=True)
class CandidateRecord:
    """A lead produced by the import pipeline before it is committed.

    System fields carry their defaults; mapped fields stay None unless the
    spreadsheet supplied them. Records are built once and never edited.
    """
    id: str
    created_at: str  # ISO8601 UTC
    updated_at: str
    status: str = "active"
    stage: LeadStage = LeadStage.NEW
    priority: LeadPriority = LeadPriority.WARM
    category: str = "property"
    subcategory: str = "india_property"
    name: str | None = None
    phone: str | None = None
    email: str | None = None
    city: str | None = None
    value: int | float | None = None
    source: LeadSource | None = None
    project_name: str | None = None
    notes: str | None = None

    def to_crm_dict(self) -> dict[str, Any]:
        """Serialize to the CRM payload shape (camelCase keys, unset fields omitted)."""
        payload: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            payload[_CRM_KEYS.get(f.name, f.name)] = value
        return payload
