from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ..models.lead import CandidateRecord

"""Phone-based deduplication of candidate records.

The identity key is the phone with every whitespace character removed. The
first record seen for a key is kept; later ones are dropped and counted, no
matter how complete they are.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "identity_key",
    "dedupe",
]

_WHITESPACE = re.compile(r"\s+")


def identity_key(phone: str) -> str:
    return _WHITESPACE.sub("", phone)


def dedupe(records: Iterable[CandidateRecord]) -> tuple[list[CandidateRecord], int]:
    """Drop records whose identity key was already seen.

    Args:
        records: Candidate records in row order; each must carry a phone

    Returns:
        (kept records in input order, number of dropped duplicates)
    """
    kept: dict[str, CandidateRecord] = {}  # insertion ordered
    duplicates = 0
    for record in records:
        # phone is always set: normalize_row rejects rows without it
        key = identity_key(record.phone)  # type: ignore[arg-type]
        if key in kept:
            duplicates += 1
            logger.debug("duplicate phone key=%s dropped record=%s kept=%s", key, record.id, kept[key].id)
            continue
        kept[key] = record
    return list(kept.values()), duplicates
