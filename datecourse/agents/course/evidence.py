"""
Grounding evidence helpers.

Gemini paraphrases and abbreviates place names, so the names in the answer
text rarely equal the titles in the grounding metadata. A place counts as
verified when its name matches one of the evidence titles:

1. Containment: the normalized name contains the normalized title, or the
   other way round ("스타벅스" vs "스타벅스 역삼역점").
2. Token overlap: at least half of the name's tokens (ceil) occur in the
   normalized title ("역삼 스타벅스" vs "스타벅스 역삼역점").

The first evidence record (in response order) passing either check wins, and
its title becomes the display name.
"""

import logging
import math
import re
from typing import Any, List, Optional

from datecourse.agents.course.types import EvidenceRecord

logger = logging.getLogger(__name__)

_SEPARATORS_RE = re.compile(r"[\s\-_.]+")
_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")
_MAPS_SUFFIX_RE = re.compile(r"\s*-\s*Google\s*Maps\s*$", re.IGNORECASE)


def normalize_name(value: str) -> str:
    """Drop whitespace and - _ . separators, lowercase. Idempotent."""
    return _SEPARATORS_RE.sub("", value).lower()


def strip_maps_suffix(title: str) -> str:
    """'카페 어니언 - Google Maps' -> '카페 어니언'"""
    return _MAPS_SUFFIX_RE.sub("", title).strip()


def _name_tokens(candidate: str) -> List[str]:
    return [t for t in _TOKEN_SPLIT_RE.split(candidate.lower()) if len(t) > 1]


def _matches(candidate: str, title: str) -> bool:
    clean_target = normalize_name(candidate)
    clean_title = normalize_name(strip_maps_suffix(title))
    if not clean_target or not clean_title:
        return False

    if clean_target in clean_title or clean_title in clean_target:
        return True

    tokens = _name_tokens(candidate)
    if tokens:
        hits = sum(1 for token in tokens if token in clean_title)
        if hits >= math.ceil(len(tokens) * 0.5):
            return True

    return False


def find_matching_evidence(
    candidate: str, evidence: List[EvidenceRecord]
) -> Optional[EvidenceRecord]:
    """
    Return the first evidence record that matches ``candidate``, or None.

    The returned record's title has the " - Google Maps" suffix removed, so it
    can be used directly as the authoritative display name.
    """
    for record in evidence:
        if _matches(candidate, record["title"]):
            return {
                "title": strip_maps_suffix(record["title"]),
                "uri": record["uri"],
                "source": record["source"],
            }
    return None


def extract_evidence(response: Any) -> List[EvidenceRecord]:
    """
    Collect evidence records from a Gemini response's grounding metadata.

    Maps chunks are preferred over web chunks for both title and URI.
    Chunks without any title are skipped.
    """
    records: List[EvidenceRecord] = []

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return records

    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    for chunk in chunks:
        maps = getattr(chunk, "maps", None)
        web = getattr(chunk, "web", None)

        title = (getattr(maps, "title", None) if maps else None) or (
            getattr(web, "title", None) if web else None
        )
        if not title:
            continue

        uri = (getattr(maps, "uri", None) if maps else None) or (
            getattr(web, "uri", None) if web else None
        )
        source = "maps" if maps and getattr(maps, "title", None) else "web"
        records.append({"title": title, "uri": uri, "source": source})

    logger.debug(f"Extracted {len(records)} evidence records from {len(chunks)} chunks")
    return records
