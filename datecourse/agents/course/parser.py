"""
Course Response Parser

Turns the model's markdown-like answer into a DateCourseResult:

    ## 맛집
    * 장소명: 정확한 상호명
    * 주소: 도로명 주소
    * 별점: 4.5
    * 설명: 추천 이유

Each line is classified first (header, one of the four fields, or other) and
then fed to a small state machine holding the active category and the place
being built. A place is finalized when the next name line or header arrives,
or at end of input. Finalizing applies, in order:

1. name + address required, otherwise the place is dropped
2. category filter (photo must look like a self-service booth, shopping must not)
3. name+address deduplication across the whole result
4. evidence verification; unverified places are dropped

All state lives in one parser instance, so a parse never leaks into the next.
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Literal, NamedTuple, Optional, Set

from datecourse.agents.course.evidence import find_matching_evidence, normalize_name
from datecourse.agents.course.types import CategoryType, EvidenceRecord
from datecourse.schemas.courses import DateCourseResult, Place
from datecourse.utils.constants import (
    CATEGORY_HEADER_KEYWORDS,
    CATEGORY_KEYS,
    DEFAULT_DESCRIPTION,
    FIELD_LABEL_ADDRESS,
    FIELD_LABEL_DESCRIPTION,
    FIELD_LABEL_NAME,
    FIELD_LABEL_RATING,
    PHOTO_BOOTH_KEYWORDS,
)

logger = logging.getLogger(__name__)

LineKind = Literal["header", "name", "address", "rating", "description", "other"]

_HEADER_RE = re.compile(r"^[\*\s]*#{2,}\s*(.*)$")
_EMPHASIS_RE = re.compile(r"\*\*")
_RATING_CHARS_RE = re.compile(r"[^\d.]")
_WHITESPACE_RE = re.compile(r"\s")


def _field_regex(label: str) -> "re.Pattern[str]":
    # "* 장소명: x", "- **주소**: x", "1. 장소명：x"
    return re.compile(rf"^[\*\-\d\.\s]*{label}\**\s*[:：]\s*(.+)$")


_FIELD_PATTERNS = (
    ("name", _field_regex(FIELD_LABEL_NAME)),
    ("address", _field_regex(FIELD_LABEL_ADDRESS)),
    ("rating", _field_regex(FIELD_LABEL_RATING)),
    ("description", _field_regex(FIELD_LABEL_DESCRIPTION)),
)


class ClassifiedLine(NamedTuple):
    kind: LineKind
    value: str


def classify_line(line: str) -> ClassifiedLine:
    """Classify a single (untrimmed) line of model output."""
    trimmed = line.strip()
    if not trimmed:
        return ClassifiedLine("other", "")

    header = _HEADER_RE.match(trimmed)
    if header:
        return ClassifiedLine("header", header.group(1).strip())

    for kind, pattern in _FIELD_PATTERNS:
        match = pattern.match(trimmed)
        if match:
            return ClassifiedLine(kind, match.group(1).strip())

    return ClassifiedLine("other", trimmed)


def category_from_header(header_text: str) -> Optional[CategoryType]:
    """
    Map header text to a category by the earliest keyword it contains.

    Matching is by substring, so "포토기기" and "유명 포토기기" both map to photo.
    Returns None when no keyword is present.
    """
    best: Optional[CategoryType] = None
    best_pos = -1
    for keyword, category in CATEGORY_HEADER_KEYWORDS:
        pos = header_text.find(keyword)
        if pos != -1 and (best_pos == -1 or pos < best_pos):
            best, best_pos = category, pos
    return best


def clean_rating(raw: str) -> Optional[str]:
    """Keep only digits and '.' ('★ 4.5' -> '4.5'); None if nothing is left."""
    rating = _RATING_CHARS_RE.sub("", raw)
    return rating or None


def dedup_key(name: str, address: str) -> str:
    return _WHITESPACE_RE.sub("", f"{name}{address}")


def is_photo_booth(name: str) -> bool:
    """Keyword check on the normalized name, so '포토 이즘' counts as '포토이즘'."""
    normalized = normalize_name(name)
    return any(keyword in normalized for keyword in PHOTO_BOOTH_KEYWORDS)


@dataclass
class _PlaceBuilder:
    category: CategoryType
    name: str
    address: Optional[str] = None
    rating: Optional[str] = None
    description: Optional[str] = None


class CourseResponseParser:
    """Single-use parser for one model response."""

    def __init__(self, evidence: List[EvidenceRecord]):
        self._evidence = evidence
        self._category: Optional[CategoryType] = None
        self._builder: Optional[_PlaceBuilder] = None
        self._seen: Set[str] = set()
        self._places: Dict[str, List[Place]] = {key: [] for key in CATEGORY_KEYS}

    def parse(self, text: str) -> DateCourseResult:
        for line in text.splitlines():
            self._feed(classify_line(line))
        self._finalize()
        return DateCourseResult(**self._places)

    def _feed(self, line: ClassifiedLine) -> None:
        if line.kind == "header":
            self._finalize()
            self._category = category_from_header(line.value)
            if self._category is None:
                logger.debug(f"Ignoring unrecognized header: {line.value!r}")
            return

        if self._category is None or line.kind == "other":
            return

        if line.kind == "name":
            self._finalize()
            self._builder = _PlaceBuilder(category=self._category, name=line.value)
            return

        if self._builder is None:
            return

        if line.kind == "address":
            self._builder.address = line.value
        elif line.kind == "rating":
            self._builder.rating = clean_rating(line.value)
        elif line.kind == "description":
            self._builder.description = line.value

    def _finalize(self) -> None:
        builder, self._builder = self._builder, None
        if builder is None:
            return

        name = _EMPHASIS_RE.sub("", builder.name).strip()
        address = (builder.address or "").strip()
        if not name or not address:
            logger.debug(f"Dropping incomplete place: name={name!r}, address={address!r}")
            return

        if not self._passes_category_filter(builder.category, name):
            logger.debug(f"Dropping {name!r}: does not fit category {builder.category}")
            return

        key = dedup_key(name, address)
        if key in self._seen:
            return

        evidence = find_matching_evidence(name, self._evidence)
        if evidence is None:
            logger.debug(f"Dropping unverified place {name!r}")
            return

        display_name = evidence["title"] or name
        # The evidence title may differ from the model's name, so the final
        # name is filtered and deduplicated as well.
        if not self._passes_category_filter(builder.category, display_name):
            logger.debug(f"Dropping {display_name!r}: evidence title does not fit {builder.category}")
            return
        display_key = dedup_key(display_name, address)
        if display_key in self._seen:
            return

        self._seen.update((key, display_key))
        self._places[builder.category].append(
            Place(
                name=display_name,
                address=address,
                description=builder.description or DEFAULT_DESCRIPTION,
                category=builder.category,
                rating=builder.rating,
                external_reference=evidence["uri"],
            )
        )

    @staticmethod
    def _passes_category_filter(category: CategoryType, name: str) -> bool:
        if category == "photo":
            return is_photo_booth(name)
        if category == "shopping":
            return not is_photo_booth(name)
        return True


def parse_course_response(text: str, evidence: List[EvidenceRecord]) -> DateCourseResult:
    """Parse one model answer into verified, deduplicated places per category."""
    result = CourseResponseParser(evidence).parse(text)
    logger.info(f"Parsed course response: {result.counts()}")
    return result
