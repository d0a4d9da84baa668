"""
Course Agent Type Definitions

Typed contracts between the Gemini call, the evidence matcher and the parser.
"""

from typing import List, Literal, Optional, TypedDict

CategoryType = Literal[
    "restaurant",
    "cafe",
    "sightseeing",
    "activity",
    "shopping",
    "relaxation",
    "photo",
]


class EvidenceRecord(TypedDict):
    """One grounding chunk from the model response (read-only)."""
    title: str
    uri: Optional[str]
    source: Literal["maps", "web"]


class ModelResponse(TypedDict):
    """Text answer plus the grounding evidence it came with."""
    text: str
    evidence: List[EvidenceRecord]
