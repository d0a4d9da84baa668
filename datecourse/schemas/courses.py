"""
Pydantic schemas for date course search endpoints.

These models define the request/response contracts between the UI and the
course search service (Gemini with Google Maps grounding).
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from datecourse.agents.course.types import CategoryType
from datecourse.utils.constants import CATEGORY_KEYS, ESSENTIAL_CATEGORIES

# ============================================================================
# DOMAIN MODELS
# ============================================================================


class Place(BaseModel):
    """
    One recommended venue, verified against grounding evidence.

    Built by the response parser once a place has both a name and an address,
    immutable afterwards.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Display name (the grounding evidence title when matched)",
        examples=["스타벅스 역삼역점"]
    )
    address: str = Field(
        ...,
        min_length=1,
        description="Address as written by the model",
        examples=["서울 강남구 테헤란로 156"]
    )
    description: str = Field(
        ...,
        description="Why the place is recommended"
    )
    category: CategoryType = Field(
        ...,
        description="Category the place was listed under"
    )
    rating: Optional[str] = Field(
        None,
        description=(
            "Rating as a decimal string (e.g. '4.5'). '0.0' means the model "
            "reported no rating data; None means no rating line at all."
        ),
        examples=["4.5", "0.0"]
    )
    external_reference: Optional[str] = Field(
        None,
        description="Map link taken from the matching grounding evidence",
        examples=["https://maps.google.com/?cid=123"]
    )


class DateCourseResult(BaseModel):
    """
    Places grouped by category.

    All seven lists are always present (possibly empty). No two places in the
    whole result share a name+address key.
    """
    model_config = ConfigDict(frozen=True)

    restaurant: List[Place] = Field(default_factory=list)
    cafe: List[Place] = Field(default_factory=list)
    sightseeing: List[Place] = Field(default_factory=list)
    activity: List[Place] = Field(default_factory=list)
    shopping: List[Place] = Field(default_factory=list)
    relaxation: List[Place] = Field(default_factory=list)
    photo: List[Place] = Field(default_factory=list)

    def places_for(self, category: str) -> List[Place]:
        """Return the list for a category key."""
        if category not in CATEGORY_KEYS:
            raise KeyError(f"Unknown category: {category}")
        return getattr(self, category)

    def counts(self) -> Dict[str, int]:
        return {key: len(self.places_for(key)) for key in CATEGORY_KEYS}

    def total_places(self) -> int:
        return sum(self.counts().values())

    def has_essentials(self) -> bool:
        """True when every essential category (restaurant, cafe) has a place."""
        return all(self.places_for(key) for key in ESSENTIAL_CATEGORIES)


# ============================================================================
# REQUEST MODELS
# ============================================================================


class LocationQuery(BaseModel):
    """
    Three-level administrative address collected by the search form.

    All three fields are required; the service receives them as a single
    space-joined string.
    """
    city: str = Field(
        ...,
        description="시/도",
        max_length=50,
        examples=["서울특별시"]
    )
    district: str = Field(
        ...,
        description="시/군/구",
        max_length=50,
        examples=["강남구"]
    )
    neighborhood: str = Field(
        ...,
        description="읍/면/동",
        max_length=50,
        examples=["역삼동"]
    )

    @field_validator("city", "district", "neighborhood")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    def to_location_string(self) -> str:
        """'서울특별시 강남구 역삼동'"""
        return f"{self.city} {self.district} {self.neighborhood}"


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class DateCourseResponseOK(BaseModel):
    """Successful search: places grouped by category."""
    status: Literal["OK"] = Field(
        "OK",
        description="Always 'OK' for this response type"
    )
    location: str = Field(
        ...,
        description="Location string the search ran for",
        examples=["서울특별시 강남구 역삼동"]
    )
    result: DateCourseResult = Field(
        ...,
        description="Verified places per category"
    )


class DateCourseResponseError(BaseModel):
    """Failed search. ``message`` is meant to be shown to the user directly."""
    status: Literal["ERROR"] = Field(
        "ERROR",
        description="Always 'ERROR' for this response type"
    )
    code: str = Field(
        ...,
        description="Machine-readable error kind",
        examples=["CONFIGURATION_ERROR", "TRANSPORT_ERROR", "EMPTY_RESULT"]
    )
    message: str = Field(
        ...,
        description="Short human-readable message (Korean)",
        examples=["장소를 찾을 수 없습니다. 잠시 후 다시 시도해주세요."]
    )
