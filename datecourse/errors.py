"""
Error hierarchy for date course searches.

Every error carries a short Korean ``user_message`` that the API layer shows
as-is, plus a machine-readable ``code``. ``str(error)`` keeps the technical
detail for logs.
"""

from typing import Optional, TYPE_CHECKING

from datecourse.utils.constants import (
    MESSAGE_API_KEY_MISSING,
    MESSAGE_PLACES_NOT_FOUND,
)

if TYPE_CHECKING:
    from datecourse.schemas.courses import DateCourseResult


class DateCourseError(Exception):
    """Base class for all errors surfaced by a course search."""

    code: str = "DATE_COURSE_ERROR"
    user_message: str = MESSAGE_PLACES_NOT_FOUND

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.user_message)


class ConfigurationError(DateCourseError):
    """GOOGLE_API_KEY is missing. Raised before any model call, never retried."""

    code = "CONFIGURATION_ERROR"
    user_message = MESSAGE_API_KEY_MISSING


class TransportError(DateCourseError):
    """The model call failed (network, quota, empty or malformed response)."""

    code = "TRANSPORT_ERROR"


class IncompleteResultError(DateCourseError):
    """
    A parsed result failed the completeness check.

    Not a hard failure: the orchestrator retries, and keeps ``result`` as a
    partial answer in case no later attempt does better.
    """

    code = "INCOMPLETE_RESULT"

    def __init__(self, result: "DateCourseResult", total_places: int, has_essentials: bool):
        self.result = result
        self.total_places = total_places
        self.has_essentials = has_essentials
        super().__init__(
            f"Incomplete result: total_places={total_places}, has_essentials={has_essentials}"
        )


class EmptyResultError(DateCourseError):
    """Every attempt finished without a single verified place."""

    code = "EMPTY_RESULT"
