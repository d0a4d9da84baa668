"""
FastAPI routes for date course search.

The search form (city / district / neighborhood) posts here. Every failure
comes back as a single displayable message, never as an HTTP error, so the
client only has to switch on ``status``.

Endpoints:
- POST /courses/search: Recommend places for a neighborhood
"""

from typing import Union

from fastapi import APIRouter

from datecourse.errors import DateCourseError
from datecourse.schemas.courses import (
    DateCourseResponseError,
    DateCourseResponseOK,
    LocationQuery,
)
from datecourse.services.course_service import fetch_date_course
from datecourse.utils.logging import get_logger

logger = get_logger(__name__)

# Create router
router = APIRouter(
    prefix="/courses",
    tags=["courses"]
)


DateCourseResponse = Union[DateCourseResponseOK, DateCourseResponseError]


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "/search",
    response_model=DateCourseResponse,
    status_code=200,
    summary="Recommend a date course",
    description="""
    Recommends verified places for a neighborhood, grouped into seven
    categories (restaurant, cafe, sightseeing, activity, shopping,
    relaxation, photo).

    **Frontend Flow:**
    1. User picks 시/도, 시/군/구 and 읍/면/동
    2. POST /courses/search (one request in flight at a time)
    3. Receive one of two responses:
       - OK: places per category (restaurant and cafe usually non-empty)
       - ERROR: show ``message`` inline and clear any previous result
    """
)
async def search_date_course_endpoint(request: LocationQuery) -> DateCourseResponse:
    """
    Date course search endpoint.

    - Parse/Validate: LocationQuery (all three fields non-blank)
    - Call service: fetch_date_course with the space-joined location
    - Map output: DateCourseError -> DateCourseResponseError
    """
    location = request.to_location_string()
    logger.info(f"POST /courses/search called for location='{location}'")

    try:
        result = await fetch_date_course(location)
    except DateCourseError as e:
        logger.warning(f"Course search failed: code={e.code}, detail={e}")
        return DateCourseResponseError(code=e.code, message=e.user_message)

    logger.info(f"Returning course with {result.total_places()} places")
    return DateCourseResponseOK(location=location, result=result)
