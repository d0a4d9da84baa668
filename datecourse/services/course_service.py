"""
Course Service - Gemini with Google Maps Grounding

This service recommends a date course (restaurants, cafés, sights,
activities, shopping, relaxation spots and self-service photo booths) for a
Korean neighborhood.

Architecture:
- Pattern: Grounded LLM with a bounded retry loop
- Model: Gemini 2.5 Flash (settings.GEMINI_MODEL)
- Grounding: Google Maps tool; every returned place matches an evidence record
- API: Google Gen AI Python SDK (google-genai), async client
- Output: Korean markdown text parsed into DateCourseResult

Retry protocol:
1. Attempt n sends the request prompt at temperature BASE + n * STEP.
2. The answer is parsed; a result is complete when it has at least one place
   and both restaurant and cafe are non-empty.
3. An incomplete result or a failed call triggers the next attempt, with the
   broaden-search notice appended, up to COURSE_MAX_ATTEMPTS (2).
4. If the last attempt is incomplete but found at least one place, its
   result is returned; otherwise the last failure is raised as a
   TransportError, or EmptyResultError when no call failed.

Missing GOOGLE_API_KEY raises ConfigurationError before any attempt.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from google import genai

from datecourse.agents.course.agent import generate_course_response, get_gemini_client
from datecourse.agents.course.parser import parse_course_response
from datecourse.agents.course.prompts import COURSE_SYSTEM_PROMPT, build_course_user_prompt
from datecourse.config import settings
from datecourse.errors import (
    EmptyResultError,
    IncompleteResultError,
    TransportError,
)
from datecourse.schemas.courses import DateCourseResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchAttempt:
    """Inputs of one attempt, rebuilt per iteration so each is reproducible."""
    number: int
    prompt: str
    temperature: float

    @classmethod
    def for_attempt(cls, location: str, number: int) -> "SearchAttempt":
        return cls(
            number=number,
            prompt=build_course_user_prompt(location, retry=number > 1),
            temperature=round(
                settings.COURSE_BASE_TEMPERATURE + number * settings.COURSE_TEMPERATURE_STEP, 2
            ),
        )


def check_completeness(result: DateCourseResult) -> DateCourseResult:
    """
    Return ``result`` if it is complete, otherwise raise IncompleteResultError.

    Complete means at least one place overall and at least one restaurant and
    one cafe.
    """
    total = result.total_places()
    has_essentials = result.has_essentials()
    if total > 0 and has_essentials:
        return result
    raise IncompleteResultError(result, total_places=total, has_essentials=has_essentials)


async def fetch_date_course(
    location: str,
    client: Optional[genai.Client] = None,
) -> DateCourseResult:
    """
    Recommend places for a location string like '서울특별시 강남구 역삼동'.

    Args:
        location: Space-joined city, district and neighborhood
        client: Gemini client (defaults to the lazily created shared client)

    Returns:
        DateCourseResult with all seven categories (non-essential ones may be empty)

    Raises:
        ConfigurationError: GOOGLE_API_KEY is not configured
        TransportError: Every attempt failed and the last failure was a model call
        EmptyResultError: No attempt produced a single verified place
    """
    logger.info(f"fetch_date_course called for location='{location}'")

    if client is None:
        client = get_gemini_client()

    max_attempts = settings.COURSE_MAX_ATTEMPTS
    last_error: Optional[TransportError] = None
    partial: Optional[DateCourseResult] = None

    for number in range(1, max_attempts + 1):
        partial = None
        attempt = SearchAttempt.for_attempt(location, number)
        logger.info(
            f"Course search attempt {attempt.number}/{max_attempts}, "
            f"temperature={attempt.temperature}"
        )

        try:
            response = await generate_course_response(
                client,
                attempt.prompt,
                temperature=attempt.temperature,
                system_instruction=COURSE_SYSTEM_PROMPT,
            )
            result = parse_course_response(response["text"], response["evidence"])
            result = check_completeness(result)
        except TransportError as e:
            logger.error(f"Attempt {attempt.number} failed: {e}")
            last_error = e
            continue
        except IncompleteResultError as e:
            logger.warning(
                f"Attempt {attempt.number} insufficient results "
                f"(total={e.total_places}, essentials={e.has_essentials})"
            )
            partial = e.result
            continue
        except Exception as e:
            logger.exception(f"Attempt {attempt.number} failed unexpectedly")
            last_error = TransportError(f"Unexpected failure: {e}")
            continue

        logger.info(f"Course search succeeded on attempt {attempt.number}: {result.counts()}")
        return result

    # Only the final attempt's partial result is returned
    if partial is not None and partial.total_places() > 0:
        logger.info(f"Returning partial course result: {partial.counts()}")
        return partial

    if last_error is not None:
        logger.error(f"Course search failed after {max_attempts} attempts: {last_error}")
        raise last_error

    logger.error(f"Course search found no places after {max_attempts} attempts")
    raise EmptyResultError()
