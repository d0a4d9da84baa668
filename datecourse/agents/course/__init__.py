"""
Course Agent Package

Grounded Gemini workflow for date course recommendations.

Main Components:
- types: TypedDict definitions for evidence records and model responses
- prompts: System instruction and request prompt builder
- evidence: Evidence extraction and fuzzy name matching
- parser: Markdown answer -> DateCourseResult
- agent: The grounded Gemini call

Usage:
    from datecourse.agents.course.agent import generate_course_response
    from datecourse.agents.course.parser import parse_course_response

    response = await generate_course_response(client, prompt, temperature=0.7)
    result = parse_course_response(response["text"], response["evidence"])

Only types and prompts are re-exported here; the parser depends on
datecourse.schemas, which itself imports the types below.
"""

from datecourse.agents.course.prompts import (
    COURSE_SYSTEM_PROMPT,
    RETRY_NOTICE,
    build_course_user_prompt,
)
from datecourse.agents.course.types import (
    CategoryType,
    EvidenceRecord,
    ModelResponse,
)

__all__ = [
    # Prompts
    "COURSE_SYSTEM_PROMPT",
    "RETRY_NOTICE",
    "build_course_user_prompt",
    # Types
    "CategoryType",
    "EvidenceRecord",
    "ModelResponse",
]
