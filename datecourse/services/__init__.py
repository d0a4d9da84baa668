"""
Service layer for the date course backend.

Services sit between routes (HTTP layer) and agents: they build prompts,
drive the model calls, decide on retries and return schema objects.
"""

from .course_service import (
    SearchAttempt,
    check_completeness,
    fetch_date_course,
)
