"""
Course Agent Runner

One grounded Gemini call: prompt + system instruction in, answer text plus
Google Maps evidence out. Retry decisions are made by the service layer;
this module only turns every failure of the call into a TransportError.
"""

import logging
from typing import Optional

from google import genai
from google.genai import types

from datecourse.agents.course.evidence import extract_evidence
from datecourse.agents.course.prompts import COURSE_SYSTEM_PROMPT
from datecourse.agents.course.types import ModelResponse
from datecourse.config import settings
from datecourse.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client: Optional[genai.Client] = None


def get_gemini_client() -> genai.Client:
    """
    Lazy initialization of the Gemini client.

    Raises:
        ConfigurationError: GOOGLE_API_KEY is not configured
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    if not settings.GOOGLE_API_KEY:
        logger.error("GOOGLE_API_KEY not configured")
        raise ConfigurationError(
            "GOOGLE_API_KEY is not configured. "
            "Please set it in your .env file to search date courses."
        )

    _gemini_client = genai.Client(api_key=settings.GOOGLE_API_KEY)
    logger.info("Gemini client initialized successfully for course search")
    return _gemini_client


def _response_text(response) -> str:
    # response.text can be None even when parts carry text
    candidates = getattr(response, "candidates", None) or []
    if candidates and candidates[0].content and candidates[0].content.parts:
        texts = [part.text for part in candidates[0].content.parts if getattr(part, "text", None)]
        if texts:
            return "".join(texts)
    return response.text or ""


async def generate_course_response(
    client: genai.Client,
    prompt: str,
    temperature: float,
    system_instruction: str = COURSE_SYSTEM_PROMPT,
    model: Optional[str] = None,
) -> ModelResponse:
    """
    Call Gemini with the Google Maps tool enabled.

    Args:
        client: Gemini client
        prompt: Request prompt for this attempt
        temperature: Sampling temperature for this attempt
        system_instruction: Course curator rules and answer format
        model: Model name (defaults to settings.GEMINI_MODEL)

    Returns:
        ModelResponse with the answer text and its grounding evidence

    Raises:
        TransportError: The call failed or returned no text
    """
    config = types.GenerateContentConfig(
        system_instruction=system_instruction,
        temperature=temperature,
        tools=[types.Tool(google_maps=types.GoogleMaps())],
    )

    try:
        response = await client.aio.models.generate_content(
            model=model or settings.GEMINI_MODEL,
            contents=prompt,
            config=config,
        )
    except Exception as e:
        logger.error(f"Error calling Gemini API: {e}")
        raise TransportError(str(e)) from e

    text = _response_text(response)
    if not text.strip():
        logger.error("Empty text in Gemini response")
        raise TransportError("Gemini returned an empty response")

    evidence = extract_evidence(response)
    logger.info(f"Gemini answered with {len(text)} chars and {len(evidence)} evidence records")
    logger.debug(f"Raw response text: {text}")

    return {"text": text, "evidence": evidence}
