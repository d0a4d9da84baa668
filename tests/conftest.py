"""
Pytest configuration for date course backend tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from types import SimpleNamespace

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")


def make_evidence(title, uri=None, source="maps"):
    """Evidence record as produced by extract_evidence."""
    return {"title": title, "uri": uri or f"https://maps.google.com/?q={title}", "source": source}


def make_gemini_response(text, chunks=()):
    """
    Minimal stand-in for a google-genai GenerateContentResponse.

    ``chunks`` is a sequence of (kind, title, uri) with kind "maps" or "web".
    """
    grounding_chunks = []
    for kind, title, uri in chunks:
        source = SimpleNamespace(title=title, uri=uri)
        grounding_chunks.append(
            SimpleNamespace(
                maps=source if kind == "maps" else None,
                web=source if kind == "web" else None,
            )
        )
    candidate = SimpleNamespace(
        content=SimpleNamespace(parts=[SimpleNamespace(text=text)]),
        grounding_metadata=SimpleNamespace(grounding_chunks=grounding_chunks),
    )
    return SimpleNamespace(text=text, candidates=[candidate])


@pytest.fixture
def full_course_text():
    """Well-formed answer with one restaurant, one cafe and one photo booth."""
    return """여기 역삼동 데이트 코스입니다.

## 맛집
* 장소명: 을지로 골뱅이
* 주소: 서울 강남구 테헤란로 1
* 별점: 4.5
* 설명: 분위기 좋은 노포

## 카페
* 장소명: **카페 어니언 역삼**
* 주소: 서울 강남구 역삼로 2
* 별점: 4.3
* 설명: 넓은 베이커리 카페

## 포토기기
* 장소명: 인생네컷 역삼점
* 주소: 서울 강남구 논현로 3
* 별점: 0.0
* 설명: 24시간 무인 사진관
"""


@pytest.fixture
def full_course_evidence():
    return [
        make_evidence("을지로 골뱅이", "https://maps.google.com/?cid=1"),
        make_evidence("카페 어니언 역삼 - Google Maps", "https://maps.google.com/?cid=2", source="web"),
        make_evidence("인생네컷 역삼점", "https://maps.google.com/?cid=3"),
    ]


@pytest.fixture(name="make_evidence")
def make_evidence_fixture():
    return make_evidence


@pytest.fixture(name="make_gemini_response")
def make_gemini_response_fixture():
    return make_gemini_response
