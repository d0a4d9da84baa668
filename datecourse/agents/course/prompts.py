"""
Course Prompt Templates

Contains the system instruction and the request prompt builder for the
date course search.

Architecture:
- Pattern: Grounded LLM (single call per attempt, Google Maps tool enabled)
- Model: Gemini 2.5 Flash (settings.GEMINI_MODEL)
- Temperature: 0.7 on the first attempt, 0.8 on the retry
- Output: Korean markdown text, parsed line by line (the Maps tool does not
  support response_schema)

The answer format below is what datecourse.agents.course.parser expects.
Changing a header keyword or field label here means changing
datecourse.utils.constants too.
"""

# =============================================================================
# SYSTEM INSTRUCTION
# =============================================================================

COURSE_SYSTEM_PROMPT = """당신은 Google Maps 데이터를 기반으로 한국의 데이트 코스를 추천하는 AI 큐레이터입니다.

[절대 규칙 - 실존 장소 보장]
1. 무조건 **Google Maps**에 실제로 등록된 장소만 추천하세요.
2. 장소명은 Google 지도에 등록된 **정확한 상호명**을 사용하세요.
3. 주소는 Google 지도에 등록된 **정확한 도로명 주소**를 사용하세요.
4. **별점(평점)**은 반드시 Google Maps 검색 결과에 있는 **실제 수치**를 기입하세요. (데이터가 없으면 0.0)
5. 답변 생성 시 반드시 Google Maps 도구를 사용하여 각 장소의 메타데이터를 확인하세요.

[카테고리 엄수 및 중복 금지]
1. **절대 중복 금지**: 한 장소를 여러 카테고리에 중복 추천하지 마세요.
2. **카테고리 정확성**:
   - **맛집**: 식사 위주의 장소. 카페나 디저트 가게를 포함하지 마세요.
   - **카페**: 커피/디저트 위주. 식당을 포함하지 마세요.
   - **쇼핑**: 상점, 편집숍, 쇼핑몰. 무인 사진관을 포함하지 마세요.
   - **포토기기**: 반드시 '인생네컷', '포토이즘', '하루필름', '포토그레이' 등 **무인 셀프 사진관 프랜차이즈**만 추천하세요. 일반 스튜디오나 사진관은 제외하세요.
3. **빈 카테고리 금지**: 동네에 없으면 '구/군', 그래도 없으면 '시/도' 단위로 검색 범위를 넓혀서라도 반드시 추천 장소를 찾으세요.

[응답 형식]
각 카테고리는 "## 카테고리명"으로 시작하며, 장소 정보는 아래 형식을 엄수하세요:

## 맛집
* 장소명: [정확한 상호명]
* 주소: [도로명 주소]
* 별점: [Google Maps 실제 별점]
* 설명: [추천 이유]
"""

# =============================================================================
# REQUEST PROMPT
# =============================================================================

# (label in the prompt, number of places requested)
CATEGORY_QUOTAS = (
    ("맛집", 3),
    ("카페", 3),
    ("볼거리", 2),
    ("놀거리", 2),
    ("쇼핑", 2),
    ("휴식 활동", 2),
    ("포토기기", 2),
)

RETRY_NOTICE = (
    "[재검색 요청] 이전 검색 결과가 부족했습니다. 검색 반경을 넓혀서라도, "
    "반드시 각 카테고리에 맞는 유명하고 확실한 장소를 찾아내세요."
)


def build_course_user_prompt(location: str, retry: bool = False) -> str:
    """
    Build the request prompt for one attempt.

    Args:
        location: Space-joined "시/도 시/군/구 읍/면/동" string
        retry: Append the broaden-search notice (every attempt after the first)

    Returns:
        str: Prompt text for Gemini
    """
    quotas = "\n".join(
        f"- {label} {count}곳" + (" (무인 사진방 필수)" if label == "포토기기" else "")
        for label, count in CATEGORY_QUOTAS
    )

    prompt = f"""사용자 입력 위치: {location}

위 위치를 중심으로 데이트 코스를 추천해주세요.
각 카테고리별로 가장 인기있고 평점이 좋은 장소를 찾아주세요.

{quotas}
"""
    if retry:
        prompt += f"\n{RETRY_NOTICE}\n"
    return prompt
