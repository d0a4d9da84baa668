"""
Closed vocabularies for date course searches.

The model is asked to answer in a fixed Korean markdown layout. These are the
category keys, header keywords and field labels the parser recognizes, plus
the user-facing messages. None of these are user-configurable.
"""

# Result keys, in display order
CATEGORY_KEYS = (
    "restaurant",
    "cafe",
    "sightseeing",
    "activity",
    "shopping",
    "relaxation",
    "photo",
)

# Header keyword -> category key. The keyword found earliest in a
# "## ..." header wins, so "포토기기" and "유명 포토기기" both map
# to photo.
CATEGORY_HEADER_KEYWORDS = (
    ("맛집", "restaurant"),
    ("카페", "cafe"),
    ("볼거리", "sightseeing"),
    ("놀거리", "activity"),
    ("쇼핑", "shopping"),
    ("휴식", "relaxation"),
    ("포토", "photo"),
)

# Both must have at least one place for a result to count as complete
ESSENTIAL_CATEGORIES = ("restaurant", "cafe")

# Field labels in "* 장소명: ..." lines
FIELD_LABEL_NAME = "장소명"
FIELD_LABEL_ADDRESS = "주소"
FIELD_LABEL_RATING = "별점"
FIELD_LABEL_DESCRIPTION = "설명"

# Self-service photo booth brands and markers (matched lowercase, as substrings).
# Staffed studios ("사진관", "스튜디오") are deliberately absent.
PHOTO_BOOTH_KEYWORDS = (
    "인생네컷",
    "네컷",
    "포토이즘",
    "포토그레이",
    "포토시그니처",
    "포토매틱",
    "하루필름",
    "비룸스튜디오",
    "셀픽스",
    "모노맨션",
    "돈룩업",
    "무인사진",
    "셀프사진",
    "photoism",
    "photogray",
    "photosignature",
    "harufilm",
    "life4cut",
    "lifefourcuts",
    "selpix",
)

DEFAULT_DESCRIPTION = "설명 없음"

# Messages shown to the user as-is
MESSAGE_API_KEY_MISSING = "API 키가 설정되지 않았습니다. 관리자에게 문의해주세요."
MESSAGE_PLACES_NOT_FOUND = "장소를 찾을 수 없습니다. 잠시 후 다시 시도해주세요."
