"""
Tests for the course response parser.

Covers line classification, header mapping, the finalize policy (complete
places only, category filters, deduplication, evidence gating) and the
end-to-end scenarios the search relies on.
"""

import random

import pytest

from datecourse.agents.course.parser import (
    CourseResponseParser,
    category_from_header,
    classify_line,
    clean_rating,
    dedup_key,
    is_photo_booth,
    parse_course_response,
)
from datecourse.agents.course.evidence import find_matching_evidence, normalize_name
from datecourse.utils.constants import CATEGORY_KEYS, PHOTO_BOOTH_KEYWORDS


def block(name, address, rating=None, description=None):
    lines = [f"* 장소명: {name}", f"* 주소: {address}"]
    if rating is not None:
        lines.append(f"* 별점: {rating}")
    if description is not None:
        lines.append(f"* 설명: {description}")
    return "\n".join(lines)


def all_places(result):
    return [place for key in CATEGORY_KEYS for place in result.places_for(key)]


# =============================================================================
# UNIT TESTS: Line Classification
# =============================================================================

class TestClassifyLine:
    """Tests for classify_line."""

    @pytest.mark.parametrize("line,kind,value", [
        ("## 맛집", "header", "맛집"),
        ("### 1. 카페 추천", "header", "1. 카페 추천"),
        ("**## 포토기기**", "header", "포토기기**"),
        ("* 장소명: 을지로 골뱅이", "name", "을지로 골뱅이"),
        ("- 장소명：을지로 골뱅이", "name", "을지로 골뱅이"),
        ("1. 장소명: 을지로 골뱅이", "name", "을지로 골뱅이"),
        ("* **장소명**: **을지로 골뱅이**", "name", "**을지로 골뱅이**"),
        ("장소명: 을지로 골뱅이", "name", "을지로 골뱅이"),
        ("   * 주소: 서울 중구 을지로 1  ", "address", "서울 중구 을지로 1"),
        ("* 별점: 4.5", "rating", "4.5"),
        ("* 설명: 분위기 좋은 노포", "description", "분위기 좋은 노포"),
        ("", "other", ""),
        ("여기 추천 코스입니다.", "other", "여기 추천 코스입니다."),
        ("* 장소명:", "other", "* 장소명:"),
    ])
    def test_classification(self, line, kind, value):
        classified = classify_line(line)
        assert classified.kind == kind
        assert classified.value == value


class TestCategoryFromHeader:
    """Tests for header keyword mapping."""

    @pytest.mark.parametrize("header,expected", [
        ("맛집", "restaurant"),
        ("카페", "cafe"),
        ("볼거리", "sightseeing"),
        ("놀거리", "activity"),
        ("쇼핑", "shopping"),
        ("휴식 활동", "relaxation"),
        ("포토기기", "photo"),
        ("유명 포토기기 (무인 사진방)", "photo"),
        ("1. 역삼동 맛집 BEST", "restaurant"),
    ])
    def test_keyword_mapping(self, header, expected):
        assert category_from_header(header) == expected

    def test_earliest_keyword_wins(self):
        assert category_from_header("카페 & 맛집") == "cafe"
        assert category_from_header("맛집 & 카페") == "restaurant"

    def test_unknown_header(self):
        assert category_from_header("추천 코스 요약") is None


class TestHelpers:
    """Tests for rating cleanup, dedup keys and the photo booth check."""

    @pytest.mark.parametrize("raw,expected", [
        ("4.5", "4.5"),
        ("★ 4.3 점", "4.3"),
        ("0.0", "0.0"),
        ("정보 없음", None),
        ("", None),
    ])
    def test_clean_rating(self, raw, expected):
        assert clean_rating(raw) == expected

    def test_dedup_key_ignores_whitespace(self):
        assert dedup_key("카페 어니언", "서울 성동구 아차산로 9") == dedup_key(
            "카페어니언", "서울  성동구아차산로 9"
        )

    @pytest.mark.parametrize("name,expected", [
        ("인생네컷 역삼점", True),
        ("PHOTOISM 강남점", True),
        ("포토그레이 신촌", True),
        ("하루필름 홍대", True),
        ("포토 이즘 강남점", True),
        ("하루 필름 홍대", True),
        ("Life-4-Cut 성수", True),
        ("일반사진관", False),
        ("OO 스튜디오", False),
        ("교보문고", False),
    ])
    def test_is_photo_booth(self, name, expected):
        assert is_photo_booth(name) is expected


# =============================================================================
# END-TO-END SCENARIOS
# =============================================================================

class TestScenarios:
    """Scenarios from the search flow."""

    def test_single_restaurant_with_evidence(self, make_evidence):
        """One well-formed restaurant + matching evidence -> one verified place."""
        text = "## 맛집\n" + block("을지로 골뱅이", "서울 중구 을지로 1", "4.5", "노포")
        evidence = [make_evidence("을지로 골뱅이 본점", "https://maps.google.com/?cid=9")]

        result = parse_course_response(text, evidence)

        assert len(result.restaurant) == 1
        place = result.restaurant[0]
        assert place.name == "을지로 골뱅이 본점"
        assert place.external_reference == "https://maps.google.com/?cid=9"
        assert place.address == "서울 중구 을지로 1"
        assert place.rating == "4.5"
        assert place.description == "노포"
        assert place.category == "restaurant"
        assert result.total_places() == 1

    def test_non_booth_photo_place_filtered(self, make_evidence):
        """'일반사진관' under 포토 has no booth keyword -> photo stays empty."""
        text = "## 포토\n" + block("일반사진관", "서울 강남구 역삼로 5")
        evidence = [make_evidence("일반사진관")]

        result = parse_course_response(text, evidence)

        assert result.photo == []

    def test_duplicate_blocks_collapse(self, make_evidence):
        """Same name+address twice under one header -> one entry."""
        text = "## 카페\n" + block("카페 어니언", "서울 성동구 아차산로 9") + "\n" + block(
            "카페 어니언", "서울 성동구 아차산로 9"
        )
        evidence = [make_evidence("카페 어니언")]

        result = parse_course_response(text, evidence)

        assert len(result.cafe) == 1

    def test_name_without_address_dropped(self, make_evidence):
        """An incomplete place is dropped and does not block the next one."""
        text = "\n".join([
            "## 맛집",
            "* 장소명: 주소없는 식당",
            "* 설명: 주소가 빠졌습니다",
            "* 장소명: 을지로 골뱅이",
            "* 주소: 서울 중구 을지로 1",
        ])
        evidence = [make_evidence("주소없는 식당"), make_evidence("을지로 골뱅이")]

        result = parse_course_response(text, evidence)

        assert [p.name for p in result.restaurant] == ["을지로 골뱅이"]
        # The dropped place's description does not leak into the next one
        assert result.restaurant[0].description == "설명 없음"

    def test_full_course(self, full_course_text, full_course_evidence):
        result = parse_course_response(full_course_text, full_course_evidence)

        assert [p.name for p in result.restaurant] == ["을지로 골뱅이"]
        assert [p.name for p in result.cafe] == ["카페 어니언 역삼"]
        assert [p.name for p in result.photo] == ["인생네컷 역삼점"]
        assert result.photo[0].rating == "0.0"
        assert result.cafe[0].external_reference == "https://maps.google.com/?cid=2"
        assert result.has_essentials()


# =============================================================================
# UNIT TESTS: Finalize Policy
# =============================================================================

class TestFinalizePolicy:
    """Tests for the rules applied when a place is finalized."""

    def test_unverified_place_dropped(self, make_evidence):
        text = "## 맛집\n" + block("가짜 식당", "서울 어딘가 1")
        result = parse_course_response(text, [make_evidence("을지로 골뱅이")])
        assert result.total_places() == 0

    def test_no_evidence_means_no_places(self, full_course_text):
        assert parse_course_response(full_course_text, []).total_places() == 0

    def test_evidence_gating_with_mixed_matches(self, make_evidence):
        """Three places, evidence for one, then for all three."""
        text = "## 놀거리\n" + "\n".join([
            block("코엑스 아쿠아리움", "서울 강남구 영동대로 513"),
            block("롯데월드 어드벤처", "서울 송파구 올림픽로 240"),
            block("키이스케이프 강남", "서울 강남구 강남대로 1"),
        ])

        one = parse_course_response(text, [make_evidence("롯데월드 어드벤처")])
        assert [p.name for p in one.activity] == ["롯데월드 어드벤처"]

        three = parse_course_response(text, [
            make_evidence("키이스케이프 강남점"),
            make_evidence("코엑스아쿠아리움"),
            make_evidence("롯데월드"),
        ])
        assert [p.name for p in three.activity] == [
            "코엑스아쿠아리움",
            "롯데월드",
            "키이스케이프 강남점",
        ]

    def test_emphasis_stripped_from_name(self, make_evidence):
        text = "## 카페\n* 장소명: **카페 어니언**\n* 주소: 서울 성동구 아차산로 9"
        result = parse_course_response(text, [make_evidence("카페 어니언")])
        assert result.cafe[0].name == "카페 어니언"

    def test_model_name_kept_only_as_match_key(self, make_evidence):
        """The display name always comes from the evidence title."""
        text = "## 카페\n" + block("어니언", "서울 성동구 아차산로 9")
        result = parse_course_response(text, [make_evidence("카페 어니언 성수 - Google Maps")])
        assert result.cafe[0].name == "카페 어니언 성수"

    def test_missing_rating_is_none(self, make_evidence):
        text = "## 휴식\n" + block("석촌호수", "서울 송파구 잠실동")
        result = parse_course_response(text, [make_evidence("석촌호수")])
        assert result.relaxation[0].rating is None

    def test_shopping_excludes_photo_booths(self, make_evidence):
        text = "## 쇼핑\n" + "\n".join([
            block("포토이즘 강남점", "서울 강남구 강남대로 2"),
            block("교보문고 강남점", "서울 서초구 강남대로 465"),
        ])
        evidence = [make_evidence("교보문고 강남점"), make_evidence("포토이즘 강남점")]
        result = parse_course_response(text, evidence)
        assert [p.name for p in result.shopping] == ["교보문고 강남점"]

    def test_spaced_booth_brand_kept_under_photo(self, make_evidence):
        text = "## 포토기기\n" + block("하루 필름 홍대", "서울 마포구 와우산로 1")
        result = parse_course_response(text, [make_evidence("하루 필름 홍대")])
        assert [p.name for p in result.photo] == ["하루 필름 홍대"]

    def test_shopping_excludes_spaced_booth_brand(self, make_evidence):
        text = "## 쇼핑\n" + block("포토 이즘 강남점", "서울 강남구 강남대로 2")
        result = parse_course_response(text, [make_evidence("포토 이즘 강남점")])
        assert result.shopping == []

    def test_photo_booth_title_checked_after_evidence_swap(self, make_evidence):
        """A booth name matched to a non-booth title is not kept under photo."""
        text = "## 포토기기\n" + block("인생네컷 스타벅스", "서울 강남구 1")
        result = parse_course_response(text, [make_evidence("스타벅스")])
        assert result.photo == []

    def test_dedup_is_global_across_categories(self, make_evidence):
        text = "\n".join([
            "## 카페",
            block("카페 어니언", "서울 성동구 아차산로 9"),
            "## 휴식",
            block("카페 어니언", "서울 성동구 아차산로 9"),
        ])
        result = parse_course_response(text, [make_evidence("카페 어니언")])
        assert len(result.cafe) == 1
        assert result.relaxation == []

    def test_dedup_on_evidence_title(self, make_evidence):
        """Two model names resolving to the same title+address yield one place."""
        text = "## 맛집\n" + "\n".join([
            block("을지로 골뱅이", "서울 중구 을지로 1"),
            block("골뱅이 을지로 본점", "서울 중구 을지로 1"),
        ])
        result = parse_course_response(text, [make_evidence("을지로 골뱅이")])
        assert len(result.restaurant) == 1

    def test_same_name_different_address_both_kept(self, make_evidence):
        text = "## 카페\n" + "\n".join([
            block("스타벅스", "서울 강남구 테헤란로 1"),
            block("스타벅스", "서울 강남구 역삼로 2"),
        ])
        result = parse_course_response(text, [make_evidence("스타벅스")])
        assert len(result.cafe) == 2

    def test_fields_before_any_header_ignored(self, make_evidence):
        text = block("을지로 골뱅이", "서울 중구 을지로 1") + "\n## 카페\n"
        result = parse_course_response(text, [make_evidence("을지로 골뱅이")])
        assert result.total_places() == 0

    def test_unknown_header_suspends_parsing(self, make_evidence):
        text = "\n".join([
            "## 맛집",
            block("을지로 골뱅이", "서울 중구 을지로 1"),
            "## 코스 요약",
            block("카페 어니언", "서울 성동구 아차산로 9"),
            "## 카페",
            block("블루보틀 성수", "서울 성동구 아차산로 7"),
        ])
        evidence = [
            make_evidence("을지로 골뱅이"),
            make_evidence("카페 어니언"),
            make_evidence("블루보틀 성수"),
        ]
        result = parse_course_response(text, evidence)
        assert [p.name for p in result.restaurant] == ["을지로 골뱅이"]
        assert [p.name for p in result.cafe] == ["블루보틀 성수"]

    def test_header_finalizes_place_under_previous_category(self, make_evidence):
        text = "## 맛집\n" + block("을지로 골뱅이", "서울 중구 을지로 1") + "\n## 카페"
        result = parse_course_response(text, [make_evidence("을지로 골뱅이")])
        assert len(result.restaurant) == 1
        assert result.cafe == []

    def test_address_before_name_ignored(self, make_evidence):
        text = "## 맛집\n* 주소: 서울 중구 을지로 1\n* 장소명: 을지로 골뱅이"
        result = parse_course_response(text, [make_evidence("을지로 골뱅이")])
        assert result.total_places() == 0

    def test_crlf_line_endings(self, make_evidence):
        text = "## 맛집\r\n* 장소명: 을지로 골뱅이\r\n* 주소: 서울 중구 을지로 1\r\n"
        result = parse_course_response(text, [make_evidence("을지로 골뱅이")])
        assert result.restaurant[0].address == "서울 중구 을지로 1"

    def test_empty_text(self):
        result = parse_course_response("", [])
        assert result.counts() == {key: 0 for key in CATEGORY_KEYS}

    def test_parser_state_not_shared(self, make_evidence):
        text = "## 맛집\n" + block("을지로 골뱅이", "서울 중구 을지로 1")
        evidence = [make_evidence("을지로 골뱅이")]
        assert len(parse_course_response(text, evidence).restaurant) == 1
        assert len(parse_course_response(text, evidence).restaurant) == 1


# =============================================================================
# PROPERTY TESTS: Randomized Input
# =============================================================================

class TestParserProperties:
    """Invariants checked on randomly assembled answers."""

    NAMES = [
        "을지로 골뱅이", "카페 어니언", "인생네컷 역삼점", "일반사진관", "포토이즘 강남",
        "교보문고", "석촌호수", "**블루보틀**", "스타벅스", "하루필름 홍대",
    ]
    ADDRESSES = ["서울 중구 을지로 1", "서울 성동구 아차산로 9", "서울 강남구 1", ""]
    HEADERS = ["## 맛집", "## 카페", "## 볼거리", "## 놀거리", "## 쇼핑", "## 휴식", "## 포토기기", "## 요약"]

    def _random_text(self, rng):
        lines = []
        for _ in range(rng.randint(5, 40)):
            roll = rng.random()
            if roll < 0.15:
                lines.append(rng.choice(self.HEADERS))
            elif roll < 0.5:
                lines.append(f"* 장소명: {rng.choice(self.NAMES)}")
            elif roll < 0.8:
                address = rng.choice(self.ADDRESSES)
                if address:
                    lines.append(f"* 주소: {address}")
            elif roll < 0.9:
                lines.append(f"* 별점: {rng.choice(['4.5', '0.0', '없음'])}")
            else:
                lines.append(rng.choice(["* 설명: 좋아요", "", "잡담"]))
        return "\n".join(lines)

    def _random_evidence(self, rng, make_evidence):
        titles = [name.replace("**", "") for name in self.NAMES]
        return [make_evidence(t) for t in rng.sample(titles, rng.randint(0, len(titles)))]

    @pytest.mark.parametrize("seed", range(25))
    def test_invariants(self, seed, make_evidence):
        rng = random.Random(seed)
        evidence = self._random_evidence(rng, make_evidence)
        result = CourseResponseParser(evidence).parse(self._random_text(rng))

        places = all_places(result)
        keys = [dedup_key(p.name, p.address) for p in places]
        assert len(keys) == len(set(keys))

        for place in places:
            assert place.name.strip() and place.address.strip()
            assert find_matching_evidence(place.name, evidence) is not None

        for place in result.photo:
            assert any(k in normalize_name(place.name) for k in PHOTO_BOOTH_KEYWORDS)
        for place in result.shopping:
            assert not any(k in normalize_name(place.name) for k in PHOTO_BOOTH_KEYWORDS)
