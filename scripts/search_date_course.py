#!/usr/bin/env python3
"""
Date Course Search Script

Runs a real course search from the command line, without starting the API
server. Uses Gemini with Google Maps grounding, so GOOGLE_API_KEY must be set.

Usage:
    python scripts/search_date_course.py
    python scripts/search_date_course.py --city 서울특별시 --district 마포구 --neighborhood 연남동
    python scripts/search_date_course.py --city 부산광역시 --district 해운대구 --neighborhood 우동 --json
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv

load_dotenv()

from datecourse.errors import DateCourseError
from datecourse.schemas.courses import DateCourseResult, LocationQuery
from datecourse.services.course_service import fetch_date_course
from datecourse.utils.constants import CATEGORY_KEYS
from datecourse.utils.logging import configure_root_logging

# Configure logging
configure_root_logging()
logger = logging.getLogger(__name__)

CATEGORY_LABELS = {
    "restaurant": "맛집",
    "cafe": "카페",
    "sightseeing": "볼거리",
    "activity": "놀거리",
    "shopping": "쇼핑",
    "relaxation": "휴식",
    "photo": "포토기기",
}


def print_result(result: DateCourseResult):
    """Pretty print places grouped by category."""
    print("\n" + "=" * 60)
    print(f"✅ Found {result.total_places()} verified place(s)")
    print("=" * 60)

    for key in CATEGORY_KEYS:
        places = result.places_for(key)
        print(f"\n## {CATEGORY_LABELS[key]} ({len(places)})")
        for place in places:
            rating = f" ★{place.rating}" if place.rating else ""
            print(f"  - {place.name}{rating}")
            print(f"    {place.address}")
            print(f"    {place.description}")
            if place.external_reference:
                print(f"    {place.external_reference}")


async def run_search(query: LocationQuery, as_json: bool = False) -> int:
    """Run one search and print it. Returns the process exit code."""
    location = query.to_location_string()
    if not as_json:
        print(f"\nLocation: {location}")
        print("Calling Gemini API (with Google Maps grounding)...")

    try:
        result = await fetch_date_course(location)
    except DateCourseError as e:
        print(f"\n❌ {e.user_message}")
        print(f"   ({e.code}: {e})\n")
        return 1

    if as_json:
        print(json.dumps(result.model_dump(), ensure_ascii=False, indent=2))
    else:
        print_result(result)
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Search a date course for a Korean neighborhood"
    )
    parser.add_argument("--city", "-c", type=str, default="서울특별시", help="시/도")
    parser.add_argument("--district", "-d", type=str, default="강남구", help="시/군/구")
    parser.add_argument("--neighborhood", "-n", type=str, default="역삼동", help="읍/면/동")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    query = LocationQuery(
        city=args.city,
        district=args.district,
        neighborhood=args.neighborhood,
    )
    sys.exit(asyncio.run(run_search(query, as_json=args.json)))


if __name__ == "__main__":
    main()
