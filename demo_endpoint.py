"""
Run the date course API locally.

Usage:
    python demo_endpoint.py
    python demo_endpoint.py --port 8080 --no-reload

Checks GOOGLE_API_KEY up front so a missing key is reported before the
server starts instead of on the first search.
"""

import argparse
import os
import sys

import uvicorn
from dotenv import load_dotenv

SEARCH_EXAMPLE = '{"city": "서울특별시", "district": "강남구", "neighborhood": "역삼동"}'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the date course API locally")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    parser.add_argument("--log-level", default=os.getenv("LOG_LEVEL", "INFO").lower())
    return parser


def main() -> int:
    load_dotenv()
    args = build_parser().parse_args()

    if not os.getenv("GOOGLE_API_KEY"):
        print("GOOGLE_API_KEY is not set; add it to .env before searching.", file=sys.stderr)
        return 1

    base = f"http://{args.host}:{args.port}"
    print(f"Health:  GET  {base}/health")
    print(f"Search:  POST {base}/courses/search")
    print(f"Docs:         {base}/docs")
    print(f"\ncurl -X POST {base}/courses/search -H 'Content-Type: application/json' \\")
    print(f"  -d '{SEARCH_EXAMPLE}'\n")

    uvicorn.run(
        "datecourse.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
        log_level=args.log_level,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
