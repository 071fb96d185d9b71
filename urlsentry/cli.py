from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from urlsentry.heuristics import DANGEROUS, SAFE, SUSPICIOUS
from urlsentry.scoring import enrich_score, enrich_scores


logger = logging.getLogger(__name__)

STATUS_ORDER = [SAFE, SUSPICIOUS, DANGEROUS]

EXIT_READ_ERROR = 1
EXIT_THRESHOLD_HIT = 3


def read_url_file(path: Path) -> List[str]:
    """Read one URL per line, skipping blank lines and # comments."""
    urls = []
    with path.open("r", encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            urls.append(line)
    return urls


def format_text(result: Dict[str, Any]) -> str:
    lines = [
        f"URL:    {result['url']}",
        f"Status: {result['status']}",
        f"Score:  {result['score']}/100",
        "Reasons:",
    ]
    lines.extend(f"  - {reason}" for reason in result["reasons"])
    if result["recommendation"]:
        lines.append(f"Recommendation: {result['recommendation']}")
    return "\n".join(lines)


def print_results(results: List[Dict[str, Any]], output_format: str, single: bool = False) -> None:
    if output_format == "json":
        payload: Any = results[0] if single else results
        print(json.dumps(payload, indent=2))
    else:
        print("\n\n".join(format_text(r) for r in results))


def threshold_hit(results: List[Dict[str, Any]], fail_on: Optional[str]) -> bool:
    if not fail_on:
        return False
    limit = STATUS_ORDER.index(fail_on)
    return any(STATUS_ORDER.index(r["status"]) >= limit for r in results)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="urlsentry",
        description="urlsentry - heuristic URL phishing-risk scorer",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    # options shared by every scoring command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--output-format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    common.add_argument(
        "--fail-on",
        choices=[SUSPICIOUS, DANGEROUS],
        default=None,
        help="Exit with code 3 if any URL is rated at or above this level",
    )

    subparsers = parser.add_subparsers(dest="command")

    # score-url command
    score_parser = subparsers.add_parser(
        "score-url", parents=[common], help="Score a single URL"
    )
    score_parser.add_argument(
        "url",
        help="URL to score",
    )

    # score-urls command
    score_batch_parser = subparsers.add_parser(
        "score-urls", parents=[common], help="Score multiple URLs (space-separated)"
    )
    score_batch_parser.add_argument(
        "urls",
        nargs="+",
        help="One or more URLs to score",
    )

    # score-file command
    score_file_parser = subparsers.add_parser(
        "score-file", parents=[common], help="Score every URL in a file (one per line)"
    )
    score_file_parser.add_argument(
        "path",
        type=Path,
        help="Path to a text file of URLs",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = "DEBUG" if args.verbose else os.getenv("URLSENTRY_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "score-url":
        results = [enrich_score(args.url)]
        print_results(results, args.output_format, single=True)

    elif args.command == "score-urls":
        results = enrich_scores(args.urls)
        print_results(results, args.output_format)

    elif args.command == "score-file":
        try:
            urls = read_url_file(args.path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Could not read {args.path}: {e}", file=sys.stderr)
            return EXIT_READ_ERROR
        logger.info("Loaded %d URLs from %s", len(urls), args.path)
        results = enrich_scores(urls)
        print_results(results, args.output_format)

    else:
        parser.print_help()
        return 1

    if threshold_hit(results, args.fail_on):
        return EXIT_THRESHOLD_HIT
    return 0


if __name__ == "__main__":
    sys.exit(main())
