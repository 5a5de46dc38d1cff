"""Command-line entrypoint for the fake-news credibility detector.

Subcommands:
1) ``analyze``: score text (inline, from a file, or stdin) and print a verdict
2) ``source``: rate the credibility of a URL's domain
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import List, Optional

from .errors import ConfigError, InputValidationError
from .output.report import format_outcome_json, format_result_text, format_source_text
from .service import AnalysisService
from .utils.logging import configure_logging, get_logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="fakenews-detector",
        description="Score the credibility of a news text with rule-based signals and an optional AI judgment",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL env or INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Analyze a piece of text")
    src = analyze.add_mutually_exclusive_group()
    src.add_argument("--text", help="Text to analyze")
    src.add_argument("--file", type=Path, help="Read text from a UTF-8 file ('-' for stdin)")
    analyze.add_argument("--url", help="Original article URL, used for the source-credibility lookup")
    analyze.add_argument("--json", action="store_true", help="Print the result as JSON")

    source = sub.add_parser("source", help="Check the credibility of a URL's domain")
    source.add_argument("url")
    source.add_argument("--json", action="store_true", help="Print the result as JSON")

    return parser.parse_args(argv)


def _read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    if args.file is not None and str(args.file) != "-":
        return args.file.read_text(encoding="utf-8")
    return sys.stdin.read()


async def _run_analyze(service: AnalysisService, args: argparse.Namespace) -> int:
    text = service.prepare_text(_read_text(args))
    outcome = await service.analyze_with_meta(text, args.url)
    if args.json:
        print(format_outcome_json(outcome))
    else:
        print(format_result_text(outcome.result, cached=outcome.cached), end="")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    # Optional: load .env
    try:
        from dotenv import load_dotenv  # type: ignore

        load_dotenv(override=False)
    except ImportError:
        pass
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    logger = get_logger("fnd.cli")

    try:
        service = AnalysisService()
    except ConfigError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 1

    if args.command == "source":
        info = service.check_source(args.url)
        if args.json:
            print(json.dumps(info.to_dict() if info else None, indent=2))
        else:
            print(format_source_text(info), end="")
        return 0 if info else 1

    try:
        return asyncio.run(_run_analyze(service, args))
    except InputValidationError as exc:
        logger.error("%s", exc)
        return 1
    except OSError as exc:
        logger.error("Could not read input: %s", exc)
        return 1


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
