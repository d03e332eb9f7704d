# src/main.py
"""CLI entry point: ingest, ingest-raw, similar, show, list, analyze commands.

Usage:
    creditai ingest "<name>" <score> "<history text>"
    creditai ingest-raw "<name>" <score> <raw_data.json>
    creditai similar <identity> [--limit N]
    creditai show <identity>
    creditai list [--page N] [--page-size N]
    creditai analyze <identity> "<question>"
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from creditai.core.errors import UserInputError
from creditai.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USER_ERROR = 2
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    from creditai.config.settings import ConfigurationError, load_settings

    overrides = {}
    if args.store:
        overrides["store_path"] = args.store
    try:
        settings = load_settings(**overrides)
    except (ConfigurationError, ValidationError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_ERROR
    _setup_logging(settings, args.verbose)

    service = None
    try:
        service = _service(settings)
        return asyncio.run(args.func(args, service))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except (UserInputError, ValidationError, ValueError) as exc:
        logger.error("Invalid request: %s", exc)
        return EXIT_USER_ERROR
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_ERROR
    finally:
        if service is not None:
            service.close()


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="creditai",
        description=f"CreditAI v{__version__}: behavioral credit profile search",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--store", type=Path, default=None,
        help="SQLite profile database (overrides STORE_PATH)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- ingest ---
    p_ingest = subparsers.add_parser("ingest", help="Ingest a profile from its history")
    p_ingest.add_argument("name", help="Customer name")
    p_ingest.add_argument("score", type=int, help="Credit score (0-1000)")
    p_ingest.add_argument("history", help="Free-text behavioral history")
    p_ingest.set_defaults(func=_cmd_ingest)

    # --- ingest-raw ---
    p_raw = subparsers.add_parser(
        "ingest-raw", help="Ingest a profile from raw JSON data via the LLM",
    )
    p_raw.add_argument("name", help="Customer name")
    p_raw.add_argument("score", type=int, help="Credit score (0-1000)")
    p_raw.add_argument("raw_data", type=Path, help="Path to JSON file with raw data")
    p_raw.add_argument(
        "--instruction", default=None,
        help="Override the narrative generation instruction",
    )
    p_raw.set_defaults(func=_cmd_ingest_raw)

    # --- similar ---
    p_similar = subparsers.add_parser("similar", help="Find behaviorally similar profiles")
    p_similar.add_argument("identity", help="Target profile identity")
    p_similar.add_argument(
        "-n", "--limit", type=int, default=None,
        help="Maximum number of matches (clamped to 1..SIMILAR_MAX_LIMIT)",
    )
    p_similar.set_defaults(func=_cmd_similar)

    # --- show ---
    p_show = subparsers.add_parser("show", help="Show one profile")
    p_show.add_argument("identity", help="Profile identity")
    p_show.set_defaults(func=_cmd_show)

    # --- list ---
    p_list = subparsers.add_parser("list", help="List stored profiles")
    p_list.add_argument("--page", type=int, default=1)
    p_list.add_argument("--page-size", type=int, default=20)
    p_list.set_defaults(func=_cmd_list)

    # --- analyze ---
    p_analyze = subparsers.add_parser("analyze", help="LLM risk analysis of a profile")
    p_analyze.add_argument("identity", help="Profile identity")
    p_analyze.add_argument("question", help="Question for the analyst")
    p_analyze.set_defaults(func=_cmd_analyze)

    return parser


def _setup_logging(settings, verbose: bool) -> None:
    from creditai.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format="text" if verbose else settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


def _service(settings):
    from creditai.api.facade import create_service

    return create_service(settings)


async def _cmd_ingest(args: argparse.Namespace, service) -> int:
    from creditai.api.models import ProfileRequest

    request = ProfileRequest(
        name=args.name, numeric_score=args.score, behavior_text=args.history,
    )
    response = await service.ingest(request)
    print(response.model_dump_json(indent=2))
    return EXIT_OK


async def _cmd_ingest_raw(args: argparse.Namespace, service) -> int:
    from creditai.api.models import RawDataProfileRequest

    raw_data = json.loads(args.raw_data.read_text(encoding="utf-8"))
    request = RawDataProfileRequest(
        name=args.name,
        numeric_score=args.score,
        raw_data=raw_data,
        instruction=args.instruction,
    )
    response = await service.ingest_from_raw_data(request)
    print(response.model_dump_json(indent=2))
    return EXIT_OK


async def _cmd_similar(args: argparse.Namespace, service) -> int:
    matches = await service.find_similar(args.identity, args.limit)
    if not matches:
        print("No similar profiles found.")
        return EXIT_OK
    for rank, match in enumerate(matches, 1):
        line = (
            f"{rank:2d}. {match.display_name} [{match.identity}] "
            f"score={match.numeric_score} similarity={match.similarity_percent:.2f}% "
            f"final={match.final_score:.4f}"
        )
        if match.rationale:
            line += f" - {match.rationale}"
        print(line)
    return EXIT_OK


async def _cmd_show(args: argparse.Namespace, service) -> int:
    response = await service.get_profile(args.identity)
    print(response.model_dump_json(indent=2))
    return EXIT_OK


async def _cmd_list(args: argparse.Namespace, service) -> int:
    page = await service.list_profiles(args.page, args.page_size)
    print(page.model_dump_json(indent=2))
    return EXIT_OK


async def _cmd_analyze(args: argparse.Namespace, service) -> int:
    response = await service.analyze_risk(args.identity, args.question)
    print(response.analysis)
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
