#!/usr/bin/env python3
"""
Pre-generate today's balance game questions for every category.

Intended for a system scheduler (cron, systemd timer) shortly after local
midnight, so the first visitor of the day is served from the cache.

    python scripts/pregenerate.py
    python scripts/pregenerate.py --date 2024-5-1 --category daily --category work
"""

import argparse
import asyncio
import sys

from balance_game.api.dependencies import build_store
from balance_game.categories import DEFAULT_CATEGORIES, get_category
from balance_game.config import settings
from balance_game.entities import GenerationStatus
from balance_game.exceptions import BalanceGameError, ValidationInputError
from balance_game.observability import setup_logging
from balance_game.repositories import GeminiQuestionGenerator
from balance_game.services import QuestionService
from balance_game.utils import today_seed

STATUS_MARKS = {
    GenerationStatus.GENERATED: "✓ generated",
    GenerationStatus.CACHED: "• cached",
    GenerationStatus.FAILED: "✗ failed",
}


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fill the question cache for one day.")
    parser.add_argument("--date", dest="date_seed", help="Date seed (default: today in TIMEZONE)")
    parser.add_argument(
        "--category",
        dest="categories",
        action="append",
        help="Category id to generate (repeatable, default: all)",
    )
    return parser.parse_args(argv)


async def run(date_seed: str, category_ids: list[str] | None) -> int:
    """Run the bulk job and return the number of failed categories."""
    categories = DEFAULT_CATEGORIES
    if category_ids:
        unknown = [c for c in category_ids if get_category(c) is None]
        if unknown:
            raise ValidationInputError("Unknown categories", unknown=unknown)
        categories = tuple(get_category(c) for c in category_ids)

    generator = GeminiQuestionGenerator.create()
    service = QuestionService.create(store=build_store(), generator=generator)

    try:
        report = await service.pregenerate_all(categories, date_seed)
    finally:
        await generator.close()

    print_section(f"Pre-generation for {date_seed}")
    for item in report:
        line = f"  {STATUS_MARKS[item.status]:<14} {item.category:<14} {item.question_count:>3}"
        if item.error:
            line += f"  ({item.error})"
        print(line)

    failed = sum(1 for item in report if item.status is GenerationStatus.FAILED)
    print(f"\n  {len(report) - failed}/{len(report)} categories ready")
    return failed


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(settings.log_level, settings.log_format)

    try:
        failed = asyncio.run(run(args.date_seed or today_seed(), args.categories))
    except BalanceGameError as e:
        print(f"\n❌ Error: {e}")
        print("\nCheck GEMINI_API_KEY and REDIS_URL (or set CACHE_BACKEND=memory).")
        return 2

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
