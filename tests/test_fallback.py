"""
Tests for the offline question bank and date seeds.
"""

from datetime import date, datetime, timezone

import pytest

from balance_game.fallback import FALLBACK_QUESTIONS, seed_from_string, seeded_random, select_fallback
from balance_game.utils import format_date_seed, today_seed


def test_selection_is_deterministic():
    first = select_fallback("2024-5-1", "work", 10)
    second = select_fallback("2024-5-1", "work", 10)

    assert first == second
    assert len(first) == 10
    assert len(set(first)) == 10
    assert set(first) <= set(FALLBACK_QUESTIONS["work"])


def test_selection_varies_across_days():
    selections = {tuple(select_fallback(f"2024-5-{day}", "daily", 10)) for day in range(1, 8)}
    assert len(selections) > 1


@pytest.mark.parametrize("category", ["ideal-male", "ideal-female", "school", "hobby", "mahjong"])
def test_categories_with_their_own_bank(category):
    selection = select_fallback("2024-5-1", category, 10)

    assert len(selection) == 10
    assert set(selection) <= set(FALLBACK_QUESTIONS[category])


def test_unknown_category_uses_daily_bank():
    selection = select_fallback("2024-5-1", "money", 10)
    assert set(selection) <= set(FALLBACK_QUESTIONS["daily"])


def test_count_larger_than_bank_returns_whole_bank():
    selection = select_fallback("2024-5-1", "ability", 50)
    assert sorted(selection, key=lambda q: q.option1) == sorted(FALLBACK_QUESTIONS["ability"], key=lambda q: q.option1)


def test_seed_from_string_matches_string_hash():
    assert seed_from_string("") == 0
    assert seed_from_string("a") == 97
    assert seed_from_string("ab") == 97 * 31 + 98


def test_seeded_random_range_and_repeatability():
    rand_a = seeded_random("2024-5-1_daily")
    rand_b = seeded_random("2024-5-1_daily")
    values = [rand_a() for _ in range(20)]

    assert values == [rand_b() for _ in range(20)]
    assert all(0 <= v < 1 for v in values)


def test_format_date_seed_has_no_padding():
    assert format_date_seed(date(2024, 5, 1)) == "2024-5-1"
    assert format_date_seed(date(2024, 12, 31)) == "2024-12-31"


def test_today_seed_uses_local_day():
    # 15:30 UTC on April 30 is already May 1 in Seoul
    now = datetime(2024, 4, 30, 15, 30, tzinfo=timezone.utc)

    assert today_seed("Asia/Seoul", now=now) == "2024-5-1"
    assert today_seed("UTC", now=now) == "2024-4-30"
