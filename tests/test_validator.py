"""
Tests for the question content validator.
"""

import pytest

from balance_game.entities import QuestionPair
from balance_game.validator import ContentValidator, RejectionReason, ValidationRules

from .fakes import valid_pair, valid_pairs


@pytest.mark.parametrize(
    "option1,option2,reason",
    [
        ("", "커피 평생 한번도 못하기", RejectionReason.MISSING_OPTION),
        ("   ", "커피 평생 한번도 못하기", RejectionReason.MISSING_OPTION),
        ("今日は 커피 평생 마시기", "커피 평생 한번도 못하기", RejectionReason.DISALLOWED_SCRIPT),
        ("커피 평생 무제한 마시기", "平生 커피 한번도 못하기", RejectionReason.DISALLOWED_SCRIPT),
        ("Netflix 평생 무료로 보기", "유튜브 평생 무료로 보기", RejectionReason.LATIN_WORD),
        ("커피 1234567890 마시기", "녹차 9876543210 마시기", RejectionReason.LOW_TARGET_RATIO),
        ("커피 마시기", "녹차 마시기", RejectionReason.TOO_SHORT),
        (
            "아주 먼 미래에 시간 여행을 떠나서 그곳에서 평생 살아보기",
            "과거로 돌아가서 다시 살아보기",
            RejectionReason.TOO_LONG,
        ),
        ("커피 평생 무제한으로 즐기기", "커피 평생 무제한으로 즐기기", RejectionReason.IDENTICAL),
        ("오전 7시에 일어나기", "오전 8시에 일어나기", RejectionReason.DIGITS_ONLY_DIFFER),
    ],
)
def test_rejection_reasons(validator, option1, option2, reason):
    """Each rule rejects the pair it targets."""
    pair = QuestionPair(option1=option1, option2=option2)
    assert validator.check(pair) is reason
    assert validator.validate([pair]) == []


def test_valid_pair_passes(validator):
    assert validator.check(valid_pair(0)) is None
    assert validator.is_valid(valid_pair(0))


def test_short_latin_fragment_is_allowed(validator):
    """Runs of fewer than four Latin letters are not treated as words."""
    pair = QuestionPair(option1="매일 TV보면서 저녁먹기", option2="매일 혼자서 조용히 저녁먹기")
    assert validator.check(pair) is None


def test_target_ratio_boundary_is_inclusive(validator):
    """Exactly 70% Hangul passes, just below fails."""
    at_threshold = QuestionPair(option1="가나다라마바사123", option2="아자차카타파하456")
    below_threshold = QuestionPair(option1="가나다라마바123", option2="아자차카타파하456")

    assert validator.check(at_threshold) is None
    assert validator.check(below_threshold) is RejectionReason.LOW_TARGET_RATIO


def test_digit_only_difference_kept_for_long_options(validator):
    """Options of 15+ characters that differ only by digits are kept."""
    short = QuestionPair(option1="오전 7시에 일어나기", option2="오전 8시에 일어나기")
    long = QuestionPair(
        option1="매일 아침 7시에 일어나서 운동하기",
        option2="매일 아침 9시에 일어나서 운동하기",
    )

    assert validator.validate([short, long]) == [long]


def test_validate_preserves_order_and_trims(validator):
    padded = QuestionPair(option1="  커피 평생 무제한으로 즐기기 ", option2="커피 평생 한번도 못하기\n")
    candidates = [
        valid_pair(1),
        QuestionPair(option1="커피 마시기", option2="녹차 마시기"),
        padded,
        valid_pair(2),
    ]

    result = validator.validate(candidates)

    assert result == [
        valid_pair(1),
        QuestionPair(option1="커피 평생 무제한으로 즐기기", option2="커피 평생 한번도 못하기"),
        valid_pair(2),
    ]


def test_validate_is_idempotent(validator):
    candidates = valid_pairs(5) + [
        QuestionPair(option1="Netflix 평생 무료로 보기", option2="유튜브 평생 무료로 보기"),
        QuestionPair(option1="  라면 평생 무제한으로 즐기기", option2="라면 평생 한번도 못하기  "),
    ]

    once = validator.validate(candidates)
    assert validator.validate(once) == once


def test_validate_empty(validator):
    assert validator.validate([]) == []


def test_strict_profile_rejects_placeholders():
    """Single-letter placeholders only matter when short options are allowed."""
    rules = ValidationRules(min_len=1, min_target_ratio=0.0, strict=True)
    strict = ContentValidator(rules)
    lenient = ContentValidator(ValidationRules(min_len=1, min_target_ratio=0.0))
    pair = QuestionPair(option1="A", option2="B")

    assert strict.check(pair) is RejectionReason.PLACEHOLDER
    assert lenient.check(pair) is None


def test_custom_length_rules():
    validator = ContentValidator(ValidationRules(min_len=4, max_len=10))
    pair = QuestionPair(option1="커피 마시기", option2="녹차 마시기")
    assert validator.check(pair) is None
