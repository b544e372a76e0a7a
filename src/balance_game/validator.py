"""
Content validation for generated balance game questions.

Model output regularly drifts into other scripts, leaves English words
untranslated, or produces near-duplicate options. The validator filters
those pairs out before anything is cached.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from balance_game.config import settings
from balance_game.entities import QuestionPair
from balance_game.observability import get_logger

logger = get_logger(__name__)

HANGUL_SYLLABLES = "\uac00-\ud7a3"
JAPANESE_KANA = "\u3040-\u309f\u30a0-\u30ff"
CJK_IDEOGRAPHS = "\u4e00-\u9fff"

_DIGIT_RUN = re.compile(r"\d+")


class RejectionReason(str, Enum):
    """First rule a candidate pair failed, in checking order."""

    MISSING_OPTION = "missing_option"
    DISALLOWED_SCRIPT = "disallowed_script"
    LATIN_WORD = "latin_word"
    LOW_TARGET_RATIO = "low_target_ratio"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    IDENTICAL = "identical"
    DIGITS_ONLY_DIFFER = "digits_only_differ"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class ValidationRules:
    """Thresholds and script sets used by the validator.

    Attributes:
        min_len: Minimum characters per trimmed option
        max_len: Maximum characters per trimmed option
        min_target_ratio: Minimum share of target-script characters in the
            combined text. A pair exactly at the threshold passes.
        short_pattern_len_threshold: Options shorter than this are rejected
            when they only differ by their digits
        target_script: Character class body of the required script
        disallowed_scripts: Character class bodies that reject a pair outright
        max_latin_run: Length of a Latin letter run treated as a stray word
        strict: Also reject single-letter placeholder options
        placeholder_tokens: Options rejected under the strict profile
    """

    min_len: int = 8
    max_len: int = 28
    min_target_ratio: float = 0.7
    short_pattern_len_threshold: int = 15
    target_script: str = HANGUL_SYLLABLES
    disallowed_scripts: tuple[str, ...] = (JAPANESE_KANA, CJK_IDEOGRAPHS)
    max_latin_run: int = 4
    strict: bool = False
    placeholder_tokens: frozenset[str] = field(default_factory=lambda: frozenset({"A", "B", "O", "X"}))

    @classmethod
    def from_settings(cls) -> "ValidationRules":
        """Build rules from the configured thresholds."""
        return cls(
            min_len=settings.validation_min_len,
            max_len=settings.validation_max_len,
            min_target_ratio=settings.validation_min_target_ratio,
            short_pattern_len_threshold=settings.validation_short_pattern_len,
            strict=settings.validation_strict,
        )


class ContentValidator:
    """Order-preserving filter over candidate question pairs.

    Each pair is checked against the rules in a fixed priority order and
    rejected at the first failure. The order only affects the reported
    reason, never whether a pair is kept.

    Example:
        ```python
        validator = ContentValidator()
        kept = validator.validate(candidates)
        ```
    """

    def __init__(self, rules: ValidationRules | None = None) -> None:
        self._rules = rules or ValidationRules.from_settings()
        self._target = re.compile(f"[{self._rules.target_script}]")
        self._disallowed = [re.compile(f"[{script}]") for script in self._rules.disallowed_scripts]
        self._latin_run = re.compile(f"[a-zA-Z]{{{self._rules.max_latin_run},}}")

    @property
    def rules(self) -> ValidationRules:
        return self._rules

    def check(self, pair: QuestionPair) -> RejectionReason | None:
        """Find the first rule a pair violates.

        Args:
            pair: Candidate pair, trimmed or not

        Returns:
            The rejection reason, or None if the pair passes every rule
        """
        rules = self._rules
        opt1 = pair.option1.strip()
        opt2 = pair.option2.strip()

        if not opt1 or not opt2:
            return RejectionReason.MISSING_OPTION

        combined = opt1 + opt2
        if any(pattern.search(combined) for pattern in self._disallowed):
            return RejectionReason.DISALLOWED_SCRIPT

        if self._latin_run.search(combined):
            return RejectionReason.LATIN_WORD

        ratio = len(self._target.findall(combined)) / len(combined)
        if ratio < rules.min_target_ratio:
            return RejectionReason.LOW_TARGET_RATIO

        if len(opt1) < rules.min_len or len(opt2) < rules.min_len:
            return RejectionReason.TOO_SHORT
        if len(opt1) > rules.max_len or len(opt2) > rules.max_len:
            return RejectionReason.TOO_LONG

        if opt1 == opt2:
            return RejectionReason.IDENTICAL

        if (
            _DIGIT_RUN.sub("X", opt1) == _DIGIT_RUN.sub("X", opt2)
            and len(opt1) < rules.short_pattern_len_threshold
        ):
            return RejectionReason.DIGITS_ONLY_DIFFER

        if rules.strict and (opt1 in rules.placeholder_tokens or opt2 in rules.placeholder_tokens):
            return RejectionReason.PLACEHOLDER

        return None

    def is_valid(self, pair: QuestionPair) -> bool:
        return self.check(pair) is None

    def validate(self, candidates: list[QuestionPair]) -> list[QuestionPair]:
        """Keep the candidates that pass every rule.

        Args:
            candidates: Raw pairs in model order

        Returns:
            Trimmed passing pairs, in their original order
        """
        kept = []
        for pair in candidates:
            reason = self.check(pair)
            if reason is None:
                kept.append(pair.trimmed())
            else:
                logger.debug(
                    "Rejected question pair",
                    reason=reason.value,
                    option1=pair.option1,
                    option2=pair.option2,
                )

        logger.info("Validation finished", total=len(candidates), passed=len(kept))
        return kept
