"""Generation request and outcome entities."""

from dataclasses import dataclass
from enum import Enum

from .question_pair import QuestionPair


class QuestionSource(str, Enum):
    """Where a served question list came from."""

    CACHE = "cache"
    GENERATED = "generated"
    GENERATED_UNCACHED = "generated_uncached"


class GenerationStatus(str, Enum):
    """Per-category outcome of a bulk pre-generation run."""

    CACHED = "cached"
    GENERATED = "generated"
    FAILED = "failed"


@dataclass(frozen=True)
class GenerationRequest:
    """Input to the pipeline for one category on one day.

    Attributes:
        category: Category identifier, part of the cache key
        category_description: Topic text embedded in the prompt
        date_seed: Calendar day identifier supplied by the caller
    """

    category: str
    category_description: str
    date_seed: str


@dataclass(frozen=True)
class GenerationResult:
    """Exactly ``required_count`` questions and where they came from."""

    questions: list[QuestionPair]
    source: QuestionSource


@dataclass(frozen=True)
class CategoryStatus:
    """Report line for one category of a pre-generation run."""

    category: str
    status: GenerationStatus
    question_count: int = 0
    error: str | None = None
