"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity, cache_key
from .generation import (
    CategoryStatus,
    GenerationRequest,
    GenerationResult,
    GenerationStatus,
    QuestionSource,
)
from .question_pair import QuestionPair

__all__ = [
    "CacheEntryEntity",
    "CategoryStatus",
    "GenerationRequest",
    "GenerationResult",
    "GenerationStatus",
    "QuestionPair",
    "QuestionSource",
    "cache_key",
]
