"""Cache entry domain entity."""

from dataclasses import dataclass
from datetime import datetime

from .question_pair import QuestionPair


def cache_key(date_seed: str, category: str) -> str:
    """Composite document key for one category on one day."""
    return f"{date_seed}_{category}"


@dataclass(frozen=True)
class CacheEntryEntity:
    """Domain entity for the stored questions of one day and category.

    Attributes:
        date_seed: Calendar day identifier, e.g. "2024-5-1"
        category: Category identifier, e.g. "daily"
        questions: The validated-or-backfilled pairs served to clients
        created_at: When the entry was written
        generated_by: Model that produced the questions, if known
    """

    date_seed: str
    category: str
    questions: list[QuestionPair]
    created_at: datetime
    generated_by: str | None = None

    @property
    def key(self) -> str:
        return cache_key(self.date_seed, self.category)
