"""In-process implementation of QuestionStore.

Keeps entries in a dict. Used for local development without Redis
(``CACHE_BACKEND=memory``) and as the store in tests. Entries live as long
as the process; nothing expires.
"""

from datetime import datetime, timezone

from balance_game.entities import CacheEntryEntity, QuestionPair, cache_key


class InMemoryQuestionRepository:
    """Dict-backed implementation of the QuestionStore protocol."""

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntryEntity] = {}

    def get_entry(self, date_seed: str, category: str) -> CacheEntryEntity | None:
        return self._entries.get(cache_key(date_seed, category))

    def get(self, date_seed: str, category: str) -> list[QuestionPair] | None:
        entry = self.get_entry(date_seed, category)
        return list(entry.questions) if entry is not None else None

    def exists(self, date_seed: str, category: str) -> bool:
        return cache_key(date_seed, category) in self._entries

    def set(
        self,
        date_seed: str,
        category: str,
        questions: list[QuestionPair],
        metadata: dict | None = None,
    ) -> str:
        entry = CacheEntryEntity(
            date_seed=date_seed,
            category=category,
            questions=list(questions),
            created_at=datetime.now(timezone.utc),
            generated_by=(metadata or {}).get("generated_by"),
        )
        self._entries[entry.key] = entry
        return entry.key

    def delete(self, date_seed: str, category: str) -> bool:
        return self._entries.pop(cache_key(date_seed, category), None) is not None

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        return {"backend": "memory", "total_entries": len(self._entries)}
