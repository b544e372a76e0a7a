"""Redis implementation of QuestionStore.

Each ``(date_seed, category)`` pair is one JSON document stored under
``{prefix}:{date_seed}_{category}``. Keys expire after the configured TTL,
so past days rotate out without a cleanup job.
"""

import json
from datetime import datetime, timezone
from typing import Any

import redis

from balance_game.config import get_redis_client, settings
from balance_game.entities import CacheEntryEntity, QuestionPair, cache_key
from balance_game.exceptions import CacheUnavailableError
from balance_game.observability import get_logger

logger = get_logger(__name__)


class RedisQuestionRepository:
    """Redis implementation of the QuestionStore protocol.

    This class satisfies the QuestionStore protocol through structural
    typing - no explicit inheritance needed.

    Document layout::

        {"questions": [{"option1": ..., "option2": ...}],
         "createdAt": "2024-05-01T00:00:05+00:00",
         "generatedBy": "gemini-2.5-flash"}

    Every ``redis.RedisError`` surfaces as ``CacheUnavailableError`` so the
    service can tell "unreachable" apart from "not generated yet".
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> None:
        """Initialize the Redis question repository.

        Args:
            redis_client: Redis client instance. If None, creates default.
            key_prefix: Namespace prepended to every key.
            ttl: Time-to-live for entries in seconds.
        """
        self._client = redis_client or get_redis_client()
        self._prefix = key_prefix or settings.cache_key_prefix
        self._ttl = ttl or settings.cache_ttl

    @classmethod
    def create(
        cls,
        key_prefix: str | None = None,
        ttl: int | None = None,
    ) -> "RedisQuestionRepository":
        """Factory method to create RedisQuestionRepository with defaults.

        Args:
            key_prefix: Key namespace. If None, uses settings.
            ttl: Entry TTL in seconds. If None, uses settings.

        Returns:
            Configured RedisQuestionRepository
        """
        return cls(key_prefix=key_prefix, ttl=ttl)

    def _key(self, date_seed: str, category: str) -> str:
        return f"{self._prefix}:{cache_key(date_seed, category)}"

    def get_entry(self, date_seed: str, category: str) -> CacheEntryEntity | None:
        """Load the stored entry with its metadata.

        Args:
            date_seed: Calendar day identifier
            category: Category identifier

        Returns:
            The entry, or None if the key was never written or holds an
            unreadable document (the next write replaces it)

        Raises:
            CacheUnavailableError: If Redis cannot be reached
        """
        key = self._key(date_seed, category)
        try:
            raw = self._client.get(key)
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Failed to read {key}: {e}") from e

        if raw is None:
            return None

        try:
            document: dict[str, Any] = json.loads(raw)
            created_at = document.get("createdAt")
            return CacheEntryEntity(
                date_seed=date_seed,
                category=category,
                questions=[QuestionPair.from_raw(item) for item in document.get("questions", [])],
                created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(timezone.utc),
                generated_by=document.get("generatedBy"),
            )
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning("Discarding unreadable question document", key=key, error=str(e))
            return None

    def get(self, date_seed: str, category: str) -> list[QuestionPair] | None:
        """Load the stored questions, or None if the key was never written."""
        entry = self.get_entry(date_seed, category)
        return entry.questions if entry is not None else None

    def exists(self, date_seed: str, category: str) -> bool:
        """Check whether an entry was written for the key."""
        key = self._key(date_seed, category)
        try:
            return bool(self._client.exists(key))
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Failed to check {key}: {e}") from e

    def set(
        self,
        date_seed: str,
        category: str,
        questions: list[QuestionPair],
        metadata: dict | None = None,
    ) -> str:
        """Store questions for the key, replacing any previous entry.

        Args:
            date_seed: Calendar day identifier
            category: Category identifier
            questions: The questions to store
            metadata: Optional extra fields; ``generated_by`` is stored as
                ``generatedBy``

        Returns:
            The storage key for the entry

        Raises:
            CacheUnavailableError: If Redis cannot be reached
        """
        key = self._key(date_seed, category)
        metadata = dict(metadata or {})
        document = {
            "questions": [q.to_dict() for q in questions],
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        generated_by = metadata.pop("generated_by", None)
        if generated_by:
            document["generatedBy"] = generated_by
        document.update(metadata)

        try:
            self._client.set(key, json.dumps(document, ensure_ascii=False), ex=self._ttl)
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Failed to write {key}: {e}") from e

        logger.info("Stored questions", key=key, count=len(questions))
        return key

    def delete(self, date_seed: str, category: str) -> bool:
        """Delete the entry for the key."""
        key = self._key(date_seed, category)
        try:
            result: int = self._client.delete(key)  # type: ignore[assignment]
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Failed to delete {key}: {e}") from e
        return result > 0

    def count_all(self) -> int:
        """Count stored entries under the key prefix."""
        count = 0
        for _ in self._client.scan_iter(match=f"{self._prefix}:*"):
            count += 1
        return count

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError:
            return False

    def get_stats(self) -> dict:
        """Get repository statistics.

        Returns:
            Dictionary with stats
        """
        try:
            total = self.count_all()
        except redis.RedisError as e:
            raise CacheUnavailableError(f"Failed to count entries: {e}") from e
        return {
            "backend": "redis",
            "key_prefix": self._prefix,
            "total_entries": total,
            "ttl": self._ttl,
        }

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
