"""Question storage protocol.

Defines the interface for any backend that keeps the questions generated
for one category on one day.

Implementations can include:
- Redis (default)
- In-process memory (development and tests)
- Firestore or any other document store
"""

from typing import Protocol, runtime_checkable

from balance_game.entities import CacheEntryEntity, QuestionPair


@runtime_checkable
class QuestionStore(Protocol):
    """Protocol for question storage backends.

    Entries are addressed by ``(date_seed, category)``. A missing entry
    (``None``) means "never generated" and is distinct from an entry that
    holds an empty list.

    Backends raise ``CacheUnavailableError`` when they cannot be reached.

    Example:
        ```python
        store: QuestionStore = RedisQuestionRepository.create()
        store: QuestionStore = InMemoryQuestionRepository()
        ```
    """

    def get(self, date_seed: str, category: str) -> list[QuestionPair] | None:
        """Load the stored questions.

        Args:
            date_seed: Calendar day identifier
            category: Category identifier

        Returns:
            The stored questions, or None if the key was never written
        """
        ...

    def get_entry(self, date_seed: str, category: str) -> CacheEntryEntity | None:
        """Load the stored entry with its metadata.

        Args:
            date_seed: Calendar day identifier
            category: Category identifier

        Returns:
            The entry, or None if the key was never written
        """
        ...

    def exists(self, date_seed: str, category: str) -> bool:
        """Check whether an entry was written for the key."""
        ...

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
            metadata: Optional extra fields (e.g. ``generated_by``)

        Returns:
            The storage key for the entry
        """
        ...

    def delete(self, date_seed: str, category: str) -> bool:
        """Delete the entry for the key.

        Returns:
            True if deleted, False if there was nothing to delete
        """
        ...

    def health_check(self) -> bool:
        """Check if the backend is accessible.

        Returns:
            True if healthy, False otherwise
        """
        ...

    def get_stats(self) -> dict:
        """Get backend statistics.

        Returns:
            Dictionary with stats (implementation-specific)
        """
        ...
