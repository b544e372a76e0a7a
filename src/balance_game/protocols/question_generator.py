"""Question generator protocol.

Defines the interface for any service that turns a topic description
into raw balance game candidates. Output is unvalidated: filtering and
backfilling happen in the service layer.
"""

from typing import Protocol, runtime_checkable

from balance_game.entities import GenerationRequest, QuestionPair


@runtime_checkable
class QuestionGenerator(Protocol):
    """Protocol for LLM-backed question generators."""

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    async def generate(self, request: GenerationRequest) -> list[QuestionPair]:
        """Generate raw candidate pairs for one category and day.

        Args:
            request: Category, its description and the date seed

        Returns:
            Candidates in model order, not yet validated

        Raises:
            GenerationError: If the provider yields no usable candidate list
        """
        ...

    async def is_available(self) -> bool:
        """Check if the generator is configured and usable."""
        ...
