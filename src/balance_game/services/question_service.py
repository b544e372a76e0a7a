"""Question service for core business logic.

This service orchestrates the daily question pipeline by coordinating
the store (cached questions), the generator (LLM candidates) and the
content validator.
"""

from collections.abc import Iterable
from enum import Enum

from balance_game.categories import Category
from balance_game.config import settings
from balance_game.entities import (
    CategoryStatus,
    GenerationRequest,
    GenerationResult,
    GenerationStatus,
    QuestionPair,
    QuestionSource,
)
from balance_game.exceptions import (
    BalanceGameError,
    CacheUnavailableError,
    QuestionsNotReadyError,
    ValidationInputError,
    ValidationShortfallError,
)
from balance_game.observability import get_logger
from balance_game.protocols import QuestionGenerator, QuestionStore
from balance_game.validator import ContentValidator

logger = get_logger(__name__)


class GenerationPolicy(str, Enum):
    """What a read request does on a cache miss."""

    ON_DEMAND = "on_demand"  # generate synchronously
    SCHEDULED = "scheduled"  # only the bulk job generates; readers get "not ready"


def select_questions(
    candidates: list[QuestionPair],
    validator: ContentValidator,
    required_count: int,
) -> list[QuestionPair]:
    """Pick exactly ``required_count`` pairs from raw candidates.

    Validated pairs come first, in their original order. If there are too
    few, the remaining complete candidates are appended in their original
    order until the count is reached.

    Args:
        candidates: Raw pairs in model order
        validator: Filter deciding which pairs pass
        required_count: Number of pairs to return

    Returns:
        Exactly ``required_count`` pairs

    Raises:
        ValidationShortfallError: If even backfilling cannot reach the count
    """
    selected = validator.validate(candidates)[:required_count]

    if len(selected) < required_count:
        logger.warning(
            "Too few questions passed validation, backfilling",
            passed=len(selected),
            required=required_count,
        )
        for pair in candidates:
            if len(selected) >= required_count:
                break
            if pair.is_complete and not validator.is_valid(pair):
                selected.append(pair.trimmed())

    if len(selected) < required_count:
        raise ValidationShortfallError(attained=len(selected), required=required_count)
    return selected


class QuestionService:
    """Core question orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - QuestionStore: can be Redis, in-memory, a document database, etc.
    - QuestionGenerator: can be Gemini or any other LLM provider

    Example:
        ```python
        from balance_game.repositories import GeminiQuestionGenerator, RedisQuestionRepository
        from balance_game.services import QuestionService

        service = QuestionService.create(
            store=RedisQuestionRepository.create(),
            generator=GeminiQuestionGenerator.create(),
        )
        result = await service.serve_one(request)
        ```
    """

    def __init__(
        self,
        store: QuestionStore,
        generator: QuestionGenerator,
        validator: ContentValidator | None = None,
        required_count: int | None = None,
        policy: GenerationPolicy | None = None,
        regenerate_on_cache_error: bool | None = None,
    ) -> None:
        """Initialize the question service.

        Args:
            store: Question storage backend (required).
            generator: LLM question generator (required).
            validator: Content filter. Defaults to settings-based rules.
            required_count: Questions per category and day. Defaults to settings.
            policy: Cache-miss behaviour. Defaults to settings.
            regenerate_on_cache_error: Generate (without caching the outcome as a hit)
                when the store cannot be read, instead of failing. Defaults to settings.
        """
        self._store = store
        self._generator = generator
        self._validator = validator or ContentValidator()
        self._required = required_count or settings.required_questions
        self._policy = policy or GenerationPolicy(settings.generation_policy)
        self._regenerate_on_cache_error = (
            regenerate_on_cache_error
            if regenerate_on_cache_error is not None
            else settings.regenerate_on_cache_error
        )

    @classmethod
    def create(
        cls,
        store: QuestionStore,
        generator: QuestionGenerator,
        required_count: int | None = None,
        policy: GenerationPolicy | None = None,
    ) -> "QuestionService":
        """Factory method to create QuestionService with sensible defaults.

        Args:
            store: Question storage backend (required).
            generator: LLM question generator (required).
            required_count: Questions per category and day. If None, uses settings.
            policy: Cache-miss behaviour. If None, uses settings.

        Returns:
            Configured QuestionService instance
        """
        return cls(
            store=store,
            generator=generator,
            required_count=required_count,
            policy=policy,
        )

    async def serve_one(self, request: GenerationRequest) -> GenerationResult:
        """Return the day's questions for one category.

        Business logic:
        1. Reject requests missing a field
        2. Serve the stored questions if present
        3. On a miss, either generate now or report "not ready" (policy)

        Args:
            request: Category, its description and the date seed

        Returns:
            GenerationResult with exactly ``required_count`` generated questions,
            or the stored entry as written

        Raises:
            ValidationInputError: A request field is blank
            CacheUnavailableError: The store cannot be read, and either
                regeneration on cache errors is off or the policy is scheduled
            QuestionsNotReadyError: Nothing stored and on-demand generation is off
            GenerationError: The provider yielded no usable candidates
            ValidationShortfallError: Too few usable candidates
        """
        missing = [
            name
            for name, value in (
                ("category", request.category),
                ("categoryDescription", request.category_description),
                ("dateSeed", request.date_seed),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationInputError("Missing required parameters", missing=missing)

        cache_readable = True
        try:
            cached = self._store.get(request.date_seed, request.category)
        except CacheUnavailableError:
            # SCHEDULED never generates, so an unreadable store stays a 503 there
            if not self._regenerate_on_cache_error or self._policy is GenerationPolicy.SCHEDULED:
                raise
            logger.warning(
                "Question store unreadable, generating without cache",
                date_seed=request.date_seed,
                category=request.category,
            )
            cached = None
            cache_readable = False

        if cached is not None:
            if len(cached) != self._required:
                logger.warning(
                    "Cached question count differs from required count",
                    date_seed=request.date_seed,
                    category=request.category,
                    count=len(cached),
                    required=self._required,
                )
            logger.info(
                "Cache hit",
                date_seed=request.date_seed,
                category=request.category,
                count=len(cached),
            )
            return GenerationResult(questions=cached, source=QuestionSource.CACHE)

        if self._policy is GenerationPolicy.SCHEDULED:
            raise QuestionsNotReadyError(
                "Questions for today have not been generated yet",
                category=request.category,
                dateSeed=request.date_seed,
            )

        logger.info("Cache miss, generating", date_seed=request.date_seed, category=request.category)
        questions = await self._generate(request)

        if not cache_readable:
            return GenerationResult(questions=questions, source=QuestionSource.GENERATED_UNCACHED)

        try:
            self._store.set(
                request.date_seed,
                request.category,
                questions,
                metadata={"generated_by": self._generator.model_name},
            )
        except CacheUnavailableError as e:
            logger.error(
                "Failed to store generated questions",
                date_seed=request.date_seed,
                category=request.category,
                error=str(e),
            )
            return GenerationResult(questions=questions, source=QuestionSource.GENERATED_UNCACHED)

        return GenerationResult(questions=questions, source=QuestionSource.GENERATED)

    async def pregenerate_all(
        self,
        categories: Iterable[Category],
        date_seed: str,
    ) -> list[CategoryStatus]:
        """Make sure every category has stored questions for the day.

        Categories are processed one after another. A failing category is
        reported and the run moves on; nothing raises out of this method.

        Args:
            categories: Categories to cover, in report order
            date_seed: Calendar day identifier

        Returns:
            One status per category, in input order
        """
        report = []
        for category in categories:
            report.append(await self._pregenerate_one(category, date_seed))

        logger.info(
            "Pre-generation finished",
            date_seed=date_seed,
            generated=sum(1 for s in report if s.status is GenerationStatus.GENERATED),
            cached=sum(1 for s in report if s.status is GenerationStatus.CACHED),
            failed=sum(1 for s in report if s.status is GenerationStatus.FAILED),
        )
        return report

    async def _pregenerate_one(self, category: Category, date_seed: str) -> CategoryStatus:
        try:
            cached = self._store.get(date_seed, category.id)
            if cached is not None:
                return CategoryStatus(
                    category=category.id,
                    status=GenerationStatus.CACHED,
                    question_count=len(cached),
                )

            request = GenerationRequest(
                category=category.id,
                category_description=category.description,
                date_seed=date_seed,
            )
            questions = await self._generate(request)
            self._store.set(
                date_seed,
                category.id,
                questions,
                metadata={"generated_by": self._generator.model_name},
            )
        except BalanceGameError as e:
            logger.error(
                "Pre-generation failed",
                date_seed=date_seed,
                category=category.id,
                error=e.message,
            )
            return CategoryStatus(category=category.id, status=GenerationStatus.FAILED, error=e.message)
        except Exception as e:
            # One category must never abort the batch
            logger.exception("Unexpected pre-generation error", date_seed=date_seed, category=category.id)
            return CategoryStatus(category=category.id, status=GenerationStatus.FAILED, error=str(e))

        return CategoryStatus(
            category=category.id,
            status=GenerationStatus.GENERATED,
            question_count=len(questions),
        )

    async def _generate(self, request: GenerationRequest) -> list[QuestionPair]:
        """Generate, validate and backfill questions for one request."""
        candidates = await self._generator.generate(request)
        return select_questions(candidates, self._validator, self._required)

    def get_stats(self) -> dict:
        """Get service statistics.

        Returns:
            Dictionary with store statistics and pipeline settings
        """
        stats = self._store.get_stats()
        stats["required_questions"] = self._required
        stats["generation_policy"] = self._policy.value
        stats["model"] = self._generator.model_name
        return stats

    async def is_healthy(self) -> bool:
        """Check if the service is healthy.

        Returns:
            True if both the store and the generator are usable
        """
        store_healthy = self._store.health_check()
        generator_available = await self._generator.is_available()
        return store_healthy and generator_available

    @property
    def required_count(self) -> int:
        return self._required

    @property
    def policy(self) -> GenerationPolicy:
        return self._policy

    @property
    def store(self) -> QuestionStore:
        """Get the underlying store (for testing)."""
        return self._store

    @property
    def generator(self) -> QuestionGenerator:
        """Get the underlying generator (for testing)."""
        return self._generator
