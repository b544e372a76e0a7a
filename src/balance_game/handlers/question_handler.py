"""HTTP handlers for question operations.

Handlers convert between DTOs (API contracts) and service calls.
Domain errors are left to propagate: the application's exception handler
renders every BalanceGameError with its own status code and payload.
"""

from balance_game.categories import DEFAULT_CATEGORIES, Category
from balance_game.dto import (
    CategoryStatusItem,
    FallbackQuestionsResponse,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    HealthCheckResponse,
    PregenerateResponse,
    QuestionPairItem,
)
from balance_game.entities import GenerationRequest, GenerationStatus, QuestionPair
from balance_game.exceptions import ValidationInputError
from balance_game.fallback import select_fallback
from balance_game.services import QuestionService
from balance_game.utils import today_seed


def _to_items(questions: list[QuestionPair]) -> list[QuestionPairItem]:
    return [QuestionPairItem(option1=q.option1, option2=q.option2) for q in questions]


def build_fallback_response(category: str | None, date_seed: str | None, count: int) -> FallbackQuestionsResponse:
    """Select the deterministic offline questions for a category and day.

    Only the static bank is read, so this works without a store or generator.

    Raises:
        ValidationInputError: If category or dateSeed is missing
    """
    missing = [name for name, value in (("category", category), ("dateSeed", date_seed)) if not value]
    if missing:
        raise ValidationInputError("Missing required parameters", missing=missing)

    return FallbackQuestionsResponse(
        category=category,
        date_seed=date_seed,
        questions=_to_items(select_fallback(date_seed, category, count)),
    )


class QuestionHandler:
    """HTTP handlers for question operations.

    Example:
        ```python
        handler = QuestionHandler(question_service=service)

        @app.post("/api/generate-questions", response_model=GenerateQuestionsResponse)
        async def generate_questions(request: GenerateQuestionsRequest):
            return await handler.generate_questions(request)
        ```
    """

    def __init__(
        self,
        question_service: QuestionService,
        categories: tuple[Category, ...] = DEFAULT_CATEGORIES,
    ) -> None:
        """Initialize the question handler.

        Args:
            question_service: The question service for business logic (required).
            categories: Categories covered by the pre-generation trigger.
        """
        self._questions = question_service
        self._categories = categories

    async def generate_questions(self, request: GenerateQuestionsRequest) -> GenerateQuestionsResponse:
        """Handle POST /api/generate-questions requests.

        Args:
            request: The generate questions request DTO

        Returns:
            GenerateQuestionsResponse with the day's questions and their source
        """
        result = await self._questions.serve_one(
            GenerationRequest(
                category=request.category or "",
                category_description=request.category_description or "",
                date_seed=request.date_seed or "",
            )
        )
        return GenerateQuestionsResponse(
            success=True,
            questions=_to_items(result.questions),
            source=result.source.value,
        )

    async def pregenerate(self, date_seed: str | None = None) -> PregenerateResponse:
        """Handle POST /api/pregenerate requests.

        Args:
            date_seed: Day to generate for. Defaults to today in the configured time zone.

        Returns:
            PregenerateResponse with one line per category
        """
        seed = date_seed or today_seed()
        report = await self._questions.pregenerate_all(self._categories, seed)

        def count(status: GenerationStatus) -> int:
            return sum(1 for item in report if item.status is status)

        return PregenerateResponse(
            date_seed=seed,
            results=[
                CategoryStatusItem(
                    category=item.category,
                    status=item.status.value,
                    question_count=item.question_count,
                    error=item.error,
                )
                for item in report
            ],
            generated=count(GenerationStatus.GENERATED),
            cached=count(GenerationStatus.CACHED),
            failed=count(GenerationStatus.FAILED),
        )

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests.

        Returns:
            HealthCheckResponse with store and generator status
        """
        store_healthy = self._questions.store.health_check()
        generator_available = await self._questions.generator.is_available()

        return HealthCheckResponse(
            status="healthy" if store_healthy and generator_available else "unhealthy",
            store_healthy=store_healthy,
            generator_available=generator_available,
        )
