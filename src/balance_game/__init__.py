"""Balance Game - daily Korean "would you rather" questions from an LLM.

Each (date, category) pair gets exactly one question set: generated once
by Gemini, filtered by a content validator and cached for the day.

Layers:
    - protocols: Interface contracts (QuestionStore, QuestionGenerator)
    - repositories: Redis/in-memory stores and the Gemini generator
    - services: The orchestrator (serve_one, pregenerate_all)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from balance_game.services import QuestionService

    service = QuestionService.create(
        store=RedisQuestionRepository.create(),
        generator=GeminiQuestionGenerator.create(),
    )
    result = await service.serve_one(GenerationRequest("daily", "일상생활", "2024-5-1"))
    ```

For HTTP API:
    ```python
    from balance_game.api.app import app
    ```
"""

from balance_game.config import get_redis_client, settings
from balance_game.entities import (
    CacheEntryEntity,
    CategoryStatus,
    GenerationRequest,
    GenerationResult,
    QuestionPair,
)
from balance_game.exceptions import BalanceGameError
from balance_game.handlers import QuestionHandler
from balance_game.protocols import QuestionGenerator, QuestionStore
from balance_game.repositories import (
    GeminiQuestionGenerator,
    InMemoryQuestionRepository,
    RedisQuestionRepository,
)
from balance_game.services import QuestionService
from balance_game.validator import ContentValidator, ValidationRules

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "QuestionStore",
    "QuestionGenerator",
    # Services (business logic)
    "QuestionService",
    "ContentValidator",
    "ValidationRules",
    # Handlers (HTTP)
    "QuestionHandler",
    # Repositories (data access)
    "RedisQuestionRepository",
    "InMemoryQuestionRepository",
    "GeminiQuestionGenerator",
    # Entities
    "QuestionPair",
    "CacheEntryEntity",
    "GenerationRequest",
    "GenerationResult",
    "CategoryStatus",
    # Errors
    "BalanceGameError",
]
