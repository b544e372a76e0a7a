"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - A configuration problem found at startup is kept in app.state and
      raised per request, so every endpoint answers with CONFIG_ERROR
      instead of the process refusing to start
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from balance_game.config import settings
from balance_game.exceptions import ConfigError
from balance_game.handlers import QuestionHandler
from balance_game.observability import get_logger
from balance_game.protocols import QuestionStore
from balance_game.repositories import (
    GeminiQuestionGenerator,
    InMemoryQuestionRepository,
    RedisQuestionRepository,
)
from balance_game.services import QuestionService

logger = get_logger(__name__)


def _raise_startup_error(request: Request) -> None:
    error = getattr(request.app.state, "startup_error", None)
    if error is not None:
        raise error


def get_question_service(request: Request) -> QuestionService:
    """Dependency injection for QuestionService from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The QuestionService instance from app.state

    Raises:
        ConfigError: If startup found the deployment misconfigured
        RuntimeError: If service is not initialized
    """
    _raise_startup_error(request)
    service = getattr(request.app.state, "question_service", None)
    if service is None:
        raise RuntimeError("QuestionService not initialized. Check lifespan setup.")
    return service


def get_handler(request: Request) -> QuestionHandler:
    """Dependency injection for QuestionHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The QuestionHandler instance from app.state

    Raises:
        ConfigError: If startup found the deployment misconfigured
        RuntimeError: If handler is not initialized
    """
    _raise_startup_error(request)
    handler = getattr(request.app.state, "question_handler", None)
    if handler is None:
        raise RuntimeError("QuestionHandler not initialized. Check lifespan setup.")
    return handler


def get_required_count(request: Request) -> int:
    """Number of questions served per category and day.

    Does not depend on the generator, so it keeps answering when startup
    found the deployment misconfigured.
    """
    return getattr(request.app.state, "required_count", None) or settings.required_questions


def build_store() -> QuestionStore:
    """Pick the question store named by CACHE_BACKEND."""
    if settings.uses_memory_cache:
        return InMemoryQuestionRepository()
    return RedisQuestionRepository.create()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Store and generator (data access)
    2. Service (business logic) - stored in app.state.question_service
    3. Handler (HTTP endpoints) - stored in app.state.question_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None
    """
    generator: GeminiQuestionGenerator | None = None
    app.state.startup_error = None
    app.state.required_count = settings.required_questions

    try:
        generator = GeminiQuestionGenerator.create()
    except ConfigError as e:
        logger.error("Question generator not configured", error=e.message)
        app.state.startup_error = e
    else:
        store = build_store()
        question_service = QuestionService.create(store=store, generator=generator)

        app.state.question_service = question_service
        app.state.question_handler = QuestionHandler(question_service=question_service)

        logger.info(
            "Question service initialized",
            store=type(store).__name__,
            model=generator.model_name,
            policy=question_service.policy.value,
            required=question_service.required_count,
        )

    yield

    if generator is not None:
        await generator.close()
    for name in ("question_handler", "question_service", "required_count"):
        if hasattr(app.state, name):
            delattr(app.state, name)
    logger.info("Question service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[QuestionHandler, Depends(get_handler)]
ServiceDep = Annotated[QuestionService, Depends(get_question_service)]
RequiredCountDep = Annotated[int, Depends(get_required_count)]
