from typing import Annotated, Any

from fastapi import FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from balance_game.api.dependencies import HandlerDep, RequiredCountDep, ServiceDep, lifespan
from balance_game.config import settings
from balance_game.dto import (
    ErrorResponse,
    FallbackQuestionsResponse,
    GenerateQuestionsRequest,
    GenerateQuestionsResponse,
    HealthCheckResponse,
    PregenerateResponse,
)
from balance_game.exceptions import BalanceGameError
from balance_game.handlers import build_fallback_response
from balance_game.observability import get_logger, setup_logging

setup_logging(settings.log_level, settings.log_format)
logger = get_logger(__name__)

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    code: {"model": ErrorResponse}
    for code in (
        status.HTTP_400_BAD_REQUEST,
        status.HTTP_404_NOT_FOUND,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        status.HTTP_502_BAD_GATEWAY,
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
}

app = FastAPI(
    title="Balance Game Question API",
    description="Daily Korean balance game questions generated by Gemini and cached per day",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BalanceGameError)
async def balance_game_error_handler(request: Request, exc: BalanceGameError) -> JSONResponse:
    """Render domain errors with their own status and payload."""
    log = logger.warning if exc.status_code < 500 else logger.error
    log("Request failed", path=request.url.path, code=exc.error, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unreadable bodies are reported like any other bad request."""
    logger.warning("Invalid request body", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "code": "INVALID_REQUEST"},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.opt(exception=exc).error("Unhandled error", path=request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Balance Game Question API",
        "version": "0.1.0",
        "description": "Daily Korean balance game questions generated by Gemini and cached per day",
        "endpoints": {
            "generate": "/api/generate-questions",
            "pregenerate": "/api/pregenerate",
            "fallback": "/api/fallback-questions",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/stats", response_model=dict[str, Any])
async def get_stats(service: ServiceDep) -> dict[str, Any]:
    """Get store statistics and pipeline settings."""
    return service.get_stats()


@app.post(
    "/api/generate-questions",
    response_model=GenerateQuestionsResponse,
    responses=ERROR_RESPONSES,
)
async def generate_questions(
    request: GenerateQuestionsRequest,
    handler: HandlerDep,
) -> GenerateQuestionsResponse:
    """
    Return a category's questions for a day, generating them on first request.

    Args:
        request: Category, category description and date seed.

    Returns:
        The day's validated questions and whether they came from the cache.
    """
    return await handler.generate_questions(request)


@app.api_route(
    "/api/pregenerate",
    methods=["GET", "POST"],
    response_model=PregenerateResponse,
    responses=ERROR_RESPONSES,
)
async def pregenerate(handler: HandlerDep) -> PregenerateResponse:
    """
    Fill the cache for every default category for today.

    Meant to be called by a scheduler shortly after local midnight.
    A failed category is reported and does not stop the others.
    """
    return await handler.pregenerate()


@app.get(
    "/api/fallback-questions",
    response_model=FallbackQuestionsResponse,
    responses=ERROR_RESPONSES,
)
async def fallback_questions(
    required_count: RequiredCountDep,
    category: str | None = None,
    date_seed: Annotated[str | None, Query(alias="dateSeed")] = None,
) -> FallbackQuestionsResponse:
    """Deterministic offline questions for when generation is unavailable.

    Served even when the generator is not configured.
    """
    return build_fallback_response(category, date_seed, required_count)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "balance_game.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
