"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class QuestionPairItem(BaseModel):
    """Single balance game question."""

    option1: str = Field(..., description="The first choice")
    option2: str = Field(..., description="The second choice")


class GenerateQuestionsResponse(BaseModel):
    """Response DTO for a successful question request."""

    success: bool = Field(True, description="Always true on success")
    questions: list[QuestionPairItem] = Field(..., description="The day's questions, in order")
    source: str = Field(..., description="'cache', 'generated' or 'generated_uncached'")


class CategoryStatusItem(BaseModel):
    """Outcome of pre-generation for one category."""

    category: str
    status: str = Field(..., description="'cached', 'generated' or 'failed'")
    question_count: int = Field(0, alias="questionCount", ge=0)
    error: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class PregenerateResponse(BaseModel):
    """Response DTO for the bulk pre-generation trigger."""

    date_seed: str = Field(..., alias="dateSeed")
    results: list[CategoryStatusItem]
    generated: int = Field(..., ge=0)
    cached: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)

    model_config = ConfigDict(populate_by_name=True)


class FallbackQuestionsResponse(BaseModel):
    """Response DTO for the offline question bank."""

    category: str
    date_seed: str = Field(..., alias="dateSeed")
    questions: list[QuestionPairItem]

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    """Error body shared by every failing endpoint."""

    error: str = Field(..., description="Human-readable message")
    code: str = Field(..., description="Machine-readable error class")

    model_config = ConfigDict(extra="allow")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    store_healthy: bool = Field(..., description="Whether the question store is reachable")
    generator_available: bool = Field(..., description="Whether the LLM generator is configured")
