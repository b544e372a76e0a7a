"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import GenerateQuestionsRequest
from .responses import (
    CategoryStatusItem,
    ErrorResponse,
    FallbackQuestionsResponse,
    GenerateQuestionsResponse,
    HealthCheckResponse,
    PregenerateResponse,
    QuestionPairItem,
)

__all__ = [
    "GenerateQuestionsRequest",
    "QuestionPairItem",
    "GenerateQuestionsResponse",
    "CategoryStatusItem",
    "PregenerateResponse",
    "FallbackQuestionsResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
