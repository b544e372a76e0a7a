"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .question_service import GenerationPolicy, QuestionService, select_questions

__all__ = [
    "GenerationPolicy",
    "QuestionService",
    "select_questions",
]
