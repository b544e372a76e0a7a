"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .question_handler import QuestionHandler, build_fallback_response

__all__ = [
    "QuestionHandler",
    "build_fallback_response",
]
