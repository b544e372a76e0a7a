"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the Gemini API)
behind protocol-based interfaces. The repositories are protocol-based
(structural typing), not inheritance-based: any class implementing the
required methods satisfies the protocol.
"""

from balance_game.protocols import QuestionGenerator, QuestionStore

from .gemini_question_generator import GeminiQuestionGenerator, extract_json_array
from .memory_question_repository import InMemoryQuestionRepository
from .redis_question_repository import RedisQuestionRepository

__all__ = [
    "QuestionGenerator",
    "QuestionStore",
    "GeminiQuestionGenerator",
    "InMemoryQuestionRepository",
    "RedisQuestionRepository",
    "extract_json_array",
]
