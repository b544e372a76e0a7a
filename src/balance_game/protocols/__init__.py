"""Protocol interfaces for swappable implementations.

Services type against these protocols, so the Redis store and the Gemini
generator can be replaced by in-memory fakes in tests.
"""

from .question_generator import QuestionGenerator
from .question_store import QuestionStore

__all__ = [
    "QuestionGenerator",
    "QuestionStore",
]
