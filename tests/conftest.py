"""Shared fixtures for the balance game tests."""

import pytest

from balance_game.entities import GenerationRequest
from balance_game.repositories import InMemoryQuestionRepository
from balance_game.services import GenerationPolicy, QuestionService
from balance_game.validator import ContentValidator, ValidationRules

from .fakes import FakeGenerator


@pytest.fixture
def validator():
    """Validator with the default thresholds, independent of the environment."""
    return ContentValidator(ValidationRules())


@pytest.fixture
def store():
    return InMemoryQuestionRepository()


@pytest.fixture
def generator():
    return FakeGenerator()


@pytest.fixture
def make_service(store, generator, validator):
    """Build a QuestionService with explicit settings and optional overrides."""

    def _make(**overrides) -> QuestionService:
        options = {
            "store": store,
            "generator": generator,
            "validator": validator,
            "required_count": 10,
            "policy": GenerationPolicy.ON_DEMAND,
            "regenerate_on_cache_error": False,
        }
        options.update(overrides)
        return QuestionService(**options)

    return _make


@pytest.fixture
def service(make_service):
    return make_service()


@pytest.fixture
def request_daily():
    return GenerationRequest(
        category="daily",
        category_description="일상생활 (음식, 수면, 생활 습관, 편의 등)",
        date_seed="2024-5-1",
    )
