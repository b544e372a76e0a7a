"""
Tests for the Gemini question generator.

The generateContent endpoint is mocked with respx; no request leaves the
process.
"""

import json
from dataclasses import replace

import httpx
import pytest
import respx

from balance_game.entities import GenerationRequest, QuestionPair
from balance_game.exceptions import (
    ConfigError,
    GenerationFailureReason,
    ParseError,
    ProviderFatalError,
    ProviderTransientError,
)
from balance_game.repositories import GeminiQuestionGenerator, extract_json_array
from balance_game.repositories import gemini_question_generator as gemini_module
from balance_game.retry import BackoffRetryExecutor

BASE_URL = "https://gemini.test/v1beta"
ENDPOINT = f"{BASE_URL}/models/gemini-2.5-flash:generateContent"


async def no_sleep(delay: float) -> None:
    return None


def gemini_body(text: str, finish_reason: str = "STOP") -> dict:
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": finish_reason,
            }
        ]
    }


@pytest.fixture
def generator():
    return GeminiQuestionGenerator(
        api_key="test-key",
        model_name="gemini-2.5-flash",
        base_url=BASE_URL,
        question_count=12,
        min_len=8,
        max_len=25,
        retry_executor=BackoffRetryExecutor(max_attempts=3, sleep=no_sleep, rng=lambda: 0.0),
    )


@pytest.fixture
def request_daily():
    return GenerationRequest(category="daily", category_description="일상생활", date_seed="2024-5-1")


@respx.mock
async def test_generate_parses_candidates(generator, request_daily):
    items = [
        {"option1": "커피 평생 무제한으로 즐기기", "option2": "커피 평생 한번도 못하기"},
        {"option1": "라면 평생 무제한으로 즐기기", "option2": "라면 평생 한번도 못하기"},
    ]
    route = respx.post(ENDPOINT).mock(
        return_value=httpx.Response(200, json=gemini_body(json.dumps(items, ensure_ascii=False)))
    )

    candidates = await generator.generate(request_daily)

    assert candidates == [QuestionPair(**item) for item in items]
    sent = route.calls.last.request
    assert sent.headers["x-goog-api-key"] == "test-key"
    body = json.loads(sent.content)
    assert body["generationConfig"]["responseMimeType"] == "application/json"
    assert body["generationConfig"]["responseSchema"]["type"] == "ARRAY"
    assert "2024-5-1" in body["contents"][0]["parts"][0]["text"]


@respx.mock
async def test_generate_keeps_malformed_items_for_validation(generator, request_daily):
    text = '[{"option1": "커피 평생 즐기기"}, "oops", {"option1": 3, "option2": "라면 평생 못하기"}]'
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=gemini_body(text)))

    candidates = await generator.generate(request_daily)

    assert candidates == [
        QuestionPair(option1="커피 평생 즐기기", option2=""),
        QuestionPair(option1="", option2=""),
        QuestionPair(option1="", option2="라면 평생 못하기"),
    ]


@respx.mock
async def test_generate_retries_overload_then_succeeds(generator, request_daily):
    route = respx.post(ENDPOINT).mock(
        side_effect=[
            httpx.Response(503),
            httpx.Response(503),
            httpx.Response(200, json=gemini_body('[{"option1": "가", "option2": "나"}]')),
        ]
    )

    candidates = await generator.generate(request_daily)

    assert route.call_count == 3
    assert candidates == [QuestionPair(option1="가", option2="나")]


@respx.mock
async def test_generate_raises_after_retries(generator, request_daily):
    route = respx.post(ENDPOINT).mock(return_value=httpx.Response(429))

    with pytest.raises(ProviderTransientError) as exc_info:
        await generator.generate(request_daily)

    assert route.call_count == 3
    assert exc_info.value.reason is GenerationFailureReason.RETRY_EXHAUSTED


@respx.mock
async def test_generate_http_error_is_fatal(generator, request_daily):
    route = respx.post(ENDPOINT).mock(return_value=httpx.Response(400, text="API key not valid"))

    with pytest.raises(ProviderFatalError) as exc_info:
        await generator.generate(request_daily)

    assert route.call_count == 1
    error = exc_info.value
    assert error.reason is GenerationFailureReason.HTTP_ERROR
    assert error.details["status"] == 400
    assert "API key not valid" in error.details["provider_details"]


@respx.mock
async def test_truncation_checked_before_envelope(generator, request_daily):
    """MAX_TOKENS is reported even when the content part is missing."""
    body = {"candidates": [{"finishReason": "MAX_TOKENS", "content": {"role": "model"}}]}
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=body))

    with pytest.raises(ProviderFatalError) as exc_info:
        await generator.generate(request_daily)

    assert exc_info.value.reason is GenerationFailureReason.TRUNCATED


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"text": ""}]}}]},
    ],
)
@respx.mock
async def test_unexpected_envelope_is_malformed(generator, request_daily, body):
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=body))

    with pytest.raises(ProviderFatalError) as exc_info:
        await generator.generate(request_daily)

    assert exc_info.value.reason is GenerationFailureReason.MALFORMED_RESPONSE


@respx.mock
async def test_non_json_body_is_malformed(generator, request_daily):
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ProviderFatalError) as exc_info:
        await generator.generate(request_daily)

    assert exc_info.value.reason is GenerationFailureReason.MALFORMED_RESPONSE


@respx.mock
async def test_unparseable_text_raises_parse_error(generator, request_daily):
    respx.post(ENDPOINT).mock(return_value=httpx.Response(200, json=gemini_body("질문을 만들 수 없습니다")))

    with pytest.raises(ParseError) as exc_info:
        await generator.generate(request_daily)

    assert exc_info.value.reason is GenerationFailureReason.PARSE_FAILED
    assert exc_info.value.details["json_text"] == "질문을 만들 수 없습니다"


def test_extract_json_array_strips_fences_and_prose():
    text = '여기 있습니다:\n```json\n[{"option1": "가", "option2": "나"}]\n```\n즐기세요!'
    assert extract_json_array(text) == [{"option1": "가", "option2": "나"}]


def test_extract_json_array_rejects_objects():
    with pytest.raises(ParseError):
        extract_json_array('{"option1": "가", "option2": "나"}')


def test_create_requires_api_key(monkeypatch):
    monkeypatch.setattr(gemini_module, "settings", replace(gemini_module.settings, gemini_api_key=None))
    with pytest.raises(ConfigError):
        GeminiQuestionGenerator.create(api_key="")


async def test_is_available_reflects_api_key(generator):
    assert await generator.is_available() is True
    assert await GeminiQuestionGenerator(api_key="").is_available() is False
