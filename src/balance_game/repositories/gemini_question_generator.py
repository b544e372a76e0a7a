"""Gemini-based question generator.

Calls Google's Generative Language ``generateContent`` REST endpoint with
a structured output schema, so the model answers with a JSON array of
``{option1, option2}`` objects. The text is still defensively unwrapped
(code fences, surrounding prose) before parsing.

Requirements:
    - GEMINI_API_KEY set in the environment or .env

The generator returns raw candidates only. Validation and backfilling
happen in QuestionService.
"""

import json
import re
from typing import Any

import httpx

from balance_game.config import settings
from balance_game.entities import GenerationRequest, QuestionPair
from balance_game.exceptions import (
    ConfigError,
    GenerationFailureReason,
    ParseError,
    ProviderFatalError,
    ProviderTransientError,
)
from balance_game.observability import get_logger
from balance_game.prompts import build_prompt, build_response_schema
from balance_game.retry import BackoffRetryExecutor

logger = get_logger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?", re.IGNORECASE)

# Options are requested a little shorter than the validator allows
PROMPT_LENGTH_MARGIN = 3


def extract_json_array(text: str) -> list[Any]:
    """Parse the JSON array embedded in model output.

    Strips markdown code fences and isolates the text between the first
    ``[`` and the last ``]`` before parsing.

    Args:
        text: Raw model output

    Returns:
        The parsed array

    Raises:
        ParseError: If no array can be parsed
    """
    cleaned = _CODE_FENCE.sub("", text).strip()
    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start != -1 and end > start:
        cleaned = cleaned[start : end + 1]

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ParseError(
            "Model output is not valid JSON",
            parse_error=str(e),
            json_text=text[:500],
        ) from e

    if not isinstance(parsed, list):
        raise ParseError(
            f"Model returned a JSON {type(parsed).__name__} instead of an array",
            json_text=text[:500],
        )
    return parsed


class GeminiQuestionGenerator:
    """Gemini implementation of the QuestionGenerator protocol.

    This class satisfies the QuestionGenerator protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        generator = GeminiQuestionGenerator.create()
        candidates = await generator.generate(
            GenerationRequest(
                category="daily",
                category_description="일상생활 (음식, 수면, 생활 습관, 편의 등)",
                date_seed="2024-5-1",
            )
        )
        ```
    """

    def __init__(
        self,
        api_key: str,
        model_name: str | None = None,
        base_url: str | None = None,
        question_count: int | None = None,
        min_len: int | None = None,
        max_len: int | None = None,
        timeout: float | None = None,
        retry_executor: BackoffRetryExecutor | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Gemini generator.

        Args:
            api_key: Gemini API key.
            model_name: Model identifier. Defaults to settings.gemini_model.
            base_url: API base URL. Defaults to settings.gemini_base_url.
            question_count: Pairs requested per call. Defaults to settings.generation_count.
            min_len: Minimum option length stated in the prompt.
            max_len: Maximum option length stated in the prompt.
            timeout: Request timeout in seconds.
            retry_executor: Backoff policy around the HTTP call.
            client: Pre-built HTTP client (tests); created lazily otherwise.
        """
        self._api_key = api_key
        self._model_name = model_name or settings.gemini_model
        self._base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self._question_count = question_count or settings.generation_count
        self._min_len = min_len or settings.validation_min_len
        self._max_len = max_len or settings.validation_max_len - PROMPT_LENGTH_MARGIN
        self._timeout = timeout or settings.llm_timeout
        self._retry = retry_executor or BackoffRetryExecutor()
        self._client = client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> "GeminiQuestionGenerator":
        """Factory method to create GeminiQuestionGenerator with defaults.

        Args:
            api_key: API key. If None, uses settings.
            model_name: Model name. If None, uses settings.

        Returns:
            Configured GeminiQuestionGenerator

        Raises:
            ConfigError: If no API key is configured
        """
        key = api_key or settings.gemini_api_key
        if not key:
            raise ConfigError("GEMINI_API_KEY is not configured")
        return cls(api_key=key, model_name=model_name)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"x-goog-api-key": self._api_key},
            )
        return self._client

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model_name}:generateContent"

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        """Build the generateContent request body."""
        prompt = build_prompt(
            category_description=request.category_description,
            date_seed=request.date_seed,
            question_count=self._question_count,
            min_len=self._min_len,
            max_len=self._max_len,
        )
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": settings.llm_temperature,
                "responseMimeType": "application/json",
                "responseSchema": build_response_schema(
                    self._question_count, self._min_len, self._max_len
                ),
                "maxOutputTokens": settings.llm_max_output_tokens,
                "topP": 0.95,
                "topK": 64,
            },
        }

    async def generate(self, request: GenerationRequest) -> list[QuestionPair]:
        """Generate raw candidate pairs for one category and day.

        Args:
            request: Category, its description and the date seed

        Returns:
            Candidates in model order, not yet validated

        Raises:
            ProviderTransientError: Provider stayed overloaded for every attempt
            ProviderFatalError: Error status, truncated output or bad envelope
            ParseError: Output is not a JSON array
        """
        payload = self.build_payload(request)
        response = await self._retry.call(lambda: self.client.post(self.endpoint, json=payload))

        if response is None:
            raise ProviderTransientError(
                "Gemini API unavailable after retries",
                attempts=self._retry.max_attempts,
            )

        if not response.is_success:
            logger.error(
                "Gemini API error",
                status_code=response.status_code,
                category=request.category,
                date_seed=request.date_seed,
            )
            raise ProviderFatalError(
                "Gemini API request failed",
                GenerationFailureReason.HTTP_ERROR,
                status=response.status_code,
                provider_details=response.text[:500],
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderFatalError(
                "Gemini API returned a non-JSON body",
                GenerationFailureReason.MALFORMED_RESPONSE,
            ) from e

        text = self._extract_text(data)
        candidates = [QuestionPair.from_raw(item) for item in extract_json_array(text)]

        logger.info(
            "Generated question candidates",
            category=request.category,
            date_seed=request.date_seed,
            count=len(candidates),
        )
        return candidates

    def _extract_text(self, data: Any) -> str:
        """Pull the generated text out of the response envelope.

        Truncation is checked before the envelope shape so that output cut
        off by the token limit is never parsed.
        """
        candidates = data.get("candidates") if isinstance(data, dict) else None
        candidate = candidates[0] if isinstance(candidates, list) and candidates else None

        if isinstance(candidate, dict) and candidate.get("finishReason") == "MAX_TOKENS":
            logger.error("Gemini output truncated by token limit", model=self._model_name)
            raise ProviderFatalError(
                "Model output was cut off by the output token limit",
                GenerationFailureReason.TRUNCATED,
            )

        try:
            text = candidate["content"]["parts"][0]["text"]
        except (TypeError, KeyError, IndexError):
            text = None

        if not isinstance(text, str) or not text:
            raise ProviderFatalError(
                "Unexpected Gemini response structure",
                GenerationFailureReason.MALFORMED_RESPONSE,
                response_excerpt=json.dumps(data, ensure_ascii=False)[:500],
            )
        return text

    async def is_available(self) -> bool:
        """Check if an API key is configured.

        No request is made: a test call would spend provider quota.
        """
        return bool(self._api_key)

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
