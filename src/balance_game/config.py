import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")  # or "memory"
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "dailyQuestions")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "604800"))  # 7 days default

    # Gemini
    gemini_api_key: str | None = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    gemini_base_url: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )

    # LLM call behaviour
    llm_timeout: float = float(os.getenv("LLM_TIMEOUT", "60"))
    llm_max_attempts: int = int(os.getenv("LLM_MAX_ATTEMPTS", "3"))
    llm_backoff_base: float = float(os.getenv("LLM_BACKOFF_BASE", "1.0"))
    llm_backoff_jitter: float = float(os.getenv("LLM_BACKOFF_JITTER", "1.0"))
    llm_temperature: float = float(os.getenv("LLM_TEMPERATURE", "0.9"))
    llm_max_output_tokens: int = int(os.getenv("LLM_MAX_OUTPUT_TOKENS", "8000"))

    # Questions
    required_questions: int = int(os.getenv("REQUIRED_QUESTIONS", "10"))
    generation_count: int = int(os.getenv("GENERATION_COUNT", "12"))
    generation_policy: str = os.getenv("GENERATION_POLICY", "on_demand")  # or "scheduled"
    regenerate_on_cache_error: bool = os.getenv("REGENERATE_ON_CACHE_ERROR", "false").lower() == "true"

    # Validation
    validation_min_len: int = int(os.getenv("VALIDATION_MIN_LEN", "8"))
    validation_max_len: int = int(os.getenv("VALIDATION_MAX_LEN", "28"))
    validation_min_target_ratio: float = float(os.getenv("VALIDATION_MIN_TARGET_RATIO", "0.7"))
    validation_short_pattern_len: int = int(os.getenv("VALIDATION_SHORT_PATTERN_LEN", "15"))
    validation_strict: bool = os.getenv("VALIDATION_STRICT", "false").lower() == "true"

    # Day boundary for the date seed
    timezone: str = os.getenv("TIMEZONE", "Asia/Seoul")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_format: str = os.getenv("LOG_FORMAT", "text")  # or "json"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def uses_memory_cache(self) -> bool:
        """Check if the in-memory question store is configured.

        Returns:
            True if questions are kept in process memory, False for Redis
        """
        return self.cache_backend.lower() == "memory"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_backend.lower() not in ("redis", "memory"):
            raise ValueError(f"CACHE_BACKEND must be 'redis' or 'memory', got {self.cache_backend!r}")

        if self.generation_policy not in ("on_demand", "scheduled"):
            raise ValueError(
                f"GENERATION_POLICY must be 'on_demand' or 'scheduled', got {self.generation_policy!r}"
            )

        if self.required_questions < 1:
            raise ValueError("REQUIRED_QUESTIONS must be at least 1")

        if self.generation_count < self.required_questions:
            raise ValueError(
                f"GENERATION_COUNT ({self.generation_count}) must be >= "
                f"REQUIRED_QUESTIONS ({self.required_questions})"
            )

        if self.llm_max_attempts < 1:
            raise ValueError("LLM_MAX_ATTEMPTS must be at least 1")

        if not 0 <= self.validation_min_target_ratio <= 1:
            raise ValueError("VALIDATION_MIN_TARGET_RATIO must be between 0 and 1")

        if self.validation_min_len > self.validation_max_len:
            raise ValueError("VALIDATION_MIN_LEN must not exceed VALIDATION_MAX_LEN")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=True,
    )
