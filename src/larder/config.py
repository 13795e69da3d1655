"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for authenticated endpoints.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    inventory_base_url: str = Field(
        default="http://localhost:3001/api",
        description="Base URL of the pantry/shopping-list API.",
    )
    inventory_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for a pantry or shopping-list fetch.",
    )
    inventory_cache_ttl: float = Field(
        default=60.0,
        description="Seconds an inventory snapshot stays fresh for matching.",
    )
    match_threshold: float = Field(
        default=60.0,
        description="Minimum similarity score (0-100) to accept a fuzzy inventory match.",
    )
    matcher_llm_enabled: bool = Field(
        default=True,
        description="Run the LLM-assisted second matching pass when credentials exist.",
    )
    matcher_llm_base_url: Optional[str] = Field(
        default="https://api.openai.com/v1",
        description="Matcher LLM base URL (OpenAI-compatible runtime or Ollama).",
    )
    matcher_llm_model: str = Field(
        default="gpt-4o-mini",
        description="Model identifier passed to the matcher LLM endpoint.",
    )
    matcher_llm_provider: str = Field(
        default="openai",
        description="Matcher LLM provider (openai or ollama).",
    )
    matcher_llm_temperature: float = Field(
        default=0.2,
        description="Sampling temperature for matcher LLM calls.",
    )
    matcher_llm_max_tokens: int = Field(
        default=1500,
        description="Max tokens for matcher LLM responses.",
    )
    matcher_llm_timeout: float = Field(
        default=30.0,
        description="Seconds before an in-flight matcher LLM call is abandoned.",
    )
    openai_api_key: Optional[str] = Field(
        default=None,
        description="API key sent as a Bearer token to OpenAI-compatible endpoints.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (api_token := _env("LARDER_API_TOKEN")):
        payload["api_token"] = api_token
    if (log_level := _env("LARDER_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("LARDER_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("LARDER_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    if (inventory_base_url := _env("LARDER_INVENTORY_BASE_URL")):
        payload["inventory_base_url"] = inventory_base_url
    if (inventory_timeout := _env("LARDER_INVENTORY_TIMEOUT")):
        try:
            payload["inventory_timeout"] = float(inventory_timeout)
        except ValueError:
            pass
    if (cache_ttl := _env("LARDER_CACHE_TTL")):
        try:
            payload["inventory_cache_ttl"] = float(cache_ttl)
        except ValueError:
            pass
    if (match_threshold := _env("LARDER_MATCH_THRESHOLD")):
        try:
            payload["match_threshold"] = float(match_threshold)
        except ValueError:
            pass
    if (llm_enabled := _env("LARDER_MATCHER_LLM_ENABLED")):
        payload["matcher_llm_enabled"] = _coerce_bool(llm_enabled)
    if (llm_base_url := _env("LARDER_MATCHER_LLM_BASE_URL")):
        payload["matcher_llm_base_url"] = llm_base_url
    if (llm_model := _env("LARDER_MATCHER_LLM_MODEL")):
        payload["matcher_llm_model"] = llm_model
    if (llm_provider := _env("LARDER_MATCHER_LLM_PROVIDER")):
        payload["matcher_llm_provider"] = llm_provider
    if (llm_temperature := _env("LARDER_MATCHER_LLM_TEMPERATURE")):
        try:
            payload["matcher_llm_temperature"] = float(llm_temperature)
        except ValueError:
            pass
    if (llm_max_tokens := _env("LARDER_MATCHER_LLM_MAX_TOKENS")):
        try:
            payload["matcher_llm_max_tokens"] = int(llm_max_tokens)
        except ValueError:
            pass
    if (llm_timeout := _env("LARDER_MATCHER_LLM_TIMEOUT")):
        try:
            payload["matcher_llm_timeout"] = float(llm_timeout)
        except ValueError:
            pass
    if (openai_key := _env("LARDER_OPENAI_API_KEY") or _env("OPENAI_API_KEY")):
        payload["openai_api_key"] = openai_key
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
