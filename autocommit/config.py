"""Configuration management for autocommit."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass
from typing import Dict, Optional

from .exceptions import ConfigError

DEFAULT_MODEL = "gpt-4.1-mini"
DEFAULT_ENDPOINT = "https://api.openai.com/v1"
DEFAULT_API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_LANGUAGE = "English"
DEFAULT_TEMPERATURE = 0.1
DEFAULT_MAX_TOKENS = 2000


@dataclass(frozen=True)
class Config:
    """Runtime configuration handed to the completion client."""

    model: str = DEFAULT_MODEL
    llm_endpoint: str = DEFAULT_ENDPOINT
    api_key_env: str = DEFAULT_API_KEY_ENV
    language: str = DEFAULT_LANGUAGE
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    repo_path: str = "."

    def resolve_api_key(self) -> Optional[str]:
        """Return the API key from the configured environment variable."""
        return os.environ.get(self.api_key_env)

    def require_api_key(self) -> str:
        """Return the API key or raise ``ConfigError`` when it is unset."""
        key = (self.resolve_api_key() or "").strip()
        if not key:
            raise ConfigError(
                f"Environment variable '{self.api_key_env}' is not set or empty."
            )
        return key

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def load_config(*, overrides: Optional[Dict[str, str]] = None) -> Config:
    """Build configuration from environment and explicit overrides."""

    overrides = overrides or {}

    model = (
        overrides.get("model")
        or os.environ.get("AUTOCOMMIT_LLM_MODEL")
        or DEFAULT_MODEL
    )
    endpoint = (
        overrides.get("endpoint")
        or os.environ.get("AUTOCOMMIT_LLM_ENDPOINT")
        or os.environ.get("OPENAI_API_BASE")
        or DEFAULT_ENDPOINT
    )
    api_key_env = overrides.get("api_key_env") or DEFAULT_API_KEY_ENV
    language = (
        overrides.get("language")
        or os.environ.get("AUTOCOMMIT_LANGUAGE")
        or DEFAULT_LANGUAGE
    )
    if overrides.get("max_tokens"):
        try:
            max_tokens = int(overrides["max_tokens"])
        except ValueError as exc:
            raise ConfigError(
                f"Invalid max_tokens override: {overrides['max_tokens']!r}"
            ) from exc
    else:
        max_tokens = _int_from_env("AUTOCOMMIT_MAX_TOKENS", DEFAULT_MAX_TOKENS)
    if max_tokens <= 0:
        raise ConfigError(f"max_tokens must be positive, got {max_tokens}")

    return Config(
        model=model,
        llm_endpoint=endpoint,
        api_key_env=api_key_env,
        language=language,
        max_tokens=max_tokens,
        repo_path=overrides.get("repo_path") or ".",
    )
