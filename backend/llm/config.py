from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

_ENV_FILE = Path(__file__).resolve().parent.parent.parent / ".env"

DEFAULT_TIMEOUT_MS = 60_000
DEFAULT_MAX_TOKENS = 2048
DEFAULT_FRONTEND_ORIGINS = ("http://localhost:5173", "http://localhost:5174")


@dataclass(frozen=True)
class ProviderConfig:
    api_key: str = ""
    api_model: str = ""
    display_name: str = ""
    max_tokens: int = DEFAULT_MAX_TOKENS
    # Transport-level timeout handed to the SDK / HTTP client, in seconds.
    timeout: float = DEFAULT_TIMEOUT_MS / 1000


@dataclass(frozen=True)
class Settings:
    anthropic: ProviderConfig = field(default_factory=ProviderConfig)
    perplexity: ProviderConfig = field(default_factory=ProviderConfig)
    gemini: ProviderConfig = field(default_factory=ProviderConfig)
    provider_timeout_ms: int = DEFAULT_TIMEOUT_MS
    debug_logging: bool = False
    environment: str = "production"
    frontend_origins: tuple[str, ...] = DEFAULT_FRONTEND_ORIGINS

    def for_provider(self, provider_id: str) -> ProviderConfig:
        """Return the config block for ``provider_id`` (a ``ProviderId`` value)."""
        return getattr(self, provider_id)

    @property
    def expose_error_details(self) -> bool:
        return self.environment.lower() == "development"


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def _provider_from_env(
    env: Mapping[str, str],
    prefix: str,
    default_model: str,
    default_display: str,
    max_tokens: int,
    timeout: float,
) -> ProviderConfig:
    # Explicitly-empty model names are kept so the adapter can reject them.
    return ProviderConfig(
        api_key=env.get(f"{prefix}_API_KEY", "").strip(),
        api_model=env.get(f"{prefix}_API_MODEL", default_model).strip(),
        display_name=env.get(f"{prefix}_MODEL_NAME", default_display).strip(),
        max_tokens=max_tokens,
        timeout=timeout,
    )


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build the process-wide ``Settings`` once, at start-up.

    Reads ``.env`` from the project root (without overriding real environment
    variables) unless an explicit ``env`` mapping is supplied.
    """
    if env is None:
        load_dotenv(_ENV_FILE)
        env = os.environ

    timeout_ms = int(env.get("PROVIDER_TIMEOUT_MS", DEFAULT_TIMEOUT_MS))
    max_tokens = int(env.get("LLM_MAX_TOKENS", DEFAULT_MAX_TOKENS))
    transport_timeout = timeout_ms / 1000

    origins = tuple(
        o.strip()
        for o in env.get("FRONTEND_URL", ",".join(DEFAULT_FRONTEND_ORIGINS)).split(",")
        if o.strip()
    )

    return Settings(
        anthropic=_provider_from_env(
            env, "ANTHROPIC", "claude-sonnet-4-5-20250929", "Claude Sonnet 4.5",
            max_tokens, transport_timeout,
        ),
        perplexity=_provider_from_env(
            env, "PERPLEXITY", "sonar", "Perplexity Sonar",
            max_tokens, transport_timeout,
        ),
        gemini=_provider_from_env(
            env, "GEMINI", "gemini-2.5-flash", "Gemini 2.5 Flash",
            max_tokens, transport_timeout,
        ),
        provider_timeout_ms=timeout_ms,
        debug_logging=_flag(env.get("DEBUG_LOGGING")),
        environment=env.get("ENVIRONMENT", "production"),
        frontend_origins=origins,
    )
