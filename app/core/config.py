from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    port: int
    log_level: str
    sentry_dsn: str | None
    log_text_max_chars: int
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    cors_allow_credentials: bool
    rate_limit: str
    rate_limit_enabled: bool
    auth_username: str | None
    auth_password: str | None
    jwt_secret: str | None
    jwt_algorithm: str
    token_ttl_minutes: int
    ai_provider: str
    ai_model: str
    ai_schema_level: str
    ai_temperature: float
    openai_api_key: str | None
    openai_base_url: str | None
    openai_api_variant: str
    openai_timeout_s: float
    fetch_timeout_s: float
    fetch_max_chars: int
    fetch_user_agent: str


def load_settings() -> Settings:
    return Settings(
        port=_get_env_int("PORT", 3000),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        log_text_max_chars=_get_env_int("LOG_TEXT_MAX_CHARS", 800),
        cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
        cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX"),
        cors_allow_credentials=_get_env_bool("CORS_ALLOW_CREDENTIALS", False),
        rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        auth_username=_get_env("AUTH_USERNAME"),
        auth_password=_get_env("AUTH_PASSWORD"),
        jwt_secret=_get_env("JWT_SECRET"),
        jwt_algorithm=_get_env("JWT_ALGORITHM", "HS256") or "HS256",
        token_ttl_minutes=_get_env_int("TOKEN_TTL_MINUTES", 60),
        ai_provider=(_get_env("AI_PROVIDER", "openai") or "openai").strip().lower(),
        ai_model=(_get_env("AI_MODEL", "gpt-4.1-mini") or "gpt-4.1-mini").strip(),
        ai_schema_level=(_get_env("AI_SCHEMA_LEVEL", "constrained") or "constrained").strip().lower(),
        ai_temperature=_get_env_float("AI_TEMPERATURE", 0.2),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        openai_base_url=_get_env("OPENAI_BASE_URL"),
        openai_api_variant=(_get_env("OPENAI_API_VARIANT", "chat") or "chat").strip().lower(),
        openai_timeout_s=_get_env_float("OPENAI_TIMEOUT_S", 60.0),
        fetch_timeout_s=_get_env_float("FETCH_TIMEOUT_S", 15.0),
        fetch_max_chars=_get_env_int("FETCH_MAX_CHARS", 50_000),
        fetch_user_agent=_get_env(
            "FETCH_USER_AGENT",
            "Mozilla/5.0 (compatible; JobAdAnalyzer/0.1; +https://example.invalid/bot)",
        )
        or "Mozilla/5.0 (compatible; JobAdAnalyzer/0.1)",
    )


def validate_settings(value: Settings) -> None:
    if value.ai_schema_level not in {"constrained", "unconstrained"}:
        raise RuntimeError("AI_SCHEMA_LEVEL must be either 'constrained' or 'unconstrained'.")
    if value.openai_api_variant not in {"chat", "responses"}:
        raise RuntimeError("OPENAI_API_VARIANT must be either 'chat' or 'responses'.")
    if value.fetch_max_chars <= 0:
        raise RuntimeError("FETCH_MAX_CHARS must be a positive integer.")


settings = load_settings()
validate_settings(settings)
