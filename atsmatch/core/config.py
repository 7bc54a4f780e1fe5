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
    api_key: str | None
    rate_limit: str
    rate_limit_enabled: bool
    keyword_extraction_rate_limit: str
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    cors_allow_origin_regex: str | None
    enable_remote: bool
    prefer_local: bool
    keyword_extraction_url: str | None
    keyword_extraction_anon_key: str | None
    remote_timeout_s: float
    remote_max_retries: int
    remote_max_input_chars: int
    remote_cache_ttl_s: int
    remote_cache_max_entries: int
    enable_semantic: bool
    semantic_model_name: str
    semantic_ready_timeout_s: float
    semantic_request_timeout_s: float
    semantic_top_n: int
    semantic_min_score: float
    semantic_mailbox_size: int
    ai_model: str
    llm_timeout_s: float
    llm_max_input_chars: int


settings = Settings(
    api_key=_get_env("API_KEY"),
    rate_limit=_get_env("RATE_LIMIT", "30/minute") or "30/minute",
    rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
    keyword_extraction_rate_limit=_get_env("KEYWORD_EXTRACTION_RATE_LIMIT", "10/minute") or "10/minute",
    log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
    sentry_dsn=_get_env("SENTRY_DSN"),
    cors_allowed_origins=_get_env_list(
        "CORS_ALLOWED_ORIGINS",
        [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ],
    ),
    cors_allow_origin_regex=_get_env("CORS_ALLOW_ORIGIN_REGEX", r"^chrome-extension://[a-p]{32}$"),
    enable_remote=_get_env_bool("ATS_ENABLE_REMOTE", False),
    prefer_local=_get_env_bool("ATS_PREFER_LOCAL", False),
    keyword_extraction_url=_get_env("KEYWORD_EXTRACTION_URL"),
    keyword_extraction_anon_key=_get_env("KEYWORD_EXTRACTION_ANON_KEY"),
    remote_timeout_s=_get_env_float("REMOTE_TIMEOUT_S", 30.0),
    remote_max_retries=_get_env_int("REMOTE_MAX_RETRIES", 2),
    remote_max_input_chars=_get_env_int("REMOTE_MAX_INPUT_CHARS", 5000),
    remote_cache_ttl_s=_get_env_int("REMOTE_CACHE_TTL_S", 3600),
    remote_cache_max_entries=_get_env_int("REMOTE_CACHE_MAX_ENTRIES", 50),
    enable_semantic=_get_env_bool("ATS_ENABLE_SEMANTIC", False),
    semantic_model_name=_get_env("SEMANTIC_MODEL_NAME", "BAAI/bge-small-en-v1.5") or "BAAI/bge-small-en-v1.5",
    semantic_ready_timeout_s=_get_env_float("SEMANTIC_READY_TIMEOUT_S", 30.0),
    semantic_request_timeout_s=_get_env_float("SEMANTIC_REQUEST_TIMEOUT_S", 60.0),
    semantic_top_n=_get_env_int("SEMANTIC_TOP_N", 20),
    semantic_min_score=_get_env_float("SEMANTIC_MIN_SCORE", 0.3),
    semantic_mailbox_size=_get_env_int("SEMANTIC_MAILBOX_SIZE", 16),
    ai_model=(_get_env("AI_MODEL") or _get_env("OPENAI_MODEL") or "x-ai/grok-4-fast").strip(),
    llm_timeout_s=_get_env_float("LLM_TIMEOUT_S", 30.0),
    llm_max_input_chars=_get_env_int("LLM_MAX_INPUT_CHARS", 3000),
)

if settings.remote_max_retries < 1:
    raise RuntimeError("REMOTE_MAX_RETRIES must be at least 1.")

if settings.remote_cache_max_entries < 1:
    raise RuntimeError("REMOTE_CACHE_MAX_ENTRIES must be at least 1.")
