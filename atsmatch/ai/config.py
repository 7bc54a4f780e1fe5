import os
from dataclasses import dataclass

from atsmatch.core.config import settings

_PLACEHOLDER_PREFIXES = ("your_", "replace_", "sk-xxx")


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str
    base_url: str | None
    timeout_s: float
    max_retries: int = 2


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith(_PLACEHOLDER_PREFIXES) or lower in {"changeme", "todo"}


def load_ai_config() -> AIConfig:
    return AIConfig(
        provider=os.getenv("AI_PROVIDER", "openai").strip().lower(),
        model=settings.ai_model,
        api_key=(os.getenv("OPENAI_API_KEY") or "").strip(),
        base_url=(os.getenv("OPENAI_BASE_URL") or "").strip() or None,
        timeout_s=settings.llm_timeout_s,
        max_retries=int(os.getenv("OPENAI_MAX_RETRIES", "2")),
    )


def ai_enabled(cfg: AIConfig | None = None) -> bool:
    """True when an OpenAI-compatible key is configured and is not a template value."""
    cfg = cfg or load_ai_config()
    if cfg.provider != "openai":
        return False
    return bool(cfg.api_key) and not _looks_like_placeholder(cfg.api_key)
