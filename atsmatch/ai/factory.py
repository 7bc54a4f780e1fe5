from functools import lru_cache

from atsmatch.ai.config import load_ai_config
from atsmatch.ai.providers.openai_provider import OpenAIProvider
from atsmatch.ai.types import AIClient


@lru_cache(maxsize=1)
def get_ai_client() -> AIClient:
    """Shared client for the configured provider; only OpenAI-compatible endpoints are wired."""
    cfg = load_ai_config()
    if cfg.provider != "openai":
        raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
    return OpenAIProvider(
        model=cfg.model,
        api_key=cfg.api_key,
        base_url=cfg.base_url,
        timeout_s=cfg.timeout_s,
        max_retries=cfg.max_retries,
    )
