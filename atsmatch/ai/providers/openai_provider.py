from __future__ import annotations

import json
import logging
from typing import Optional, Sequence

from openai import AsyncOpenAI

from atsmatch.ai.types import ChatMessage, JSONCompletion

logger = logging.getLogger(__name__)


class OpenAIProvider:
    """Chat completions in JSON-object mode against any OpenAI-compatible endpoint."""

    def __init__(
        self,
        model: str,
        api_key: str,
        base_url: Optional[str] = None,
        timeout_s: float = 30.0,
        max_retries: int = 2,
    ):
        if not api_key.strip():
            raise RuntimeError("OPENAI_API_KEY is missing")
        self._model = model
        self._client = AsyncOpenAI(
            api_key=api_key.strip(),
            base_url=base_url,
            timeout=timeout_s,
            max_retries=max_retries,
        )

    @property
    def model(self) -> str:
        return self._model

    async def complete_json(
        self,
        messages: Sequence[ChatMessage],
        *,
        temperature: float = 0.3,
        max_tokens: int = 1500,
    ) -> JSONCompletion:
        response = await self._client.chat.completions.create(
            model=self._model,
            messages=[{"role": message.role, "content": message.content} for message in messages],
            temperature=temperature,
            max_tokens=max_tokens,
            response_format={"type": "json_object"},
        )
        choice = response.choices[0] if response.choices else None
        content = choice.message.content if choice is not None else None
        if not content:
            raise ValueError("Model returned an empty completion.")
        parsed = json.loads(content)
        if not isinstance(parsed, dict):
            raise ValueError("Model output is not a JSON object.")

        usage = response.usage
        tokens_used = usage.total_tokens if usage is not None else 0
        logger.debug("json_completion_ok model=%s tokens=%s", response.model, tokens_used)
        return JSONCompletion(data=parsed, model=response.model or self._model, tokens_used=tokens_used or 0)
