from __future__ import annotations

import logging
import time
from typing import Any

from atsmatch.ai.config import ai_enabled
from atsmatch.ai.factory import get_ai_client
from atsmatch.ai.types import AIClient, ChatMessage
from atsmatch.core.config import settings
from atsmatch.errors import KeywordLLMError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert ATS (Applicant Tracking System) keyword extraction engine. Your job is to analyze job descriptions and extract the most important, relevant keywords that candidates need to match.

**Your tasks:**
1. Extract technical skills, tools, technologies, and software
2. Identify soft skills (communication, leadership, etc.)
3. Categorize each keyword as "required" or "preferred" based on context
4. Assign importance scores (0-100) based on:
   - Frequency of mention
   - Section placement (requirements = higher score)
   - Requirement level (required > preferred > optional)
   - Technical specificity (React.js > JavaScript frameworks)
5. Extract experience requirements (years of experience for specific skills)
6. Identify required certifications

**Critical guidelines:**
- Focus on actionable, specific terms candidates can match
- Ignore marketing fluff, company descriptions, and boilerplate text
- Prioritize technical requirements over generic descriptions
- Extract individual keywords, NOT multi-line blocks or paragraphs
- Use consistent, normalized terminology (e.g., "JavaScript" not "js")

Return results ONLY as valid JSON with no additional text or explanation."""

USER_PROMPT_TEMPLATE = """Analyze this job description and extract ATS keywords:

{description}

Return a JSON object with this EXACT structure:
{{
  "hardSkills": [
    {{"term": "React", "importance": 95, "category": "hard", "requirementLevel": "required", "context": "5+ years React experience"}},
    {{"term": "TypeScript", "importance": 90, "category": "hard", "requirementLevel": "required"}}
  ],
  "softSkills": [
    {{"term": "communication", "importance": 85, "category": "soft", "requirementLevel": "required"}},
    {{"term": "leadership", "importance": 75, "category": "soft", "requirementLevel": "preferred"}}
  ],
  "experienceRequirements": [
    {{"skill": "React", "years": 5, "isMinimum": true}}
  ],
  "certifications": ["AWS Certified", "PMP"]
}}"""

_RESULT_KEYS = ("hardSkills", "softSkills", "experienceRequirements", "certifications")


def build_messages(description: str) -> list[ChatMessage]:
    truncated = description[: settings.llm_max_input_chars]
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=USER_PROMPT_TEMPLATE.format(description=truncated)),
    ]


async def extract_keywords_llm(description: str, client: AIClient | None = None) -> dict[str, Any]:
    """Run the extraction prompt and return the ``{success, data, meta}`` envelope."""
    if client is None:
        if not ai_enabled():
            raise KeywordLLMError("Keyword extraction model is not configured.", code="llm_disabled")
        client = get_ai_client()

    started = time.perf_counter()
    try:
        completion = await client.complete_json(build_messages(description), temperature=0.3, max_tokens=1500)
    except Exception as exc:  # noqa: BLE001 - surfaced as a typed error
        logger.warning("keyword_llm_failed model=%s prompt_len=%s: %s", settings.ai_model, len(description), exc)
        raise KeywordLLMError("Keyword extraction failed. Try again.", code="llm_unavailable") from exc

    data = {key: completion.data.get(key) or [] for key in _RESULT_KEYS}
    logger.info(
        "keyword_llm_ok hard=%s soft=%s tokens=%s latency_ms=%s",
        len(data["hardSkills"]),
        len(data["softSkills"]),
        completion.tokens_used,
        int((time.perf_counter() - started) * 1000),
    )
    return {
        "success": True,
        "data": data,
        "meta": {"tokensUsed": completion.tokens_used, "model": completion.model},
    }
