from __future__ import annotations

import logging
from typing import Any

from atsmatch.errors import ATSMatchError
from atsmatch.features.local_extraction import build_local_extraction
from atsmatch.features.resume_updater import apply_edit_suggestions
from atsmatch.features.suggestions import generate_edit_suggestions
from atsmatch.schemas.messages import (
    ApplySuggestionsMessage,
    CalculateScoreMessage,
    ExtractKeywordsMessage,
    GenerateSuggestionsMessage,
    MessageError,
    MessageResponse,
    PanelMessage,
    panel_message_adapter,
)
from atsmatch.services.scoring_service import ExtractionContext, calculate_ats_score

logger = logging.getLogger(__name__)


def parse_message(raw: Any) -> PanelMessage:
    """Validate an untyped panel message; raises pydantic.ValidationError."""
    return panel_message_adapter.validate_python(raw)


async def dispatch_message(
    message: PanelMessage,
    *,
    context: ExtractionContext,
    auth_token: str | None = None,
) -> MessageResponse:
    try:
        if isinstance(message, CalculateScoreMessage):
            report = await calculate_ats_score(
                message.payload.resume,
                message.payload.job,
                context=context,
                auth_token=auth_token,
                prefer_local=message.payload.prefer_local,
            )
            return MessageResponse(type=message.type, score=report)
        if isinstance(message, ExtractKeywordsMessage):
            return MessageResponse(type=message.type, keywords=build_local_extraction(message.payload.text))
        if isinstance(message, GenerateSuggestionsMessage):
            suggestions = generate_edit_suggestions(message.payload.text, message.payload.section)
            return MessageResponse(type=message.type, suggestions=suggestions)
        if isinstance(message, ApplySuggestionsMessage):
            result = apply_edit_suggestions(
                message.payload.resume,
                message.payload.suggestions,
                safe=message.payload.safe,
            )
            return MessageResponse(type=message.type, result=result)
    except ATSMatchError as exc:
        logger.info("panel_message_failed type=%s code=%s", message.type, exc.code)
        return MessageResponse(type=message.type, ok=False, error=MessageError(code=exc.code, message=str(exc)))
    raise ValueError(f"Unsupported message type: {message.type}")
