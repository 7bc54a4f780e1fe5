from __future__ import annotations

from fastapi import HTTPException, Request, status

from atsmatch.services.scoring_service import ExtractionContext


def get_extraction_context(request: Request) -> ExtractionContext:
    context = getattr(request.app.state, "extraction_context", None)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction context is not initialised.",
        )
    return context
