from typing import Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException, Request, status
from pydantic import ValidationError

from atsmatch.api.v1.deps import get_extraction_context
from atsmatch.core.rate_limit import rate_limit
from atsmatch.core.security import bearer_token
from atsmatch.schemas.messages import MessageResponse
from atsmatch.services.dispatch import dispatch_message, parse_message
from atsmatch.services.scoring_service import ExtractionContext

router = APIRouter()


@router.post("/messages", response_model=MessageResponse, response_model_exclude_none=True)
@rate_limit()
async def panel_message(
    request: Request,
    raw: dict[str, Any] = Body(...),
    authorization: str | None = Header(default=None),
    context: ExtractionContext = Depends(get_extraction_context),
):
    try:
        message = parse_message(raw)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=exc.errors(include_url=False, include_context=False),
        ) from exc
    return await dispatch_message(message, context=context, auth_token=bearer_token(authorization))
