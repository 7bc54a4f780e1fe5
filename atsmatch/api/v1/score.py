from fastapi import APIRouter, Depends, Header, Request

from atsmatch.api.v1.deps import get_extraction_context
from atsmatch.api.v1.errors import raise_http_error
from atsmatch.core.rate_limit import rate_limit
from atsmatch.core.security import bearer_token
from atsmatch.errors import ATSMatchError
from atsmatch.schemas.api import ScoreRequest
from atsmatch.schemas.keywords import ScoreReport
from atsmatch.services.scoring_service import ExtractionContext, calculate_ats_score

router = APIRouter()


@router.post("/ats-score", response_model=ScoreReport)
@rate_limit()
async def ats_score(
    request: Request,
    payload: ScoreRequest,
    authorization: str | None = Header(default=None),
    context: ExtractionContext = Depends(get_extraction_context),
):
    try:
        return await calculate_ats_score(
            payload.resume,
            payload.job,
            context=context,
            auth_token=bearer_token(authorization),
            prefer_local=payload.prefer_local,
        )
    except ATSMatchError as exc:
        raise_http_error(exc)
