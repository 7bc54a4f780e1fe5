from fastapi import APIRouter, Request

from atsmatch.api.v1.errors import raise_http_error
from atsmatch.core.rate_limit import rate_limit
from atsmatch.errors import ATSMatchError
from atsmatch.features.resume_updater import apply_edit_suggestion, apply_edit_suggestions, ensure_safe
from atsmatch.features.suggestions import generate_edit_suggestions
from atsmatch.schemas.api import ApplySuggestionRequest, ApplySuggestionsRequest, SuggestionsRequest
from atsmatch.schemas.resume import Resume
from atsmatch.schemas.suggestions import BulkApplyResult, EditSuggestion

router = APIRouter()


@router.post("/suggestions", response_model=list[EditSuggestion])
@rate_limit()
async def suggestions(request: Request, payload: SuggestionsRequest):
    return generate_edit_suggestions(payload.text, payload.section)


@router.post("/suggestions/apply", response_model=BulkApplyResult)
@rate_limit()
async def apply_suggestions(request: Request, payload: ApplySuggestionsRequest):
    return apply_edit_suggestions(payload.resume, payload.suggestions, safe=payload.safe)


@router.post("/suggestions/apply-one", response_model=Resume)
@rate_limit()
async def apply_suggestion(request: Request, payload: ApplySuggestionRequest):
    try:
        if payload.safe:
            ensure_safe(payload.suggestion)
        return apply_edit_suggestion(payload.resume, payload.suggestion)
    except ATSMatchError as exc:
        raise_http_error(exc)
