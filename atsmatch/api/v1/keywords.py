from fastapi import APIRouter, Header, HTTPException, Request, status

from atsmatch.api.v1.errors import raise_http_error
from atsmatch.core.config import settings
from atsmatch.core.rate_limit import rate_limit
from atsmatch.core.security import check_api_key
from atsmatch.errors import KeywordLLMError
from atsmatch.features.local_extraction import build_local_extraction
from atsmatch.schemas.api import KeywordExtractRequest, KeywordLLMRequest, KeywordLLMResponse
from atsmatch.schemas.keywords import ExtractionResult
from atsmatch.services.keyword_llm import extract_keywords_llm

router = APIRouter()


@router.post("/keywords/extract", response_model=ExtractionResult)
@rate_limit()
async def extract_keywords(request: Request, payload: KeywordExtractRequest):
    if not payload.text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")
    return build_local_extraction(payload.text)


@router.post("/keyword-extraction", response_model=KeywordLLMResponse)
@rate_limit(settings.keyword_extraction_rate_limit)
async def keyword_extraction(
    request: Request,
    payload: KeywordLLMRequest,
    x_api_key: str | None = Header(default=None),
    authorization: str | None = Header(default=None),
):
    check_api_key(x_api_key, authorization)
    if not payload.job_description.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail={"error": "Job description is required"})
    try:
        return await extract_keywords_llm(payload.job_description)
    except KeywordLLMError as exc:
        raise_http_error(exc)
