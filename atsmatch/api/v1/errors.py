from __future__ import annotations

from fastapi import HTTPException, status

from atsmatch.errors import (
    ATSMatchError,
    EmptyInputError,
    ExtractionFailedError,
    KeywordLLMError,
    RemoteAuthError,
    RemoteQuotaError,
    SuggestionNotFoundError,
    SuggestionSafetyError,
)

_STATUS_BY_ERROR: tuple[tuple[type[ATSMatchError], int], ...] = (
    (EmptyInputError, status.HTTP_400_BAD_REQUEST),
    (RemoteAuthError, status.HTTP_401_UNAUTHORIZED),
    (RemoteQuotaError, status.HTTP_429_TOO_MANY_REQUESTS),
    (SuggestionNotFoundError, status.HTTP_404_NOT_FOUND),
    (SuggestionSafetyError, status.HTTP_409_CONFLICT),
    (ExtractionFailedError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (KeywordLLMError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def raise_http_error(exc: ATSMatchError) -> None:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            detail: dict[str, object] = {"code": exc.code, "message": str(exc)}
            if isinstance(exc, SuggestionSafetyError):
                detail["dropped"] = exc.dropped
            raise HTTPException(status_code=status_code, detail=detail) from exc
    raise exc
