from __future__ import annotations


class ATSMatchError(RuntimeError):
    def __init__(self, message: str, *, code: str = "ats_error"):
        super().__init__(message)
        self.code = code


class EmptyInputError(ATSMatchError):
    def __init__(self, message: str):
        super().__init__(message, code="empty_input")


class ExtractionFailedError(ATSMatchError):
    def __init__(self, message: str):
        super().__init__(message, code="extraction_failed")


class RemoteExtractionError(ATSMatchError):
    """Retryable failure of the hosted keyword-extraction call."""

    def __init__(self, message: str, *, code: str = "remote_error", status_code: int | None = None):
        super().__init__(message, code=code)
        self.status_code = status_code


class RemoteTimeoutError(RemoteExtractionError):
    def __init__(self, message: str):
        super().__init__(message, code="remote_timeout")


class RemoteAuthError(RemoteExtractionError):
    def __init__(self, message: str = "Authentication failed. Please log in again."):
        super().__init__(message, code="remote_auth", status_code=401)


class RemoteQuotaError(RemoteExtractionError):
    def __init__(self, message: str = "Keyword extraction quota exceeded. Please upgrade your plan."):
        super().__init__(message, code="remote_quota", status_code=429)


class SemanticUnavailableError(ATSMatchError):
    def __init__(self, message: str):
        super().__init__(message, code="semantic_unavailable")


class SemanticTimeoutError(SemanticUnavailableError):
    def __init__(self, message: str):
        super().__init__(message)
        self.code = "semantic_timeout"


class SuggestionNotFoundError(ATSMatchError):
    def __init__(self, message: str, *, suggestion_id: str | None = None):
        super().__init__(message, code="suggestion_not_found")
        self.suggestion_id = suggestion_id


class SuggestionSafetyError(ATSMatchError):
    """The rewrite would drop factual content (numbers, emails, phone numbers)."""

    def __init__(self, message: str, *, suggestion_id: str | None = None, dropped: list[str] | None = None):
        super().__init__(message, code="suggestion_unsafe")
        self.suggestion_id = suggestion_id
        self.dropped = list(dropped or [])


class KeywordLLMError(ATSMatchError):
    def __init__(self, message: str, *, code: str = "llm_unavailable"):
        super().__init__(message, code=code)
