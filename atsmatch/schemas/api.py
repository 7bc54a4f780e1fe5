from __future__ import annotations

from typing import Any

from pydantic import Field

from .keywords import CamelModel
from .resume import JobPosting, Resume
from .suggestions import EditSuggestion, ResumeSection


class ScoreRequest(CamelModel):
    resume: Resume
    job: JobPosting
    prefer_local: bool | None = None


class KeywordExtractRequest(CamelModel):
    text: str


class KeywordLLMRequest(CamelModel):
    job_description: str = ""


class KeywordLLMResponse(CamelModel):
    success: bool
    data: dict[str, Any]
    meta: dict[str, Any] = Field(default_factory=dict)


class SuggestionsRequest(CamelModel):
    text: str
    section: ResumeSection


class ApplySuggestionRequest(CamelModel):
    resume: Resume
    suggestion: EditSuggestion
    safe: bool = True


class ApplySuggestionsRequest(CamelModel):
    resume: Resume
    suggestions: list[EditSuggestion]
    safe: bool = True
