from __future__ import annotations

from typing import Literal

from pydantic import Field

from .keywords import CamelModel
from .resume import Resume

SuggestionType = Literal["action_verb", "passive_voice", "formatting", "clarity", "quantification"]
ResumeSection = Literal["summary", "experience", "skills", "education", "contact"]


class EditSuggestion(CamelModel):
    id: str
    type: SuggestionType
    original: str
    suggestion: str
    rationale: str
    section: ResumeSection
    confidence: float = Field(ge=0.0, le=1.0)


class SafetyReport(CamelModel):
    suggestion_id: str
    safe: bool
    dropped_numbers: list[str] = Field(default_factory=list)
    dropped_emails: list[str] = Field(default_factory=list)
    dropped_phones: list[str] = Field(default_factory=list)
    message: str = ""


class RejectedSuggestion(CamelModel):
    suggestion_id: str
    code: str
    message: str


class BulkApplyResult(CamelModel):
    resume: Resume
    applied: list[str] = Field(default_factory=list)
    rejected: list[RejectedSuggestion] = Field(default_factory=list)
