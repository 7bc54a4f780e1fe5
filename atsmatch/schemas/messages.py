from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field, TypeAdapter

from .keywords import CamelModel, ExtractionResult, ScoreReport
from .resume import JobPosting, Resume
from .suggestions import BulkApplyResult, EditSuggestion, ResumeSection


class CalculateScorePayload(CamelModel):
    resume: Resume
    job: JobPosting
    prefer_local: bool | None = None


class ExtractKeywordsPayload(CamelModel):
    text: str = Field(min_length=1)


class GenerateSuggestionsPayload(CamelModel):
    text: str
    section: ResumeSection


class ApplySuggestionsPayload(CamelModel):
    resume: Resume
    suggestions: list[EditSuggestion] = Field(min_length=1)
    safe: bool = True


class CalculateScoreMessage(CamelModel):
    type: Literal["calculate_score"]
    payload: CalculateScorePayload


class ExtractKeywordsMessage(CamelModel):
    type: Literal["extract_keywords"]
    payload: ExtractKeywordsPayload


class GenerateSuggestionsMessage(CamelModel):
    type: Literal["generate_suggestions"]
    payload: GenerateSuggestionsPayload


class ApplySuggestionsMessage(CamelModel):
    type: Literal["apply_suggestions"]
    payload: ApplySuggestionsPayload


PanelMessage = Annotated[
    Union[CalculateScoreMessage, ExtractKeywordsMessage, GenerateSuggestionsMessage, ApplySuggestionsMessage],
    Field(discriminator="type"),
]

panel_message_adapter: TypeAdapter[PanelMessage] = TypeAdapter(PanelMessage)


class MessageError(CamelModel):
    code: str
    message: str


class MessageResponse(CamelModel):
    type: str
    ok: bool = True
    score: ScoreReport | None = None
    keywords: ExtractionResult | None = None
    suggestions: list[EditSuggestion] | None = None
    result: BulkApplyResult | None = None
    error: MessageError | None = None
