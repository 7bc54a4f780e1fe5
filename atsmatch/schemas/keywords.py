from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from atsmatch.normalize.keywords import normalize

Category = Literal["hard", "soft"]
RequirementLevel = Literal["required", "preferred", "optional", "neutral"]
SectionKind = Literal["requirements", "responsibilities", "preferred", "experience", "company", "unknown"]
ExtractionStrategy = Literal["remote", "semantic+rules", "semantic", "rules"]

MAX_TERM_LENGTH = 50


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Keyword(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    term: str
    normalized_key: str = ""
    category: Category
    requirement_level: RequirementLevel = "neutral"
    importance: int = Field(default=50, ge=0, le=100)
    section: SectionKind = "unknown"
    frequency: int = Field(default=1, ge=1)

    @field_validator("term")
    @classmethod
    def _validate_term(cls, value: str) -> str:
        term = value.strip()
        if not term:
            raise ValueError("term must not be empty")
        if "\n" in term or "\r" in term:
            raise ValueError("term must not contain newlines")
        if len(term) > MAX_TERM_LENGTH:
            raise ValueError(f"term must be at most {MAX_TERM_LENGTH} characters")
        return term

    @model_validator(mode="before")
    @classmethod
    def _derive_normalized_key(cls, data: Any) -> Any:
        # The key is always derived from the term so every producer agrees on equality.
        if isinstance(data, dict) and isinstance(data.get("term"), str):
            data = {key: value for key, value in data.items() if key not in {"normalizedKey", "normalized_key"}}
            data["normalized_key"] = normalize(data["term"])
        return data


class ExperienceRequirement(CamelModel):
    skill: str
    years: int = Field(ge=0, le=60)
    is_minimum: bool = True


class ExtractionResult(CamelModel):
    hard_skills: list[Keyword] = Field(default_factory=list)
    soft_skills: list[Keyword] = Field(default_factory=list)
    experience_requirements: list[ExperienceRequirement] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.hard_skills and not self.soft_skills


class SkillBreakdown(CamelModel):
    matched: list[str] = Field(default_factory=list)
    missing: list[str] = Field(default_factory=list)


class ScoreAnalysis(CamelModel):
    hard_skills: SkillBreakdown = Field(default_factory=SkillBreakdown)
    soft_skills: SkillBreakdown = Field(default_factory=SkillBreakdown)


class ATSScore(CamelModel):
    score: int = Field(ge=0, le=100)
    matched_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    analysis: ScoreAnalysis = Field(default_factory=ScoreAnalysis)


class ScoreWarning(CamelModel):
    code: str
    message: str


class ScoreReport(CamelModel):
    ats_score: ATSScore
    strategy: ExtractionStrategy
    job_keywords: ExtractionResult
    warnings: list[ScoreWarning] = Field(default_factory=list)
