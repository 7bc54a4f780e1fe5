from .keywords import (
    ATSScore,
    Category,
    ExperienceRequirement,
    ExtractionResult,
    ExtractionStrategy,
    Keyword,
    RequirementLevel,
    ScoreAnalysis,
    ScoreReport,
    ScoreWarning,
    SectionKind,
    SkillBreakdown,
)
from .resume import ContactSection, EducationItem, ExperienceItem, JobPosting, Resume, ResumeSections
from .suggestions import BulkApplyResult, EditSuggestion, RejectedSuggestion, ResumeSection, SafetyReport

__all__ = [
    "ATSScore",
    "Category",
    "ExperienceRequirement",
    "ExtractionResult",
    "ExtractionStrategy",
    "Keyword",
    "RequirementLevel",
    "ScoreAnalysis",
    "ScoreReport",
    "ScoreWarning",
    "SectionKind",
    "SkillBreakdown",
    "ContactSection",
    "EducationItem",
    "ExperienceItem",
    "JobPosting",
    "Resume",
    "ResumeSections",
    "BulkApplyResult",
    "EditSuggestion",
    "RejectedSuggestion",
    "ResumeSection",
    "SafetyReport",
]
