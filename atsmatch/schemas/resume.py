from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import Field

from .keywords import CamelModel

JobSource = Literal["indeed", "linkedin", "glassdoor", "other"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ContactSection(CamelModel):
    name: str = ""
    email: str = ""
    phone: str | None = None
    location: str | None = None
    linkedin: str | None = None
    website: str | None = None


class ExperienceItem(CamelModel):
    id: str = ""
    company: str = ""
    position: str = ""
    start_date: str = ""
    end_date: str = ""
    description: list[str] = Field(default_factory=list)


class EducationItem(CamelModel):
    id: str = ""
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""


class ResumeSections(CamelModel):
    contact: ContactSection | None = None
    summary: str | None = None
    experience: list[ExperienceItem] | None = None
    education: list[EducationItem] | None = None
    skills: list[str] | None = None


class Resume(CamelModel):
    id: str = ""
    name: str = ""
    content: str = ""
    sections: ResumeSections = Field(default_factory=ResumeSections)
    created_at: datetime = Field(default_factory=_utc_now)
    updated_at: datetime = Field(default_factory=_utc_now)


class JobPosting(CamelModel):
    id: str = ""
    title: str = ""
    company: str | None = None
    description: str
    url: str = ""
    source: JobSource = "other"
    detected_at: datetime = Field(default_factory=_utc_now)
