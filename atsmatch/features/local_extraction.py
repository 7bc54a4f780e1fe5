"""Local (offline) keyword extraction: rules, context annotation, categorization."""

from __future__ import annotations

import logging
import re
import sys
from typing import Iterable

from atsmatch.normalize.job_description import parse_and_filter_job_description
from atsmatch.normalize.keywords import normalize
from atsmatch.schemas.keywords import Category, ExperienceRequirement, ExtractionResult, Keyword

from .categorizer import categorize, categorize_all
from .context_annotator import annotate, locate_sections
from .keyword_extractor import extract_with_frequency

logger = logging.getLogger(__name__)

_EXPERIENCE_RE = re.compile(
    r"(?P<prefix>\b(?:at least|minimum(?: of)?|min\.?)\s+)?"
    r"(?P<years>\d{1,2})\s*(?P<plus>\+)?\s*(?:years?|yrs?)\b"
    r"(?:\s+of)?(?:\s+(?:professional|hands-on|relevant|commercial|working|industry))?(?:\s+experience)?"
    r"\s+(?:with|in|using|of)\s+"
    r"(?P<skill>[A-Za-z0-9][A-Za-z0-9#+./ -]{0,48}?)\s*(?=[,.;:()\n]|\s(?:and|or)\s|$)",
    re.IGNORECASE,
)

_CERTIFICATION_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"\bAWS Certified(?: [A-Z][\w-]*){1,4}"),
    re.compile(r"\b(?:Microsoft|Google|Azure|Salesforce|Oracle|Cisco) Certified(?: [A-Z][\w-]*){1,4}"),
    re.compile(r"\bCompTIA(?: [A-Z][\w+]*)?"),
    re.compile(r"\bSix Sigma(?: (?:Green|Black|Yellow) Belt)?"),
    re.compile(r"\bCertified Scrum Master\b|\bCertified (?:Public Accountant|Information Systems Auditor)\b"),
    re.compile(r"\b(?:PMP|CISSP|CISM|CISA|CCNA|CCNP|CPA|CFA|CSM|ITIL(?: v?\d)?)\b"),
    re.compile(r"\b(?P<name>[A-Z][\w+#-]*(?: [A-Z][\w+#-]*){0,3}) (?:certification|certificate)\b"),
)


def extract_experience_requirements(text: str) -> list[ExperienceRequirement]:
    """Find "N+ years of experience with X" style requirements."""
    requirements: list[ExperienceRequirement] = []
    seen: set[str] = set()
    for match in _EXPERIENCE_RE.finditer(text or ""):
        skill = match.group("skill").strip(" -./")
        key = normalize(skill)
        if not key or key in seen:
            continue
        seen.add(key)
        requirements.append(
            ExperienceRequirement(
                skill=skill,
                years=min(int(match.group("years")), 60),
                is_minimum=bool(match.group("plus") or match.group("prefix")),
            )
        )
    return requirements


def extract_certifications(text: str) -> list[str]:
    found: list[tuple[int, str]] = []
    for pattern in _CERTIFICATION_RES:
        for match in pattern.finditer(text or ""):
            name = match.groupdict().get("name") or match.group(0)
            found.append((match.start(), name.strip()))
    found.sort(key=lambda item: (item[0], -len(item[1])))

    certifications: list[str] = []
    seen: set[str] = set()
    for _, name in found:
        key = normalize(name)
        # Longer matches at the same position win; fragments of a kept name are skipped.
        if not key or key in seen or any(key in existing for existing in seen):
            continue
        seen.add(key)
        certifications.append(name)
    return certifications


def _build_keyword(
    text: str,
    term: str,
    category: Category,
    frequency: int,
    headers: list,
    importance: int | None = None,
) -> Keyword:
    context = annotate(text, term, frequency, headers=headers)
    return Keyword(
        term=term,
        category=category,
        requirement_level=context.requirement_level,
        importance=context.importance if importance is None else importance,
        section=context.section,
        frequency=frequency,
    )


def build_local_extraction(text: str, *, job_posting: bool = True) -> ExtractionResult:
    """Full ``ExtractionResult`` from the rule-based pipeline.

    Job postings go through the block pre-filter first; resume text is used as-is.
    """
    source = parse_and_filter_job_description(text) if job_posting else (text or "")
    ranked = extract_with_frequency(source)
    frequencies = dict(ranked)
    buckets = categorize_all([term for term, _ in ranked])
    headers = locate_sections(source)

    result = ExtractionResult(
        hard_skills=[_build_keyword(source, term, "hard", frequencies[term], headers) for term in buckets.hard],
        soft_skills=[_build_keyword(source, term, "soft", frequencies[term], headers) for term in buckets.soft],
        experience_requirements=extract_experience_requirements(source),
        certifications=extract_certifications(source),
    )
    logger.debug(
        "local_extraction_done hard=%s soft=%s discarded=%s",
        len(result.hard_skills),
        len(result.soft_skills),
        buckets.discard_count,
    )
    return result


def keywords_from_semantic(text: str, hits: Iterable[tuple[str, int]]) -> ExtractionResult:
    """Categorize and annotate semantic hits given as ``(keyword, importance)`` pairs."""
    headers = locate_sections(text)
    hard: list[Keyword] = []
    soft: list[Keyword] = []
    for term, importance in hits:
        category = categorize(term)
        if category is None:
            continue
        keyword = _build_keyword(text, term, category, 1, headers, importance=importance)
        (hard if category == "hard" else soft).append(keyword)
    return ExtractionResult(hard_skills=hard, soft_skills=soft)


def _merge_keywords(primary: list[Keyword], secondary: list[Keyword], seen: set[str]) -> list[Keyword]:
    merged: list[Keyword] = []
    for keyword in [*primary, *secondary]:
        if keyword.normalized_key in seen:
            continue
        seen.add(keyword.normalized_key)
        merged.append(keyword)
    return merged


def merge_extractions(semantic: ExtractionResult, rules: ExtractionResult) -> ExtractionResult:
    """Semantic hits first; rule-based hits appended when their key is new."""
    seen: set[str] = set()
    hard = _merge_keywords(semantic.hard_skills, rules.hard_skills, seen)
    soft = _merge_keywords(semantic.soft_skills, rules.soft_skills, seen)
    return ExtractionResult(
        hard_skills=hard,
        soft_skills=soft,
        experience_requirements=rules.experience_requirements or semantic.experience_requirements,
        certifications=rules.certifications or semantic.certifications,
    )


def resume_keywords(text: str) -> list[str]:
    """Every rule-based candidate in the resume, uncapped and uncategorized."""
    ranked = extract_with_frequency(text, single_cap=sys.maxsize)
    return [term for term, _ in ranked]
