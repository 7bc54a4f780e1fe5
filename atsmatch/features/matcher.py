from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence

from atsmatch.core.scoring import get_scoring_value
from atsmatch.normalize.keywords import dedupe_by_key, normalize
from atsmatch.schemas.keywords import ATSScore, ExtractionResult, ScoreAnalysis, SkillBreakdown
from atsmatch.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

logger = logging.getLogger(__name__)

HARD_SKILL_WEIGHT = 60
SOFT_SKILL_WEIGHT = 40
NO_HARD_SKILLS_CREDIT = 30
NO_SOFT_SKILLS_CREDIT = 20
MISSING_KEYWORDS_LIMIT = 10
# Keys shorter than this only match exactly ("go" must not match "google").
MIN_SUBSTRING_KEY_LENGTH = 3


@dataclass(frozen=True, slots=True)
class _ResumeTerm:
    key: str
    skill_id: str | None


def _substring_match(left: str, right: str) -> bool:
    shorter, longer = (left, right) if len(left) <= len(right) else (right, left)
    if len(shorter) < MIN_SUBSTRING_KEY_LENGTH:
        return False
    return shorter in longer


def keywords_match(job_term: str, resume_term: str, taxonomy: TaxonomyProvider | None = None) -> bool:
    """Equal key, one key containing the other, or the same curated synonym group."""
    job_key = normalize(job_term)
    resume_key = normalize(resume_term)
    if not job_key or not resume_key:
        return False
    if job_key == resume_key or _substring_match(job_key, resume_key):
        return True
    provider = taxonomy or get_default_taxonomy_provider()
    return provider.are_synonyms(job_term, resume_term)


class _ResumeIndex:
    def __init__(self, terms: Iterable[str], taxonomy: TaxonomyProvider) -> None:
        self._taxonomy = taxonomy
        self._terms: list[_ResumeTerm] = []
        seen: set[str] = set()
        for term in terms:
            key, skill_id = taxonomy.normalize_skill(term)
            if not key or key in seen:
                continue
            seen.add(key)
            self._terms.append(_ResumeTerm(key=key, skill_id=skill_id))
        self._keys = seen
        self._skill_ids = {term.skill_id for term in self._terms if term.skill_id}

    def contains(self, job_term: str) -> bool:
        key, skill_id = self._taxonomy.normalize_skill(job_term)
        if not key:
            return False
        if key in self._keys:
            return True
        if skill_id and skill_id in self._skill_ids:
            return True
        return any(_substring_match(key, term.key) for term in self._terms)


def _weighted(matched: int, total: int, weight: float, empty_credit: float) -> float:
    if total == 0:
        return empty_credit
    return matched / total * weight


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _split(terms: Sequence[str], index: _ResumeIndex) -> SkillBreakdown:
    breakdown = SkillBreakdown()
    for term in terms:
        if index.contains(term):
            breakdown.matched.append(term)
        else:
            breakdown.missing.append(term)
    return breakdown


def score(
    job_hard: Sequence[str],
    job_soft: Sequence[str],
    resume_hard: Sequence[str],
    resume_soft: Sequence[str] = (),
    *,
    taxonomy: TaxonomyProvider | None = None,
) -> ATSScore:
    """Weighted keyword match of a job posting against a resume.

    Job keywords are deduplicated by normalized key (a key listed as both hard
    and soft counts once, as hard). Every resume keyword is eligible to match
    either category.
    """
    provider = taxonomy or get_default_taxonomy_provider()
    hard_terms = dedupe_by_key(job_hard)
    hard_keys = {normalize(term) for term in hard_terms}
    soft_terms = [term for term in dedupe_by_key(job_soft) if normalize(term) not in hard_keys]

    index = _ResumeIndex([*resume_hard, *resume_soft], provider)
    hard = _split(hard_terms, index)
    soft = _split(soft_terms, index)

    hard_weight = float(get_scoring_value("scoring.weights.hard", HARD_SKILL_WEIGHT))
    soft_weight = float(get_scoring_value("scoring.weights.soft", SOFT_SKILL_WEIGHT))
    hard_credit = float(get_scoring_value("scoring.empty_category_credit.hard", NO_HARD_SKILLS_CREDIT))
    soft_credit = float(get_scoring_value("scoring.empty_category_credit.soft", NO_SOFT_SKILLS_CREDIT))
    limit = int(get_scoring_value("scoring.missing_keywords_limit", MISSING_KEYWORDS_LIMIT))

    hard_score = _weighted(len(hard.matched), len(hard_terms), hard_weight, hard_credit)
    soft_score = _weighted(len(soft.matched), len(soft_terms), soft_weight, soft_credit)
    total = max(0, min(100, _round_half_up(hard_score + soft_score)))

    logger.debug(
        "ats_score_computed score=%s hard=%s/%s soft=%s/%s",
        total,
        len(hard.matched),
        len(hard_terms),
        len(soft.matched),
        len(soft_terms),
    )
    return ATSScore(
        score=total,
        matched_keywords=dedupe_by_key([*hard.matched, *soft.matched]),
        missing_keywords=dedupe_by_key([*hard.missing, *soft.missing])[:limit],
        analysis=ScoreAnalysis(hard_skills=hard, soft_skills=soft),
    )


def score_extractions(
    job: ExtractionResult,
    resume: ExtractionResult,
    *,
    taxonomy: TaxonomyProvider | None = None,
) -> ATSScore:
    return score(
        [keyword.term for keyword in job.hard_skills],
        [keyword.term for keyword in job.soft_skills],
        [keyword.term for keyword in resume.hard_skills],
        [keyword.term for keyword in resume.soft_skills],
        taxonomy=taxonomy,
    )


def suggest_keywords(ats_score: ATSScore, limit: int = MISSING_KEYWORDS_LIMIT) -> list[str]:
    return ats_score.missing_keywords[:limit]
