from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from atsmatch.normalize.keywords import normalize
from atsmatch.schemas.keywords import Category

logger = logging.getLogger(__name__)

# Soft skills are checked first: they are more specific and rarely false positives.
SOFT_SKILL_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"\bleadership\b",
        r"\bcommunicat(?:ion|ions|or|ing)\b",
        r"\bcollaborat(?:e|ion|ive|ing)\b",
        r"\bteamwork\b|\bteam[- ]player\b",
        r"\bproblem[- ]solv(?:ing|er)\b",
        r"\bcritical thinking\b",
        r"\btime management\b",
        r"\badaptab(?:le|ility)\b|\bflexib(?:le|ility)\b",
        r"\bcreativ(?:e|ity)\b",
        r"\banalytical\b",
        r"\borgani[sz](?:ed|ational)\b",
        r"\bdetail[- ]oriented\b|\battention to detail\b",
        r"\bself[- ]motivated\b|\bself[- ]starter\b",
        r"\bproactive\b",
        r"\bstrategic\b",
        r"\binterpersonal\b",
        r"\bcustomer service\b",
        r"\bnegotiat(?:ion|ing)\b",
        r"\bpresentation skills\b|\bpublic speaking\b",
        r"\bmentor(?:ing|ship)?\b",
        r"\bwork ethic\b",
        r"\bmulti[- ]?tasking\b",
        r"\bdecision[- ]making\b",
        r"\bconflict resolution\b",
        r"\bemotional intelligence\b|\bempathy\b",
        r"\bstakeholder management\b",
    )
)

HARD_SKILL_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        # Programming languages
        r"(?<![\w#+])(?:javascript|typescript|python|java|c\+\+|c#|ruby|go|golang|rust|php|swift|kotlin|scala|"
        r"perl|dart|sql|html|css|bash|matlab)(?![\w#+])",
        # Frameworks and libraries
        r"\b(?:react|vue|angular|node\.?js|express|django|flask|fastapi|spring|rails|laravel|next\.?js|"
        r"svelte|tensorflow|pytorch|pandas|numpy|scikit-learn|spark|hadoop|kafka|graphql)\b|\.net\b",
        # Tools and platforms
        r"\b(?:git|github|gitlab|docker|kubernetes|k8s|aws|azure|gcp|jenkins|ci/cd|terraform|ansible|linux|"
        r"unix|jira|confluence|figma|tableau|power bi|excel|salesforce|hubspot|sap|crm|erp|pos|quickbooks|"
        r"photoshop|illustrator|microservices|rest api|apis?)\b",
        # Databases
        r"\b(?:postgresql|postgres|mysql|mongodb|redis|elasticsearch|oracle|dynamodb|sqlite|snowflake|"
        r"bigquery|cassandra)\b",
        # Methodologies
        r"\b(?:agile|scrum|kanban|devops|test[- ]driven|tdd|bdd|lean|six sigma|continuous integration|"
        r"continuous delivery|unit testing)\b",
        # Certifications
        r"\b(?:aws certified|pmp|cissp|comptia|microsoft certified|google certified|cpa|cfa|ccna|itil)\b",
        # Domain-specific tools and practices
        r"\b(?:machine learning|deep learning|data analysis|data science|nlp|computer vision|seo|sem|"
        r"google analytics|inventory|merchandising|bookkeeping|accounting|payroll|budgeting|forecasting|"
        r"autocad|cad|hvac|cnc|osha|hipaa|gaap|ehr|emr|point of sale)\b",
    )
)

_ACRONYM_RE = re.compile(r"[A-Z]{2,}")
_SHORT_HYPHEN_RE = re.compile(r"\b[A-Za-z]{1,4}-[A-Za-z]+\b|\b[A-Za-z]+-[A-Za-z]{1,4}\b")
HEURISTIC_MIN_KEY_LENGTH = 6


@dataclass(slots=True)
class CategorizedKeywords:
    hard: list[str] = field(default_factory=list)
    soft: list[str] = field(default_factory=list)
    discarded: list[str] = field(default_factory=list)

    @property
    def discard_count(self) -> int:
        return len(self.discarded)


def is_soft_skill(keyword: str) -> bool:
    return any(pattern.search(keyword) for pattern in SOFT_SKILL_PATTERNS)


def is_hard_skill(keyword: str) -> bool:
    return any(pattern.search(keyword) for pattern in HARD_SKILL_PATTERNS)


def looks_technical(keyword: str) -> bool:
    if any(char.isdigit() for char in keyword):
        return True
    if _ACRONYM_RE.search(keyword):
        return True
    if "." in keyword or "/" in keyword:
        return True
    if _SHORT_HYPHEN_RE.search(keyword):
        return True
    return len(normalize(keyword)) >= HEURISTIC_MIN_KEY_LENGTH


def categorize(keyword: str) -> Category | None:
    """Hard or soft skill; ``None`` means the keyword is too low-signal to keep."""
    term = (keyword or "").strip()
    if not term:
        return None
    if is_soft_skill(term):
        return "soft"
    if is_hard_skill(term):
        return "hard"
    if looks_technical(term):
        return "hard"
    return None


def categorize_all(keywords: list[str]) -> CategorizedKeywords:
    result = CategorizedKeywords()
    for keyword in keywords:
        category = categorize(keyword)
        if category == "soft":
            result.soft.append(keyword)
        elif category == "hard":
            result.hard.append(keyword)
        else:
            result.discarded.append(keyword)
    if result.discarded:
        logger.debug(
            "keywords_discarded count=%s sample=%s",
            result.discard_count,
            result.discarded[:5],
        )
    return result
