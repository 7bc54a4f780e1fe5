"""Requirement-level, section and importance detection for job-posting keywords.

Raw frequency is a poor importance proxy: a term under "Benefits" is noise no
matter how often it repeats, while one mention under "Requirements" is signal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from atsmatch.core.scoring import get_scoring_value
from atsmatch.normalize.keywords import is_whitelisted
from atsmatch.schemas.keywords import RequirementLevel, SectionKind

WINDOW_CHARS = 100
BASE_IMPORTANCE = 50
REQUIREMENT_BONUS: dict[str, int] = {"required": 30, "preferred": 15, "optional": 5, "neutral": 0}
SECTION_BONUS: dict[str, int] = {
    "requirements": 20,
    "responsibilities": 15,
    "experience": 15,
    "preferred": 10,
    "company": -10,
    "unknown": 0,
}
REPETITION_STEP = 5
REPETITION_MAX_STEPS = 4
WHITELIST_BONUS = 10

_REQUIRED_CUES = re.compile(
    r"\b(?:required|must[- ]have|must|minimum|at least|mandatory|essential|"
    r"proficien(?:t|cy)|expert(?:ise)?|\d+\+?\s*(?:years?|yrs))\b",
    re.IGNORECASE,
)
_PREFERRED_CUES = re.compile(
    r"\b(?:preferred|nice[- ]to[- ]have|a plus|bonus|desired|ideally|advantageous|familiar(?:ity)? with)\b",
    re.IGNORECASE,
)
_OPTIONAL_CUES = re.compile(
    r"\b(?:optional|exposure to|interest in|willing(?:ness)? to learn|helpful|not necessary)\b",
    re.IGNORECASE,
)

_SECTION_PATTERNS: tuple[tuple[SectionKind, re.Pattern[str]], ...] = (
    (
        "preferred",
        re.compile(
            r"^[ \t]*(?:preferred(?: qualifications| skills| experience)?|nice[- ]to[- ]haves?|bonus(?: points)?|"
            r"pluses)[ \t]*:?[ \t]*$",
            re.IGNORECASE | re.MULTILINE,
        ),
    ),
    (
        "requirements",
        re.compile(
            r"^[ \t]*(?:requirements?|qualifications?|(?:required|minimum|basic) qualifications|"
            r"what you(?:'ll)? need|must[- ]haves?|you have|skills(?: required| & qualifications)?|"
            r"what we(?:'re| are) looking for)[ \t]*:?[ \t]*$",
            re.IGNORECASE | re.MULTILINE,
        ),
    ),
    (
        "responsibilities",
        re.compile(
            r"^[ \t]*(?:(?:key |job |role )?responsibilities|duties|what you(?:'ll| will) do|your role|the role|"
            r"day[- ]to[- ]day)[ \t]*:?[ \t]*$",
            re.IGNORECASE | re.MULTILINE,
        ),
    ),
    (
        "experience",
        re.compile(
            r"^[ \t]*(?:experience|education|background|education (?:and|&) experience)[ \t]*:?[ \t]*$",
            re.IGNORECASE | re.MULTILINE,
        ),
    ),
    (
        "company",
        re.compile(
            r"^[ \t]*(?:about (?:us|the company|our company)|company (?:description|overview)|who we are|"
            r"our (?:mission|values|company|story)|why join us|why work (?:with us|here)|benefits|perks|"
            r"what we offer|compensation(?: and benefits)?)[ \t]*:?[ \t]*$",
            re.IGNORECASE | re.MULTILINE,
        ),
    ),
)


@dataclass(frozen=True, slots=True)
class SectionHeader:
    position: int
    kind: SectionKind


@dataclass(frozen=True, slots=True)
class KeywordContext:
    requirement_level: RequirementLevel
    section: SectionKind
    importance: int


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    escaped = re.escape(keyword.strip()).replace(r"\ ", r"\s+")
    return re.compile(rf"(?<![A-Za-z0-9]){escaped}(?![A-Za-z0-9])", re.IGNORECASE)


def find_first_occurrence(text: str, keyword: str) -> int:
    if not keyword.strip():
        return -1
    match = _keyword_pattern(keyword).search(text)
    return match.start() if match else -1


def count_occurrences(text: str, keyword: str) -> int:
    if not keyword.strip():
        return 0
    return len(_keyword_pattern(keyword).findall(text))


def detect_requirement_level(text: str, position: int, keyword_length: int = 0) -> RequirementLevel:
    if position < 0:
        return "neutral"
    window_chars = int(get_scoring_value("annotation.window_chars", WINDOW_CHARS))
    start = max(0, position - window_chars)
    end = min(len(text), position + keyword_length + window_chars)
    window = text[start:end]
    if _REQUIRED_CUES.search(window):
        return "required"
    if _PREFERRED_CUES.search(window):
        return "preferred"
    if _OPTIONAL_CUES.search(window):
        return "optional"
    return "neutral"


def locate_sections(text: str) -> list[SectionHeader]:
    headers: list[SectionHeader] = []
    taken: set[int] = set()
    for kind, pattern in _SECTION_PATTERNS:
        for match in pattern.finditer(text):
            if match.start() in taken:
                continue
            taken.add(match.start())
            headers.append(SectionHeader(position=match.start(), kind=kind))
    headers.sort(key=lambda header: header.position)
    return headers


def detect_section(headers: list[SectionHeader], position: int) -> SectionKind:
    if position < 0:
        return "unknown"
    section: SectionKind = "unknown"
    for header in headers:
        if header.position > position:
            break
        section = header.kind
    return section


def compute_importance(
    requirement_level: RequirementLevel,
    section: SectionKind,
    frequency: int,
    *,
    whitelisted: bool = False,
) -> int:
    score = int(get_scoring_value("annotation.base", BASE_IMPORTANCE))
    score += int(get_scoring_value(f"annotation.requirement_bonus.{requirement_level}", REQUIREMENT_BONUS[requirement_level]))
    score += int(get_scoring_value(f"annotation.section_bonus.{section}", SECTION_BONUS[section]))
    step = int(get_scoring_value("annotation.repetition_step", REPETITION_STEP))
    max_steps = int(get_scoring_value("annotation.repetition_max_steps", REPETITION_MAX_STEPS))
    score += min(max(frequency - 1, 0), max_steps) * step
    if whitelisted:
        score += int(get_scoring_value("annotation.whitelist_bonus", WHITELIST_BONUS))
    return max(0, min(100, score))


def annotate(
    text: str,
    keyword: str,
    frequency: int | None = None,
    *,
    headers: list[SectionHeader] | None = None,
) -> KeywordContext:
    """Classify one keyword against the posting it came from.

    ``headers`` may be passed in when annotating many keywords of the same text.
    """
    position = find_first_occurrence(text, keyword)
    if frequency is None:
        frequency = max(1, count_occurrences(text, keyword))
    requirement_level = detect_requirement_level(text, position, len(keyword))
    section = detect_section(headers if headers is not None else locate_sections(text), position)
    importance = compute_importance(
        requirement_level,
        section,
        frequency,
        whitelisted=is_whitelisted(keyword),
    )
    return KeywordContext(requirement_level=requirement_level, section=section, importance=importance)
