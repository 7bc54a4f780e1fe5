"""Deterministic resume edit suggestions.

Each sentence/line unit is run through four independent checks (weak verbs,
passive voice, missing quantification, formatting). Results are pooled,
ordered by confidence and truncated.
"""

from __future__ import annotations

import re

from atsmatch.core.scoring import get_scoring_value
from atsmatch.normalize.utils import split_units
from atsmatch.schemas.suggestions import EditSuggestion, ResumeSection

CAPITALIZATION_CONFIDENCE = 0.9
SPACING_CONFIDENCE = 0.95
WEAK_VERB_CONFIDENCE = 0.8
PASSIVE_VOICE_CONFIDENCE = 0.7
QUANTIFICATION_CONFIDENCE = 0.6
SUGGESTIONS_LIMIT = 10

WEAK_VERBS: tuple[str, ...] = (
    "was responsible for",
    "was in charge of",
    "responsible for",
    "worked on",
    "helped with",
    "assisted",
    "tried",
    "used",
    "made",
    "did",
    "got",
    "had",
)
_WEAK_VERB_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(verb) for verb in sorted(WEAK_VERBS, key=len, reverse=True)) + r")\b",
    re.IGNORECASE,
)

# First matching context wins; "managed" is the fallback.
STRONG_VERB_TABLE: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"team|people|members", re.IGNORECASE), "led"),
    (re.compile(r"create|build|develop", re.IGNORECASE), "developed"),
    (re.compile(r"improve|better|enhance", re.IGNORECASE), "improved"),
    (re.compile(r"analy[sz]e|data|research", re.IGNORECASE), "analyzed"),
)
DEFAULT_STRONG_VERB = "managed"

_PASSIVE_RE = re.compile(r"\b(was|were|is|are|been)\s+(\w+ed|managed|led|built|created)\b", re.IGNORECASE)
_METRIC_RE = re.compile(r"\d+|\$|%|million|billion|thousand", re.IGNORECASE)
_MULTI_SPACE_RE = re.compile(r"\s+")
QUANTIFY_HINT = ' [Add specific metrics: e.g., "resulting in 30% increase in efficiency"]'


def _match_case(replacement: str, matched: str) -> str:
    if matched[:1].isupper():
        return replacement[:1].upper() + replacement[1:]
    return replacement


def choose_strong_verb(text: str) -> str:
    for pattern, verb in STRONG_VERB_TABLE:
        if pattern.search(text):
            return verb
    return DEFAULT_STRONG_VERB


def check_weak_verbs(text: str, section: ResumeSection, index: int) -> list[EditSuggestion]:
    matches = list(_WEAK_VERB_RE.finditer(text))
    if not matches:
        return []
    strong = choose_strong_verb(text)
    suggestion = _WEAK_VERB_RE.sub(lambda match: _match_case(strong, match.group(0)), text)
    weak = matches[0].group(0).lower()
    return [
        EditSuggestion(
            id=f"{section}-{index}-weak-verb",
            type="action_verb",
            original=text,
            suggestion=suggestion,
            rationale=f'Replace "{weak}" with a stronger action verb like "{strong}"',
            section=section,
            confidence=WEAK_VERB_CONFIDENCE,
        )
    ]


def check_passive_voice(text: str, section: ResumeSection, index: int) -> list[EditSuggestion]:
    if not _PASSIVE_RE.search(text):
        return []
    suggestion = _PASSIVE_RE.sub(lambda match: _match_case(match.group(2), match.group(1)), text)
    return [
        EditSuggestion(
            id=f"{section}-{index}-passive",
            type="passive_voice",
            original=text,
            suggestion=suggestion,
            rationale="Use active voice instead of passive voice to make your achievements more impactful",
            section=section,
            confidence=PASSIVE_VOICE_CONFIDENCE,
        )
    ]


def check_quantification(text: str, section: ResumeSection, index: int) -> list[EditSuggestion]:
    if section != "experience" or _METRIC_RE.search(text):
        return []
    return [
        EditSuggestion(
            id=f"{section}-{index}-quantify",
            type="quantification",
            original=text,
            suggestion=text + QUANTIFY_HINT,
            rationale="Add quantifiable metrics to demonstrate impact (e.g., percentages, dollar amounts, time saved)",
            section=section,
            confidence=QUANTIFICATION_CONFIDENCE,
        )
    ]


def check_formatting(text: str, section: ResumeSection, index: int) -> list[EditSuggestion]:
    suggestions: list[EditSuggestion] = []
    stripped = text.strip()
    if section == "experience" and stripped and stripped[0].islower():
        suggestions.append(
            EditSuggestion(
                id=f"{section}-{index}-capitalize",
                type="formatting",
                original=text,
                suggestion=stripped[0].upper() + stripped[1:],
                rationale="Start bullet points with a capital letter",
                section=section,
                confidence=CAPITALIZATION_CONFIDENCE,
            )
        )
    if "  " in text:
        suggestions.append(
            EditSuggestion(
                id=f"{section}-{index}-spacing",
                type="formatting",
                original=text,
                suggestion=_MULTI_SPACE_RE.sub(" ", text),
                rationale="Remove extra spaces for cleaner formatting",
                section=section,
                confidence=SPACING_CONFIDENCE,
            )
        )
    return suggestions


CHECKS = (check_weak_verbs, check_passive_voice, check_quantification, check_formatting)


def generate_edit_suggestions(text: str, section: ResumeSection) -> list[EditSuggestion]:
    suggestions: list[EditSuggestion] = []
    for index, unit in enumerate(split_units(text)):
        for check in CHECKS:
            suggestions.extend(check(unit, section, index))
    suggestions.sort(key=lambda item: item.confidence, reverse=True)
    limit = int(get_scoring_value("suggestions.limit", SUGGESTIONS_LIMIT))
    return suggestions[:limit]
