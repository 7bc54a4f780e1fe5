"""Rule-based keyword extraction.

Stages, applied in this order by ``extract_with_frequency``:

1. ``extract_critical_phrases`` pulls atomic multi-word terms and blanks their spans.
2. ``extract_phrase_candidates`` / ``extract_word_candidates`` scan the remaining text.
3. ``is_valid_candidate`` drops malformed and boilerplate candidates.
4. ``is_valid_phrase`` / ``is_valid_word`` apply the phrase and word rules.
5. ``rank_by_frequency`` counts normalized keys and applies the retention cap.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass

from atsmatch.core.scoring import get_scoring_value
from atsmatch.normalize.keywords import TECHNICAL_WHITELIST, normalize

from .vocabulary import (
    BOILERPLATE_PHRASES,
    CRITICAL_PHRASES,
    GENERIC_NOISE_WORDS,
    ROLE_NOUNS,
    STOP_WORDS,
    TECHNICAL_ADJECTIVES,
)

logger = logging.getLogger(__name__)

MAX_TERM_LENGTH = 50
SINGLE_OCCURRENCE_MIN_KEPT = 50
SINGLE_OCCURRENCE_MULTIPLIER = 3

_PLACEHOLDER = " ‖ "
_TOKEN = r"\.?[A-Za-z0-9](?:[A-Za-z0-9#+]|\.(?=[A-Za-z0-9]))*"
_TOKEN_RE = re.compile(_TOKEN)
_PHRASE_RE = re.compile(rf"{_TOKEN}(?:(?:[ \t]+|-){_TOKEN}){{1,3}}")
_PHRASE_SPLIT_RE = re.compile(r"[ \t]+")
_CONJUNCTIONS = frozenset({"and", "or", "nor", "but"})
_NUMERIC_RE = re.compile(r"\d+[+%]?")
_CRITICAL_RE = re.compile(
    r"(?<![A-Za-z0-9])(?:"
    + "|".join(re.escape(phrase).replace(r"\ ", r"[ \t]+") for phrase in sorted(CRITICAL_PHRASES, key=len, reverse=True))
    + r")(?![A-Za-z0-9])",
    re.IGNORECASE,
)
_NOISE_PHRASE_RES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^(?:in|on|at|of|for|with|to|from|by|about|into|through|over|under|within|across)\b", re.IGNORECASE),
    re.compile(
        r"^(?:we|you|our|your|this|that|these|those|the|a|an|join|help|looking for|able to|ability to|"
        r"responsible for|work with|working with|experience with|experience in)\b",
        re.IGNORECASE,
    ),
)


@dataclass(frozen=True, slots=True)
class Candidate:
    term: str
    kind: str  # "critical", "phrase" or "word"


def _clean_term(term: str) -> str:
    return re.sub(r"[ \t]+", " ", term).strip(" \t-")


def extract_critical_phrases(text: str) -> tuple[list[Candidate], str]:
    """Return critical phrases in text order plus the text with their spans blanked out."""
    found = [Candidate(_clean_term(match.group(0)), "critical") for match in _CRITICAL_RE.finditer(text)]
    remaining = _CRITICAL_RE.sub(_PLACEHOLDER, text)
    return found, remaining


def extract_phrase_candidates(text: str) -> list[Candidate]:
    return [Candidate(_clean_term(match.group(0)), "phrase") for match in _PHRASE_RE.finditer(text)]


def extract_word_candidates(text: str) -> list[Candidate]:
    return [Candidate(match.group(0), "word") for match in _TOKEN_RE.finditer(text) if len(match.group(0)) >= 2]


def is_boilerplate(term: str) -> bool:
    lowered = term.lower()
    return any(phrase in lowered for phrase in BOILERPLATE_PHRASES)


def is_valid_candidate(term: str) -> bool:
    if not term or "\n" in term or "\r" in term:
        return False
    if len(term) > MAX_TERM_LENGTH:
        return False
    return not is_boilerplate(term)


def _phrase_words(phrase: str) -> list[str]:
    return [word.lower() for word in _PHRASE_SPLIT_RE.split(phrase) if word]


def is_valid_phrase(phrase: str) -> bool:
    if any(pattern.search(phrase) for pattern in _NOISE_PHRASE_RES):
        return False
    words = _phrase_words(phrase)
    if len(words) < 2:
        # Hyphenated compounds ("test-driven") arrive as a single space-delimited word.
        return is_valid_word(phrase) if "-" in phrase else False
    if len(set(words)) < len(words) or _CONJUNCTIONS.intersection(words):
        return False
    first, last = words[0], words[-1]
    if first in STOP_WORDS and first not in TECHNICAL_ADJECTIVES:
        return False
    if last in STOP_WORDS and last not in ROLE_NOUNS:
        return False
    if first in GENERIC_NOISE_WORDS and any(word in STOP_WORDS for word in words[1:-1]):
        return False
    stop_count = sum(1 for word in words if word in STOP_WORDS)
    if stop_count == len(words) or stop_count / len(words) > 0.5:
        return False
    return any(
        (len(word) >= 4 and word not in STOP_WORDS) or word in TECHNICAL_WHITELIST or word in TECHNICAL_ADJECTIVES
        for word in words
    )


def is_valid_word(word: str) -> bool:
    lowered = word.lower()
    if lowered in TECHNICAL_WHITELIST:
        return True
    if len(lowered) < 3 or _NUMERIC_RE.fullmatch(lowered):
        return False
    return lowered not in STOP_WORDS and lowered not in GENERIC_NOISE_WORDS


def _passes(candidate: Candidate) -> bool:
    if not is_valid_candidate(candidate.term):
        return False
    if candidate.kind == "critical":
        return True
    if candidate.kind == "phrase":
        return is_valid_phrase(candidate.term)
    return is_valid_word(candidate.term)


def single_occurrence_cap(frequent_count: int) -> int:
    min_kept = int(get_scoring_value("extraction.single_occurrence.min_kept", SINGLE_OCCURRENCE_MIN_KEPT))
    multiplier = int(get_scoring_value("extraction.single_occurrence.frequent_multiplier", SINGLE_OCCURRENCE_MULTIPLIER))
    return max(min_kept, multiplier * frequent_count)


def rank_by_frequency(terms: list[str], *, single_cap: int | None = None) -> list[tuple[str, int]]:
    """Frequent keys first (descending count), then single occurrences in encounter order."""
    counts: Counter[str] = Counter()
    first_form: dict[str, str] = {}
    order: list[str] = []
    for term in terms:
        key = normalize(term)
        if not key:
            continue
        if key not in first_form:
            first_form[key] = term
            order.append(key)
        counts[key] += 1

    frequent = [key for key in order if counts[key] >= 2]
    frequent.sort(key=lambda key: counts[key], reverse=True)
    singles = [key for key in order if counts[key] == 1]
    cap = single_cap if single_cap is not None else single_occurrence_cap(len(frequent))

    ranked = [(first_form[key], counts[key]) for key in frequent]
    ranked.extend((first_form[key], 1) for key in singles[:cap])
    if len(singles) > cap:
        logger.debug("keyword_singles_truncated kept=%s dropped=%s", cap, len(singles) - cap)
    return ranked


def extract_with_frequency(text: str, *, single_cap: int | None = None) -> list[tuple[str, int]]:
    if not text or not text.strip():
        return []
    critical, remaining = extract_critical_phrases(text)
    candidates = critical + extract_phrase_candidates(remaining) + extract_word_candidates(remaining)
    surviving = [candidate.term for candidate in candidates if _passes(candidate)]
    return rank_by_frequency(surviving, single_cap=single_cap)


def extract(text: str, *, single_cap: int | None = None) -> list[str]:
    """Ranked candidate keywords, highest-value first."""
    return [term for term, _ in extract_with_frequency(text, single_cap=single_cap)]
