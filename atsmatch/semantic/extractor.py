"""Embedding-similarity keyword ranking.

Candidates come from a light capitalized-word / lowercase-word scan, not the
rule-based pipeline; each is scored by cosine similarity to the document.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .embeddings import EmbeddingProvider, cosine_similarity

MIN_SENTENCE_LENGTH = 10
MAX_CANDIDATES = 100
DEFAULT_TOP_N = 20
DEFAULT_MIN_SCORE = 0.3

_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")
_CANDIDATE_RE = re.compile(r"\b[A-Z][a-z]*(?:[A-Z][a-z]*)*\b|\b[a-z]{3,}\b")

STOP_WORDS = frozenset(
    {
        "the", "be", "to", "of", "and", "a", "in", "that", "have", "i",
        "it", "for", "not", "on", "with", "he", "as", "you", "do", "at",
        "this", "but", "his", "by", "from", "they", "we", "say", "her", "she",
        "or", "an", "will", "my", "one", "all", "would", "there", "their", "what",
    }
)


@dataclass(frozen=True, slots=True)
class ScoredCandidate:
    keyword: str
    score: float


@dataclass(frozen=True, slots=True)
class SemanticKeyword:
    keyword: str
    score: float
    importance: int


def split_sentences(text: str) -> list[str]:
    sentences = (sentence.strip() for sentence in _SENTENCE_SPLIT_RE.split(text or ""))
    return [sentence for sentence in sentences if len(sentence) > MIN_SENTENCE_LENGTH]


def candidate_terms(text: str) -> list[str]:
    candidates: dict[str, None] = {}
    for sentence in split_sentences(text):
        for word in _CANDIDATE_RE.findall(sentence):
            if len(word) >= 3 and word.lower() not in STOP_WORDS:
                candidates.setdefault(word, None)
    return list(candidates)[:MAX_CANDIDATES]


def rank_candidates(text: str, provider: EmbeddingProvider, top_n: int = DEFAULT_TOP_N) -> list[ScoredCandidate]:
    """Top ``top_n`` candidates by similarity to the whole document, best first."""
    candidates = candidate_terms(text)
    if not candidates:
        return []
    document_vector, *candidate_vectors = provider.embed([text, *candidates])
    scored = [
        ScoredCandidate(keyword=keyword, score=cosine_similarity(document_vector, vector))
        for keyword, vector in zip(candidates, candidate_vectors)
    ]
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored[:top_n]


def rescale_scores(items: list[ScoredCandidate], min_score: float = DEFAULT_MIN_SCORE) -> list[SemanticKeyword]:
    """Drop items below ``min_score`` and map scores onto 0-100.

    The range is taken from the whole ranked batch, before filtering.
    """
    if not items:
        return []
    high = max(item.score for item in items)
    low = min(item.score for item in items)
    spread = (high - low) or 1.0
    return [
        SemanticKeyword(
            keyword=item.keyword,
            score=item.score,
            importance=max(0, min(100, round((item.score - low) / spread * 100))),
        )
        for item in items
        if item.score >= min_score
    ]
