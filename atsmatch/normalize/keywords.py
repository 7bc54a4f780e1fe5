"""Keyword normalization.

``normalize`` is the only equality oracle for keywords: two terms are the same
keyword iff their normalized keys are equal. The pipeline stages run in a fixed
order and each stage is a standalone pure function:

1. ``lowercase_trim``
2. whitelist short-circuit (``TECHNICAL_WHITELIST``)
3. ``apply_special_patterns`` (ordered ``NORMALIZATION_RULES``)
4. ``collapse_separators``
5. ``strip_non_alnum``
6. ``apply_synonyms`` (``KEYWORD_SYNONYMS``)

Special patterns must run before separator collapsing and punctuation stripping,
otherwise ``c++`` and ``c`` would collide.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

_SEPARATOR_RE = re.compile(r"[\s\-_]+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


@dataclass(frozen=True)
class NormalizationRule:
    pattern: str
    canonical_form: str


# Order matters: canonical forms are plain alphanumerics so no later rule can
# re-match text produced by an earlier one.
NORMALIZATION_RULES: tuple[NormalizationRule, ...] = (
    NormalizationRule("c++", "cpp"),
    NormalizationRule("c#", "csharp"),
    NormalizationRule("f#", "fsharp"),
    NormalizationRule(".net", "dotnet"),
    NormalizationRule("node.js", "nodejs"),
    NormalizationRule("react.js", "reactjs"),
    NormalizationRule("vue.js", "vuejs"),
    NormalizationRule("next.js", "nextjs"),
    NormalizationRule("express.js", "expressjs"),
    NormalizationRule("ci/cd", "cicd"),
    NormalizationRule("tcp/ip", "tcpip"),
    NormalizationRule("ui/ux", "uiux"),
    NormalizationRule("a/b", "ab"),
)

# Short high-value tokens kept verbatim and exempt from stop-word and length filters.
TECHNICAL_WHITELIST: frozenset[str] = frozenset(
    {
        "go",
        "r",
        "c",
        "c#",
        "c++",
        "f#",
        ".net",
        "ai",
        "ui",
        "ux",
        "qa",
        "bi",
        "ios",
        "aws",
        "gcp",
        "sql",
        "api",
        "seo",
        "crm",
        "erp",
        "etl",
        "git",
        "php",
        "css",
        "html",
        "vba",
        "sap",
        "pos",
        "tdd",
        "bdd",
        "pmp",
        "3d",
    }
)

# Values are fixed points (never keys) so normalize() stays idempotent.
KEYWORD_SYNONYMS: Mapping[str, str] = MappingProxyType(
    {
        "js": "javascript",
        "ecmascript": "javascript",
        "ts": "typescript",
        "reactjs": "react",
        "node": "nodejs",
        "vuejs": "vue",
        "angularjs": "angular",
        "expressjs": "express",
        "golang": "go",
        "k8s": "kubernetes",
        "postgres": "postgresql",
        "psql": "postgresql",
        "mongo": "mongodb",
        "py": "python",
        "ml": "machinelearning",
        "artificialintelligence": "ai",
        "amazonwebservices": "aws",
        "googlecloud": "gcp",
        "googlecloudplatform": "gcp",
        "microsoftazure": "azure",
        "restful": "restapi",
        "restapis": "restapi",
        "restfulapi": "restapi",
        "restfulapis": "restapi",
        "apis": "api",
        "continuousintegrationcontinuousdelivery": "cicd",
        "continuousintegrationcontinuousdeployment": "cicd",
        "userexperience": "ux",
        "userinterface": "ui",
        "qualityassurance": "qa",
        "businessintelligence": "bi",
        "searchengineoptimization": "seo",
        "customerrelationshipmanagement": "crm",
    }
)


def lowercase_trim(raw: str) -> str:
    return (raw or "").lower().strip()


def is_whitelisted(term: str) -> bool:
    return lowercase_trim(term) in TECHNICAL_WHITELIST


def apply_special_patterns(value: str, rules: Iterable[NormalizationRule] = NORMALIZATION_RULES) -> str:
    for rule in rules:
        if rule.pattern in value:
            value = value.replace(rule.pattern, rule.canonical_form)
    return value


def collapse_separators(value: str) -> str:
    return _SEPARATOR_RE.sub("", value)


def strip_non_alnum(value: str) -> str:
    return _NON_ALNUM_RE.sub("", value)


def apply_synonyms(value: str, synonyms: Mapping[str, str] = KEYWORD_SYNONYMS) -> str:
    return synonyms.get(value, value)


def normalize(raw: str) -> str:
    value = lowercase_trim(raw)
    if value in TECHNICAL_WHITELIST:
        return value
    value = apply_special_patterns(value)
    value = collapse_separators(value)
    value = strip_non_alnum(value)
    return apply_synonyms(value)


def same_keyword(left: str, right: str) -> bool:
    return normalize(left) == normalize(right)


def dedupe_by_key(terms: Iterable[str]) -> list[str]:
    """Keep the first spelling of every normalized key, preserving order."""
    seen: set[str] = set()
    unique: list[str] = []
    for term in terms:
        key = normalize(term)
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(term)
    return unique
