from __future__ import annotations

import re

from .utils import contains_any

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")

_REQUIREMENT_HEADERS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(?:^|\n)\s*(requirements?|qualifications?|skills?|what (?:we're|you'll) looking for|you have|"
        r"must have|what you'll need|ideal candidate|necessary qualifications?|required qualifications?|"
        r"minimum qualifications?|preferred qualifications?)[\s:]*\n",
        re.IGNORECASE,
    ),
    re.compile(
        r"(?:^|\n)\s*(responsibilities|duties|what you'll do|your role|the role|role overview|day to day|"
        r"key responsibilities)[\s:]*\n",
        re.IGNORECASE,
    ),
    re.compile(r"(?:^|\n)\s*(education|experience|background)[\s:]*\n", re.IGNORECASE),
)

_COMPANY_HEADERS: tuple[re.Pattern[str], ...] = (
    re.compile(
        r"(?:^|\n)\s*(company (?:description|overview)|about (?:us|the company|our company)|who we are|"
        r"our company|the company|our mission|our values|what we do|why join us|why work (?:with us|here))[\s:]*\n",
        re.IGNORECASE,
    ),
    re.compile(r"(?:^|\n)\s*(benefits|perks|what we offer|compensation|salary)[\s:]*\n", re.IGNORECASE),
)

_REQUIREMENT_MARKERS = ("responsibilities", "requirements", "qualifications", "skills", "experience")
MAX_COMPANY_BLOCKS = 3


def _matches_any(block: str, patterns: tuple[re.Pattern[str], ...]) -> bool:
    # Headers are anchored to a trailing newline, so a header ending the block still counts.
    candidate = block if block.endswith("\n") else f"{block}\n"
    return any(pattern.search(candidate) for pattern in patterns)


def parse_and_filter_job_description(description: str) -> str:
    """Reorder a scraped posting so requirement blocks come first and marketing copy last."""
    if not description.strip():
        return ""

    requirement_blocks: list[str] = []
    neutral_blocks: list[str] = []
    company_blocks: list[str] = []

    for block in _BLOCK_SPLIT_RE.split(description):
        block = block.strip("\n")
        if not block.strip():
            continue
        if _matches_any(block, _REQUIREMENT_HEADERS):
            requirement_blocks.append(block)
        elif _matches_any(block, _COMPANY_HEADERS):
            company_blocks.append(block)
        elif contains_any(block, _REQUIREMENT_MARKERS):
            requirement_blocks.append(block)
        else:
            neutral_blocks.append(block)

    ordered = requirement_blocks + neutral_blocks + company_blocks[:MAX_COMPANY_BLOCKS]
    return "\n\n".join(ordered)
