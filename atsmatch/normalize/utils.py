from __future__ import annotations

import re

EMAIL_RE = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"\+?\d[\d\s().-]{7,}\d")
NUMBER_RE = re.compile(r"\d+(?:[.,]\d+)*")
_UNIT_SPLIT_RE = re.compile(r"[.\n]")


def normalize_line(line: str) -> str:
    return re.sub(r"\s+", " ", line).strip()


def normalize_for_compare(text: str) -> str:
    return normalize_line(text).lower()


def contains_any(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def split_units(text: str) -> list[str]:
    """Split prose into sentence/line units, dropping blank ones."""
    return [item for item in _UNIT_SPLIT_RE.split(text or "") if item.strip()]


def find_emails(text: str) -> list[str]:
    return EMAIL_RE.findall(text or "")


def find_phones(text: str) -> list[str]:
    return [normalize_line(match) for match in PHONE_RE.findall(text or "")]


def find_numbers(text: str) -> list[str]:
    return NUMBER_RE.findall(text or "")
