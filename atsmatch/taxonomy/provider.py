from __future__ import annotations

from typing import Protocol


class TaxonomyProvider(Protocol):
    """Resolves keywords to canonical skill IDs."""

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        """Normalized keyword key plus the skill ID of its synonym group, if any."""

    def are_synonyms(self, left: str, right: str) -> bool:
        ...
