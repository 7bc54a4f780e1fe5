from __future__ import annotations

import json
import logging
from pathlib import Path

from atsmatch.normalize.keywords import normalize

from .provider import TaxonomyProvider

logger = logging.getLogger(__name__)

DEFAULT_SYNONYMS_PATH = Path(__file__).with_name("synonyms.json")


class LocalTaxonomy(TaxonomyProvider):
    """Synonym groups keyed by skill ID, looked up by normalized keyword key.

    ``synonyms.json`` maps each canonical skill ID to its member terms. A term
    may belong to a single group only.
    """

    def __init__(self, synonyms_path: str | Path | None = None) -> None:
        path = Path(synonyms_path) if synonyms_path else DEFAULT_SYNONYMS_PATH
        self._groups = self._load_groups(path)
        self._skill_by_key = self._index(self._groups)
        logger.debug("taxonomy_loaded path=%s groups=%s terms=%s", path, len(self._groups), len(self._skill_by_key))

    @staticmethod
    def _load_groups(path: Path) -> dict[str, tuple[str, ...]]:
        with path.open("r", encoding="utf-8") as handle:
            raw = json.load(handle)
        if not isinstance(raw, dict):
            raise ValueError(f"Synonym file must map skill IDs to term lists: {path}")
        return {str(skill_id): tuple(str(term) for term in terms) for skill_id, terms in raw.items()}

    @staticmethod
    def _index(groups: dict[str, tuple[str, ...]]) -> dict[str, str]:
        index: dict[str, str] = {}
        for skill_id, terms in groups.items():
            for term in terms:
                key = normalize(term)
                owner = index.setdefault(key, skill_id)
                if owner != skill_id:
                    raise ValueError(f"Term {term!r} is listed under both {owner} and {skill_id}")
        return index

    def normalize_skill(self, raw: str) -> tuple[str, str | None]:
        key = normalize(raw)
        return key, self._skill_by_key.get(key)

    def are_synonyms(self, left: str, right: str) -> bool:
        _, left_id = self.normalize_skill(left)
        if left_id is None:
            return False
        return self.normalize_skill(right)[1] == left_id

    def members(self, skill_id: str) -> tuple[str, ...]:
        return self._groups.get(skill_id, ())
