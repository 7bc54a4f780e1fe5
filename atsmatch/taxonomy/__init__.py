"""Skill synonym groups used when matching job keywords against a resume."""

from functools import lru_cache

from .local_taxonomy import LocalTaxonomy
from .provider import TaxonomyProvider


@lru_cache(maxsize=1)
def get_default_taxonomy_provider() -> TaxonomyProvider:
    """Process-wide taxonomy built from the bundled synonym groups."""
    return LocalTaxonomy()


__all__ = ["LocalTaxonomy", "TaxonomyProvider", "get_default_taxonomy_provider"]
