"""Crossref posted-content (bioRxiv, medRxiv, Research Square, SSRN, OSF, ...)."""

from .adapter import CrossrefSource
from .mapper import map_crossref_to_record

__all__ = [
    "CrossrefSource",
    "map_crossref_to_record",
]
