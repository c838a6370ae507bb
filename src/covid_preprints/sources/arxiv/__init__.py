"""arXiv API (Atom) search restricted to the submission window."""

from .adapter import ArxivSource
from .mapper import map_arxiv_entry

__all__ = [
    "ArxivSource",
    "map_arxiv_entry",
]
