"""Source-specific clients for the scholarly metadata APIs.

Each source has its own package with an adapter (pagination against the API)
and a mapper (raw record to ``PreprintRecord``).
"""

from __future__ import annotations

from typing import Dict, Optional, Type

import requests

from .arxiv import ArxivSource
from .base import PreprintSource
from .crossref import CrossrefSource
from .datacite import DataCiteSource
from .repec import RepecSource

SOURCES: Dict[str, Type[PreprintSource]] = {
    CrossrefSource.name: CrossrefSource,
    DataCiteSource.name: DataCiteSource,
    ArxivSource.name: ArxivSource,
    RepecSource.name: RepecSource,
}


def get_source(name: str, session: Optional[requests.Session] = None) -> PreprintSource:
    try:
        cls = SOURCES[name]
    except KeyError:
        raise ValueError(f"Unknown source: {name}")
    return cls(session=session)


__all__ = [
    "ArxivSource",
    "CrossrefSource",
    "DataCiteSource",
    "PreprintSource",
    "RepecSource",
    "SOURCES",
    "get_source",
]
