"""DataCite text DOIs registered by preprint-hosting repositories."""

from .adapter import DataCiteSource
from .mapper import map_datacite_to_record

__all__ = [
    "DataCiteSource",
    "map_datacite_to_record",
]
