"""Harvest every configured source, then merge the batches into one dataset.

Per source: fetch -> normalize/classify -> topic filter -> deduplicate.
Across sources: concatenate -> date cutoff -> abstract cleanup -> title dedup -> sort.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Sequence

import requests

from .config import Settings
from .dedupe import collapse_titles, deduplicate
from .filters import filter_topic, within_window
from .records import PreprintRecord
from .sources import PreprintSource, get_source

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")


@dataclass
class HarvestSummary:
    normalized: Dict[str, int] = field(default_factory=dict)
    kept: Dict[str, int] = field(default_factory=dict)
    total: int = 0
    elapsed_sec: float = 0.0

    def as_dict(self) -> Dict[str, object]:
        return {
            "normalized": dict(self.normalized),
            "kept": dict(self.kept),
            "total": self.total,
            "elapsed_sec": self.elapsed_sec,
        }


def strip_markup(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    cleaned = re.sub(r"\s+", " ", _TAG_RE.sub(" ", text)).strip()
    return cleaned or None


def process_batch(source: PreprintSource, records: Iterable[PreprintRecord], settings: Settings) -> List[PreprintRecord]:
    """Topic filter and deduplicate one source's normalized records."""
    on_topic = list(filter_topic(records, settings.topic_regex))
    return deduplicate(on_topic, source.version_pattern)


def merge(batches: Sequence[Iterable[PreprintRecord]], settings: Settings) -> List[PreprintRecord]:
    merged: List[PreprintRecord] = []
    dropped = 0
    for batch in batches:
        for record in batch:
            if not within_window(record, settings.start_date, settings.sample_date):
                dropped += 1
                continue
            merged.append(replace(record, abstract=strip_markup(record.abstract)))
    if dropped:
        logger.info(f"Dropped {dropped} records outside {settings.start_date}..{settings.sample_date}")
    # different sources can classify into the same repository label
    unique = collapse_titles(merged)
    if len(unique) < len(merged):
        logger.info(f"Dropped {len(merged) - len(unique)} cross-source duplicate titles")
    merged = unique
    merged.sort(key=lambda r: (r.posted_date, r.source, r.identifier))
    return merged


def harvest_source(source: PreprintSource, settings: Settings, summary: HarvestSummary) -> List[PreprintRecord]:
    normalized = source.harvest(settings)
    kept = process_batch(source, normalized, settings)
    summary.normalized[source.name] = len(normalized)
    summary.kept[source.name] = len(kept)
    logger.info(f"{source.name}: kept {len(kept)} of {len(normalized)} normalized records")
    return kept


def run(settings: Settings, session: Optional[requests.Session] = None) -> tuple[List[PreprintRecord], HarvestSummary]:
    """Harvest all configured sources in order; a failing source aborts the run."""
    start = time.time()
    summary = HarvestSummary()
    batches = []
    for name in settings.sources:
        source = get_source(name, session=session)
        batches.append(harvest_source(source, settings, summary))
    records = merge(batches, settings)
    summary.total = len(records)
    summary.elapsed_sec = round(time.time() - start, 3)
    return records, summary
