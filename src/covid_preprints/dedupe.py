"""Collapse multiple versions and duplicate titles in a batch of records.

Two stages, always in this order:

1. Strip the source-specific version suffix from each identifier
   (``10.20944/preprints202003.0001.v2`` -> ``10.20944/preprints202003.0001``)
   and keep the earliest posted record per stripped identifier.
2. Keep the earliest posted record per ``(source, title)``.

Records with equal dates keep whichever came first in the input, so the
result depends only on fetch order.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, Hashable, Iterable, List, Optional

from .records import PreprintRecord

logger = logging.getLogger(__name__)


def strip_version(identifier: str, pattern: Optional[re.Pattern]) -> str:
    """Drop the version suffix matched by ``pattern``.

    When the pattern has a ``version`` group only that group is removed,
    so a pattern can require a prefix without consuming it.
    """
    if pattern is None:
        return identifier
    match = pattern.search(identifier)
    if match is None:
        return identifier
    start = match.start("version") if "version" in pattern.groupindex else match.start()
    return identifier[:start]


def _keep_earliest(
    records: Iterable[PreprintRecord],
    key: Callable[[PreprintRecord], Hashable],
) -> List[PreprintRecord]:
    best: Dict[Hashable, PreprintRecord] = {}
    for record in records:
        k = key(record)
        current = best.get(k)
        # strict comparison keeps the first seen on ties
        if current is None or record.posted_date < current.posted_date:
            best[k] = record
    return list(best.values())


def collapse_versions(records: Iterable[PreprintRecord], pattern: Optional[re.Pattern]) -> List[PreprintRecord]:
    return _keep_earliest(records, lambda r: strip_version(r.identifier, pattern))


def collapse_titles(records: Iterable[PreprintRecord]) -> List[PreprintRecord]:
    return _keep_earliest(records, lambda r: (r.source, r.title))


def deduplicate(records: Iterable[PreprintRecord], pattern: Optional[re.Pattern]) -> List[PreprintRecord]:
    records = list(records)
    by_version = collapse_versions(records, pattern)
    by_title = collapse_titles(by_version)
    logger.debug(
        f"Deduplicated {len(records)} records: {len(by_version)} after versions, {len(by_title)} after titles"
    )
    return by_title
