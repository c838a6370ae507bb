"""Topic and date-window filters."""

from __future__ import annotations

import re
from datetime import date
from typing import Iterable, Iterator, Optional

from .records import PreprintRecord


def compile_topic_pattern(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


def _search(text: Optional[str], pattern: re.Pattern) -> bool:
    return bool(text) and pattern.search(text) is not None


def matches_topic(record: PreprintRecord, pattern: re.Pattern) -> bool:
    """True when the title or the abstract mentions one of the topic terms."""
    return _search(record.title, pattern) or _search(record.abstract, pattern)


def within_window(record: PreprintRecord, start: date, end: date) -> bool:
    return start <= record.posted_date <= end


def filter_topic(records: Iterable[PreprintRecord], pattern: re.Pattern) -> Iterator[PreprintRecord]:
    return (r for r in records if matches_topic(r, pattern))
