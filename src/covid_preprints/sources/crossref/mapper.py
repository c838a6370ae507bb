"""Mapper: Convert Crossref work items to ``PreprintRecord``."""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Dict, Optional

from ...classify import CROSSREF_RULES, classify
from ...records import IdentifierType, PreprintRecord

logger = logging.getLogger(__name__)


def parse_date_parts(value: Optional[Dict[str, Any]]) -> Optional[date]:
    """Crossref ``{"date-parts": [[y, m, d]]}`` -> date; month/day default to 1."""
    if not value:
        return None
    parts = (value.get("date-parts") or [[]])[0]
    if not parts or parts[0] is None:
        return None
    try:
        year = int(parts[0])
        month = int(parts[1]) if len(parts) > 1 and parts[1] else 1
        day = int(parts[2]) if len(parts) > 2 and parts[2] else 1
        return date(year, month, day)
    except (TypeError, ValueError):
        return None


def clean_jats(text: Optional[str]) -> Optional[str]:
    if not text:
        return None
    # Remove JATS XML tags (e.g., <jats:title>, <jats:p>) and any other markup
    cleaned = re.sub(r"<[^>]+>", " ", text)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned or None


def _first(values: Any) -> Optional[str]:
    if isinstance(values, list):
        for v in values:
            if isinstance(v, str) and v.strip():
                return v.strip()
        return None
    if isinstance(values, str):
        return values.strip() or None
    return None


def _institution(item: Dict[str, Any]) -> Optional[str]:
    # A list of objects in current API responses, a single object in older ones
    inst = item.get("institution")
    if isinstance(inst, list):
        inst = inst[0] if inst else None
    if isinstance(inst, dict):
        return inst.get("name")
    return None


def classification_fields(item: Dict[str, Any]) -> Dict[str, Optional[str]]:
    return {
        "institution": _institution(item),
        "publisher": item.get("publisher"),
        "group_title": item.get("group-title"),
    }


def map_crossref_to_record(item: Dict[str, Any]) -> Optional[PreprintRecord]:
    source = classify(classification_fields(item), CROSSREF_RULES)
    if source is None:
        logger.debug(f"Unclassified Crossref item: {item.get('DOI')} ({item.get('publisher')})")
        return None

    doi = (item.get("DOI") or "").strip().lower()
    title = _first(item.get("title"))
    posted = parse_date_parts(item.get("posted"))
    if not doi or not title or posted is None:
        return None

    return PreprintRecord(
        source=source,
        identifier=doi,
        identifier_type=IdentifierType.DOI,
        posted_date=posted,
        title=title,
        abstract=clean_jats(item.get("abstract")),
    )
