"""Mapper: Convert DataCite JSON:API resources to ``PreprintRecord``."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Any, Dict, Optional

from ...classify import DATACITE_RULES, classify
from ...records import IdentifierType, PreprintRecord

logger = logging.getLogger(__name__)


def parse_iso_date(value: Optional[str]) -> Optional[date]:
    """``2020-03-05T10:22:31.000Z`` (or a bare ``2020-03-05``) -> date."""
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.strip()[:10]).date()
    except ValueError:
        return None


def _client_id(raw: Dict[str, Any]) -> Optional[str]:
    data = ((raw.get("relationships") or {}).get("client") or {}).get("data") or {}
    return data.get("id")


def _title(attrs: Dict[str, Any]) -> Optional[str]:
    for t in attrs.get("titles") or []:
        text = (t or {}).get("title")
        if isinstance(text, str) and text.strip():
            return re.sub(r"\s+", " ", text).strip()
    return None


def _abstract(attrs: Dict[str, Any]) -> Optional[str]:
    for d in attrs.get("descriptions") or []:
        if (d or {}).get("descriptionType") != "Abstract":
            continue
        text = d.get("description")
        # Older records wrap the description in a list
        if isinstance(text, list):
            text = " ".join(t for t in text if isinstance(t, str))
        if isinstance(text, str) and text.strip():
            return re.sub(r"\s+", " ", text).strip()
    return None


def map_datacite_to_record(raw: Dict[str, Any]) -> Optional[PreprintRecord]:
    attrs = raw.get("attributes") or {}
    source = classify({"client": _client_id(raw)}, DATACITE_RULES)
    if source is None:
        logger.debug(f"Unclassified DataCite item: {raw.get('id')} ({_client_id(raw)})")
        return None

    doi = (attrs.get("doi") or raw.get("id") or "").strip().lower()
    title = _title(attrs)
    posted = parse_iso_date(attrs.get("registered")) or parse_iso_date(attrs.get("created"))
    if not doi or not title or posted is None:
        return None

    return PreprintRecord(
        source=source,
        identifier=doi,
        identifier_type=IdentifierType.DOI,
        posted_date=posted,
        title=title,
        abstract=_abstract(attrs),
    )
