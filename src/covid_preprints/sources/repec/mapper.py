"""Mapper: Convert parsed RePEc OAI records to ``PreprintRecord``."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Dict, Optional

from ...classify import classify_repec
from ...records import IdentifierType, PreprintRecord

_DATE_FORMATS = ("%Y-%m-%d", "%Y-%m", "%Y")


def parse_oai_date(value: Optional[str]) -> Optional[date]:
	"""OAI datestamps and dc:date values: ``YYYY-MM-DD``, ``YYYY-MM`` or ``YYYY``."""
	if not value:
		return None
	value = value.strip()[:10]
	for fmt in _DATE_FORMATS:
		try:
			return datetime.strptime(value, fmt).date()
		except ValueError:
			continue
	return None


def _collapse(text: Optional[str]) -> Optional[str]:
	if not text:
		return None
	return re.sub(r"\s+", " ", text).strip() or None


def map_repec_record(obj: Dict[str, Any]) -> Optional[PreprintRecord]:
	handle = obj.get("handle")
	title = _collapse(obj.get("title"))
	posted = parse_oai_date(obj.get("date")) or parse_oai_date(obj.get("datestamp"))
	if not handle or not title or posted is None:
		return None
	return PreprintRecord(
		source=classify_repec(handle),
		identifier=handle,
		identifier_type=IdentifierType.REPEC,
		posted_date=posted,
		title=title,
		abstract=_collapse(obj.get("abstract")),
	)
