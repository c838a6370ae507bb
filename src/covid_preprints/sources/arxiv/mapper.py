"""Mapper: Convert arXiv Atom entries (as parsed by feedparser) to ``PreprintRecord``."""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ...records import IdentifierType, PreprintRecord

ARXIV_LABEL = "arXiv"


def _collapse(text: Optional[str]) -> Optional[str]:
	if not text:
		return None
	return re.sub(r"\s+", " ", text).strip() or None


def arxiv_id(entry_id: Optional[str]) -> Optional[str]:
	"""``http://arxiv.org/abs/2003.12345v2`` -> ``2003.12345v2``."""
	if not entry_id or "/abs/" not in entry_id:
		return None
	return entry_id.split("/abs/")[-1].strip() or None


def _published(value: Optional[str]) -> Optional[date]:
	if not value:
		return None
	try:
		return datetime.strptime(value[:10], "%Y-%m-%d").date()
	except ValueError:
		return None


def map_arxiv_entry(entry: Mapping[str, Any]) -> Optional[PreprintRecord]:
	ident = arxiv_id(entry.get("id"))
	title = _collapse(entry.get("title"))
	posted = _published(entry.get("published"))
	if not ident or not title or posted is None:
		return None
	return PreprintRecord(
		source=ARXIV_LABEL,
		identifier=ident,
		identifier_type=IdentifierType.ARXIV,
		posted_date=posted,
		title=title,
		abstract=_collapse(entry.get("summary")),
	)
