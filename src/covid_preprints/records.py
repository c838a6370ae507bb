"""The common record shape every source is normalized into."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Mapping, Optional


class IdentifierType(str, Enum):
	DOI = "DOI"
	ARXIV = "arXiv ID"
	REPEC = "RePEc handle"


@dataclass(frozen=True)
class PreprintRecord:
	source: str
	identifier: str
	identifier_type: IdentifierType
	posted_date: date
	title: str
	abstract: Optional[str] = None

	def as_row(self) -> Dict[str, str]:
		return {
			"source": self.source,
			"identifier": self.identifier,
			"identifier_type": self.identifier_type.value,
			"posted_date": self.posted_date.isoformat(),
			"title": self.title,
			"abstract": self.abstract or "",
		}

	@classmethod
	def from_row(cls, row: Mapping[str, str]) -> "PreprintRecord":
		return cls(
			source=row["source"],
			identifier=row["identifier"],
			identifier_type=IdentifierType(row["identifier_type"]),
			posted_date=date.fromisoformat(row["posted_date"]),
			title=row["title"],
			abstract=row.get("abstract") or None,
		)
