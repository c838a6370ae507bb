from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import Date, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ..records import IdentifierType, PreprintRecord


class Base(DeclarativeBase):
	pass


class Preprint(Base):
	__tablename__ = "preprints"
	__table_args__ = (UniqueConstraint("source", "identifier", name="uq_preprints_source_identifier"),)

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	source: Mapped[str] = mapped_column(String(100))
	identifier: Mapped[str] = mapped_column(String(255))
	identifier_type: Mapped[str] = mapped_column(String(20))
	posted_date: Mapped[date] = mapped_column(Date)
	title: Mapped[str] = mapped_column(Text)
	abstract: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

	@classmethod
	def from_record(cls, record: PreprintRecord) -> "Preprint":
		return cls(
			source=record.source,
			identifier=record.identifier,
			identifier_type=record.identifier_type.value,
			posted_date=record.posted_date,
			title=record.title,
			abstract=record.abstract,
		)

	def to_record(self) -> PreprintRecord:
		return PreprintRecord(
			source=self.source,
			identifier=self.identifier,
			identifier_type=IdentifierType(self.identifier_type),
			posted_date=self.posted_date,
			title=self.title,
			abstract=self.abstract,
		)
