"""SQLite copy of the exported dataset.

The table is rewritten on every export so that it always mirrors the CSV.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from sqlalchemy import create_engine, delete, select
from sqlalchemy.orm import Session, sessionmaker

from ..records import PreprintRecord
from .models import Preprint


def create_sqlite_engine(db_path: Path):
	engine = create_engine(f"sqlite:///{db_path}", future=True)
	SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
	return engine, SessionLocal


def write_records(session: Session, records: Iterable[PreprintRecord]) -> int:
	session.execute(delete(Preprint))
	n = 0
	for record in records:
		session.add(Preprint.from_record(record))
		n += 1
	session.commit()
	return n


def load_records(session: Session) -> List[PreprintRecord]:
	rows = session.execute(select(Preprint).order_by(Preprint.posted_date, Preprint.source, Preprint.identifier)).scalars()
	return [row.to_record() for row in rows]
