"""Write the merged dataset (CSV), its JSON sidecar and an optional SQLite copy."""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List

from .config import Settings
from .constants import DATASET_COLUMNS, DATASET_FILENAME, METADATA_FILENAME
from .records import PreprintRecord
from .store import Base, create_sqlite_engine, write_records

logger = logging.getLogger(__name__)


def write_dataset(records: Iterable[PreprintRecord], path: Path) -> int:
	path.parent.mkdir(parents=True, exist_ok=True)
	n = 0
	with open(path, "w", encoding="utf-8", newline="") as f:
		writer = csv.DictWriter(f, fieldnames=DATASET_COLUMNS)
		writer.writeheader()
		for record in records:
			writer.writerow(record.as_row())
			n += 1
	return n


def read_dataset(path: Path) -> List[PreprintRecord]:
	with open(path, "r", encoding="utf-8", newline="") as f:
		return [PreprintRecord.from_row(row) for row in csv.DictReader(f)]


def build_metadata(settings: Settings) -> Dict[str, str]:
	return {
		"release_date": settings.release_date.isoformat(),
		"sample_date": settings.sample_date.isoformat(),
		"url": settings.source_url or "",
	}


def write_metadata(path: Path, settings: Settings) -> Dict[str, str]:
	meta = build_metadata(settings)
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(json.dumps(meta, ensure_ascii=False, indent=2), encoding="utf-8")
	return meta


def write_database(records: Iterable[PreprintRecord], db_path: Path) -> int:
	db_path.parent.mkdir(parents=True, exist_ok=True)
	engine, SessionLocal = create_sqlite_engine(db_path)
	Base.metadata.create_all(engine)
	session = SessionLocal()
	try:
		return write_records(session, records)
	finally:
		session.close()


def export(records: List[PreprintRecord], settings: Settings) -> Dict[str, Path]:
	"""Write every output artifact into ``settings.output_dir``; returns their paths."""
	out_dir = Path(settings.output_dir)
	paths = {
		"dataset": out_dir / DATASET_FILENAME,
		"metadata": out_dir / METADATA_FILENAME,
	}
	n = write_dataset(records, paths["dataset"])
	write_metadata(paths["metadata"], settings)
	logger.info(f"Exported {n} records to {paths['dataset']}")
	if settings.database:
		write_database(records, Path(settings.database))
		paths["database"] = Path(settings.database)
		logger.info(f"Wrote {n} records to {settings.database}")
	return paths
