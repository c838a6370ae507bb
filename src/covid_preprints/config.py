"""Run configuration: YAML file plus a few environment overrides.

A ``Settings`` instance is built once by the CLI and passed explicitly to every
harvester, the merger and the exporter.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .constants import DEFAULT_TIMEOUT_SEC, OTHER_THRESHOLD, SEARCH_PATTERN, SEARCH_TERMS, SOURCE_NAMES, START_DATE
from .errors import ConfigError
from .filters import compile_topic_pattern


@dataclass
class Settings:
	sample_date: date
	start_date: date = START_DATE
	release_date: date = field(default_factory=date.today)
	search_pattern: str = SEARCH_PATTERN
	search_terms: List[str] = field(default_factory=lambda: list(SEARCH_TERMS))
	contact_email: Optional[str] = None
	output_dir: Path = Path("data")
	source_url: Optional[str] = None
	throttle_sec: float = 1.0
	timeout_sec: int = DEFAULT_TIMEOUT_SEC
	page_size: int = 1000
	other_threshold: int = OTHER_THRESHOLD
	database: Optional[Path] = None
	datacite_clients: List[str] = field(default_factory=list)
	repec_sets: List[str] = field(default_factory=list)
	resolve_ssrn_dates: bool = True
	sources: List[str] = field(default_factory=lambda: list(SOURCE_NAMES))

	@property
	def topic_regex(self) -> re.Pattern:
		return compile_topic_pattern(self.search_pattern)


def load_config(config_path: Path) -> Dict[str, Any]:
	if not config_path.exists():
		raise FileNotFoundError(f"Config not found: {config_path}")
	with config_path.open("r", encoding="utf-8") as f:
		data = yaml.safe_load(f) or {}
	return data


def _as_date(value: Any, name: str) -> date:
	# yaml already turns unquoted ISO dates into date objects
	if isinstance(value, date):
		return value
	try:
		return date.fromisoformat(str(value).strip())
	except ValueError:
		raise ConfigError(f"{name} must be in YYYY-MM-DD format, got: {value}")


def validate_config(data: Dict[str, Any]) -> None:
	if "sample_date" not in data and not os.getenv("COVID_PREPRINTS_SAMPLE_DATE"):
		raise ConfigError("Missing required config keys: sample_date")
	sample = _as_date(os.getenv("COVID_PREPRINTS_SAMPLE_DATE") or data["sample_date"], "sample_date")
	start = _as_date(data.get("start_date", START_DATE), "start_date")
	if sample < start:
		raise ConfigError(f"sample_date {sample} is before start_date {start}")
	if "release_date" in data:
		_as_date(data["release_date"], "release_date")
	pattern = data.get("search_pattern", SEARCH_PATTERN)
	try:
		re.compile(pattern)
	except (re.error, TypeError) as e:
		raise ConfigError(f"search_pattern does not compile: {e}")
	sources = data.get("sources", list(SOURCE_NAMES))
	if not isinstance(sources, list) or not sources:
		raise ConfigError("sources must be a non-empty list")
	unknown = [s for s in sources if s not in SOURCE_NAMES]
	if unknown:
		raise ConfigError(f"Unknown sources: {', '.join(map(str, unknown))}")
	for key in ("datacite_clients", "repec_sets", "search_terms"):
		if key in data and not isinstance(data[key], list):
			raise ConfigError(f"{key} must be a list")


def settings_from_config(data: Dict[str, Any]) -> Settings:
	"""Validate ``data`` and build a ``Settings``; env vars win over the file."""
	validate_config(data)
	sample = _as_date(os.getenv("COVID_PREPRINTS_SAMPLE_DATE") or data["sample_date"], "sample_date")
	settings = Settings(sample_date=sample)
	if "start_date" in data:
		settings.start_date = _as_date(data["start_date"], "start_date")
	if "release_date" in data:
		settings.release_date = _as_date(data["release_date"], "release_date")
	settings.search_pattern = data.get("search_pattern", SEARCH_PATTERN)
	settings.search_terms = list(data.get("search_terms") or SEARCH_TERMS)
	settings.contact_email = os.getenv("COVID_PREPRINTS_CONTACT_EMAIL") or data.get("contact_email")
	settings.output_dir = Path(data.get("output_dir") or settings.output_dir)
	settings.source_url = data.get("source_url")
	settings.throttle_sec = float(os.getenv("COVID_PREPRINTS_THROTTLE_SEC", data.get("throttle_sec", 1.0)))
	settings.timeout_sec = int(data.get("timeout_sec", DEFAULT_TIMEOUT_SEC))
	settings.page_size = int(data.get("page_size", settings.page_size))
	settings.other_threshold = int(data.get("other_threshold", OTHER_THRESHOLD))
	if data.get("database"):
		settings.database = Path(data["database"])
	settings.datacite_clients = list(data.get("datacite_clients") or [])
	settings.repec_sets = list(data.get("repec_sets") or [])
	settings.resolve_ssrn_dates = bool(data.get("resolve_ssrn_dates", True))
	settings.sources = list(data.get("sources", SOURCE_NAMES))
	return settings
