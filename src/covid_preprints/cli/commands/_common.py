from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any

from ...config import Settings, load_config, settings_from_config

DEFAULT_CONFIG = str(Path("config") / "config.yaml")


def add_config_argument(p: argparse.ArgumentParser) -> None:
	p.add_argument("--config", default=DEFAULT_CONFIG, help="Path to config.yaml")


def load_settings(args: argparse.Namespace) -> Settings:
	settings = settings_from_config(load_config(Path(args.config)))
	sources = getattr(args, "source", None)
	if sources:
		settings.sources = list(sources)
	out_dir = getattr(args, "out_dir", None)
	if out_dir:
		settings.output_dir = Path(out_dir)
	return settings


# Structured logging helper
def log_json(enabled: bool, event: str, **kwargs: Any) -> None:
	if not enabled:
		return
	payload = {"event": event}
	payload.update(kwargs)
	print(json.dumps(payload, ensure_ascii=False, default=str))
