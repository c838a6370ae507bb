"""CLI command: run the full harvest and export the dataset."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import requests
from rich.console import Console
from sqlalchemy.exc import SQLAlchemyError

from ...constants import SOURCE_NAMES
from ...errors import HarvestError
from ...export import export
from ...pipeline import run
from ._common import add_config_argument, load_settings, log_json

logger = logging.getLogger(__name__)
console = Console()


def register(sub) -> None:
	p = sub.add_parser("harvest", help="Harvest all sources, merge and export the dataset")
	add_config_argument(p)
	p.add_argument(
		"--source",
		action="append",
		choices=SOURCE_NAMES,
		default=None,
		help="Restrict to one source (repeatable). Defaults to the sources in config.yaml",
	)
	p.add_argument("--out-dir", default=None, help="Override output_dir from config.yaml")
	p.add_argument("--log-json", action="store_true")
	p.add_argument("--metrics-out", default=None, help="Optional JSON file to write harvest metrics")

	def _cmd(args: argparse.Namespace) -> int:
		try:
			settings = load_settings(args)
		except (FileNotFoundError, ValueError) as e:
			console.print(f"[red]Invalid configuration:[/red] {e}")
			return 1

		console.print(
			f"[cyan]Harvesting {', '.join(settings.sources)} for {settings.start_date} .. {settings.sample_date}[/cyan]"
		)
		try:
			records, summary = run(settings)
		except (requests.RequestException, HarvestError) as e:
			logger.error(f"Harvest failed: {e}")
			console.print(f"[red]Harvest failed:[/red] {e}")
			return 1

		try:
			paths = export(records, settings)
		except (OSError, SQLAlchemyError) as e:
			logger.error(f"Export failed: {e}")
			console.print(f"[red]Export failed:[/red] {e}")
			return 1
		for name in settings.sources:
			console.print(
				f"[green]{name}: normalized={summary.normalized.get(name, 0)} kept={summary.kept.get(name, 0)}[/green]"
			)
		console.print(f"[green]Exported {summary.total} records to {paths['dataset']} in {summary.elapsed_sec}s[/green]")
		log_json(args.log_json, "harvest_done", **summary.as_dict(), out=str(paths["dataset"]))

		if args.metrics_out:
			Path(args.metrics_out).parent.mkdir(parents=True, exist_ok=True)
			Path(args.metrics_out).write_text(json.dumps(summary.as_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
			console.print(f"[green]Saved metrics to {args.metrics_out}[/green]")
		return 0

	p.set_defaults(func=_cmd)
