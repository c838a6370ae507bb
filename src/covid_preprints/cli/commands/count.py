from __future__ import annotations

import argparse

import requests
from rich.console import Console
from rich.table import Table

from ...constants import SOURCE_NAMES
from ...errors import HarvestError
from ...sources import get_source
from ._common import add_config_argument, load_settings, log_json

console = Console()


def register(sub) -> None:
	p = sub.add_parser("count", help="Probe each source for the number of raw records in the window")
	add_config_argument(p)
	p.add_argument("--source", action="append", choices=SOURCE_NAMES, default=None)
	p.add_argument("--log-json", action="store_true")

	def _cmd(args: argparse.Namespace) -> int:
		try:
			settings = load_settings(args)
		except (FileNotFoundError, ValueError) as e:
			console.print(f"[red]Invalid configuration:[/red] {e}")
			return 1
		table = Table(title=f"Raw records {settings.start_date} .. {settings.sample_date}")
		table.add_column("Source")
		table.add_column("Records", justify="right")
		counts = {}
		for name in settings.sources:
			try:
				counts[name] = get_source(name).count(settings)
			except (requests.RequestException, HarvestError) as e:
				console.print(f"[red]{name}: count failed:[/red] {e}")
				return 1
			table.add_row(name, "unknown" if counts[name] is None else str(counts[name]))
		console.print(table)
		log_json(args.log_json, "count_done", **counts)
		return 0

	p.set_defaults(func=_cmd)
