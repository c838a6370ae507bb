from __future__ import annotations

import argparse

from rich.console import Console
from rich.table import Table

from ._common import add_config_argument, load_settings

console = Console()


def register(sub) -> None:
	p = sub.add_parser("config-validate", help="Validate and summarize a config.yaml")
	add_config_argument(p)

	def _cmd(args: argparse.Namespace) -> int:
		try:
			settings = load_settings(args)
		except (FileNotFoundError, ValueError) as e:
			console.print(f"[red]Config validation failed:[/red] {e}")
			return 1
		table = Table(title="Harvest Config Summary")
		table.add_column("Field")
		table.add_column("Value")
		table.add_row("config_path", str(args.config))
		table.add_row("window", f"{settings.start_date} .. {settings.sample_date}")
		table.add_row("release_date", str(settings.release_date))
		table.add_row("search_pattern", settings.search_pattern)
		table.add_row("sources", ", ".join(settings.sources))
		table.add_row("#datacite_clients", str(len(settings.datacite_clients)))
		table.add_row("#repec_sets", str(len(settings.repec_sets)))
		table.add_row("output_dir", str(settings.output_dir))
		table.add_row("database", str(settings.database or "-"))
		console.print(table)
		console.print("[green]Config validation passed.[/green]")
		return 0

	p.set_defaults(func=_cmd)
