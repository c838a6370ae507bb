from __future__ import annotations

import argparse
import json
from collections import Counter
from pathlib import Path

from rich.console import Console
from rich.table import Table

from ...constants import DATASET_FILENAME
from ...export import read_dataset

console = Console()


def register(sub) -> None:
	p = sub.add_parser("stats", help="Show per-source record counts of an exported dataset")
	p.add_argument("--csv", default=str(Path("data") / DATASET_FILENAME))
	p.add_argument("--json-out", default=None)

	def _cmd(args: argparse.Namespace) -> int:
		csv_path = Path(args.csv)
		if not csv_path.exists():
			console.print(f"[red]Dataset not found:[/red] {csv_path}")
			return 1
		records = read_dataset(csv_path)
		by_source = Counter(r.source for r in records)
		table = Table(title=f"{len(records)} records in {csv_path}")
		table.add_column("Source")
		table.add_column("Records", justify="right")
		table.add_column("First posted")
		table.add_column("Last posted")
		for source, n in by_source.most_common():
			dates = [r.posted_date for r in records if r.source == source]
			table.add_row(source, str(n), str(min(dates)), str(max(dates)))
		console.print(table)
		if args.json_out:
			stats = {"total": len(records), "by_source": dict(by_source)}
			Path(args.json_out).parent.mkdir(parents=True, exist_ok=True)
			Path(args.json_out).write_text(json.dumps(stats, ensure_ascii=False, indent=2), encoding="utf-8")
			console.print(f"[green]Saved stats to {args.json_out}[/green]")
		return 0

	p.set_defaults(func=_cmd)
