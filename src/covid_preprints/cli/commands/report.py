from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console

from ...constants import DATASET_FILENAME, OTHER_THRESHOLD
from ...report import render_reports
from ._common import log_json

console = Console()


def register(sub) -> None:
	p = sub.add_parser("report", help="Render daily, weekly and cumulative charts from the exported CSV")
	p.add_argument("--csv", default=str(Path("data") / DATASET_FILENAME))
	p.add_argument("--out-dir", default=str(Path("data") / "figures"))
	p.add_argument("--threshold", type=int, default=OTHER_THRESHOLD, help="Sources below this count become 'Other'")
	p.add_argument("--log-json", action="store_true")

	def _cmd(args: argparse.Namespace) -> int:
		csv_path = Path(args.csv)
		if not csv_path.exists():
			console.print(f"[red]Dataset not found:[/red] {csv_path}")
			return 1
		paths = render_reports(csv_path, Path(args.out_dir), threshold=args.threshold)
		for name, path in paths.items():
			console.print(f"[green]Saved {name} chart to {path}[/green]")
		log_json(args.log_json, "report_done", **{k: str(v) for k, v in paths.items()})
		return 0

	p.set_defaults(func=_cmd)
