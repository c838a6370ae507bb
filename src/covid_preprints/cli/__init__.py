"""covid-preprints CLI: harvest, export and report on COVID-19 preprints.

Usage examples:
- covid-preprints config-validate --config config/config.yaml
- covid-preprints harvest --config config/config.yaml --log-json
- covid-preprints report --csv data/covid19_preprints.csv --out-dir data/figures
"""
import argparse
import logging
import sys
from typing import Any

from .commands import config_validate, count, harvest, report, stats

COMMANDS = (config_validate, harvest, count, report, stats)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="covid-preprints", description="COVID-19 preprint metadata harvester")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="command")
	for module in COMMANDS:
		module.register(sub)
	return parser


def main(argv: Any = None) -> int:
	parser = build_parser()
	args = parser.parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.INFO,
		format="%(asctime)s %(levelname)s %(name)s: %(message)s",
	)
	if not hasattr(args, "func"):
		parser.print_help()
		return 0
	return int(args.func(args))


if __name__ == "__main__":
	sys.exit(main())
