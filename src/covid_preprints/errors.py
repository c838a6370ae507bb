"""Exception types raised by the harvester."""

from __future__ import annotations


class HarvestError(Exception):
	"""Base class for harvest failures."""


class SourceError(HarvestError):
	"""A source API returned a payload that cannot be interpreted."""

	def __init__(self, source: str, message: str) -> None:
		super().__init__(f"{source}: {message}")
		self.source = source


class ConfigError(ValueError):
	"""Invalid or incomplete run configuration."""
