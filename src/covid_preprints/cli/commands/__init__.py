"""Subcommands; each module exposes ``register(sub)``."""
