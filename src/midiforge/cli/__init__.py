"""Command line interface for midiforge."""

from .main import cli

__all__ = ["cli"]
