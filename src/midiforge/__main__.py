"""Allow running midiforge with ``python -m midiforge``."""

from midiforge.cli.main import cli

if __name__ == "__main__":
    cli()
