"""Serial port listing."""

import click

from midiforge.learning import available_ports


@click.command()
def ports():
    """List available serial ports."""
    found = available_ports()
    if not found:
        click.echo("No serial ports found.")
        return

    click.echo("Serial ports:\n")
    for device, description in found:
        click.echo(f"  {device}  {description}")
