import logging

import click

from soundsupervisor.pulse.cli import pulse

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@click.group()
def cli() -> None:
    """Sound supervisor - Watch a PulseAudio server and control its volume and sinks."""
    pass


cli.add_command(pulse)


if __name__ == "__main__":
    cli()
