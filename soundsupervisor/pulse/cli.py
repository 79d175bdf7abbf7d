import asyncio
import dataclasses

import click
from tabulate import tabulate

from soundsupervisor.pulse.config import SupervisorConfig
from soundsupervisor.pulse.models import ServerAddress
from soundsupervisor.pulse.supervisor import ConnectionSupervisor


@click.group()
@click.option(
    "--server",
    envvar="PULSE_SERVER",
    default="tcp:localhost:4317",
    show_default=True,
    help="PulseAudio server address ([tcp|tcp4|tcp6:]host[:port])",
)
@click.option(
    "--timeout",
    type=float,
    default=5.0,
    show_default=True,
    envvar="SOUND_COMMAND_TIMEOUT",
    help="Seconds before a pactl call is killed",
)
@click.pass_context
def pulse(ctx: click.Context, server: str, timeout: float) -> None:
    """PulseAudio supervision commands."""
    try:
        address = ServerAddress.parse(server)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--server")
    ctx.obj = ConnectionSupervisor(address, SupervisorConfig(command_timeout=timeout))


@pulse.command("supervise")
@click.option("--probe-interval", type=float, default=3.0, show_default=True, envvar="SOUND_PROBE_INTERVAL")
@click.option("--poll-interval", type=float, default=1.0, show_default=True, envvar="SOUND_POLL_INTERVAL")
@click.option("--max-retries", type=int, default=20, show_default=True, envvar="SOUND_MAX_RETRIES")
@click.option("--default-sink", default="balena-sound.input", show_default=True, envvar="SOUND_DEFAULT_SINK")
@click.pass_obj
def supervise(
    obj: ConnectionSupervisor, probe_interval: float, poll_interval: float, max_retries: int, default_sink: str
) -> None:
    """Connect to the server and print connection and playback events until it gives up."""
    config = dataclasses.replace(
        obj.config,
        probe_interval=probe_interval,
        poll_interval=poll_interval,
        max_retries=max_retries,
        default_sink_name=default_sink,
    )
    supervisor = ConnectionSupervisor(obj.address, config)

    async def main() -> None:
        given_up = asyncio.Event()
        for event in ("connect", "ready", "disconnect", "stop"):
            supervisor.on(event, lambda event=event: click.echo(event))
        supervisor.on("play", lambda sink_name: click.echo(f"play\t{sink_name}"))
        supervisor.on("give_up", given_up.set)
        supervisor.start()
        try:
            await given_up.wait()
        finally:
            supervisor.destroy()

    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        return
    click.echo("Gave up connecting to the audio server", err=True)
    raise click.exceptions.Exit(1)


@pulse.group()
def volume() -> None:
    """Default sink volume commands."""
    pass


@volume.command("get")
@click.pass_obj
def volume_get(obj: ConnectionSupervisor) -> None:
    """Print the default sink volume (0-100)."""
    click.echo(asyncio.run(obj.get_volume()))


@volume.command("set")
@click.argument("percent", type=float)
@click.pass_obj
def volume_set(obj: ConnectionSupervisor, percent: float) -> None:
    """Set the default sink volume, clamped to 0-100."""
    asyncio.run(obj.set_volume(percent))
    click.echo(f"Volume set to {obj.current_volume}%", err=True)


@pulse.group()
def sink() -> None:
    """Sink commands."""
    pass


@sink.command("list")
@click.option("--quiet", is_flag=True, help="Output only sink names")
@click.pass_obj
def sink_list(obj: ConnectionSupervisor, quiet: bool) -> None:
    """List available sinks."""
    sinks = asyncio.run(obj.get_sinks())
    if quiet:
        for s in sinks:
            click.echo(s.name)
    else:
        headers = ["Index", "Name", "Module", "Sample Spec", "State"]
        rows = [
            [s.index if s.index is not None else "", s.name, s.module_id, s.sample_spec, s.state] for s in sinks
        ]
        click.echo(tabulate(rows, headers=headers, tablefmt="plain"))


@sink.command("inputs")
@click.pass_obj
def sink_inputs(obj: ConnectionSupervisor) -> None:
    """List active streams."""
    streams = asyncio.run(obj.get_sink_inputs())
    headers = ["Index", "Sink", "Client", "Driver", "Sample Spec"]
    rows = [
        [s.index if s.index is not None else "", s.sink, s.client, s.driver, s.sample_spec] for s in streams
    ]
    click.echo(tabulate(rows, headers=headers, tablefmt="plain"))


@sink.command("move")
@click.argument("stream_index", type=int)
@click.argument("sink_index", type=int)
@click.pass_obj
def sink_move(obj: ConnectionSupervisor, stream_index: int, sink_index: int) -> None:
    """Move an active stream to another sink."""
    asyncio.run(obj.move_sink_input(stream_index, sink_index))
    click.echo(f"Requested move of stream {stream_index} to sink {sink_index}", err=True)


@pulse.command("info")
@click.pass_obj
def info(obj: ConnectionSupervisor) -> None:
    """Print server information."""
    server_info = asyncio.run(obj.get_info())
    if not server_info:
        click.echo("No server information available", err=True)
        raise click.Abort()
    click.echo(tabulate(list(server_info.items()), tablefmt="plain"))
