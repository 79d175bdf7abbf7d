import logging

from soundsupervisor.pulse.base import CommandExecutor
from soundsupervisor.pulse.executor import CommandError
from soundsupervisor.pulse.models import SinkDescriptor, SinkInputDescriptor

logger = logging.getLogger(__name__)


def _parse_index(value: str) -> int | None:
    return int(value) if value.isdigit() else None


def parse_sinks(output: str) -> list[SinkDescriptor]:
    """Parse `pactl list short sinks` output, skipping malformed lines."""
    sinks = []
    for line in output.strip().split("\n"):
        if not line.strip():
            continue
        parts = line.split("\t")
        if len(parts) < 2:
            logger.debug(f"Skipping malformed sink line: {line}")
            continue
        parts += [""] * (5 - len(parts))
        sinks.append(
            SinkDescriptor(
                index=_parse_index(parts[0]),
                name=parts[1],
                module_id=parts[2],
                sample_spec=parts[3],
                state=parts[4],
            )
        )
    return sinks


def parse_sink_inputs(output: str) -> list[SinkInputDescriptor]:
    """Parse `pactl list short sink-inputs` output, skipping malformed lines."""
    sink_inputs = []
    for line in output.strip().split("\n"):
        if not line.strip():
            continue
        parts = line.split("\t")
        if len(parts) < 2:
            logger.debug(f"Skipping malformed sink-input line: {line}")
            continue
        parts += [""] * (5 - len(parts))
        sink_inputs.append(
            SinkInputDescriptor(
                index=_parse_index(parts[0]),
                sink=parts[1],
                client=parts[2],
                driver=parts[3],
                sample_spec=parts[4],
            )
        )
    return sink_inputs


def parse_info(output: str) -> dict[str, str]:
    """Parse the colon-delimited report of `pactl info`."""
    info = {}
    for line in output.strip().split("\n"):
        key, sep, value = line.partition(":")
        if key.strip() and sep:
            info[key.strip()] = value.strip()
    return info


class SinkQueryService:
    """Queries about sinks and streams; every failure degrades to an empty result."""

    def __init__(self, executor: CommandExecutor) -> None:
        self._executor = executor

    async def get_sinks(self) -> list[SinkDescriptor]:
        """List the server's sinks in the order reported."""
        try:
            output = await self._executor.run("list", "short", "sinks")
        except CommandError as e:
            logger.warning(f"getSinks failed: {e}")
            return []
        sinks = parse_sinks(output)
        logger.debug(f"Listed {len(sinks)} sinks")
        return sinks

    async def get_sink_inputs(self) -> list[SinkInputDescriptor]:
        """List the active streams in the order reported."""
        try:
            output = await self._executor.run("list", "short", "sink-inputs")
        except CommandError as e:
            logger.warning(f"getSinkInputs failed: {e}")
            return []
        return parse_sink_inputs(output)

    async def get_info(self) -> dict[str, str]:
        """Server metadata (e.g., 'Server Name', 'Default Sink')."""
        try:
            output = await self._executor.run("info")
        except CommandError as e:
            logger.warning(f"getInfo failed: {e}")
            return {}
        return parse_info(output)

    async def move_sink_input(self, stream_index: int, sink_index: int) -> None:
        """Move a stream to another sink. Failures are only logged."""
        try:
            await self._executor.run("move-sink-input", str(stream_index), str(sink_index))
        except CommandError as e:
            logger.warning(f"moveSinkInput failed: {e}")
            return
        logger.info(f"Moved sink input {stream_index} to sink {sink_index}")
