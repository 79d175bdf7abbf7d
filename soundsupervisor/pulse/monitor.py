import asyncio
import logging
import typing

from soundsupervisor.pulse.base import CommandExecutor
from soundsupervisor.pulse.executor import CommandError
from soundsupervisor.pulse.models import PlaybackEvent, Started, Stopped

logger = logging.getLogger(__name__)


def parse_sink_name(sink_input_list: str, default: str) -> str:
    """Sink column of the first active stream, or `default` if there is none."""
    first_line = sink_input_list.strip().split("\n")[0]
    if not first_line:
        return default
    parts = first_line.split("\t")
    if len(parts) < 3 or not parts[2].strip():
        return default
    return parts[2].strip()


class PlaybackMonitor:
    """Polls the active streams and reports edge-triggered start/stop events.

    Owned by ConnectionSupervisor. A failed poll stops the monitor and is
    reported through `on_lost`; the monitor never retries on its own.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        on_event: typing.Callable[[PlaybackEvent], None],
        on_lost: typing.Callable[[CommandError], None],
        interval: float = 1.0,
        default_sink_name: str = "balena-sound.input",
    ) -> None:
        self._executor = executor
        self._on_event = on_event
        self._on_lost = on_lost
        self.interval = interval
        self.default_sink_name = default_sink_name
        self.was_playing = False
        self._task: asyncio.Task[None] | None = None

    @property
    def active(self) -> bool:
        return self._task is not None

    def start(self) -> None:
        if self._task is not None:
            return
        self.was_playing = False
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.debug(f"Playback monitor started (interval: {self.interval}s)")

    def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        self._task = None
        logger.debug("Playback monitor stopped")

    def observe(self, sink_input_list: str) -> PlaybackEvent | None:
        """Update the latch from one poll result and return the event it triggers, if any."""
        is_playing = bool(sink_input_list.strip())
        if is_playing and not self.was_playing:
            self.was_playing = True
            return Started(sink_name=parse_sink_name(sink_input_list, self.default_sink_name))
        if not is_playing and self.was_playing:
            self.was_playing = False
            return Stopped()
        return None

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                output = await self._executor.run("list", "short", "sink-inputs")
            except CommandError as e:
                logger.warning(f"Polling sink inputs failed, connection likely dropped: {e}")
                self._task = None
                self._on_lost(e)
                return
            event = self.observe(output)
            if event is not None:
                logger.info(f"Playback event: {event}")
                self._on_event(event)
