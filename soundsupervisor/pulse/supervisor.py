import asyncio
import logging
import typing

from soundsupervisor.pulse.base import CommandExecutor
from soundsupervisor.pulse.config import SupervisorConfig
from soundsupervisor.pulse.events import EventEmitter, Listener
from soundsupervisor.pulse.executor import CommandError, PactlExecutor
from soundsupervisor.pulse.models import (
    ConnectionState,
    PlaybackEvent,
    ServerAddress,
    SinkDescriptor,
    SinkInputDescriptor,
    Started,
)
from soundsupervisor.pulse.monitor import PlaybackMonitor
from soundsupervisor.pulse.sinks import SinkQueryService
from soundsupervisor.pulse.volume import VolumeController

logger = logging.getLogger(__name__)


class ConnectionSupervisor:
    """Keeps a connection to a PulseAudio server alive and reports playback.

    Emits, in lifecycle order: `connect`, `ready`, `play(sink_name)`, `stop`,
    `disconnect`, and `give_up` once the probe retries are exhausted. All work
    runs on the asyncio loop that was running when start() was called.
    """

    def __init__(
        self,
        address: str | ServerAddress,
        config: SupervisorConfig | None = None,
        executor: CommandExecutor | None = None,
    ) -> None:
        self.address = address if isinstance(address, ServerAddress) else ServerAddress.parse(address)
        self.config = config or SupervisorConfig()
        self.executor = executor or PactlExecutor(
            self.address, binary=self.config.pactl_binary, timeout=self.config.command_timeout
        )
        self.volume = VolumeController(self.executor, initial_volume=self.config.initial_volume)
        self.sinks = SinkQueryService(self.executor)
        self._events = EventEmitter()
        self._monitor = PlaybackMonitor(
            self.executor,
            on_event=self._handle_playback,
            on_lost=self._handle_connection_lost,
            interval=self.config.poll_interval,
            default_sink_name=self.config.default_sink_name,
        )
        self._state = ConnectionState.DISCONNECTED
        self._retry_count = 0
        self._probe_task: asyncio.Task[None] | None = None
        # bumped by start() and destroy(); emits from an older cycle are dropped
        self._generation = 0
        self._monitor_generation = 0

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def retry_count(self) -> int:
        return self._retry_count

    @property
    def monitoring(self) -> bool:
        """Whether the playback monitor is running."""
        return self._monitor.active

    @property
    def current_volume(self) -> int:
        return self.volume.current_volume

    def on(self, event: str, listener: Listener) -> None:
        self._events.on(event, listener)

    def off(self, event: str, listener: Listener) -> None:
        self._events.off(event, listener)

    def start(self) -> None:
        """Start probing the server. No-op while connecting or connected.

        Raises RuntimeError, leaving the state untouched, when no asyncio loop is running.
        """
        if self._state in (ConnectionState.CONNECTING, ConnectionState.CONNECTED):
            return
        loop = asyncio.get_running_loop()
        self._generation += 1
        self._retry_count = 0
        logger.info(f"Connecting to PulseAudio at {self.address.host}:{self.address.port}")
        self._start_probing(loop, delay=0)

    def destroy(self) -> None:
        """Cancel all pending work. Idempotent; no event is emitted afterwards."""
        self._generation += 1
        if self._probe_task is not None:
            self._probe_task.cancel()
            self._probe_task = None
        self._monitor.stop()
        if self._state != ConnectionState.DISCONNECTED:
            self._set_state(ConnectionState.DISCONNECTED)

    async def set_volume(self, percent: float) -> None:
        await self.volume.set_volume(percent)

    async def get_volume(self) -> int:
        return await self.volume.get_volume()

    async def get_sinks(self) -> list[SinkDescriptor]:
        return await self.sinks.get_sinks()

    async def get_sink_inputs(self) -> list[SinkInputDescriptor]:
        return await self.sinks.get_sink_inputs()

    async def get_info(self) -> dict[str, str]:
        return await self.sinks.get_info()

    async def move_sink_input(self, stream_index: int, sink_index: int) -> None:
        await self.sinks.move_sink_input(stream_index, sink_index)

    def _set_state(self, state: ConnectionState) -> None:
        logger.debug(f"State {self._state.value} -> {state.value}")
        self._state = state

    def _emit(self, generation: int, event: str, *args: typing.Any) -> None:
        if generation != self._generation:
            logger.debug(f"Dropping '{event}' from a superseded connection cycle")
            return
        self._events.emit(event, *args)

    def _start_probing(self, loop: asyncio.AbstractEventLoop, delay: float) -> None:
        self._probe_task = loop.create_task(self._probe(self._generation, delay))
        self._set_state(ConnectionState.CONNECTING)

    async def _probe(self, generation: int, delay: float) -> None:
        if delay:
            await asyncio.sleep(delay)
        while True:
            try:
                await self.executor.run("stat")
                break
            except CommandError as e:
                logger.info(f"Error connecting to audio server - {e}")
            self._retry_count += 1
            if self._retry_count > self.config.max_retries:
                self._probe_task = None
                self._set_state(ConnectionState.GIVEN_UP)
                logger.error("Max retries exceeded. Giving up.")
                self._emit(generation, "give_up")
                return
            logger.info(
                f"Retry {self._retry_count}/{self.config.max_retries} in {self.config.probe_interval}s..."
            )
            await asyncio.sleep(self.config.probe_interval)
        self._probe_task = None
        self._retry_count = 0
        self._set_state(ConnectionState.CONNECTED)
        self._monitor_generation = generation
        self._monitor.start()
        logger.info(f"Connected to PulseAudio at {self.address.host}:{self.address.port}")
        self._emit(generation, "connect")
        self._emit(generation, "ready")

    def _handle_playback(self, event: PlaybackEvent) -> None:
        if isinstance(event, Started):
            self._emit(self._monitor_generation, "play", event.sink_name)
        else:
            self._emit(self._monitor_generation, "stop")

    def _handle_connection_lost(self, error: CommandError) -> None:
        generation = self._monitor_generation
        if generation != self._generation or self._state != ConnectionState.CONNECTED:
            return
        self._monitor.stop()
        self._set_state(ConnectionState.DISCONNECTED)
        logger.info("Disconnected from PulseAudio")
        self._emit(generation, "disconnect")
        self._retry_count = 0
        # a disconnect listener may have called destroy() or start()
        if generation != self._generation or self._state != ConnectionState.DISCONNECTED:
            return
        self._start_probing(asyncio.get_running_loop(), delay=self.config.probe_interval)
