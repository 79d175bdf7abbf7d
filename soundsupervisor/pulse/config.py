import dataclasses


@dataclasses.dataclass(frozen=True)
class SupervisorConfig:
    """Tunable constants of the connection supervisor."""

    probe_interval: float = 3.0
    """Seconds between liveness probes while connecting."""

    poll_interval: float = 1.0
    """Seconds between polls of the active streams while connected."""

    max_retries: int = 20
    """Consecutive failed probes tolerated before giving up."""

    command_timeout: float = 5.0
    """Seconds a single pactl call may take before it is killed."""

    default_sink_name: str = "balena-sound.input"
    """Sink name reported on playback start when the stream list can't be parsed."""

    pactl_binary: str = "pactl"
    """Name or path of the pactl executable."""

    initial_volume: int = 75
    """Volume assumed until the server is queried."""

    def __post_init__(self) -> None:
        if self.probe_interval < 0 or self.poll_interval < 0:
            raise ValueError("Intervals must not be negative")
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.command_timeout <= 0:
            raise ValueError("command_timeout must be positive")
        if not 0 <= self.initial_volume <= 100:
            raise ValueError(f"initial_volume out of range: {self.initial_volume}")
