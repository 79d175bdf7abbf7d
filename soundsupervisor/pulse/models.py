import dataclasses
import enum

DEFAULT_PORT = 4317
"""Port the PulseAudio TCP module listens on when the address omits one."""

TCP_SCHEMES = ("tcp", "tcp4", "tcp6")
"""Address schemes pactl accepts for a host:port server."""


@dataclasses.dataclass(frozen=True)
class ServerAddress:
    """Dataclass for the PulseAudio server address (mirrors `pactl --server`)."""

    host: str
    """Hostname or IP address of the audio server."""

    port: int = DEFAULT_PORT
    """TCP port of the native protocol module."""

    scheme: str = "tcp"
    """Address scheme, one of TCP_SCHEMES."""

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("Server address has an empty host")
        if not 0 < self.port < 65536:
            raise ValueError(f"Invalid server port: {self.port}")
        if self.scheme not in TCP_SCHEMES:
            raise ValueError(f"Unsupported server address scheme: {self.scheme}")

    @classmethod
    def parse(cls, address: str) -> "ServerAddress":
        """Parse an address of the form `scheme:host:port`.

        Also accepts `scheme:host`, `host:port` and `host`. The scheme defaults
        to `tcp` and the port to DEFAULT_PORT.
        """
        parts = address.strip().split(":")
        if len(parts) == 3:
            scheme, host, port = parts
        elif len(parts) == 2 and parts[0] in TCP_SCHEMES:
            scheme, host, port = parts[0], parts[1], ""
        elif len(parts) == 2:
            scheme, host, port = "tcp", parts[0], parts[1]
        elif len(parts) == 1:
            scheme, host, port = "tcp", parts[0], ""
        else:
            raise ValueError(f"Invalid server address '{address}'")
        if not port:
            return cls(host=host, scheme=scheme)
        if not port.isdigit():
            raise ValueError(f"Invalid server port in address '{address}'")
        return cls(host=host, port=int(port), scheme=scheme)

    def __str__(self) -> str:
        return f"{self.scheme}:{self.host}:{self.port}"


class ConnectionState(str, enum.Enum):
    """State of the connection supervisor."""

    DISCONNECTED = "disconnected"
    """Not connected and not probing."""

    CONNECTING = "connecting"
    """Probing the server until it answers or the retries run out."""

    CONNECTED = "connected"
    """Server answered; playback monitor is running."""

    GIVEN_UP = "given_up"
    """Retries exhausted; only an explicit start() resumes probing."""


@dataclasses.dataclass(frozen=True)
class SinkDescriptor:
    """Dataclass for one line of `pactl list short sinks`."""

    index: int | None
    """Sink index as reported by the server."""

    name: str
    """Sink name."""

    module_id: str
    """Owner module of the sink."""

    sample_spec: str
    """Sample specification (e.g., 's16le 2ch 44100Hz')."""

    state: str
    """Sink state (e.g., 'RUNNING', 'SUSPENDED')."""


@dataclasses.dataclass(frozen=True)
class SinkInputDescriptor:
    """Dataclass for one line of `pactl list short sink-inputs` (an active stream)."""

    index: int | None
    """Stream index, used as the source of a move."""

    sink: str
    """Second column (index 1): the destination sink index as pactl reports it.

    The sink name carried by the `play` event is read from the third column
    (index 2) of the first line instead, see monitor.parse_sink_name, so the
    two values are not expected to match.
    """

    client: str
    """Client owning the stream."""

    driver: str
    """Driver that created the stream."""

    sample_spec: str
    """Sample specification of the stream."""


@dataclasses.dataclass(frozen=True)
class Started:
    """Playback started on a sink."""

    sink_name: str
    """Best-effort name of the sink receiving the first active stream."""


@dataclasses.dataclass(frozen=True)
class Stopped:
    """All active streams are gone."""


PlaybackEvent = Started | Stopped
