import logging
import typing

logger = logging.getLogger(__name__)

Listener = typing.Callable[..., None]

EVENTS = ("connect", "ready", "disconnect", "play", "stop", "give_up")


class EventEmitter:
    """Synchronous listener registry; listeners run in registration order."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {name: [] for name in EVENTS}

    def on(self, event: str, listener: Listener) -> None:
        """Register a listener for an event."""
        self._listeners_for(event).append(listener)

    def off(self, event: str, listener: Listener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        listeners = self._listeners_for(event)
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event: str, *args: typing.Any) -> None:
        for listener in list(self._listeners_for(event)):
            try:
                listener(*args)
            except Exception:
                logger.exception(f"Error in listener for event '{event}'")

    def _listeners_for(self, event: str) -> list[Listener]:
        if event not in self._listeners:
            raise ValueError(f"Unknown event: {event}")
        return self._listeners[event]
