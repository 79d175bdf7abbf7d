from soundsupervisor.pulse.config import SupervisorConfig
from soundsupervisor.pulse.executor import CommandError, PactlExecutor
from soundsupervisor.pulse.models import (
    ConnectionState,
    PlaybackEvent,
    ServerAddress,
    SinkDescriptor,
    SinkInputDescriptor,
    Started,
    Stopped,
)
from soundsupervisor.pulse.supervisor import ConnectionSupervisor

__all__ = [
    "CommandError",
    "ConnectionState",
    "ConnectionSupervisor",
    "PactlExecutor",
    "PlaybackEvent",
    "ServerAddress",
    "SinkDescriptor",
    "SinkInputDescriptor",
    "Started",
    "Stopped",
    "SupervisorConfig",
]
