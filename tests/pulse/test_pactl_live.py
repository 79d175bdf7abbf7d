# mypy: disable-error-code=no-untyped-def

import asyncio
import os

import pytest

from soundsupervisor.pulse.config import SupervisorConfig
from soundsupervisor.pulse.models import ConnectionState
from soundsupervisor.pulse.supervisor import ConnectionSupervisor


@pytest.fixture
def live_supervisor() -> ConnectionSupervisor:
    address = os.environ.get("PULSE_SERVER", "tcp:localhost:4317")
    return ConnectionSupervisor(address, SupervisorConfig(probe_interval=0.5, max_retries=4))


@pytest.mark.gui
@pytest.mark.asyncio
async def test_connects_to_real_server(live_supervisor: ConnectionSupervisor) -> None:
    ready = asyncio.Event()
    live_supervisor.on("ready", ready.set)
    live_supervisor.start()
    try:
        await asyncio.wait_for(ready.wait(), timeout=5)
        assert live_supervisor.state == ConnectionState.CONNECTED
        sinks = await live_supervisor.get_sinks()
        assert len(sinks) > 0
        info = await live_supervisor.get_info()
        assert "Server Name" in info
    finally:
        live_supervisor.destroy()


@pytest.mark.gui
@pytest.mark.asyncio
async def test_volume_round_trip(live_supervisor: ConnectionSupervisor) -> None:
    original = await live_supervisor.get_volume()
    try:
        await live_supervisor.set_volume(37)
        assert await live_supervisor.get_volume() == 37
    finally:
        await live_supervisor.set_volume(original)
