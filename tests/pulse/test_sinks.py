# mypy: disable-error-code=no-untyped-def

import pytest

from soundsupervisor.pulse.models import SinkDescriptor, SinkInputDescriptor
from soundsupervisor.pulse.sinks import SinkQueryService, parse_info, parse_sink_inputs, parse_sinks
from tests.pulse.fakes import FakeExecutor, fail

SINKS_OUTPUT = (
    "0\talsa_output.platform-bcm2835_audio.stereo-fallback\tmodule-alsa-card.c\ts16le 2ch 44100Hz\tSUSPENDED\n"
    "1\tbalena-sound.input\tmodule-null-sink.c\ts16le 2ch 44100Hz\tRUNNING\n"
)

INFO_OUTPUT = """Server String: tcp:localhost:4317
Library Protocol Version: 35
Server Name: pulseaudio
Server Version: 16.1
Default Sink: balena-sound.input
Cookie: 0a1b:2c3d
"""


def test_parse_sinks() -> None:
    sinks = parse_sinks(SINKS_OUTPUT)
    assert sinks == [
        SinkDescriptor(
            index=0,
            name="alsa_output.platform-bcm2835_audio.stereo-fallback",
            module_id="module-alsa-card.c",
            sample_spec="s16le 2ch 44100Hz",
            state="SUSPENDED",
        ),
        SinkDescriptor(
            index=1,
            name="balena-sound.input",
            module_id="module-null-sink.c",
            sample_spec="s16le 2ch 44100Hz",
            state="RUNNING",
        ),
    ]


def test_parse_sinks_skips_malformed_lines() -> None:
    sinks = parse_sinks("garbage\n\n2\tshort-sink\n")
    assert sinks == [SinkDescriptor(index=2, name="short-sink", module_id="", sample_spec="", state="")]


def test_parse_sink_inputs() -> None:
    sink_inputs = parse_sink_inputs("7\t1\t12\tprotocol-native.c\ts16le 2ch 44100Hz\n")
    assert sink_inputs == [
        SinkInputDescriptor(index=7, sink="1", client="12", driver="protocol-native.c", sample_spec="s16le 2ch 44100Hz")
    ]


def test_parse_info_keeps_colons_in_values() -> None:
    info = parse_info(INFO_OUTPUT)
    assert info["Server Name"] == "pulseaudio"
    assert info["Server String"] == "tcp:localhost:4317"
    assert info["Cookie"] == "0a1b:2c3d"
    assert len(info) == 6


@pytest.mark.asyncio
async def test_get_sinks(executor: FakeExecutor) -> None:
    executor.script("list", "short", "sinks", default=SINKS_OUTPUT)
    sinks = await SinkQueryService(executor).get_sinks()
    assert [s.name for s in sinks] == ["alsa_output.platform-bcm2835_audio.stereo-fallback", "balena-sound.input"]


@pytest.mark.asyncio
async def test_get_sinks_returns_empty_on_failure(executor: FakeExecutor) -> None:
    executor.script("list", "short", "sinks", default=fail("list"))
    assert await SinkQueryService(executor).get_sinks() == []


@pytest.mark.asyncio
async def test_get_sink_inputs_returns_empty_on_failure(executor: FakeExecutor) -> None:
    executor.script("list", "short", "sink-inputs", default=fail("list"))
    assert await SinkQueryService(executor).get_sink_inputs() == []


@pytest.mark.asyncio
async def test_get_info(executor: FakeExecutor) -> None:
    executor.script("info", default=INFO_OUTPUT)
    info = await SinkQueryService(executor).get_info()
    assert info["Default Sink"] == "balena-sound.input"


@pytest.mark.asyncio
async def test_get_info_returns_empty_on_failure(executor: FakeExecutor) -> None:
    executor.script("info", default=fail("info"))
    assert await SinkQueryService(executor).get_info() == {}


@pytest.mark.asyncio
async def test_move_sink_input(executor: FakeExecutor) -> None:
    await SinkQueryService(executor).move_sink_input(7, 1)
    assert executor.calls == [("move-sink-input", "7", "1")]


@pytest.mark.asyncio
async def test_move_sink_input_swallows_failure(executor: FakeExecutor) -> None:
    executor.script("move-sink-input", "7", "9", default=fail("move-sink-input"))
    await SinkQueryService(executor).move_sink_input(7, 9)
    assert executor.calls == [("move-sink-input", "7", "9")]
