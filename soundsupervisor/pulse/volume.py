import logging
import math
import re

from soundsupervisor.pulse.base import CommandExecutor
from soundsupervisor.pulse.executor import CommandError

logger = logging.getLogger(__name__)

_PERCENT_RE = re.compile(r"(\d+)%")


def clamp_volume(percent: float) -> int:
    """Clamp to [0, 100] and round half up to an integer percentage."""
    clamped = max(0.0, min(100.0, float(percent)))
    return int(math.floor(clamped + 0.5))


class VolumeController:
    """Default sink volume with a cached last-known value."""

    def __init__(self, executor: CommandExecutor, initial_volume: int = 75) -> None:
        self._executor = executor
        self._current_volume = clamp_volume(initial_volume)

    @property
    def current_volume(self) -> int:
        """Best-known volume of the default sink (0-100)."""
        return self._current_volume

    async def set_volume(self, percent: float) -> None:
        """Set the default sink volume.

        The cached value is updated before the command is sent and is kept
        even if the command fails.
        """
        if math.isnan(percent):
            logger.warning("Ignoring setVolume with NaN percentage")
            return
        volume = clamp_volume(percent)
        self._current_volume = volume
        logger.debug(f"Setting default sink volume to {volume}%")
        try:
            await self._executor.run("set-sink-volume", "@DEFAULT_SINK@", f"{volume}%")
        except CommandError as e:
            logger.warning(f"setVolume failed: {e}")

    async def get_volume(self) -> int:
        """Query the default sink volume; returns the cached value on failure."""
        try:
            # "Volume: front-left: 65536 /  100% / 0.00 dB, ..."
            output = await self._executor.run("get-sink-volume", "@DEFAULT_SINK@")
        except CommandError as e:
            logger.warning(f"getVolume failed: {e}")
            return self._current_volume
        match = _PERCENT_RE.search(output)
        if not match:
            logger.warning(f"getVolume could not parse output: {output.strip()!r}")
            return self._current_volume
        self._current_volume = clamp_volume(int(match.group(1)))
        return self._current_volume
