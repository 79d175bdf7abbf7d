import asyncio
import contextlib
import logging
import typing

from soundsupervisor.pulse.base import CommandExecutor
from soundsupervisor.pulse.models import ServerAddress

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """A pactl invocation failed, timed out or could not be started."""

    def __init__(self, argv: typing.Sequence[str], message: str, returncode: int | None = None) -> None:
        super().__init__(f"{' '.join(argv)}: {message}")
        self.argv = list(argv)
        self.returncode = returncode
        self.message = message


class PactlExecutor(CommandExecutor):
    """CommandExecutor implementation using `pactl --server` subprocess calls."""

    def __init__(self, address: ServerAddress, binary: str = "pactl", timeout: float = 5.0) -> None:
        """Initialize PactlExecutor.

        Args:
            address: Server every command is sent to. Passed on the command line,
                     the process environment is never touched.
            binary: Name or path of the pactl executable.
            timeout: Seconds to wait for a command before killing it.
        """
        self.address = address
        self.binary = binary
        self.timeout = timeout

    async def run(self, *args: str) -> str:
        cmd = [self.binary, "--server", str(self.address), *args]
        logger.debug(f"Running command: {' '.join(cmd)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise CommandError(cmd, f"could not start: {e}") from e
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise CommandError(cmd, f"timed out after {self.timeout}s") from e
        except asyncio.CancelledError:
            if process.returncode is None:
                with contextlib.suppress(ProcessLookupError):
                    process.kill()
                await asyncio.shield(process.wait())
            raise
        if process.returncode != 0:
            error_msg = stderr.decode(errors="replace").strip()
            raise CommandError(cmd, error_msg or "failed", returncode=process.returncode)
        return stdout.decode(errors="replace")
