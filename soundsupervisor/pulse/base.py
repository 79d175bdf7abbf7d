import abc

from soundsupervisor.pulse.models import ServerAddress


class CommandExecutor(abc.ABC):
    """Abstract base class for running commands against an audio server."""

    address: ServerAddress

    @abc.abstractmethod
    async def run(self, *args: str) -> str:
        """Run a single command against the server and return its standard output.

        Raises CommandError when the command cannot be run or fails.
        """
        ...
