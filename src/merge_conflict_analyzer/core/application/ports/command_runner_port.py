from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from merge_conflict_analyzer.core.application.ports.common.exceptions import CommandExecutionError


@dataclass(frozen=True)
class CommandResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


class CommandRunnerPort(ABC):

    @abstractmethod
    async def run(
        self, args: list[str], cwd: Path | None = None, timeout: float | None = None
    ) -> CommandResult:
        """Runs a command and captures its output. Raises CommandTimeoutError on timeout."""

    async def run_checked(
        self, args: list[str], cwd: Path | None = None, timeout: float | None = None
    ) -> CommandResult:
        """Like run(), but raises CommandExecutionError on a non-zero exit."""
        result = await self.run(args, cwd=cwd, timeout=timeout)
        if not result.succeeded:
            raise CommandExecutionError(self.describe(args), result.returncode, result.stderr)
        return result

    def describe(self, args: list[str]) -> list[str]:
        """Argument list safe to log; subclasses redact secrets here."""
        return list(args)
