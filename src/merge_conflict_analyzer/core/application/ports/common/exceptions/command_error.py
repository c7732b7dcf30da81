from merge_conflict_analyzer.core.application.ports.common.exceptions.infra_error import InfraError


class CommandExecutionError(InfraError):
    """A subprocess exited with a non-zero status."""

    def __init__(self, args: list[str], returncode: int | None, stderr: str) -> None:
        self.command = args
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"'{' '.join(args)}' exited with {returncode}: {stderr.strip()}")


class CommandTimeoutError(CommandExecutionError):
    """A subprocess exceeded its timeout and was killed."""

    def __init__(self, args: list[str], timeout: float) -> None:
        self.timeout = timeout
        super().__init__(args, None, f"timed out after {timeout}s")
