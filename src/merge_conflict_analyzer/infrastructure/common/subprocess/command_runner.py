import asyncio
from pathlib import Path

import structlog

from merge_conflict_analyzer.core.application.ports import CommandResult, CommandRunnerPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import CommandTimeoutError
from merge_conflict_analyzer.infrastructure.observability.metrics_service import (
    SUBPROCESS_CALLS_TOTAL,
)
from merge_conflict_analyzer.infrastructure.observability.redaction_service import redact_text

logger = structlog.get_logger()


class AsyncCommandRunner(CommandRunnerPort):
    """Runs OS commands with asyncio, capturing decoded stdout/stderr."""

    def __init__(self, default_timeout: float | None = None) -> None:
        self._default_timeout = default_timeout

    async def run(
        self, args: list[str], cwd: Path | None = None, timeout: float | None = None
    ) -> CommandResult:
        timeout = timeout if timeout is not None else self._default_timeout
        program = Path(args[0]).name if args else "<empty>"
        logger.debug("Running command", argv=self.describe(args), cwd=str(cwd) if cwd else None)

        proc = await asyncio.create_subprocess_exec(
            *args,
            cwd=cwd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except TimeoutError as exc:
            proc.kill()
            await proc.wait()
            SUBPROCESS_CALLS_TOTAL.labels(program=program, outcome="timeout").inc()
            raise CommandTimeoutError(self.describe(args), timeout or 0.0) from exc

        result = CommandResult(
            returncode=proc.returncode if proc.returncode is not None else -1,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=redact_text(stderr.decode("utf-8", errors="replace")),
        )
        outcome = "success" if result.succeeded else "failure"
        SUBPROCESS_CALLS_TOTAL.labels(program=program, outcome=outcome).inc()
        return result

    def describe(self, args: list[str]) -> list[str]:
        return [redact_text(arg) for arg in args]
