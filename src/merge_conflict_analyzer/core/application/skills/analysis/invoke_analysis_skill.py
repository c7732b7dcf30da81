import structlog

from merge_conflict_analyzer.core.application.exceptions import ConfigurationError
from merge_conflict_analyzer.core.application.ports import CommandResult, CommandRunnerPort
from merge_conflict_analyzer.core.application.ports.common.exceptions import CommandTimeoutError
from merge_conflict_analyzer.core.application.skills.analysis.config.analysis_tool_config import (
    AnalysisToolConfig,
)
from merge_conflict_analyzer.core.application.skills.analysis.contracts.analysis_contracts import (
    AnalysisInvocation,
    InvokeAnalysisInput,
)
from merge_conflict_analyzer.core.application.skills.skill import BaseSkill

logger = structlog.get_logger()


class InvokeAnalysisSkill(BaseSkill[InvokeAnalysisInput, CommandResult | None]):
    """Runs the external conflict analysis tool over a reproduced merge.

    A non-zero exit is only logged: the tool may still have written partial
    results, and the enrichment step treats a missing results file as the
    real failure. Returns None when the tool timed out.
    """

    def __init__(self, runner: CommandRunnerPort, config: AnalysisToolConfig) -> None:
        self._runner = runner
        self._config = config

    async def execute(self, input_data: InvokeAnalysisInput) -> CommandResult | None:
        invocation = self.build_invocation(input_data)
        logger.info(
            "Invoking analysis tool",
            merge_sha=input_data.context.reproduced_merge_sha,
            argv=invocation.argv,
        )
        try:
            result = await self._runner.run(
                invocation.argv, cwd=invocation.cwd, timeout=invocation.timeout_seconds
            )
        except CommandTimeoutError as exc:
            logger.warning(
                "Analysis tool timed out",
                error_type="CommandTimeoutError",
                error_details=str(exc),
            )
            return None

        if not result.succeeded:
            logger.warning(
                "Analysis tool exited with non-zero status",
                error_type="AnalysisToolExit",
                error_code=result.returncode,
                error_details=result.stderr[-2000:],
            )
        else:
            logger.info("Analysis tool finished", stdout_length=len(result.stdout))
        return result

    def build_invocation(self, input_data: InvokeAnalysisInput) -> AnalysisInvocation:
        """Derive the tool's command line from the merge context and tool paths."""
        self._validate_config()
        ctx = input_data.context
        settings = input_data.pr_settings
        main_class = settings.main_class if settings else self._config.default_main_class
        main_method = settings.main_method if settings else self._config.default_main_method

        argv = [
            *self._config.command,
            "-hc", ctx.reproduced_merge_sha,
            "-hl", ctx.left_sha,
            "-hr", ctx.right_sha,
            "-hb", ctx.merge_base_sha,
            "-cp", self._config.dependencies_path,
            "-pp", str(input_data.checkout_dir),
            "-mvn", self._config.maven_home,
            "-gradle", self._config.gradle_home,
            "-mc", main_class,
            "-mm", main_method,
        ]  # fmt: skip
        if settings and settings.base_class:
            argv += ["-bc", settings.base_class]
        return AnalysisInvocation(
            argv=argv, cwd=input_data.checkout_dir, timeout_seconds=self._config.timeout_seconds
        )

    def _validate_config(self) -> None:
        missing = [
            name
            for name, value in (
                ("command", self._config.command),
                ("dependencies_path", self._config.dependencies_path),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Analysis tool is not configured: missing {', '.join(missing)}",
                context={"missing": missing, "step": "invoke_analysis"},
            )
