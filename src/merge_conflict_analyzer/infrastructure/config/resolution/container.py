"""Functional DI container: builds fully-wired workflows from AppConfig.

Convenient free-function API for FastAPI dependency injection.
"""

from functools import partial

from merge_conflict_analyzer.core.application.policies.bounded_retry import BoundedRetry
from merge_conflict_analyzer.core.application.ports.common.exceptions import is_transient
from merge_conflict_analyzer.core.application.skills.analysis.config.analysis_tool_config import (
    AnalysisToolConfig,
    ReproductionConfig,
)
from merge_conflict_analyzer.core.application.skills.analysis.deliver_analysis_skill import (
    DeliverAnalysisSkill,
)
from merge_conflict_analyzer.core.application.skills.analysis.enrich_analysis_result_skill import (
    EnrichAnalysisResultSkill,
)
from merge_conflict_analyzer.core.application.skills.analysis.invoke_analysis_skill import (
    InvokeAnalysisSkill,
)
from merge_conflict_analyzer.core.application.skills.analysis.reproduce_merge_skill import (
    ReproduceMergeSkill,
)
from merge_conflict_analyzer.core.application.skills.analysis.resolve_merge_state_skill import (
    ResolveMergeStateSkill,
)
from merge_conflict_analyzer.core.application.workflows.analysis.merge_analysis_workflow import (
    MergeAnalysisWorkflow,
)
from merge_conflict_analyzer.core.application.workflows.registration.repository_registration_workflow import (
    RepositoryRegistrationWorkflow,
)
from merge_conflict_analyzer.infrastructure.common.filesystem.file_locator import FileIndex
from merge_conflict_analyzer.infrastructure.common.subprocess.command_runner import (
    AsyncCommandRunner,
)
from merge_conflict_analyzer.infrastructure.config.app_config import AppConfig
from merge_conflict_analyzer.infrastructure.tools.analysis.filesystem_report_archive import (
    FilesystemReportArchive,
)
from merge_conflict_analyzer.infrastructure.tools.services.analysis_ingestion_client import (
    AnalysisIngestionClient,
)
from merge_conflict_analyzer.infrastructure.tools.services.repository_registry_client import (
    RepositoryRegistryClient,
)
from merge_conflict_analyzer.infrastructure.tools.services.settings_client import SettingsClient
from merge_conflict_analyzer.infrastructure.tools.vcs.github.github_rest_client import (
    GitHubRestClient,
)


def build_merge_analysis_workflow(config: AppConfig | None = None) -> MergeAnalysisWorkflow:
    """Assemble the merge analysis pipeline with GitHub, git and the analysis tool."""
    config = config or AppConfig()
    app, github, analysis = config.app, config.github, config.analysis

    vcs = GitHubRestClient(settings=github)
    runner = AsyncCommandRunner()

    resolve = ResolveMergeStateSkill(
        vcs=vcs,
        retry=BoundedRetry(
            max_attempts=github.merge_poll_attempts,
            delay_seconds=github.merge_poll_delay_seconds,
            retry_on=is_transient,
        ),
    )
    reproduce = ReproduceMergeSkill(
        runner=runner,
        vcs=vcs,
        config=ReproductionConfig(
            clone_timeout_seconds=app.clone_timeout_seconds,
            git_timeout_seconds=app.git_timeout_seconds,
            diff_context_lines=app.diff_context_lines,
            committer_name=app.committer_name,
            committer_email=app.committer_email,
        ),
    )
    invoke = InvokeAnalysisSkill(
        runner=runner,
        config=AnalysisToolConfig(
            command=list(analysis.command),
            dependencies_path=analysis.dependencies_path,
            maven_home=analysis.maven_home,
            gradle_home=analysis.gradle_home,
            timeout_seconds=analysis.timeout_seconds,
            default_main_class=analysis.default_main_class,
            default_main_method=analysis.default_main_method,
        ),
    )
    enrich = EnrichAnalysisResultSkill(
        locator_factory=partial(FileIndex, source_extension=analysis.source_extension),
        output_file_name=analysis.output_file,
        modified_lines_file_name=analysis.modified_lines_file,
    )
    deliver = DeliverAnalysisSkill(
        vcs=vcs,
        ingestion=AnalysisIngestionClient(settings=config.services),
        inline_comments_enabled=github.inline_comments_enabled,
    )
    archive = (
        FilesystemReportArchive(
            reports_dir=app.reports_dir,
            output_file=analysis.output_file,
            modified_lines_file=analysis.modified_lines_file,
        )
        if app.is_development
        else None
    )

    return MergeAnalysisWorkflow(
        registry=RepositoryRegistryClient(settings=config.services),
        settings=SettingsClient(settings=config.services),
        resolve=resolve,
        reproduce=reproduce,
        invoke=invoke,
        enrich=enrich,
        deliver=deliver,
        workspace_root=app.workspace_root,
        archive=archive,
    )


def build_registration_workflow(config: AppConfig | None = None) -> RepositoryRegistrationWorkflow:
    config = config or AppConfig()
    return RepositoryRegistrationWorkflow(
        registry=RepositoryRegistryClient(settings=config.services)
    )
