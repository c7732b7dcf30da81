from merge_conflict_analyzer.core.application.ports.analysis_ingestion_port import (
    AnalysisIngestionPort,
)
from merge_conflict_analyzer.core.application.ports.command_runner_port import (
    CommandResult,
    CommandRunnerPort,
)
from merge_conflict_analyzer.core.application.ports.file_locator_port import FileLocatorPort
from merge_conflict_analyzer.core.application.ports.repository_registry_port import (
    RepositoryRegistryPort,
)
from merge_conflict_analyzer.core.application.ports.report_archive_port import ReportArchivePort
from merge_conflict_analyzer.core.application.ports.settings_port import SettingsPort
from merge_conflict_analyzer.core.application.ports.vcs_port import VcsPort

__all__ = [
    "AnalysisIngestionPort",
    "CommandResult",
    "CommandRunnerPort",
    "FileLocatorPort",
    "ReportArchivePort",
    "RepositoryRegistryPort",
    "SettingsPort",
    "VcsPort",
]
