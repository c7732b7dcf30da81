from dataclasses import dataclass, field


@dataclass(frozen=True)
class AnalysisToolConfig:
    """Paths and defaults needed to run the external conflict analysis tool."""

    command: list[str] = field(default_factory=lambda: ["java", "-jar", "conflict-analysis.jar"])
    dependencies_path: str = ""
    maven_home: str = ""
    gradle_home: str = ""
    timeout_seconds: float = 1800.0
    default_main_class: str = "Main"
    default_main_method: str = "main"


@dataclass(frozen=True)
class ReproductionConfig:
    clone_timeout_seconds: float = 600.0
    git_timeout_seconds: float = 120.0
    diff_context_lines: int = 999_999
    committer_name: str = "merge-conflict-analyzer"
    committer_email: str = "merge-conflict-analyzer@users.noreply.github.com"
