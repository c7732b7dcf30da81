from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-level settings: runtime environment, local directories and
    git behaviour. Collaborator-specific config lives in isolated settings
    classes (GitHubSettings, ServicesSettings, AnalysisToolSettings).
    """

    app_name: str = Field(default="Merge Conflict Analyzer", alias="APP_NAME")
    env: str = Field(default="local", alias="APP_ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="auto", alias="LOG_FORMAT")
    trace_console_export: bool = Field(default=False, alias="OTEL_CONSOLE_EXPORT")
    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")

    workspace_root: Path = Field(default=Path("./runtime_data/workspaces"), alias="WORKSPACE_ROOT")
    reports_dir: Path = Field(default=Path("./runtime_data/reports"), alias="REPORTS_DIR")

    clone_timeout_seconds: float = Field(default=600.0, alias="CLONE_TIMEOUT_SECONDS")
    git_timeout_seconds: float = Field(default=120.0, alias="GIT_TIMEOUT_SECONDS")
    diff_context_lines: int = Field(default=999_999, alias="DIFF_CONTEXT_LINES")
    committer_name: str = Field(default="merge-conflict-analyzer", alias="GIT_COMMITTER_NAME")
    committer_email: str = Field(
        default="merge-conflict-analyzer@users.noreply.github.com", alias="GIT_COMMITTER_EMAIL"
    )

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    @property
    def is_development(self) -> bool:
        return self.env.lower() in ("development", "dev")
