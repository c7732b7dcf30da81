from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from merge_conflict_analyzer.infrastructure.config.main_settings import Settings
from merge_conflict_analyzer.infrastructure.tools.analysis.config.analysis_tool_settings import (
    AnalysisToolSettings,
)
from merge_conflict_analyzer.infrastructure.tools.services.config.services_settings import (
    ServicesSettings,
)
from merge_conflict_analyzer.infrastructure.tools.vcs.github.config.github_settings import (
    GitHubSettings,
)


class AppConfig(BaseSettings):
    """
    Master config class combining all sub-settings.
    """

    app: Settings = Field(default_factory=Settings)
    github: GitHubSettings = Field(default_factory=GitHubSettings)
    services: ServicesSettings = Field(default_factory=ServicesSettings)
    analysis: AnalysisToolSettings = Field(default_factory=AnalysisToolSettings)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
