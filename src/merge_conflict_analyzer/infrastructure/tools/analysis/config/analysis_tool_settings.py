import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisToolSettings(BaseSettings):
    """Where the conflict analysis tool lives and how its results are named."""

    command: list[str] = Field(
        default_factory=lambda: ["java", "-jar", "conflict-analysis.jar"],
        alias="ANALYSIS_COMMAND",
    )
    dependencies_path: str = Field(default="", alias="ANALYSIS_DEPENDENCIES_PATH")
    maven_home: str = Field(default="", alias="MAVEN_HOME")
    gradle_home: str = Field(default="", alias="GRADLE_HOME")
    timeout_seconds: float = Field(default=1800.0, alias="ANALYSIS_TIMEOUT_SECONDS")

    output_file: str = Field(default="out.json", alias="ANALYSIS_OUTPUT_FILE")
    modified_lines_file: str = Field(default="modified-lines.txt", alias="MODIFIED_LINES_FILE")
    source_extension: str = Field(default=".java", alias="SOURCE_FILE_EXTENSION")

    default_main_class: str = Field(default="Main", alias="DEFAULT_MAIN_CLASS")
    default_main_method: str = Field(default="main", alias="DEFAULT_MAIN_METHOD")

    @field_validator("command", mode="before")
    @classmethod
    def parse_json_list(cls, value: object) -> list[str]:
        """Parse JSON string from .env into a Python list."""
        if isinstance(value, str):
            parsed = json.loads(value)
            if not isinstance(parsed, list):
                raise ValueError(f"Expected a JSON list, got {type(parsed).__name__}")
            return parsed
        if isinstance(value, list):
            return value
        return []

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)
