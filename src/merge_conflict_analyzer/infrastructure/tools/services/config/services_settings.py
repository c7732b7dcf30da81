from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServicesSettings(BaseSettings):
    """Endpoints of the registration, settings and analysis ingestion services."""

    repo_service_url: str = Field(default="", alias="REPO_SERVICE_URL")
    settings_service_url: str = Field(default="", alias="SETTINGS_SERVICE_URL")
    analysis_service_url: str = Field(default="", alias="ANALYSIS_SERVICE_URL")
    timeout_seconds: float = Field(default=20.0, alias="SERVICES_TIMEOUT_SECONDS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)
