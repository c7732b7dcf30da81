from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class GitHubSettings(BaseSettings):
    """Settings for the GitHub REST API, webhook verification and cloning."""

    # ── Core GitHub settings ──
    api_url: str = Field(default="https://api.github.com", alias="GITHUB_API_URL")
    clone_base_url: str = Field(default="https://github.com", alias="GITHUB_CLONE_BASE_URL")
    token: SecretStr | None = Field(default=None, alias="GITHUB_TOKEN")
    webhook_secret: SecretStr | None = Field(default=None, alias="GITHUB_WEBHOOK_SECRET")
    timeout_seconds: float = Field(default=10.0, alias="GITHUB_TIMEOUT_SECONDS")

    # ── Merge state polling ──
    merge_poll_attempts: int = Field(default=5, ge=1, alias="MERGE_POLL_ATTEMPTS")
    merge_poll_delay_seconds: float = Field(default=3.0, ge=0, alias="MERGE_POLL_DELAY_SECONDS")

    # ── Review publishing ──
    inline_comments_enabled: bool = Field(default=False, alias="INLINE_COMMENTS_ENABLED")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)
