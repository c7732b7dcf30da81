import pytest

from merge_conflict_analyzer.infrastructure.config.main_settings import Settings
from merge_conflict_analyzer.infrastructure.tools.analysis.config.analysis_tool_settings import (
    AnalysisToolSettings,
)
from merge_conflict_analyzer.infrastructure.tools.vcs.github.config.github_settings import (
    GitHubSettings,
)


def test_analysis_command_is_read_as_json_list(monkeypatch):
    monkeypatch.setenv("ANALYSIS_COMMAND", '["java", "-Xmx4g", "-jar", "/opt/tool.jar"]')

    assert AnalysisToolSettings().command == ["java", "-Xmx4g", "-jar", "/opt/tool.jar"]


def test_merge_polling_defaults(monkeypatch):
    monkeypatch.delenv("MERGE_POLL_ATTEMPTS", raising=False)
    monkeypatch.delenv("MERGE_POLL_DELAY_SECONDS", raising=False)

    settings = GitHubSettings()

    assert settings.merge_poll_attempts == 5
    assert settings.merge_poll_delay_seconds == 3.0


@pytest.mark.parametrize(("env", "expected"), [("development", True), ("production", False)])
def test_development_mode(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert Settings().is_development is expected
