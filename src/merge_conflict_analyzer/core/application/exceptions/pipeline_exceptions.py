"""Application exception hierarchy.

Every workflow and skill raises from this tree so the webhook layer can tell a
benign skip from a fatal failure without string-matching.
"""

from typing import Any


class ApplicationError(Exception):
    """Base exception for all application-layer errors."""

    def __init__(self, message: str = "", *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context: dict[str, Any] = context or {}


class WorkflowExecutionError(ApplicationError):
    """Raised when the pipeline fails at any step."""


class WorkflowHaltedException(ApplicationError):
    """Benign early-exit: the run stopped intentionally.

    Example: the pull request never became mergeable, or the merge base
    equals one of the parents. Callers log it and end the run quietly.
    """


class SkillExecutionError(ApplicationError):
    """Raised when a Skill.execute() call fails."""


class ConfigurationError(WorkflowExecutionError):
    """Required tool paths or settings are absent."""


class AnalysisOutputError(SkillExecutionError):
    """The analysis tool left no readable results file."""
