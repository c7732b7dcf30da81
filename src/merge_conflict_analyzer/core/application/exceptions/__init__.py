from merge_conflict_analyzer.core.application.exceptions.pipeline_exceptions import (
    AnalysisOutputError,
    ApplicationError,
    ConfigurationError,
    SkillExecutionError,
    WorkflowExecutionError,
    WorkflowHaltedException,
)

__all__ = [
    "AnalysisOutputError",
    "ApplicationError",
    "ConfigurationError",
    "SkillExecutionError",
    "WorkflowExecutionError",
    "WorkflowHaltedException",
]
