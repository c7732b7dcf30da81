from merge_conflict_analyzer.core.domain.analysis.analysis_output import (
    AnalysisData,
    AnalysisOutput,
    MissingFileRecord,
    ModifiedLinesRecord,
)
from merge_conflict_analyzer.core.domain.analysis.interference_event import (
    UNKNOWN_FILE,
    CodeLocation,
    InterferenceBody,
    InterferenceEvent,
    InterferenceNode,
    InterferenceNodeKind,
)

__all__ = [
    "UNKNOWN_FILE",
    "AnalysisData",
    "AnalysisOutput",
    "CodeLocation",
    "InterferenceBody",
    "InterferenceEvent",
    "InterferenceNode",
    "InterferenceNodeKind",
    "MissingFileRecord",
    "ModifiedLinesRecord",
]
