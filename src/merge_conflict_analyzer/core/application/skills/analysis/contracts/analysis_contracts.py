from dataclasses import dataclass, field
from pathlib import Path

from merge_conflict_analyzer.core.domain.analysis import (
    AnalysisData,
    AnalysisOutput,
    InterferenceEvent,
)
from merge_conflict_analyzer.core.domain.merge import MergeContext, MergeParents, PrSettings


@dataclass(frozen=True)
class ResolveMergeStateInput:
    owner: str
    repo: str
    pull_number: int


@dataclass(frozen=True)
class ReproduceMergeInput:
    owner: str
    repo: str
    pull_number: int
    parents: MergeParents
    workdir: Path


@dataclass(frozen=True)
class InvokeAnalysisInput:
    context: MergeContext
    checkout_dir: Path
    pr_settings: PrSettings | None = None


@dataclass(frozen=True)
class AnalysisInvocation:
    """Fully derived command line for one run of the analysis tool."""

    argv: list[str]
    cwd: Path
    timeout_seconds: float


@dataclass(frozen=True)
class EnrichAnalysisInput:
    checkout_dir: Path
    diff_text: str


@dataclass(frozen=True)
class EnrichedAnalysis:
    events: list[InterferenceEvent] = field(default_factory=list)
    data: AnalysisData = field(default_factory=AnalysisData)


@dataclass(frozen=True)
class DeliverAnalysisInput:
    """What the delivery step knows; ``output`` is None when the tool gave nothing usable."""

    context: MergeContext
    output: AnalysisOutput | None
    diff_text: str = ""
