from merge_conflict_analyzer.core.domain.merge.merge_context import (
    MergeContext,
    MergeParents,
    ReproducedMerge,
)
from merge_conflict_analyzer.core.domain.merge.pr_settings import PrSettings
from merge_conflict_analyzer.core.domain.merge.pull_request_state import PullRequestState

__all__ = ["MergeContext", "MergeParents", "PrSettings", "PullRequestState", "ReproducedMerge"]
