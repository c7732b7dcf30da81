from merge_conflict_analyzer.core.domain.analysis.services.diff_scanner import files_in_diff
from merge_conflict_analyzer.core.domain.analysis.services.interference_deduplicator import (
    filter_duplicated_events,
)
from merge_conflict_analyzer.core.domain.analysis.services.modified_lines_parser import (
    parse_modified_lines,
)

__all__ = ["files_in_diff", "filter_duplicated_events", "parse_modified_lines"]
