from collections.abc import Iterable

from merge_conflict_analyzer.core.domain.analysis.interference_event import InterferenceEvent


def filter_duplicated_events(events: Iterable[InterferenceEvent]) -> list[InterferenceEvent]:
    """Keep the first event seen for every distinct (first node, last node) location pair.

    The analysis tool reports the same conflict once per traversal path it
    found; only the endpoints identify the finding. Input order is preserved.
    """
    seen: set[tuple[str, int, str, int]] = set()
    unique: list[InterferenceEvent] = []
    for event in events:
        key = event.endpoint_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(event)
    return unique
