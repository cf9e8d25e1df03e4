"""
Row ordering for the table views.
"""

from typing import Any, Callable, Dict, List

from bandwidth_tui.models.data_models import DisplayRow, RequestType, SortField


def _path_key(row: DisplayRow) -> Any:
    # GROQ query rows sort ahead of everything else in ascending order
    return (0 if row.req_type is RequestType.QUERY else 1, row.label)


SORT_KEYS: Dict[SortField, Callable[[DisplayRow], Any]] = {
    SortField.PATH: _path_key,
    SortField.EXT: lambda r: r.ext,
    SortField.REQUESTS: lambda r: r.request_count,
    SortField.AVG_REQUEST_SIZE: lambda r: r.avg_size,
    SortField.BANDWIDTH: lambda r: r.bandwidth_sum,
}


def default_descending(field: SortField) -> bool:
    """Text columns start ascending, numeric columns start descending"""
    return field not in (SortField.PATH, SortField.EXT)


def sort_rows(rows: List[DisplayRow], field: SortField, descending: bool) -> List[DisplayRow]:
    """Stable sort; ties keep their incoming order in both directions"""
    return sorted(rows, key=SORT_KEYS[field], reverse=descending)
