"""
View Builder - derives displayable rows from PathStats

Two views are supported:
- ViewMode.PATH: one row per path, labelled by asset id
- ViewMode.TYPE: one header per request type, with per-extension
  child rows for images and files

Rows are always rebuilt from the PathStat list and sorted here, so the
caller never patches a previous row list.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from bandwidth_tui.models.data_models import (
    REQUEST_TYPE_ORDER,
    DisplayRow,
    PathStat,
    RequestType,
    SortField,
    ViewMode,
)
from bandwidth_tui.services.classifier import classify, groups_extensions, path_segments, type_label
from bandwidth_tui.services.sorter import sort_rows

NO_EXT = "no ext"
ASSET_PREFIX_SEGMENTS = 3  # /images/<project>/<dataset>/...


# ──────────────────────────────────────────────────────────────────────────────
# Label / extension extraction
# ──────────────────────────────────────────────────────────────────────────────


def strip_prefix_segments(path: str, count: int) -> Optional[str]:
    """Drop `count` leading non-empty segments; None when nothing is left"""
    parts = path_segments(path)
    if len(parts) <= count:
        return None
    return "/".join(parts[count:])


def extract_extension(path: str) -> Optional[str]:
    """Lower-cased text after the last '.', or None"""
    _, dot, ext = path.rpartition(".")
    if not dot or not ext:
        return None
    return ext.lower()


def format_ext(ext: str) -> str:
    return f".{ext.lower()}" if ext else ""


def _split_filename(path: str) -> Tuple[str, str]:
    remainder = strip_prefix_segments(path, ASSET_PREFIX_SEGMENTS) or path
    filename = remainder.split("/")[-1]
    name, dot, ext = filename.rpartition(".")
    if not dot:
        return filename, ""
    return name, ext


def asset_id_and_ext(path: str, req_type: RequestType) -> Tuple[str, str]:
    """
    Label and displayed extension for a path in the flat view.

    >>> asset_id_and_ext("/images/p/d/abc123-800x600.jpg", RequestType.IMAGE)
    ('abc123', '.jpg')
    """
    if req_type is RequestType.IMAGE:
        name, ext = _split_filename(path)
        # image variants carry size suffixes after the id
        return name.split("-")[0], format_ext(ext)
    if req_type is RequestType.FILE:
        name, ext = _split_filename(path)
        return name, format_ext(ext)
    if req_type is RequestType.QUERY:
        return type_label(RequestType.QUERY), ""

    return path, format_ext(extract_extension(path) or "")


# ──────────────────────────────────────────────────────────────────────────────
# Flat view
# ──────────────────────────────────────────────────────────────────────────────


def build_path_rows(stats: Sequence[PathStat], field: SortField, descending: bool) -> List[DisplayRow]:
    rows: List[DisplayRow] = []
    for s in stats:
        req_type = classify(s.path)
        label, ext = asset_id_and_ext(s.path, req_type)
        rows.append(
            DisplayRow(
                label=label,
                ext=ext,
                request_count=s.request_count,
                bandwidth_sum=s.bandwidth_sum,
                req_type=req_type,
                open_url=s.sample_url,
            )
        )
    return sort_rows(rows, field, descending)


# ──────────────────────────────────────────────────────────────────────────────
# Grouped view
# ──────────────────────────────────────────────────────────────────────────────


@dataclass
class _Agg:
    request_count: int = 0
    bandwidth_sum: int = 0
    sample_url: Optional[str] = None

    def add(self, s: PathStat) -> None:
        self.request_count += s.request_count
        self.bandwidth_sum += s.bandwidth_sum
        if self.sample_url is None:
            self.sample_url = s.sample_url


def _ext_row(req_type: RequestType, ext: str, agg: _Agg) -> DisplayRow:
    if ext == NO_EXT:
        label, ext_text = "  (no ext)", "(none)"
    else:
        label, ext_text = "  ", f".{ext}"
    return DisplayRow(
        label=label,
        ext=ext_text,
        request_count=agg.request_count,
        bandwidth_sum=agg.bandwidth_sum,
        req_type=req_type,
        open_url=agg.sample_url,
    )


def build_type_rows(stats: Sequence[PathStat], field: SortField, descending: bool) -> List[DisplayRow]:
    type_map: Dict[RequestType, _Agg] = {}
    ext_map: Dict[Tuple[RequestType, str], _Agg] = {}

    for s in stats:
        req_type = classify(s.path)
        type_map.setdefault(req_type, _Agg()).add(s)

        if groups_extensions(req_type):
            ext = extract_extension(s.path) or NO_EXT
            ext_map.setdefault((req_type, ext), _Agg()).add(s)

    headers = [
        DisplayRow(
            label=type_label(req_type),
            ext="",
            request_count=type_map[req_type].request_count,
            bandwidth_sum=type_map[req_type].bandwidth_sum,
            req_type=req_type,
            open_url=None,
            is_group=True,
        )
        for req_type in REQUEST_TYPE_ORDER
        if req_type in type_map
    ]

    rows: List[DisplayRow] = []
    for header in sort_rows(headers, field, descending):
        rows.append(header)
        if not groups_extensions(header.req_type):
            continue
        children = [
            _ext_row(kind, ext, agg)
            for (kind, ext), agg in ext_map.items()
            if kind is header.req_type
        ]
        rows.extend(sort_rows(children, field, descending))

    return rows


def build_display_rows(
    stats: Sequence[PathStat],
    view_mode: ViewMode,
    field: SortField,
    descending: bool,
) -> List[DisplayRow]:
    if view_mode is ViewMode.TYPE:
        return build_type_rows(stats, field, descending)
    return build_path_rows(stats, field, descending)
