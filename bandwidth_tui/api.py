from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from bandwidth_tui.models.data_models import DisplayRow, LogSummary, PathStat, SortField, ViewMode
from bandwidth_tui.services.aggregator import Aggregator
from bandwidth_tui.services.sorter import default_descending
from bandwidth_tui.services.storage import LogStore
from bandwidth_tui.services.views import build_display_rows

# ──────────────────────────────────────────────────────────────────────────────
# Config
# ──────────────────────────────────────────────────────────────────────────────

API_PREFIX = "/api"

# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────


def parse_choice(enum_cls, value: str, name: str):
    try:
        return enum_cls(value.lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise HTTPException(status_code=400, detail=f"Unknown {name} '{value}' (expected one of: {allowed})")


def row_to_dict(row: DisplayRow) -> Dict[str, Any]:
    return {
        "label": row.label,
        "ext": row.ext,
        "type": row.req_type.value,
        "requests": row.request_count,
        "avg_size": row.avg_size,
        "bandwidth": row.bandwidth_sum,
        "open_url": row.open_url,
        "is_group": row.is_group,
    }


# ──────────────────────────────────────────────────────────────────────────────
# App
# ──────────────────────────────────────────────────────────────────────────────


def create_app(
    store: LogStore,
    stats: Sequence[PathStat],
    summary: Optional[LogSummary] = None,
) -> FastAPI:
    """
    Read-only JSON view over stats that were loaded once at startup.
    The file is never re-read; restart to pick up new log lines.
    """
    stats = list(stats)
    summary = summary or LogSummary()
    totals = Aggregator.compute_totals(stats)

    app = FastAPI(title="Bandwidth Log Explorer")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get(f"{API_PREFIX}/health")
    def health() -> Dict[str, Any]:
        status = store.stat()
        status.distinct_paths = len(stats)
        if summary.first_timestamp:
            status.first_timestamp = summary.first_timestamp.isoformat()
        if summary.last_timestamp:
            status.last_timestamp = summary.last_timestamp.isoformat()
        return {
            **asdict(status),
            "kept_lines": summary.kept_lines,
            "skipped_lines": summary.skipped_lines,
        }

    @app.get(f"{API_PREFIX}/rows")
    def rows(
        view: str = Query("path"),       # "path" or "type"
        sort_by: str = Query("bandwidth"),
        order: Optional[str] = Query(None),  # "asc" or "desc"; field default when omitted
        limit: int = Query(100, ge=1, le=10_000),
    ) -> Dict[str, Any]:
        view_mode = parse_choice(ViewMode, view, "view")
        field = parse_choice(SortField, sort_by, "sort_by")
        if order is None:
            descending = default_descending(field)
        elif order.lower() in ("asc", "desc"):
            descending = order.lower() == "desc"
        else:
            raise HTTPException(status_code=400, detail=f"Unknown order '{order}' (expected asc or desc)")

        out: List[DisplayRow] = build_display_rows(stats, view_mode, field, descending)
        return {
            "view": view_mode.value,
            "sort_by": field.value,
            "order": "desc" if descending else "asc",
            "total_rows": len(out),
            "rows": [row_to_dict(r) for r in out[:limit]],
        }

    @app.get(f"{API_PREFIX}/totals")
    def get_totals() -> Dict[str, Any]:
        return {
            "requests": totals.request_count,
            "bandwidth": totals.bandwidth_sum,
            "avg_size": totals.avg_size,
        }

    return app
