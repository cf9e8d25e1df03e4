"""
Request classification by URL path, plus the per-type display attributes.
"""

from typing import Dict, List

from bandwidth_tui.models.data_models import RequestType

QUERY_SEGMENTS = ["data", "query"]

TYPE_LABELS: Dict[RequestType, str] = {
    RequestType.IMAGE: "Images",
    RequestType.FILE: "Files",
    RequestType.QUERY: "GROQ Queries",
    RequestType.OTHER: "Other",
}

TYPE_GLYPHS: Dict[RequestType, str] = {
    RequestType.IMAGE: "I",
    RequestType.FILE: "F",
    RequestType.QUERY: "Q",
    RequestType.OTHER: "?",
}

# curses colour names, resolved by the terminal front end
TYPE_COLORS: Dict[RequestType, str] = {
    RequestType.IMAGE: "green",
    RequestType.FILE: "blue",
    RequestType.QUERY: "yellow",
    RequestType.OTHER: "gray",
}


def path_segments(path: str) -> List[str]:
    return [s for s in path.split("/") if s]


def classify(path: str) -> RequestType:
    """
    /images/... and /files/... win over the query check.
    A path of at least four segments with data/query as its second and
    third segment (/<version>/data/query/<dataset>) is a GROQ query, as
    is one that starts with data/query (/data/query/<version>/<dataset>),
    so both /v1/data/query/x and /data/query/v1/x count as queries.
    """
    if path.startswith("/images/"):
        return RequestType.IMAGE
    if path.startswith("/files/"):
        return RequestType.FILE
    parts = path_segments(path)
    if len(parts) >= 4 and (parts[1:3] == QUERY_SEGMENTS or parts[0:2] == QUERY_SEGMENTS):
        return RequestType.QUERY
    return RequestType.OTHER


def groups_extensions(req_type: RequestType) -> bool:
    """Whether the grouped view breaks this type down by file extension"""
    return req_type in (RequestType.IMAGE, RequestType.FILE)


def type_label(req_type: RequestType) -> str:
    return TYPE_LABELS[req_type]
