"""
Data Models (DTOs - Data Transfer Objects)

This module contains the dataclasses and enums shared by the loader,
the view builders and the two front ends (terminal and JSON API).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class RequestType(Enum):
    """Request category derived from a URL path"""
    IMAGE = "image"
    FILE = "file"
    QUERY = "query"
    OTHER = "other"


# Display order of type groups in the grouped view
REQUEST_TYPE_ORDER = (
    RequestType.IMAGE,
    RequestType.FILE,
    RequestType.QUERY,
    RequestType.OTHER,
)


class SortField(Enum):
    PATH = "path"
    EXT = "ext"
    REQUESTS = "requests"
    AVG_REQUEST_SIZE = "avg_size"
    BANDWIDTH = "bandwidth"


class ViewMode(Enum):
    PATH = "path"  # flat, one row per path
    TYPE = "type"  # grouped by request type with extension sub-totals


@dataclass
class LogRecord:
    """Fields extracted from a single log line"""
    url: str
    path: str
    request_size: Optional[int]
    response_size: Optional[int]
    timestamp: Optional[datetime] = None


@dataclass
class PathStat:
    """Running totals for one distinct URL path"""
    path: str
    sample_url: str
    request_count: int = 0
    request_size_sum: int = 0
    request_size_count: int = 0
    bandwidth_sum: int = 0

    @property
    def avg_request_size(self) -> int:
        if self.request_size_count:
            return self.request_size_sum // self.request_size_count
        return self.bandwidth_sum // self.request_count if self.request_count else 0


@dataclass
class DisplayRow:
    """One renderable table row, rebuilt from PathStat data on every change"""
    label: str
    ext: str
    request_count: int
    bandwidth_sum: int
    req_type: RequestType
    open_url: Optional[str] = None
    is_group: bool = False

    @property
    def avg_size(self) -> int:
        return self.bandwidth_sum // self.request_count if self.request_count else 0


@dataclass
class Totals:
    """Sums across every PathStat, independent of the current view"""
    request_count: int
    bandwidth_sum: int

    @property
    def avg_size(self) -> int:
        return self.bandwidth_sum // self.request_count if self.request_count else 0


@dataclass
class LogSummary:
    """What the loader saw while reading the log"""
    total_lines: int = 0
    kept_lines: int = 0
    skipped_lines: int = 0
    first_timestamp: Optional[datetime] = None
    last_timestamp: Optional[datetime] = None


@dataclass
class HealthStatus:
    """Health check response"""
    status: str
    log_file_exists: bool
    path: str
    size_bytes: int
    total_lines: int
    distinct_paths: int = 0
    first_timestamp: Optional[str] = None
    last_timestamp: Optional[str] = None
