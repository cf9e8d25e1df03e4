"""
LogParser Class - Handles parsing and field extraction

This module turns raw NDJSON log lines into LogRecord objects.
"""

import json
from typing import Any, Dict, Optional
from urllib.parse import urlsplit

from bandwidth_tui.models.data_models import LogRecord
from bandwidth_tui.utils.helpers import get_nested, parse_ts, safe_size


class LogParser:
    """
    Parses raw log lines into LogRecord objects.
    Responsibilities:
    - Parse JSON lines
    - Extract the request URL and its path
    - Extract request/response sizes and an optional timestamp
    """

    @staticmethod
    def parse_json(line: str) -> Optional[Dict[str, Any]]:
        """Parse JSON line, return None if invalid or not an object"""
        try:
            value = json.loads(line)
        except (ValueError, RecursionError):
            # RecursionError: nesting too deep for the decoder
            return None
        return value if isinstance(value, dict) else None

    @staticmethod
    def url_path(url: str) -> Optional[str]:
        """
        Path component of an absolute URL, '/' when empty.
        Returns None when the string is not a usable absolute URL.
        """
        try:
            parts = urlsplit(url)
            # accessing .port validates the authority section
            parts.port
        except ValueError:
            return None
        if not parts.scheme:
            return None
        return parts.path or "/"

    @classmethod
    def extract(cls, raw: Dict[str, Any]) -> Optional[LogRecord]:
        """
        Pull the fields we aggregate on out of a raw record.
        Records without a body object or a parseable body.url are dropped.
        """
        body = raw.get("body")
        if not isinstance(body, dict):
            return None

        url = body.get("url")
        if not isinstance(url, str):
            return None

        path = cls.url_path(url)
        if path is None:
            return None

        ts = parse_ts(
            raw.get("timestamp")
            or raw.get("time")
            or get_nested(raw, ("body", "timestamp"))
        )

        return LogRecord(
            url=url,
            path=path,
            request_size=safe_size(body.get("requestSize")),
            response_size=safe_size(body.get("responseSize")),
            timestamp=ts,
        )

    @classmethod
    def parse_line(cls, line: str) -> Optional[LogRecord]:
        raw = cls.parse_json(line)
        if raw is None:
            return None
        return cls.extract(raw)
