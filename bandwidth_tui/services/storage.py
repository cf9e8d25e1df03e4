"""
LogStore Class - Handles file I/O operations

This module reads the NDJSON access log from disk.
"""

import os
from typing import Iterable

from bandwidth_tui.models.data_models import HealthStatus


class LogStore:
    """
    Read-only access to the log file.
    Responsibilities:
    - Read non-blank log lines
    - Provide file statistics
    """

    def __init__(self, file_path: str):
        self.file_path = file_path

    def read_lines(self) -> Iterable[str]:
        """
        Iterator over non-blank lines in the log file.
        Missing or unreadable files raise OSError; the caller decides
        whether that is fatal.
        """
        with open(self.file_path, "r", encoding="utf-8", errors="replace") as f:
            for line in f:
                line = line.strip()
                if line:
                    yield line

    def stat(self) -> HealthStatus:
        """Get file statistics"""
        exists = os.path.exists(self.file_path)
        size_bytes = os.path.getsize(self.file_path) if exists else 0
        total_lines = 0

        if exists:
            try:
                total_lines = sum(1 for _ in self.read_lines())
            except OSError:
                pass

        return HealthStatus(
            status="ok",
            log_file_exists=exists,
            path=os.path.abspath(self.file_path),
            size_bytes=size_bytes,
            total_lines=total_lines,
        )
