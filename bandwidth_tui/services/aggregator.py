"""
Aggregator Class - Folds log records into per-path statistics

This module builds the PathStat map that every view is derived from.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from bandwidth_tui.models.data_models import LogRecord, LogSummary, PathStat, Totals
from bandwidth_tui.services.parser import LogParser
from bandwidth_tui.services.storage import LogStore

logger = logging.getLogger(__name__)


class Aggregator:
    """
    Aggregates log records into per-path statistics.
    Responsibilities:
    - Fold records into a path -> PathStat mapping
    - Compute totals across all paths
    - Load and summarise a whole log file
    """

    def __init__(self, log_store: LogStore, log_parser: LogParser):
        self.store = log_store
        self.parser = log_parser

    @staticmethod
    def add_record(stats: Dict[str, PathStat], record: LogRecord) -> PathStat:
        """Fold one record into the mapping; the first URL seen stays the sample"""
        entry = stats.get(record.path)
        if entry is None:
            entry = PathStat(path=record.path, sample_url=record.url)
            stats[record.path] = entry

        entry.request_count += 1
        if record.request_size is not None:
            entry.request_size_sum += record.request_size
            entry.request_size_count += 1
        if record.response_size is not None:
            entry.bandwidth_sum += record.response_size
        return entry

    @classmethod
    def aggregate(cls, records: Iterable[LogRecord]) -> Dict[str, PathStat]:
        """Build the path -> PathStat mapping from records"""
        stats: Dict[str, PathStat] = {}
        for record in records:
            cls.add_record(stats, record)
        return stats

    @staticmethod
    def compute_totals(stats: Iterable[PathStat]) -> Totals:
        """Sum requests and bandwidth over every path"""
        requests = 0
        bandwidth = 0
        for s in stats:
            requests += s.request_count
            bandwidth += s.bandwidth_sum
        return Totals(request_count=requests, bandwidth_sum=bandwidth)

    def load_stats(self) -> Tuple[List[PathStat], LogSummary]:
        """
        Read the whole log once and return PathStats (largest bandwidth first)
        together with a summary of what was read.
        I/O errors propagate to the caller.
        """
        stats: Dict[str, PathStat] = {}
        summary = LogSummary()
        first: Optional[datetime] = None
        last: Optional[datetime] = None

        for line in self.store.read_lines():
            summary.total_lines += 1
            record = self.parser.parse_line(line)
            if record is None:
                summary.skipped_lines += 1
                continue

            summary.kept_lines += 1
            self.add_record(stats, record)

            if record.timestamp is not None:
                if first is None or record.timestamp < first:
                    first = record.timestamp
                if last is None or record.timestamp > last:
                    last = record.timestamp

        summary.first_timestamp = first
        summary.last_timestamp = last

        logger.info(
            "Loaded %s: %d lines, %d kept, %d skipped, %d distinct paths",
            self.store.file_path,
            summary.total_lines,
            summary.kept_lines,
            summary.skipped_lines,
            len(stats),
        )

        ordered = sorted(stats.values(), key=lambda s: s.bandwidth_sum, reverse=True)
        return ordered, summary
