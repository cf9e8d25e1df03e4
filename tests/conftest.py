import json
from pathlib import Path
from typing import List

import pytest

from bandwidth_tui.models.data_models import PathStat


def _write_log(path: Path, lines: List[object]) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        for line in lines:
            f.write((line if isinstance(line, str) else json.dumps(line)) + "\n")
    return path


@pytest.fixture
def scenario_log(tmp_path):
    """Two image hits and one file hit, plus lines that must be skipped"""
    image = {"body": {"url": "http://h/images/a-1.jpg", "responseSize": 1000}}
    doc = {"body": {"url": "http://h/files/doc.pdf", "responseSize": 2000, "requestSize": 50}}
    return _write_log(
        tmp_path / "access.ndjson",
        [
            image,
            "",
            "not json at all",
            {"body": "not an object"},
            {"body": {"url": 42}},
            {"body": {"url": "no scheme here"}},
            image,
            doc,
        ],
    )


@pytest.fixture
def mixed_stats():
    return [
        PathStat("/images/p/d/abc123-800x600.jpg", "https://cdn/images/p/d/abc123-800x600.jpg", 5, 0, 0, 5000),
        PathStat("/images/p/d/def456.PNG", "https://cdn/images/p/d/def456.PNG", 1, 0, 0, 300),
        PathStat("/images/p/d/noext", "https://cdn/images/p/d/noext", 2, 0, 0, 100),
        PathStat("/files/p/d/report.pdf", "https://cdn/files/p/d/report.pdf", 3, 0, 0, 9000),
        PathStat("/v1/data/query/prod", "https://api/v1/data/query/prod?q=x", 10, 0, 0, 700),
        PathStat("/health", "https://api/health", 4, 0, 0, 40),
    ]


@pytest.fixture
def write_log():
    return _write_log
