from datetime import datetime, timezone

import pytest

from bandwidth_tui.services.aggregator import Aggregator
from bandwidth_tui.services.parser import LogParser
from bandwidth_tui.services.storage import LogStore


def test_extracts_url_path_and_sizes():
    record = LogParser.parse_line(
        '{"body": {"url": "https://cdn.example.com/images/p/d/a.jpg?w=10", "requestSize": "12", "responseSize": 3400}}'
    )
    assert record is not None
    assert record.url == "https://cdn.example.com/images/p/d/a.jpg?w=10"
    assert record.path == "/images/p/d/a.jpg"
    assert record.request_size == 12
    assert record.response_size == 3400
    assert record.timestamp is None


def test_empty_path_becomes_root():
    record = LogParser.parse_line('{"body": {"url": "https://example.com"}}')
    assert record.path == "/"


@pytest.mark.parametrize(
    "line",
    [
        "{broken",
        "[1, 2, 3]",
        '{"nobody": {}}',
        '{"body": []}',
        '{"body": {"url": null}}',
        '{"body": {"url": "relative/path"}}',
        '{"body": {"url": "http://host:notaport/x"}}',
    ],
)
def test_unusable_lines_are_skipped(line):
    assert LogParser.parse_line(line) is None


@pytest.mark.parametrize("value", [-5, "12abc", "1.5", [], {}, True, None, 2.5])
def test_odd_sizes_are_absent(value):
    record = LogParser.extract({"body": {"url": "http://h/x", "responseSize": value}})
    assert record is not None
    assert record.response_size is None


def test_timestamp_is_normalised_to_utc():
    record = LogParser.extract(
        {"timestamp": "2024-05-01T12:00:00+02:00", "body": {"url": "http://h/x"}}
    )
    assert record.timestamp == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)


def test_too_deeply_nested_line_is_skipped(tmp_path, write_log):
    log = write_log(tmp_path / "deep.ndjson", ["[" * 100000, {"body": {"url": "http://h/x"}}])
    stats, summary = Aggregator(LogStore(str(log)), LogParser()).load_stats()
    assert summary.skipped_lines == 1
    assert [s.path for s in stats] == ["/x"]
