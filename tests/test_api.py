import pytest
from fastapi.testclient import TestClient

from bandwidth_tui.api import create_app
from bandwidth_tui.services.aggregator import Aggregator
from bandwidth_tui.services.parser import LogParser
from bandwidth_tui.services.storage import LogStore


@pytest.fixture
def client(scenario_log):
    store = LogStore(str(scenario_log))
    stats, summary = Aggregator(store, LogParser()).load_stats()
    return TestClient(create_app(store, stats, summary))


def test_health(client, scenario_log):
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["log_file_exists"] is True
    assert body["total_lines"] == 7
    assert body["kept_lines"] == 3
    assert body["skipped_lines"] == 4
    assert body["distinct_paths"] == 2


def test_rows_default_flat_by_bandwidth(client):
    body = client.get("/api/rows").json()
    assert body["view"] == "path"
    assert body["sort_by"] == "bandwidth"
    assert body["order"] == "desc"
    assert [(r["label"], r["ext"], r["requests"], r["bandwidth"]) for r in body["rows"]] == [
        ("a", ".jpg", 2, 2000),
        ("doc", ".pdf", 1, 2000),
    ]


def test_rows_grouped(client):
    body = client.get("/api/rows", params={"view": "type"}).json()
    assert [(r["label"], r["is_group"]) for r in body["rows"]] == [
        ("Images", True),
        ("  ", False),
        ("Files", True),
        ("  ", False),
    ]
    assert body["rows"][0]["open_url"] is None


def test_rows_sort_field_default_direction_and_limit(client):
    body = client.get("/api/rows", params={"sort_by": "path", "limit": 1}).json()
    assert body["order"] == "asc"
    assert body["total_rows"] == 2
    assert [r["label"] for r in body["rows"]] == ["a"]


@pytest.mark.parametrize(
    "params",
    [{"view": "tree"}, {"sort_by": "latency"}, {"order": "sideways"}],
)
def test_rows_rejects_unknown_choices(client, params):
    assert client.get("/api/rows", params=params).status_code == 400


def test_rows_validates_limit(client):
    assert client.get("/api/rows", params={"limit": 0}).status_code == 422


def test_totals(client):
    assert client.get("/api/totals").json() == {"requests": 3, "bandwidth": 4000, "avg_size": 1333}
