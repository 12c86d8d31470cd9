"""Tests for the live-view server: TableWatcher and the Flask app."""

import logging

import pytest

from rootline.config import load_config
from rootline.server import TableWatcher

pytest.importorskip("flask")
pytest.importorskip("flask_cors")

from rootline.server.app import create_app  # noqa: E402

CYCLE_CSV = "parent,child\nA,B\nB,A\n"
GROWN_CSV = "parent,child\n,A\nA,B\nA,C\n,D\nD,E\n"


@pytest.fixture
def config():
    return load_config(environ={})


@pytest.fixture
def watcher(example_csv, config):
    return TableWatcher(example_csv, config)


class TestTableWatcher:
    """Tests for TableWatcher.refresh()."""

    def test_first_refresh_builds(self, watcher):
        assert watcher.refresh() is True
        assert watcher.result.roots == ["A", "D"]
        assert watcher.build_count == 1
        assert watcher.last_error is None

    def test_unchanged_file_not_rebuilt(self, watcher):
        watcher.refresh()

        assert watcher.refresh() is False
        assert watcher.build_count == 1

    def test_force_rebuilds(self, watcher):
        watcher.refresh()

        assert watcher.refresh(force=True) is True
        assert watcher.build_count == 2

    def test_changed_file_rebuilt(self, watcher, example_csv):
        watcher.refresh()
        example_csv.write_text(GROWN_CSV, encoding="utf-8")

        assert watcher.refresh() is True
        assert watcher.result.graph.node_count() == 5

    def test_failed_rebuild_keeps_previous_result(self, watcher, example_csv, caplog):
        watcher.refresh()
        previous = watcher.result
        example_csv.write_text(CYCLE_CSV, encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger="rootline.server.watcher"):
            assert watcher.refresh() is False

        assert watcher.result is previous
        assert "cycle detected" in watcher.last_error
        assert "Keeping previous lineage" in caplog.text

    def test_undecodable_rewrite_keeps_previous_result(self, watcher, example_csv):
        watcher.refresh()
        previous = watcher.result
        example_csv.write_bytes(b"parent,child\n,\xff\xfe\n,B\n")

        assert watcher.refresh(force=True) is False

        assert watcher.result is previous
        assert "Cannot read" in watcher.last_error

    def test_missing_file_waits(self, tmp_path, config):
        watcher = TableWatcher(tmp_path / "later.csv", config)

        assert watcher.refresh() is False
        assert watcher.result is None
        assert "not found" in watcher.status()["last_error"]

    def test_status(self, watcher):
        watcher.refresh()

        status = watcher.status()

        assert status["has_result"] is True
        assert status["build_count"] == 1
        assert status["table"].endswith("lineage.csv")


class TestServerApp:
    """Tests for the Flask routes."""

    @pytest.fixture
    def client(self, watcher):
        app = create_app(watcher)
        app.config["TESTING"] = True
        return app.test_client()

    def test_index_renders_svg(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert b'<svg id="lineage"' in response.data
        assert response.headers["Cache-Control"] == "no-store"

    def test_api_graph(self, client):
        data = client.get("/api/graph").get_json()

        assert [node["id"] for node in data["nodes"]] == ["A", "B", "C", "D"]
        assert len(data["links"]) == 2

    def test_api_layout(self, client):
        data = client.get("/api/layout").get_json()

        assert data["roots"] == ["A", "D"]
        assert data["layout"]["band_height"] == 300

    def test_api_status(self, client):
        data = client.get("/api/status").get_json()

        assert data["has_result"] is True

    def test_cors_header(self, client):
        response = client.get("/api/status", headers={"Origin": "http://example.test"})

        assert "Access-Control-Allow-Origin" in response.headers

    def test_unavailable_until_first_good_build(self, tmp_path, config):
        table = tmp_path / "lineage.csv"
        table.write_text(CYCLE_CSV, encoding="utf-8")
        client = create_app(TableWatcher(table, config)).test_client()

        page = client.get("/")
        api = client.get("/api/graph")

        assert page.status_code == 503
        assert b"cycle detected" in page.data
        assert api.status_code == 503
        assert "cycle detected" in api.get_json()["error"]
