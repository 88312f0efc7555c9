"""
Tests for the REST API.
"""

import os

import pytest
from fastapi.testclient import TestClient

from cs2_launcher.api import create_app
from cs2_launcher.orchestrator import Orchestrator


class Console:
    def __init__(self):
        self.sent = []

    def send(self, line):
        self.sent.append(line)
        return True


@pytest.fixture
def console():
    return Console()


@pytest.fixture
def port_owner():
    return {"pid": None}


@pytest.fixture
def client(settings, layout, write_conf, console, port_owner):
    write_conf(layout.server_conf, "PORT=27040\nGSLT=TOKEN\n")

    def factory():
        return Orchestrator(settings, port_lookup=lambda proto, port: port_owner["pid"],
                            which=lambda _: "/usr/bin/taskset", core_count=4, console=console)

    return TestClient(create_app(settings, orchestrator_factory=factory))


class TestReadEndpoints:

    def test_health(self, client):
        assert client.get("/health").json() == {"ok": True}

    def test_config_uses_conf_keys(self, client):
        data = client.get("/config").json()
        assert data["PORT"] == 27040
        assert data["MAPGROUP"] == "mg_active"

    def test_plan(self, client):
        data = client.get("/plan").json()
        assert data["ok"] is True
        assert "TOKEN" not in data["argv"]

    def test_plan_port_conflict(self, client, port_owner):
        port_owner["pid"] = 55
        r = client.get("/plan")
        assert r.status_code == 409
        assert "27040" in r.json()["detail"]

    def test_config_missing(self, settings):
        r = TestClient(create_app(settings)).get("/config")
        assert r.status_code == 400

    def test_status(self, client, port_owner):
        port_owner["pid"] = 12
        data = client.get("/status").json()["data"]
        assert data["running"] is True and data["pid"] == 12


class TestActions:

    def test_prepare(self, client, layout):
        r = client.post("/prepare")
        assert r.status_code == 200
        assert layout.start_script.exists()

    def test_announce_and_shutdown(self, client, console):
        client.post("/announce")
        client.post("/shutdown")
        assert console.sent[-1] == "quit"
        assert console.sent[0].startswith("say ")

    def test_kill_not_running(self, client):
        data = client.post("/kill").json()
        assert data["detail"] == "not running"
        assert data["data"] == {"pid": None}


class TestLogs:

    def test_latest_missing(self, client):
        assert client.get("/logs/latest").status_code == 404

    def test_latest_follows_symlink(self, client, layout):
        layout.log_dir.mkdir(parents=True, exist_ok=True)
        old = layout.log_dir / "2024-01-01_00-00-00-server.log"
        new = layout.log_dir / "2024-01-02_00-00-00-server.log"
        old.write_text("old\n")
        new.write_text("line 1\nline 2\nline 3\n")
        os.symlink(new, layout.log_link)

        data = client.get("/logs/latest", params={"tail": 2}).json()
        assert [e["line"] for e in data["entries"]] == ["line 2", "line 3"]
        assert data["truncated"] is True

        names = [l["name"] for l in client.get("/logs").json()["logs"]]
        assert names == [new.name, old.name]
