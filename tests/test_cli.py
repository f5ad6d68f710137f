"""CLI commands end to end against the in-memory API."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from adapters.state_store import StateStore
from cli import doctor as doctor_module
from cli import main as cli_main
from core.domain.resource_data import ResourceData
from core.errors import IncapsulaHTTPError
from fakes import FakeSiteAPI

runner = CliRunner()


@pytest.fixture
def state_path(tmp_path: Path) -> Path:
    return tmp_path / "state.json"


@pytest.fixture
def api(monkeypatch: pytest.MonkeyPatch) -> FakeSiteAPI:
    fake = FakeSiteAPI()
    monkeypatch.setenv("INCAPSULA_API_ID", "12345")
    monkeypatch.setenv("INCAPSULA_API_KEY", "s3cr3t")
    monkeypatch.setattr(cli_main, "IncapsulaClient", lambda settings: fake)
    monkeypatch.setattr(doctor_module, "IncapsulaClient", lambda settings: fake)
    return fake


def _invoke(state_path: Path, *args: str):
    return runner.invoke(cli_main.app, ["--state", str(state_path), *args])


def _state(state_path: Path) -> dict:
    return json.loads(state_path.read_text(encoding="utf-8"))["sites"]


def test_create_records_state(api: FakeSiteAPI, state_path: Path):
    result = _invoke(state_path, "create", "Example.com", "--log-level", "full")

    assert result.exit_code == 0, result.output
    assert "Created site example.com" in result.output
    entry = _state(state_path)["example.com"]
    assert entry["id"] == "1000"
    assert entry["attributes"]["log_level"] == "full"
    assert entry["attributes"]["dns_a_record_value"] == ["192.0.2.10", "192.0.2.11"]
    assert api.closed


def test_create_refuses_managed_domain(api: FakeSiteAPI, state_path: Path):
    _invoke(state_path, "create", "example.com")

    result = _invoke(state_path, "create", "example.com")

    assert result.exit_code == 1
    assert "already managed" in result.output
    assert [c[0] for c in api.calls].count("add_site") == 1


def test_create_keeps_id_when_read_fails(api: FakeSiteAPI, state_path: Path, monkeypatch):
    def failing_status(domain, site_id):
        raise IncapsulaHTTPError("status unavailable", status_code=502)

    monkeypatch.setattr(api, "site_status", failing_status)

    result = _invoke(state_path, "create", "example.com")

    assert result.exit_code == 1
    assert "status unavailable" in result.output
    assert _state(state_path)["example.com"]["id"] == "1000"


def test_api_error_exits_with_code_1(api: FakeSiteAPI, state_path: Path):
    api.fail_with = IncapsulaHTTPError("service down", status_code=503)

    result = _invoke(state_path, "create", "example.com")

    assert result.exit_code == 1
    assert "service down" in result.output
    assert not state_path.exists()


def test_refresh_updates_computed_attributes(api: FakeSiteAPI, state_path: Path):
    _invoke(state_path, "create", "example.com")
    api.sites[1000].dns = []

    result = _invoke(state_path, "refresh", "example.com")

    assert result.exit_code == 0, result.output
    assert _state(state_path)["example.com"]["attributes"]["dns_a_record_value"] == []


def test_refresh_unknown_domain(api: FakeSiteAPI, state_path: Path):
    result = _invoke(state_path, "refresh", "missing.example.com")

    assert result.exit_code == 1
    assert "No site for domain" in result.output


def test_update_is_local_only(api: FakeSiteAPI, state_path: Path):
    _invoke(state_path, "create", "example.com")
    calls_before = list(api.calls)

    result = _invoke(state_path, "update", "example.com", "--log-level", "security")

    assert result.exit_code == 0, result.output
    assert "recorded locally only" in result.output
    assert api.calls == calls_before
    assert _state(state_path)["example.com"]["attributes"]["log_level"] == "security"


def test_update_refuses_domain_change(api: FakeSiteAPI, state_path: Path):
    _invoke(state_path, "create", "example.com")

    result = _invoke(state_path, "update", "example.com", "--new-domain", "other.example.com")

    assert result.exit_code == 2
    assert "requires a new site" in result.output
    assert list(_state(state_path)) == ["example.com"]


def test_delete_drops_state_entry(api: FakeSiteAPI, state_path: Path):
    _invoke(state_path, "create", "example.com")

    result = _invoke(state_path, "delete", "example.com")

    assert result.exit_code == 0, result.output
    assert _state(state_path) == {}
    assert api.sites == {}


def test_import_existing_site(api: FakeSiteAPI, state_path: Path):
    site_id = api.add_site("example.com", "", "", "", "", "", "", "").site_id

    result = _invoke(state_path, "import", "example.com", str(site_id))

    assert result.exit_code == 0, result.output
    entry = _state(state_path)["example.com"]
    assert entry["id"] == str(site_id)
    assert entry["attributes"]["dns_cname_record_value"] == f"{site_id}.x.incapdns.net"


def test_import_unknown_site_fails(api: FakeSiteAPI, state_path: Path):
    result = _invoke(state_path, "import", "example.com", "999")

    assert result.exit_code == 1
    assert not state_path.exists()


def test_show_without_state(state_path: Path):
    result = _invoke(state_path, "show")

    assert result.exit_code == 0
    assert "No sites" in result.output


def test_show_lists_sites(api: FakeSiteAPI, state_path: Path):
    _invoke(state_path, "create", "example.com")

    result = _invoke(state_path, "show")

    assert result.exit_code == 0
    assert "example.com" in result.output
    assert "1000" in result.output


def test_schema_lists_attributes(state_path: Path):
    result = _invoke(state_path, "schema")

    assert result.exit_code == 0
    assert "domain" in result.output
    assert "computed" in result.output


def test_missing_credentials(state_path: Path):
    result = _invoke(state_path, "create", "example.com")

    assert result.exit_code == 1
    assert "credentials missing" in result.output


def test_doctor_reports_account(api: FakeSiteAPI, state_path: Path):
    result = _invoke(state_path, "doctor", "run")

    assert result.exit_code == 0, result.output
    assert ("verify",) in api.calls


def test_update_needs_no_credentials(state_path: Path):
    StateStore(state_path).put(ResourceData({"domain": "example.com"}, id="1000"))

    result = _invoke(state_path, "update", "example.com", "--log-level", "full")

    assert result.exit_code == 0, result.output
    assert "recorded locally only" in result.output
    assert _state(state_path)["example.com"]["attributes"]["log_level"] == "full"


def test_domain_lookups_ignore_case(api: FakeSiteAPI, state_path: Path):
    _invoke(state_path, "create", "Example.com")

    again = _invoke(state_path, "create", "Example.com")
    assert again.exit_code == 1
    assert "already managed" in again.output
    assert [c[0] for c in api.calls].count("add_site") == 1

    result = _invoke(state_path, "delete", "EXAMPLE.com")
    assert result.exit_code == 0, result.output
    assert _state(state_path) == {}
