"""Shared fixtures for the incapsula-site test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppSettings
from fakes import FakeSiteAPI


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep real credentials and .env files out of the tests."""

    for name in (
        "INCAPSULA_API_ID",
        "INCAPSULA_API_KEY",
        "INCAPSULA_BASE_URL",
        "INCAPSULA_STATE_PATH",
        "INCAPSULA_LOG_LEVEL",
        "INCAPSULA_HTTP_TIMEOUT_SECONDS",
        "INCAPSULA_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        api_id="12345",
        api_key="s3cr3t",
        state_path=tmp_path / "state.json",
    )


@pytest.fixture
def fake_api() -> FakeSiteAPI:
    return FakeSiteAPI()


@pytest.fixture
def status_payload() -> dict:
    """A trimmed `sites/status` answer."""

    return {
        "site_id": 7654321,
        "statusEnum": "pending-dns-changes",
        "status": "pending-dns-changes",
        "domain": "www.example.com",
        "account_id": 4242,
        "acceleration_level": "standard",
        "site_creation_date": 1_527_000_000_000,
        "ips": ["192.0.2.1"],
        "dns": [
            {"dns_record_name": "www.example.com", "set_type_to": "CNAME", "set_data_to": ["abc12.x.incapdns.net"]},
            {"dns_record_name": "example.com", "set_type_to": "A", "set_data_to": ["198.51.100.1", "198.51.100.2"]},
        ],
        "active": "active",
        "res": 0,
        "res_message": "OK",
        "debug_info": {"id-info": "999999"},
    }
