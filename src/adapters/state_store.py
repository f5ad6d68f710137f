"""Local JSON state of managed sites.

Format (stable, UTF-8, sorted keys):

    {"version": 1, "sites": {"<domain>": {"id": "123", "attributes": {...}}}}

Entries are keyed by lower-cased domain; the canonical domain returned by
the service replaces the key the user typed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.resource_data import ResourceData
from core.errors import StateError

STATE_VERSION = 1


class StateStore:
    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def load_all(self) -> dict[str, dict[str, Any]]:
        if not self._path.exists():
            return {}
        try:
            payload = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StateError(f"Could not read state file {self._path}: {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("sites", {}), dict):
            raise StateError(f"Malformed state file {self._path}: expected an object with 'sites'")
        version = payload.get("version", STATE_VERSION)
        if version != STATE_VERSION:
            raise StateError(f"Unsupported state version {version!r} in {self._path}")
        return payload.get("sites", {})

    def get(self, domain: str) -> ResourceData | None:
        entry = self.load_all().get(_key(domain))
        if entry is None:
            return None
        try:
            return ResourceData.from_state(entry)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise StateError(f"Malformed state entry for {domain}: {exc}") from exc

    def put(self, d: ResourceData, *, previous_domain: str | None = None) -> Path:
        sites = self.load_all()
        if previous_domain:
            sites.pop(_key(previous_domain), None)
        sites[_key(d.get("domain"))] = d.to_state()
        return self._write(sites)

    def remove(self, domain: str) -> bool:
        sites = self.load_all()
        key = _key(domain)
        if key not in sites:
            return False
        del sites[key]
        self._write(sites)
        return True

    def _write(self, sites: dict[str, Any]) -> Path:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"version": STATE_VERSION, "sites": sites}
        self._path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
        return self._path


def _key(domain: str) -> str:
    return domain.strip().lower()
