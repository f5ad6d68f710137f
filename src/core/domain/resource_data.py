"""State of one `site` resource instance.

`ResourceData` is the attribute bag the lifecycle functions read and write:
`get`/`set` for attributes, `id`/`set_id` for the remote identifier. An empty
identifier means the resource does not exist (yet, or any more).
"""

from __future__ import annotations

import copy
from typing import Any, Mapping

from core.domain.models import SiteConfig
from core.domain.schema import INPUT_ATTRIBUTES, SITE_SCHEMA, Attribute, AttributeType


class ResourceData:
    def __init__(self, attributes: Mapping[str, Any] | None = None, *, id: str = "") -> None:
        self._id = id
        self._values: dict[str, Any] = {}
        for name, value in (attributes or {}).items():
            self.set(name, value)
        self._original = copy.deepcopy(self._values)

    @classmethod
    def from_config(cls, config: SiteConfig, *, id: str = "") -> "ResourceData":
        return cls(config.model_dump(exclude_none=True), id=id)

    @classmethod
    def from_state(cls, state: Mapping[str, Any]) -> "ResourceData":
        """Rebuild an instance from the dict produced by `to_state`."""

        attributes = state.get("attributes") or {}
        if not isinstance(attributes, Mapping):
            raise ValueError("state 'attributes' must be a mapping")
        return cls(attributes, id=str(state.get("id") or ""))

    def to_state(self) -> dict[str, Any]:
        return {
            "id": self._id,
            "attributes": {name: self.get(name) for name in SITE_SCHEMA},
        }

    def to_config(self) -> SiteConfig:
        values = {name: self._values[name] for name in INPUT_ATTRIBUTES if self._values.get(name)}
        return SiteConfig(**values)

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        self._id = value

    @property
    def exists(self) -> bool:
        return bool(self._id)

    def is_new(self) -> bool:
        return not self._id

    def get(self, name: str) -> Any:
        attr = _lookup(name)
        if name in self._values:
            return copy.copy(self._values[name])
        return attr.type.zero_value()

    def set(self, name: str, value: Any) -> None:
        attr = _lookup(name)
        self._values[name] = _coerce(attr, value)

    def has_change(self, name: str) -> bool:
        _lookup(name)
        return self._values.get(name) != self._original.get(name)

    def changed_force_new(self) -> list[str]:
        """Attributes changed since construction that cannot be updated in place."""

        return [a.name for a in SITE_SCHEMA.values() if a.force_new and self.has_change(a.name)]

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, domain={self.get('domain')!r})"


def _lookup(name: str) -> Attribute:
    try:
        return SITE_SCHEMA[name]
    except KeyError:
        raise KeyError(f"unknown site attribute: {name!r}") from None


def _coerce(attr: Attribute, value: Any) -> Any:
    if value is None:
        return attr.type.zero_value()
    if attr.type is AttributeType.INT:
        return int(value)
    if attr.type is AttributeType.LIST:
        if isinstance(value, (str, bytes)):
            raise TypeError(f"{attr.name} expects a list, got {type(value).__name__}")
        return [str(v) for v in value]
    return str(value)
