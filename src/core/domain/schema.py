"""Attribute schema of the `site` resource.

Each attribute declares its kind (required/optional/computed), its value
type and whether changing it forces a new resource. `ResourceData` uses the
schema for validation and defaults; the CLI renders it with `schema`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class AttributeKind(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    COMPUTED = "computed"


class AttributeType(str, Enum):
    STRING = "string"
    INT = "int"
    LIST = "list"

    def zero_value(self) -> Any:
        """Value reported for an attribute that was never set."""

        if self is AttributeType.INT:
            return 0
        if self is AttributeType.LIST:
            return []
        return ""


@dataclass(frozen=True)
class Attribute:
    name: str
    kind: AttributeKind
    type: AttributeType
    description: str
    force_new: bool = False

    @property
    def is_input(self) -> bool:
        return self.kind is not AttributeKind.COMPUTED


def _optional(name: str, description: str) -> Attribute:
    return Attribute(name, AttributeKind.OPTIONAL, AttributeType.STRING, description)


def _computed(name: str, type_: AttributeType, description: str) -> Attribute:
    return Attribute(name, AttributeKind.COMPUTED, type_, description)


SITE_SCHEMA: dict[str, Attribute] = {
    attr.name: attr
    for attr in (
        # Required arguments
        Attribute(
            "domain",
            AttributeKind.REQUIRED,
            AttributeType.STRING,
            "The domain name of the site. For example: www.example.com, hello.example.com, example.com.",
            force_new=True,
        ),
        # Optional arguments
        _optional(
            "account_id",
            "Numeric identifier of the account to operate on. If not specified, operation will be "
            "performed on the account identified by the authentication parameters.",
        ),
        _optional("ref_id", "Customer specific identifier for this operation."),
        _optional(
            "send_site_setup_emails",
            "If this value is false, end users will not get emails about the add site process such "
            "as DNS instructions and SSL setup.",
        ),
        _optional("site_ip", "Manually set the web server IP/CNAME."),
        _optional(
            "force_ssl",
            "If this value is true, manually set the site to support SSL. This option is only "
            "available for sites with manually configured IP/CNAME and for specific accounts.",
        ),
        _optional(
            "log_level",
            "Available only for Enterprise Plan customers that purchased the Logs Integration SKU. "
            "Sets the log reporting level for the site. Options are full, security, none, and default.",
        ),
        _optional(
            "logs_account_id",
            "Available only for Enterprise Plan customers that purchased the Logs Integration SKU. "
            "Numeric identifier of the account that purchased the logs integration SKU and which "
            "collects the logs. If not specified, operation will be performed on the account "
            "identified by the authentication parameters.",
        ),
        # Computed attributes
        _computed("site_creation_date", AttributeType.INT, "Numeric representation of the site creation date."),
        _computed("dns_cname_record_name", AttributeType.STRING, "CNAME record name."),
        _computed("dns_cname_record_value", AttributeType.STRING, "CNAME record value."),
        _computed("dns_a_record_name", AttributeType.STRING, "A record name."),
        _computed("dns_a_record_value", AttributeType.LIST, "A record value."),
    )
}

INPUT_ATTRIBUTES: tuple[str, ...] = tuple(a.name for a in SITE_SCHEMA.values() if a.is_input)
COMPUTED_ATTRIBUTES: tuple[str, ...] = tuple(a.name for a in SITE_SCHEMA.values() if not a.is_input)
