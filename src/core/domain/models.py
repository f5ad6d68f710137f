"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation at the edge (API JSON, CLI flags) with self-documenting
  `Field` descriptions.
- The models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class SiteConfig(BaseModel):
    """Declarative arguments of one site, as written by the user."""

    model_config = ConfigDict(extra="forbid")

    domain: str = Field(
        ...,
        min_length=1,
        max_length=253,
        description="Domain name of the site (force-new).",
    )
    account_id: str | None = Field(
        default=None,
        description="Numeric identifier of the account to operate on.",
    )
    ref_id: str | None = Field(
        default=None,
        description="Customer specific identifier for this operation.",
    )
    send_site_setup_emails: str | None = Field(
        default=None,
        description="'false' disables the add-site emails (DNS/SSL instructions).",
    )
    site_ip: str | None = Field(
        default=None,
        description="Manually set web server IP/CNAME.",
    )
    force_ssl: str | None = Field(
        default=None,
        description="'true' forces SSL support (manual IP/CNAME sites only).",
    )
    log_level: str | None = Field(
        default=None,
        description="Log reporting level: full, security, none or default.",
    )
    logs_account_id: str | None = Field(
        default=None,
        description="Account collecting the logs (Logs Integration SKU).",
    )


class ApiResponse(BaseModel):
    """Envelope shared by every provisioning API answer.

    `res == 0` means success; anything else comes with a `res_message`.
    """

    model_config = ConfigDict(extra="ignore")

    res: int = Field(
        default=0,
        description="Result code (0 on success).",
    )
    res_message: str = Field(
        default="",
        description="Human readable result message.",
    )

    @property
    def ok(self) -> bool:
        return self.res == 0


class SiteAddResponse(ApiResponse):
    site_id: int = Field(
        default=0,
        description="Numeric identifier of the newly created site.",
    )


class DnsRecordEntry(BaseModel):
    """One DNS instruction returned by site status: (type, name, values)."""

    model_config = ConfigDict(extra="ignore")

    dns_record_name: str = Field(
        default="",
        description="Record name the customer must create.",
    )
    set_type_to: str = Field(
        default="",
        description="Record type (CNAME, A...).",
    )
    set_data_to: list[str] = Field(
        default_factory=list,
        description="Record values.",
    )


class SiteStatusResponse(ApiResponse):
    site_id: int = Field(default=0)
    domain: str = Field(default="")
    status: str = Field(default="")
    account_id: int | None = Field(default=None)
    site_creation_date: int = Field(
        default=0,
        description="Numeric representation of the site creation date.",
    )
    ips: list[str] = Field(default_factory=list)
    dns: list[DnsRecordEntry] = Field(
        default_factory=list,
        description="DNS instructions to route the site through the service.",
    )


class AccountStatusResponse(ApiResponse):
    account_id: int | None = Field(default=None)
    email: str | None = Field(default=None)
    plan_name: str | None = Field(default=None)
