"""Contract of the remote site API.

Why Protocol:
- Structural contract (duck typing) without rigid inheritance.
- The lifecycle depends on this abstraction; the httpx client and the test
  fakes both satisfy it.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import AccountStatusResponse, SiteAddResponse, SiteStatusResponse


@runtime_checkable
class SiteAPI(Protocol):
    """Operations the `site` lifecycle needs from the provisioning API.

    Every method raises an `IncapsulaError` subclass on failure and never
    returns a response whose `res` is non-zero.
    """

    def add_site(
        self,
        domain: str,
        account_id: str,
        ref_id: str,
        send_site_setup_emails: str,
        site_ip: str,
        force_ssl: str,
        log_level: str,
        logs_account_id: str,
    ) -> SiteAddResponse:
        ...

    def site_status(self, domain: str, site_id: int) -> SiteStatusResponse:
        ...

    def delete_site(self, domain: str, site_id: int) -> None:
        ...

    def verify(self) -> AccountStatusResponse:
        """Check the configured credentials against the account endpoint."""

        ...
