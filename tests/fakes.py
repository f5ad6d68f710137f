"""In-memory stand-in for the provisioning API."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.domain.models import (
    AccountStatusResponse,
    DnsRecordEntry,
    SiteAddResponse,
    SiteStatusResponse,
)
from core.errors import IncapsulaAPIError

UNKNOWN_SITE_RES = 9413


@dataclass
class FakeSite:
    site_id: int
    domain: str
    arguments: tuple[str, ...]
    dns: list[DnsRecordEntry] = field(default_factory=list)


class FakeSiteAPI:
    """Implements `SiteAPI` on a dict; records every call."""

    def __init__(self, *, first_id: int = 1000, creation_date: int = 1_700_000_000_000) -> None:
        self.sites: dict[int, FakeSite] = {}
        self.calls: list[tuple] = []
        self.closed = False
        self.fail_with: Exception | None = None
        self._next_id = first_id
        self._creation_date = creation_date

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
        args = (
            domain,
            account_id,
            ref_id,
            send_site_setup_emails,
            site_ip,
            force_ssl,
            log_level,
            logs_account_id,
        )
        self.calls.append(("add_site", *args))
        self._maybe_fail()
        site_id = self._next_id
        self._next_id += 1
        self.sites[site_id] = FakeSite(
            site_id=site_id,
            domain=domain.lower(),
            arguments=args,
            dns=[
                DnsRecordEntry(
                    dns_record_name=domain.lower(),
                    set_type_to="CNAME",
                    set_data_to=[f"{site_id}.x.incapdns.net"],
                ),
                DnsRecordEntry(
                    dns_record_name=domain.lower(),
                    set_type_to="A",
                    set_data_to=["192.0.2.10", "192.0.2.11"],
                ),
            ],
        )
        return SiteAddResponse(site_id=site_id)

    def site_status(self, domain: str, site_id: int) -> SiteStatusResponse:
        self.calls.append(("site_status", domain, site_id))
        self._maybe_fail()
        site = self._get(site_id, action=f"getting site status for domain {domain}")
        return SiteStatusResponse(
            site_id=site.site_id,
            domain=site.domain,
            status="pending-dns-changes",
            site_creation_date=self._creation_date,
            dns=list(site.dns),
        )

    def delete_site(self, domain: str, site_id: int) -> None:
        self.calls.append(("delete_site", domain, site_id))
        self._maybe_fail()
        self._get(site_id, action=f"deleting site for domain {domain}")
        del self.sites[site_id]

    def verify(self) -> AccountStatusResponse:
        self.calls.append(("verify",))
        self._maybe_fail()
        return AccountStatusResponse(account_id=42, email="ops@example.com", plan_name="Enterprise")

    def close(self) -> None:
        self.closed = True

    def _get(self, site_id: int, *, action: str) -> FakeSite:
        try:
            return self.sites[site_id]
        except KeyError:
            raise IncapsulaAPIError(
                f"Error from Incapsula service when {action}: Unknown/unauthorized site_id",
                res=UNKNOWN_SITE_RES,
                res_message="Unknown/unauthorized site_id",
            ) from None

    def _maybe_fail(self) -> None:
        if self.fail_with is not None:
            raise self.fail_with
