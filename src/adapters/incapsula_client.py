"""Incapsula provisioning API client (httpx, synchronous).

Responsibility:
- Authenticate every call (`api_id`/`api_key` form fields).
- POST form-encoded requests to the `sites/*` and `account` endpoints.
- Turn transport failures, non-200 answers, bad JSON and non-zero `res`
  codes into `IncapsulaError` subclasses.

No retries: a failed call raises immediately.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import ValidationError

from adapters.http_client import build_client
from core.config import AppSettings
from core.domain.models import (
    AccountStatusResponse,
    ApiResponse,
    SiteAddResponse,
    SiteStatusResponse,
)
from core.errors import (
    ConfigurationError,
    IncapsulaAPIError,
    IncapsulaHTTPError,
    IncapsulaResponseError,
    IncapsulaTransportError,
)

logger = logging.getLogger(__name__)

ENDPOINT_ACCOUNT = "account"
ENDPOINT_SITE_ADD = "sites/add"
ENDPOINT_SITE_STATUS = "sites/status"
ENDPOINT_SITE_DELETE = "sites/delete"

_BODY_PREVIEW_CHARS = 500

R = TypeVar("R", bound=ApiResponse)


class IncapsulaClient:
    """Concrete `SiteAPI` backed by `httpx.Client`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        if not self._settings.has_credentials:
            raise ConfigurationError(
                "Incapsula credentials missing: set INCAPSULA_API_ID and INCAPSULA_API_KEY "
                "(or run `incapsula-site doctor setup`)."
            )
        self._owns_http = http_client is None
        self._http = http_client or build_client(self._settings)

    def __enter__(self) -> "IncapsulaClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def verify(self) -> AccountStatusResponse:
        return self._post(ENDPOINT_ACCOUNT, {}, AccountStatusResponse, action="verifying credentials")

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
        optional = {
            "account_id": account_id,
            "ref_id": ref_id,
            "send_site_setup_emails": send_site_setup_emails,
            "site_ip": site_ip,
            "force_ssl": force_ssl,
            "log_level": log_level,
            "logs_account_id": logs_account_id,
        }
        form = {"domain": domain}
        # Unset arguments are left out so the service applies its own defaults.
        form.update({k: v for k, v in optional.items() if v})

        return self._post(
            ENDPOINT_SITE_ADD,
            form,
            SiteAddResponse,
            action=f"adding site for domain {domain}",
        )

    def site_status(self, domain: str, site_id: int) -> SiteStatusResponse:
        return self._post(
            ENDPOINT_SITE_STATUS,
            {"site_id": str(site_id)},
            SiteStatusResponse,
            action=f"getting site status for domain {domain} (id: {site_id})",
        )

    def delete_site(self, domain: str, site_id: int) -> None:
        self._post(
            ENDPOINT_SITE_DELETE,
            {"site_id": str(site_id)},
            ApiResponse,
            action=f"deleting site for domain {domain} (id: {site_id})",
        )

    def _post(self, endpoint: str, form: dict[str, str], model: type[R], *, action: str) -> R:
        data = {
            "api_id": self._settings.api_id or "",
            "api_key": self._settings.api_key or "",
            **form,
        }
        logger.debug("POST %s (%s)", endpoint, action)

        try:
            response = self._http.post(endpoint, data=data)
        except httpx.HTTPError as exc:
            raise IncapsulaTransportError(
                f"Error from Incapsula service when {action}: {exc}"
            ) from exc

        body = response.text
        if response.status_code != 200:
            raise IncapsulaHTTPError(
                f"Error status code {response.status_code} from Incapsula service when "
                f"{action}: {body[:_BODY_PREVIEW_CHARS]}",
                status_code=response.status_code,
                body=body,
            )

        try:
            parsed = model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise IncapsulaResponseError(
                f"Error parsing JSON response when {action}: {exc}"
            ) from exc

        if not parsed.ok:
            raise IncapsulaAPIError(
                f"Error from Incapsula service when {action}: "
                f"{parsed.res_message or 'no message'} (res: {parsed.res})",
                res=parsed.res,
                res_message=parsed.res_message,
            )
        return parsed
