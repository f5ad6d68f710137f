"""Lifecycle binding of the `site` resource.

Maps the declarative attributes of a `ResourceData` onto the three remote
operations of `SiteAPI` and copies the remote answer back into state.

Rules:
- Errors from the client are logged and re-raised unchanged.
- `update` is a no-op: changes to optional arguments are never sent.
- No retries, no partial-failure reconciliation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from core.domain.models import SiteStatusResponse
from core.domain.resource_data import ResourceData
from core.domain.schema import SITE_SCHEMA, Attribute
from core.interfaces.site_api import SiteAPI

logger = logging.getLogger(__name__)

LifecycleFunc = Callable[[ResourceData, SiteAPI], None]


def create(d: ResourceData, client: SiteAPI) -> None:
    domain = d.get("domain")

    logger.info("Creating Incapsula site for domain: %s", domain)

    try:
        response = client.add_site(
            domain,
            d.get("account_id"),
            d.get("ref_id"),
            d.get("send_site_setup_emails"),
            d.get("site_ip"),
            d.get("force_ssl"),
            d.get("log_level"),
            d.get("logs_account_id"),
        )
    except Exception as exc:
        logger.error("Could not create Incapsula site for domain: %s, %s", domain, exc)
        raise

    d.set_id(str(response.site_id))

    logger.info("Created Incapsula site for domain: %s", domain)

    # The rest of the state comes from the remote status.
    read(d, client)


def read(d: ResourceData, client: SiteAPI) -> None:
    domain = d.get("domain")
    site_id = site_id_of(d)

    logger.info("Reading Incapsula site for domain: %s", domain)

    try:
        status = client.site_status(domain, site_id)
    except Exception as exc:
        logger.error("Could not read Incapsula site for domain: %s, %s", domain, exc)
        raise

    d.set("site_creation_date", status.site_creation_date)
    d.set("domain", status.domain)
    apply_dns_records(d, status)

    logger.info("Read Incapsula site for domain: %s", domain)


def update(d: ResourceData, client: SiteAPI) -> None:
    # Not implemented remotely.
    logger.debug("Update of Incapsula site %s is a no-op", d.id)


def delete(d: ResourceData, client: SiteAPI) -> None:
    domain = d.get("domain")
    site_id = site_id_of(d)

    logger.info("Deleting Incapsula site for domain: %s", domain)

    try:
        client.delete_site(domain, site_id)
    except Exception as exc:
        logger.error("Could not delete Incapsula site for domain: %s, %s", domain, exc)
        raise

    # An empty id marks the resource as gone.
    d.set_id("")

    logger.info("Deleted Incapsula site for domain: %s", domain)


def import_state(d: ResourceData, client: SiteAPI) -> None:
    """Passthrough importer: keep the user supplied id and read the rest."""

    logger.info("Importing Incapsula site %s", d.id)
    read(d, client)


def site_id_of(d: ResourceData) -> int:
    """Numeric site id of `d`; `0` when the id is empty or not a number."""

    try:
        return int(d.id)
    except ValueError:
        return 0


def apply_dns_records(d: ResourceData, status: SiteStatusResponse) -> None:
    """Copy the DNS instructions of `status` into the computed attributes.

    The first CNAME entry with a value wins. Every A entry contributes all of
    its values, in response order, and the last A entry names the record.
    """

    cname_seen = False
    a_values: list[str] = []
    for entry in status.dns:
        record_type = entry.set_type_to
        if record_type == "CNAME" and entry.set_data_to and not cname_seen:
            d.set("dns_cname_record_name", entry.dns_record_name)
            d.set("dns_cname_record_value", entry.set_data_to[0])
            cname_seen = True
        elif record_type == "A":
            d.set("dns_a_record_name", entry.dns_record_name)
            a_values.extend(entry.set_data_to)
    d.set("dns_a_record_value", a_values)


@dataclass(frozen=True)
class Resource:
    """A resource type: its schema plus its lifecycle callables."""

    name: str
    schema: dict[str, Attribute]
    create: LifecycleFunc
    read: LifecycleFunc
    update: LifecycleFunc
    delete: LifecycleFunc
    importer: LifecycleFunc


SITE_RESOURCE = Resource(
    name="incapsula_site",
    schema=SITE_SCHEMA,
    create=create,
    read=read,
    update=update,
    delete=delete,
    importer=import_state,
)
