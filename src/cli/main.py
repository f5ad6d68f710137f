"""`incapsula-site` command line.

Each command loads the local state, runs one lifecycle operation of the
`incapsula_site` resource against the live API and writes the state back.
"""

from __future__ import annotations

import logging
from contextlib import closing
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.incapsula_client import IncapsulaClient
from adapters.state_store import StateStore
from cli import doctor
from cli.ui_components import build_schema_table, build_site_table, build_sites_summary_table
from core.config import AppSettings
from core.domain.models import SiteConfig
from core.domain.resource_data import ResourceData
from core.errors import IncapsulaError
from core.services.site_resource import SITE_RESOURCE, LifecycleFunc

app = typer.Typer(no_args_is_help=True, help="Manage Incapsula sites declaratively.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    state: Optional[Path] = typer.Option(None, "--state", help="State file (default: INCAPSULA_STATE_PATH)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every API call."),
) -> None:
    settings = AppSettings()
    if state is not None:
        settings = settings.model_copy(update={"state_path": state})
    _configure_logging("INFO" if verbose else settings.log_level)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> AppSettings:
    return ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()


def _fail(message: str, code: int = 1) -> typer.Exit:
    _err_console.print(message, style="red", markup=False)
    return typer.Exit(code=code)


class _LazyClient:
    """Builds the API client on first use.

    Operations that never reach the service (update) run without credentials.
    """

    def __init__(self, settings: AppSettings) -> None:
        self._settings = settings
        self._client: IncapsulaClient | None = None

    def __getattr__(self, name: str):
        if self._client is None:
            self._client = IncapsulaClient(self._settings)
        return getattr(self._client, name)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()


def _run(op: LifecycleFunc, d: ResourceData, settings: AppSettings) -> None:
    """Run one lifecycle operation with a fresh client."""

    try:
        with closing(_LazyClient(settings)) as client:
            op(d, client)
    except IncapsulaError as exc:
        raise _fail(str(exc)) from exc


def _find(store: StateStore, domain: str) -> ResourceData | None:
    try:
        return store.get(domain)
    except IncapsulaError as exc:
        raise _fail(str(exc)) from exc


def _load(store: StateStore, domain: str) -> ResourceData:
    d = _find(store, domain)
    if d is None:
        raise _fail(f"No site for domain {domain} in {store.path}")
    return d


def _build_config(**values: Optional[str]) -> SiteConfig:
    try:
        return SiteConfig(**values)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def create(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name of the site."),
    account_id: Optional[str] = typer.Option(None, help="Account to operate on."),
    ref_id: Optional[str] = typer.Option(None, help="Customer specific identifier."),
    send_site_setup_emails: Optional[str] = typer.Option(None, help="'false' disables setup emails."),
    site_ip: Optional[str] = typer.Option(None, help="Web server IP/CNAME."),
    force_ssl: Optional[str] = typer.Option(None, help="'true' forces SSL support."),
    log_level: Optional[str] = typer.Option(None, help="full, security, none or default."),
    logs_account_id: Optional[str] = typer.Option(None, help="Account collecting the logs."),
) -> None:
    """Create a site and record it in the state file."""

    settings = _settings(ctx)
    store = StateStore(settings.state_path)
    existing = _find(store, domain)
    if existing is not None and existing.exists:
        raise _fail(f"Site {domain} is already managed (id: {existing.id})")

    config = _build_config(
        domain=domain,
        account_id=account_id,
        ref_id=ref_id,
        send_site_setup_emails=send_site_setup_emails,
        site_ip=site_ip,
        force_ssl=force_ssl,
        log_level=log_level,
        logs_account_id=logs_account_id,
    )
    d = ResourceData.from_config(config)
    try:
        _run(SITE_RESOURCE.create, d, settings)
    finally:
        # The site may exist remotely even if the follow-up read failed.
        if d.exists:
            store.put(d, previous_domain=domain)

    _console.print(build_site_table(d))
    _console.print(f"[green]Created site {d.get('domain')} (id: {d.id})[/green]")


@app.command()
def refresh(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain of a managed site."),
) -> None:
    """Read the remote site into the state file."""

    settings = _settings(ctx)
    store = StateStore(settings.state_path)
    d = _load(store, domain)

    _run(SITE_RESOURCE.read, d, settings)
    store.put(d, previous_domain=domain)
    _console.print(build_site_table(d))


@app.command()
def update(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain of a managed site."),
    new_domain: Optional[str] = typer.Option(None, help="Rename the site (not supported in place)."),
    account_id: Optional[str] = typer.Option(None),
    ref_id: Optional[str] = typer.Option(None),
    send_site_setup_emails: Optional[str] = typer.Option(None),
    site_ip: Optional[str] = typer.Option(None),
    force_ssl: Optional[str] = typer.Option(None),
    log_level: Optional[str] = typer.Option(None),
    logs_account_id: Optional[str] = typer.Option(None),
) -> None:
    """Record new arguments for a site.

    Updates are not sent to the service: only the local state changes.
    """

    settings = _settings(ctx)
    store = StateStore(settings.state_path)
    d = _load(store, domain)

    changes = {
        "account_id": account_id,
        "ref_id": ref_id,
        "send_site_setup_emails": send_site_setup_emails,
        "site_ip": site_ip,
        "force_ssl": force_ssl,
        "log_level": log_level,
        "logs_account_id": logs_account_id,
    }
    for name, value in changes.items():
        if value is not None:
            d.set(name, value)
    if new_domain is not None:
        d.set("domain", new_domain)

    forced = d.changed_force_new()
    if forced:
        raise _fail(
            f"Changing {', '.join(forced)} requires a new site: delete {domain} and create it again.",
            code=2,
        )

    _run(SITE_RESOURCE.update, d, settings)
    store.put(d, previous_domain=domain)
    _console.print(
        "[yellow]Note:[/yellow] updates are recorded locally only; the remote site was not changed."
    )


@app.command()
def delete(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain of a managed site."),
) -> None:
    """Delete a site and drop it from the state file."""

    settings = _settings(ctx)
    store = StateStore(settings.state_path)
    d = _load(store, domain)

    _run(SITE_RESOURCE.delete, d, settings)
    store.remove(domain)
    _console.print(f"[green]Deleted site {domain}[/green]")


@app.command(name="import")
def import_site(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain of the existing site."),
    site_id: int = typer.Argument(..., help="Numeric site id."),
) -> None:
    """Bring an existing site under management."""

    settings = _settings(ctx)
    store = StateStore(settings.state_path)
    if _find(store, domain) is not None:
        raise _fail(f"Site {domain} is already in {store.path}")

    d = ResourceData({"domain": domain}, id=str(site_id))
    _run(SITE_RESOURCE.importer, d, settings)
    store.put(d, previous_domain=domain)
    _console.print(build_site_table(d))


@app.command()
def show(
    ctx: typer.Context,
    domain: Optional[str] = typer.Argument(None, help="Only show this site."),
) -> None:
    """Print the stored state (no API call)."""

    store = StateStore(_settings(ctx).state_path)
    if domain is not None:
        _console.print(build_site_table(_load(store, domain)))
        return

    try:
        sites = {name: store.get(name) for name in store.load_all()}
    except IncapsulaError as exc:
        raise _fail(str(exc)) from exc
    if not sites:
        _console.print(f"[dim]No sites in {store.path}[/dim]")
        return
    _console.print(build_sites_summary_table(sites))


@app.command()
def schema() -> None:
    """Print the attributes of the incapsula_site resource."""

    _console.print(build_schema_table(SITE_RESOURCE.schema))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
