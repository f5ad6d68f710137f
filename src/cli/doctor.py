"""Doctor command for environment diagnostics."""

from __future__ import annotations

from contextlib import closing

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from adapters.incapsula_client import IncapsulaClient
from adapters.state_store import StateStore
from core.config import AppSettings, write_user_env_vars
from core.errors import IncapsulaError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_credentials(settings: AppSettings) -> tuple[bool, str]:
    try:
        with closing(IncapsulaClient(settings)) as client:
            account = client.verify()
    except IncapsulaError as exc:
        return False, str(exc)
    detail = f"account {account.account_id}" if account.account_id else "OK"
    if account.plan_name:
        detail += f" ({account.plan_name})"
    return True, detail


def _check_state(settings: AppSettings) -> tuple[bool, str]:
    store = StateStore(settings.state_path)
    if not store.path.exists():
        return True, f"{store.path} (not created yet)"
    try:
        sites = store.load_all()
    except IncapsulaError as exc:
        return False, str(exc)
    return True, f"{store.path} ({len(sites)} site(s))"


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()

    table = Table(title="incapsula-site doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API ID", "OK" if settings.api_id else "MISSING", "INCAPSULA_API_ID")
    table.add_row("API key", "OK" if settings.api_key else "MISSING", "INCAPSULA_API_KEY")
    table.add_row("Base URL", "OK", settings.base_url)

    ok_state, detail_state = _check_state(settings)
    table.add_row("State file", "OK" if ok_state else "FAIL", escape(detail_state))

    # Credentials (one live API call)
    ok_auth = False
    if settings.has_credentials:
        ok_auth, detail_auth = _check_credentials(settings)
        table.add_row("Credentials", "OK" if ok_auth else "FAIL", escape(detail_auth))
    else:
        table.add_row("Credentials", "SKIPPED", "No credentials configured")

    _console.print(table)

    if not settings.has_credentials:
        _console.print("\n[yellow]Note:[/yellow] run `incapsula-site doctor setup` to store credentials.")
    if not (ok_state and ok_auth):
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive credentials setup (stored in the user config .env)."""

    api_id = typer.prompt("API ID").strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    base_url = typer.prompt(
        "API base URL",
        default=AppSettings.model_fields["base_url"].default,
        show_default=True,
    ).strip()

    if not api_id or not api_key:
        raise typer.BadParameter("API ID and API key are required")

    env_path = write_user_env_vars(
        {
            "INCAPSULA_API_ID": api_id,
            "INCAPSULA_API_KEY": api_key,
            "INCAPSULA_BASE_URL": base_url,
        }
    )

    _console.print(f"[green]Saved credentials to:[/green] {env_path}")
