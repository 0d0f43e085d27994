"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.rest_client import is_well_formed_absolute_uri
from core.config import ClientSettings, get_user_env_file

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: ClientSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.base_uri)
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings()

    table = Table(title="REST client doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "MISSING", str(env_file))

    uri_ok = is_well_formed_absolute_uri(settings.base_uri)
    table.add_row("Base URI", "OK" if uri_ok else "FAIL", settings.base_uri)

    if settings.auth_token:
        table.add_row("Auth token", "OK", "Bearer token configured")
    else:
        table.add_row("Auth token", "WARN", "No token set -> requests carry an empty Bearer header")
    table.add_row("User-Agent", "OK", f"{settings.client_name}/{settings.client_version}")

    ok_http = False
    if uri_ok:
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not uri_ok:
        _console.print("\n[yellow]Note:[/yellow] run `configure` to store a valid absolute base URI.")
        raise typer.Exit(code=1)
    if not ok_http:
        raise typer.Exit(code=1)


@app.command()
def settings() -> None:
    """Show the effective configuration (token masked)."""

    current = ClientSettings()

    table = Table(title="Effective settings")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in current.model_dump().items():
        if name == "auth_token" and value:
            value = value[:4] + "…" if len(value) > 4 else "…"
        table.add_row(name, "-" if value is None else str(value))
    _console.print(table)
