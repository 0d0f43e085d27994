"""CLI entry point.

Commands:
- `request`: perform one call through the request engine and show the envelope.
- `configure`: store base URI / token in the user's global .env.
- `doctor`: environment diagnostics (sub-app).
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.http_client import build_async_client
from adapters.json_client import SUPPORTED_METHODS, JsonClient
from cli import doctor
from cli.log_setup import configure_logging
from cli.ui_components import build_result_table, print_banner
from core.config import ClientSettings, write_user_env_vars
from core.domain.results import Results
from core.errors import InvalidArgumentError

app = typer.Typer(no_args_is_help=True, help="Typed REST client toolbox.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
logger = logging.getLogger("rest_client.cli")


async def _perform(settings: ClientSettings, method: str, path: str, body: Any) -> Results[Any]:
    async with build_async_client(settings) as http:
        client = JsonClient(http, settings, logger=logger)
        return await client.fetch(method, path, body)


@app.command()
def request(
    method: str = typer.Argument(..., help="HTTP method: GET, POST, PUT or DELETE."),
    path: str = typer.Argument(..., help="Path resolved against the base URI ('/x' replaces, 'x' appends)."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON body for POST/PUT."),
    base_uri: Optional[str] = typer.Option(None, "--base-uri", help="Override REST_CLIENT_BASE_URI."),
    token: Optional[str] = typer.Option(None, "--token", help="Override REST_CLIENT_AUTH_TOKEN."),
    debug: bool = typer.Option(False, "--debug", help="Log request URI and Authorization header."),
    as_json: bool = typer.Option(False, "--json", help="Print the envelope as JSON."),
) -> None:
    """Perform one call and print the result envelope."""

    overrides: dict[str, Any] = {}
    if base_uri is not None:
        overrides["base_uri"] = base_uri
    if token is not None:
        overrides["auth_token"] = token
    try:
        settings = ClientSettings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())
        raise typer.BadParameter(problems, param_hint="--base-uri/--token") from exc

    configure_logging("DEBUG" if debug else settings.log_level)

    if method.upper() not in SUPPORTED_METHODS:
        raise typer.BadParameter(f"expected one of {', '.join(SUPPORTED_METHODS)}", param_hint="METHOD")

    body: Any = None
    if data is not None:
        try:
            body = json.loads(data)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"invalid JSON: {exc}", param_hint="--data") from exc

    try:
        result = asyncio.run(_perform(settings, method, path, body))
    except InvalidArgumentError as exc:
        raise typer.BadParameter(str(exc), param_hint=exc.argument) from exc

    if as_json:
        typer.echo(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
    else:
        print_banner(_console)
        _console.print(build_result_table(result))

    if not result.success:
        raise typer.Exit(code=1)


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    defaults = ClientSettings()
    base_uri = typer.prompt("Base URI", default=defaults.base_uri, show_default=True).strip()
    client_name = typer.prompt("Client name", default=defaults.client_name, show_default=True).strip()
    token = typer.prompt("Bearer token (empty for none)", default="", show_default=False, hide_input=True).strip()

    if not base_uri or not client_name:
        raise typer.BadParameter("base URI and client name are required")

    env_path = write_user_env_vars(
        {
            "REST_CLIENT_BASE_URI": base_uri,
            "REST_CLIENT_CLIENT_NAME": client_name,
            "REST_CLIENT_AUTH_TOKEN": token or None,
        }
    )
    _console.print(f"[green]Saved config to:[/green] {env_path}")


def run() -> None:
    app()
