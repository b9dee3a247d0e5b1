"""CLI principal (Typer).

Uso:
    httpc get <url>
    httpc post <url> [key=value ...]

Flujo por invocación: argumentos -> `build_request` -> `HttpxDispatcher.send`
-> `render_response`. Un input inválido se rechaza con un error de uso
(exit 2) antes de tocar la red; los fallos en tiempo de ejecución terminan
con exit 1.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from adapters.http_client import HttpxDispatcher
from cli.ui_components import build_console, render_response
from core.config import APP_NAME, APP_VERSION, AppSettings
from core.domain.errors import HttpcError, RequestBuildError
from core.domain.models import HttpMethod, RequestSpec
from core.services.request_builder import build_request, parse_field, parse_url

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Minimal HTTP client: send GET/POST requests and pretty-print the response.",
)

logger = logging.getLogger(__name__)


@dataclass
class CliState:
    settings: AppSettings = field(default_factory=AppSettings)


def setup_logging(level: str = "WARNING") -> None:
    """Logging a stderr con Rich; stdout queda solo para la respuesta."""

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=False,
    )
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"{APP_NAME} {APP_VERSION}")
        raise typer.Exit()


def _timeout_callback(value: float | None) -> float | None:
    if value is not None and value <= 0:
        raise typer.BadParameter("timeout must be greater than 0")
    return value


def _url_callback(value: str) -> str:
    try:
        return parse_url(value)
    except RequestBuildError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _fields_callback(values: list[str] | None) -> list[str]:
    values = values or []
    for value in values:
        try:
            parse_field(value)
        except RequestBuildError as exc:
            raise typer.BadParameter(str(exc)) from exc
    return values


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log request details to stderr."),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        callback=_timeout_callback,
        help="Request timeout in seconds (default: no timeout).",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output."),
) -> None:
    """Send a single HTTP request and print status, headers and body."""

    try:
        settings = AppSettings()
    except ValidationError as exc:
        typer.echo(f"Error: invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2) from exc

    updates: dict[str, object] = {}
    if verbose:
        updates["log_level"] = "DEBUG"
    if timeout is not None:
        updates["timeout_seconds"] = timeout
    if no_color:
        updates["color"] = False
    if updates:
        settings = settings.model_copy(update=updates)

    setup_logging(settings.log_level)
    ctx.obj = CliState(settings=settings)


async def _dispatch(spec: RequestSpec, settings: AppSettings, console: Console) -> None:
    dispatcher = HttpxDispatcher(settings)
    view = await dispatcher.send(spec)
    render_response(view, console)


def _execute(ctx: typer.Context, method: HttpMethod, url: str, fields: list[str]) -> None:
    state: CliState = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    try:
        spec = build_request(method, url, fields)
    except RequestBuildError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console = build_console(color=state.settings.color)
    try:
        asyncio.run(_dispatch(spec, state.settings, console))
    except HttpcError as exc:
        logger.debug("invocation failed", exc_info=exc)
        build_console(color=state.settings.color, stderr=True).print(
            Text.assemble(("Error:", "bold red"), " ", str(exc))
        )
        raise typer.Exit(code=1) from exc


@app.command()
def get(
    ctx: typer.Context,
    url: str = typer.Argument(..., callback=_url_callback, help="Absolute http(s) URL."),
) -> None:
    """Send a GET request."""

    _execute(ctx, HttpMethod.GET, url, [])


@app.command()
def post(
    ctx: typer.Context,
    url: str = typer.Argument(..., callback=_url_callback, help="Absolute http(s) URL."),
    fields: list[str] | None = typer.Argument(
        None,
        callback=_fields_callback,
        metavar="[KEY=VALUE]...",
        help="Form fields, sent as application/x-www-form-urlencoded.",
    ),
) -> None:
    """Send a POST request with form-encoded fields."""

    _execute(ctx, HttpMethod.POST, url, fields or [])


def run() -> None:
    app(prog_name=APP_NAME)
