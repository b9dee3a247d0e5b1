"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar la lógica de los comandos con detalles visuales.
- Permite testear el render con una `Console` sobre un `StringIO`.
"""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from core.domain.models import BodyFormat, ResponseView
from core.services.body_formatter import format_body, select_body_format

STATUS_STYLE = "bold blue"
HEADER_NAME_STYLE = "green"
JSON_BODY_STYLE = "cyan"


def build_console(*, color: bool = True, stderr: bool = False) -> Console:
    """Console de salida: sin markup implícito, sin resaltado y sin cortar líneas."""

    return Console(
        stderr=stderr,
        no_color=None if color else True,
        highlight=False,
        soft_wrap=True,
    )


def print_status(view: ResponseView, console: Console) -> None:
    console.print(Text(view.status_line, style=STATUS_STYLE))
    console.print()


def print_headers(view: ResponseView, console: Console) -> None:
    for name, value in view.headers:
        console.print(Text.assemble((name, HEADER_NAME_STYLE), ": ", value))
    console.print()


def print_body(view: ResponseView, console: Console) -> None:
    """Imprime el body según la estrategia elegida para su Content-Type.

    JSON inválido con Content-Type JSON eleva `MalformedResponseBody`; no hay
    fallback a texto plano.
    """

    body_format = select_body_format(view.content_type)
    text = format_body(view.body, body_format, content_type=view.content_type)

    if body_format is BodyFormat.JSON:
        console.out(text, style=JSON_BODY_STYLE, highlight=False)
        return

    # Texto plano sin pasar por el render de Rich (tabs, códigos de control).
    console.file.write(text)
    console.file.write("\n")
    console.file.flush()


def render_response(view: ResponseView, console: Console) -> None:
    """Status line, cabeceras en orden de llegada y body."""

    print_status(view, console)
    print_headers(view, console)
    print_body(view, console)
