"""Jerarquía de errores de httpc.

Por qué una jerarquía propia:
- La CLI distingue errores de uso (antes de cualquier I/O) de fallos en tiempo
  de ejecución sin conocer httpx ni Typer.
- Cada error lleva el valor que lo provocó para mensajes claros.
"""

from __future__ import annotations


class HttpcError(Exception):
    """Base de todos los errores de la aplicación."""


class RequestBuildError(HttpcError, ValueError):
    """Input de línea de comandos inválido; se detecta antes de la red."""


class InvalidUrl(RequestBuildError):
    def __init__(self, url: str, reason: str = "not a valid absolute URL") -> None:
        super().__init__(f"invalid URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class InvalidFieldSyntax(RequestBuildError):
    def __init__(self, field: str, reason: str = "expected key=value") -> None:
        super().__init__(f"invalid key-value pair {field!r}: {reason}")
        self.field = field
        self.reason = reason


class TransportError(HttpcError):
    """Fallo al enviar la request (DNS, conexión, TLS, timeout, protocolo).

    La excepción original de httpx queda en `__cause__`.
    """

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ResponseError(HttpcError):
    """La respuesta llegó pero no se puede presentar."""


class MalformedResponseBody(ResponseError):
    def __init__(self, content_type: str, detail: str) -> None:
        super().__init__(f"response declared {content_type} but the body is not valid JSON: {detail}")
        self.content_type = content_type
        self.detail = detail


class InvalidHeaderValue(ResponseError):
    def __init__(self, name: str, detail: str) -> None:
        super().__init__(f"invalid {name} header: {detail}")
        self.name = name
        self.detail = detail
