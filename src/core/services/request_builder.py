"""Construcción de la request a partir de la línea de comandos.

Todo aquí es puro: strings de entrada -> `RequestSpec` o una excepción
`RequestBuildError`. Nada toca la red, así que un input inválido nunca llega
al transporte.
"""

from __future__ import annotations

from typing import Iterable

import httpx

from core.domain.errors import InvalidFieldSyntax, InvalidUrl
from core.domain.models import FormField, HttpMethod, RequestSpec

SUPPORTED_SCHEMES = ("http", "https")


def parse_url(value: str) -> str:
    """Valida que `value` sea una URL absoluta http(s) con host."""

    candidate = value.strip()
    if not candidate:
        raise InvalidUrl(value, "empty URL")
    try:
        url = httpx.URL(candidate)
    except httpx.InvalidURL as exc:
        raise InvalidUrl(value, str(exc)) from exc

    if not url.is_absolute_url:
        raise InvalidUrl(value, "missing scheme (expected e.g. https://...)")
    if url.scheme not in SUPPORTED_SCHEMES:
        raise InvalidUrl(value, f"unsupported scheme {url.scheme!r}")
    if not url.host:
        raise InvalidUrl(value, "missing host")
    return candidate


def parse_field(value: str) -> FormField:
    """Separa `key=value` por el primer '='; el resto del texto es el valor."""

    key, sep, field_value = value.partition("=")
    if not sep:
        raise InvalidFieldSyntax(value, "missing '=' separator")
    if not key:
        raise InvalidFieldSyntax(value, "empty key")
    return FormField(key=key, value=field_value)


def build_request(
    method: HttpMethod | str,
    url: str,
    raw_fields: Iterable[str] = (),
) -> RequestSpec:
    """Traduce el input de la CLI a una `RequestSpec` validada.

    - La URL se valida primero (`InvalidUrl`).
    - POST: cada string se parsea con `parse_field`; se conservan orden y
      claves duplicadas.
    - GET: no admite campos.
    """

    method = HttpMethod(method.upper() if isinstance(method, str) else method)
    checked_url = parse_url(url)

    raw = list(raw_fields)
    if method is HttpMethod.GET:
        if raw:
            raise InvalidFieldSyntax(raw[0], "GET requests do not carry form fields")
        return RequestSpec(method=method, url=checked_url)

    fields = [parse_field(item) for item in raw]
    return RequestSpec(method=method, url=checked_url, fields=fields)
