"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeout, headers y redirecciones en un único builder.
- Traduce `httpx.Response` al modelo `ResponseView` del dominio y los
  `httpx.HTTPError` a `TransportError`.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import logging
from urllib.parse import urlencode

import httpx

from core.config import AppSettings
from core.domain.errors import InvalidHeaderValue, TransportError
from core.domain.models import ContentType, RequestSpec, ResponseView
from core.interfaces.transport import HttpTransport

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con los defaults de la aplicación.

    Por qué un builder:
    - Centraliza timeout/headers para que todas las requests se comporten igual.
    - `timeout_seconds=None` deja la request sin límite de tiempo.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "*/*",
    }
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.timeout_seconds),
        follow_redirects=settings.follow_redirects,
        headers=headers,
        transport=transport,
    )


def encode_form(items: list[tuple[str, str]]) -> bytes:
    """Form-encoding respetando el orden y los duplicados."""

    return urlencode(items).encode("ascii")


def read_content_type(response: httpx.Response) -> ContentType | None:
    """Lee `Content-Type` desde los bytes crudos; exige UTF-8 válido."""

    for raw_name, raw_value in response.headers.raw:
        if raw_name.lower() != b"content-type":
            continue
        try:
            value = raw_value.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidHeaderValue("content-type", f"value is not valid UTF-8 ({exc.reason})") from exc
        return ContentType.parse(value)
    return None


def to_response_view(response: httpx.Response) -> ResponseView:
    encoding = response.headers.encoding
    headers = [
        (raw_name.decode(encoding), raw_value.decode(encoding))
        for raw_name, raw_value in response.headers.raw
    ]
    return ResponseView(
        http_version=response.http_version,
        status_code=response.status_code,
        reason_phrase=response.reason_phrase,
        headers=headers,
        content_type=read_content_type(response),
        body=response.text,
    )


class HttpxDispatcher(HttpTransport):
    """Envía una `RequestSpec` con httpx y devuelve la respuesta completa."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def send(self, spec: RequestSpec) -> ResponseView:
        content: bytes | None = None
        headers: dict[str, str] = {}
        if spec.has_body:
            content = encode_form(spec.form_items())
            headers["Content-Type"] = FORM_CONTENT_TYPE

        logger.debug("%s %s (%d form fields)", spec.method.value, spec.url, len(spec.fields))
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.request(
                    spec.method.value,
                    spec.url,
                    content=content,
                    headers=headers,
                )
        except httpx.HTTPError as exc:
            logger.debug("request to %s failed: %r", spec.url, exc)
            detail = str(exc) or type(exc).__name__
            raise TransportError(f"{spec.method.value} {spec.url} failed: {detail}", url=spec.url) from exc

        logger.debug(
            "%s %s -> %s %d (%d bytes)",
            spec.method.value,
            spec.url,
            response.http_version,
            response.status_code,
            len(response.content),
        )
        return to_response_view(response)
