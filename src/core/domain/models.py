"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación en el borde: una `RequestSpec` construida ya cumple sus invariantes.
- El dominio describe *qué* se envía y *qué* se recibió, no *cómo* (httpx vive
  en `adapters`).
"""

from __future__ import annotations

import re
from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import InvalidHeaderValue

_TOKEN = r"[!#$%&'*+.^_`|~0-9A-Za-z-]+"
_ESSENCE_RE = re.compile(rf"^\s*({_TOKEN})/({_TOKEN})\s*$")
_PARAM_RE = re.compile(rf';\s*({_TOKEN})\s*=\s*("(?:[^"\\]|\\.)*"|[^;]*)')
_QUOTED_PAIR_RE = re.compile(r"\\(.)")


class HttpMethod(str, Enum):
    """Métodos soportados por la CLI."""

    GET = "GET"
    POST = "POST"


class BodyFormat(str, Enum):
    """Estrategia de formato del body, elegida una vez por respuesta."""

    JSON = "json"
    PLAIN_TEXT = "plain_text"


class FormField(BaseModel):
    """Un par `key=value` de la línea de comandos."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Nombre del campo de formulario.")
    value: str = Field(default="", description="Valor (puede contener '=').")


class RequestSpec(BaseModel):
    """Descripción completa de la request saliente.

    Invariantes:
    - `url` es absoluta (http/https) y fue validada por el builder.
    - `fields` está vacío para GET.
    """

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    url: str = Field(..., min_length=1, description="URL absoluta de destino.")
    fields: list[FormField] = Field(
        default_factory=list,
        description="Campos de formulario en el orden recibido (duplicados incluidos).",
    )

    @property
    def has_body(self) -> bool:
        return self.method is HttpMethod.POST

    def form_items(self) -> list[tuple[str, str]]:
        """Pares `(key, value)` en orden, listos para form-encoding."""

        return [(f.key, f.value) for f in self.fields]


class ContentType(BaseModel):
    """Valor de `Content-Type` separado en essence y parámetros."""

    model_config = ConfigDict(frozen=True)

    essence: str = Field(..., description="`type/subtype` en minúsculas.")
    parameters: dict[str, str] = Field(default_factory=dict)
    raw: str = Field(..., description="Valor tal y como llegó en la cabecera.")

    @classmethod
    def parse(cls, value: str) -> "ContentType":
        head, sep, rest = value.partition(";")
        match = _ESSENCE_RE.match(head)
        if match is None:
            raise InvalidHeaderValue("content-type", f"{value!r} is not a MIME type")

        parameters: dict[str, str] = {}
        for match_param in _PARAM_RE.finditer(sep + rest):
            name = match_param.group(1).lower()
            param_value = match_param.group(2).strip()
            if len(param_value) >= 2 and param_value[0] == param_value[-1] == '"':
                param_value = _QUOTED_PAIR_RE.sub(r"\1", param_value[1:-1])
            parameters[name] = param_value

        essence = f"{match.group(1)}/{match.group(2)}".lower()
        return cls(essence=essence, parameters=parameters, raw=value)


class ResponseView(BaseModel):
    """Vista de una respuesta completa, usada solo durante el render."""

    http_version: str = Field(default="HTTP/1.1", description="Versión de protocolo, p.ej. 'HTTP/1.1'.")
    status_code: int = Field(..., ge=100, le=999)
    reason_phrase: str = Field(default="")
    headers: list[tuple[str, str]] = Field(
        default_factory=list,
        description="Cabeceras en orden de llegada; duplicados sin fusionar.",
    )
    content_type: ContentType | None = None
    body: str = ""

    @property
    def status_line(self) -> str:
        line = f"{self.http_version} {self.status_code}"
        if self.reason_phrase:
            line = f"{line} {self.reason_phrase}"
        return line
