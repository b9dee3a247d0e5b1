"""Formato del body según el Content-Type declarado.

La estrategia se elige una sola vez por respuesta (`select_body_format`) y
luego se aplica (`format_body`). Añadir un formato nuevo = un valor más en
`BodyFormat` y una rama aquí.

El pretty-print de JSON solo reescribe espacios: strings (con sus escapes),
números y claves duplicadas salen tal y como llegaron.
"""

from __future__ import annotations

import json
import re

from core.domain.errors import MalformedResponseBody
from core.domain.models import BodyFormat, ContentType

JSON_ESSENCE = "application/json"

_JSON_TOKEN_RE = re.compile(r'"(?:[^"\\]+|\\.)*"|[{}\[\],:]|[^\s{}\[\],:"]+|\s+', re.DOTALL)
_CLOSING = {"{": "}", "[": "]"}


def select_body_format(content_type: ContentType | None) -> BodyFormat:
    """JSON solo si la essence es exactamente `application/json`."""

    if content_type is not None and content_type.essence == JSON_ESSENCE:
        return BodyFormat.JSON
    return BodyFormat.PLAIN_TEXT


def _reject_constant(name: str) -> None:
    raise ValueError(f"{name} is not a valid JSON value")


def validate_json(text: str) -> None:
    """Falla con `ValueError` si `text` no es JSON estricto (sin NaN/Infinity)."""

    try:
        json.loads(text, parse_constant=_reject_constant)
    except RecursionError as exc:
        raise ValueError("document nesting is too deep") from exc


def reindent_json(text: str, *, indent: int = 2) -> str:
    """Reindenta un documento JSON ya validado sin tocar sus tokens."""

    tokens = [t for t in _JSON_TOKEN_RE.findall(text) if not t.isspace()]
    parts: list[str] = []
    depth = 0
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token in _CLOSING:
            if i + 1 < len(tokens) and tokens[i + 1] == _CLOSING[token]:
                parts.append(token + tokens[i + 1])
                i += 2
                continue
            depth += 1
            parts.append(token + "\n" + " " * (indent * depth))
        elif token in ("}", "]"):
            depth -= 1
            parts.append("\n" + " " * (indent * depth) + token)
        elif token == ",":
            parts.append(",\n" + " " * (indent * depth))
        elif token == ":":
            parts.append(": ")
        else:
            parts.append(token)
        i += 1
    return "".join(parts)


def pretty_json(text: str, *, indent: int = 2) -> str:
    validate_json(text)
    return reindent_json(text, indent=indent)


def format_body(body: str, body_format: BodyFormat, *, content_type: ContentType | None = None) -> str:
    if body_format is BodyFormat.JSON:
        try:
            return pretty_json(body)
        except ValueError as exc:
            declared = content_type.raw if content_type is not None else JSON_ESSENCE
            raise MalformedResponseBody(declared, str(exc)) from exc
    return body
