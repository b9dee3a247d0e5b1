"""Contrato del transporte HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- La CLI y los tests pueden sustituir el dispatcher httpx por cualquier
  objeto con el mismo `send`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import RequestSpec, ResponseView


@runtime_checkable
class HttpTransport(Protocol):
    """Contrato mínimo para enviar una request.

    Reglas de diseño:
    - `send` es asíncrono: es el único punto de suspensión de una invocación.
    - Devuelve la respuesta completa (body ya materializado como texto).
    - Los fallos de red se elevan como `TransportError`.
    """

    async def send(self, spec: RequestSpec) -> ResponseView:
        """Envía `spec` y devuelve la respuesta normalizada."""

        ...
