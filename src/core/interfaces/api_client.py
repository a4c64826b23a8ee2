"""Contrato del cliente HTTP por plataforma.

Por qué Protocol:
- Los handlers de comandos dependen de esta forma, no de httpx.
- Los tests inyectan un cliente falso (spy) sin herencia ni red.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PlatformClient(Protocol):
    """Cliente autenticado de una plataforma.

    Reglas de diseño:
    - `request` es asíncrono porque hace I/O (HTTP).
    - Devuelve el JSON parseado (o texto crudo) y lanza `APIError` tipado.
    - No reintenta: la política vive en el `CommandExecutor`.
    """

    platform: str

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        ...
