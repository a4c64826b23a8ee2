"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Facilita la serialización estable de la config persistida (camelCase en disco).

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.errors import APIError

JSONValue = Any
T = TypeVar("T")


class PlatformConfig(BaseModel):
    """Config persistida de una plataforma: `{apiKey, baseUrl, lastUsed}`.

    Por qué alias:
    - El fichero usa camelCase (compatibilidad con la herramienta previa),
      el código usa snake_case.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    api_key: str | None = Field(
        default=None,
        alias="apiKey",
        description="API key de la plataforma.",
    )
    base_url: str | None = Field(
        default=None,
        alias="baseUrl",
        description="Base URL alternativa a la de fábrica.",
    )
    last_used: datetime | None = Field(
        default=None,
        alias="lastUsed",
        description="Último `set` explícito (UTC).",
    )

    def merged(self, partial: "PlatformConfig") -> "PlatformConfig":
        """Mezcla solo los campos presentes en `partial`."""

        updates = partial.model_dump(exclude_unset=True, exclude_none=True)
        return self.model_copy(update=updates)

    def to_file_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ResolvedConfig(BaseModel):
    """Snapshot de solo lectura que recibe un `APIClient` al construirse."""

    model_config = ConfigDict(frozen=True)

    platform: str
    api_key: str
    base_url: str


class ConfigStatus(BaseModel):
    """Vista enmascarada de la config de una plataforma (para `config:list`)."""

    platform: str
    configured: bool
    api_key_source: str | None = Field(
        default=None,
        description="flag | env | file (de dónde salió la key ganadora).",
    )
    masked_api_key: str | None = None
    base_url: str
    last_used: datetime | None = None
    issues: list[str] = Field(default_factory=list)


class HealthState(str, Enum):
    OK = "ok"
    ERROR = "error"
    NOT_CONFIGURED = "not_configured"


class HealthReport(BaseModel):
    platform: str
    display_name: str
    state: HealthState
    latency_ms: float | None = None
    detail: str | None = None
    checked_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CommandResult(Generic[T]):
    """Resultado uniforme: `value` en éxito o `error` tipado en fallo."""

    __slots__ = ("value", "error")

    def __init__(self, value: T | None = None, error: APIError | None = None) -> None:
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value: T) -> "CommandResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: APIError) -> "CommandResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def retryable(self) -> bool:
        return self.error is not None and self.error.retryable

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.error is not None:
            return f"CommandResult(error={self.error!r})"
        return f"CommandResult(value={self.value!r})"


def mask_secret(value: str | None, visible: int = 8) -> str | None:
    if not value:
        return None
    return f"{value[:visible]}..."
