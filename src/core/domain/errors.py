"""Taxonomía de errores del Core.

Por qué una jerarquía de excepciones:
- Cada fallo (config, registro, argumentos, red, HTTP) se normaliza a un
  `APIError` con un `ErrorKind` estable, de modo que `exec` y las shells
  interactivas lo traten igual.
- La CLI es el único sitio que decide color y exit code; aquí solo hay datos.

Hierarchy
---------
APIError
├── NotConfiguredError
├── NotFoundError
│   ├── PlatformNotFoundError
│   └── CommandNotFoundError
├── ArgumentValidationError
├── NetworkError
├── RequestTimeoutError
├── HttpStatusError
└── UnknownAPIError
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable


class ErrorKind(str, Enum):
    NOT_CONFIGURED = "not_configured"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    NETWORK = "network"
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    UNKNOWN = "unknown"


class APIError(Exception):
    """Base de todos los errores que cruzan la frontera del Core."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        platform: str | None = None,
        command: str | None = None,
        hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.retryable = retryable
        self.platform = platform
        self.command = command
        self.hint = hint

    def with_context(self, *, platform: str | None = None, command: str | None = None) -> "APIError":
        """Añade plataforma/comando sin sobrescribir contexto ya presente."""

        if platform and not self.platform:
            self.platform = platform
        if command and not self.command:
            self.command = command
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "retryable": self.retryable,
            "platform": self.platform,
            "command": self.command,
        }

    def __str__(self) -> str:
        scope = "/".join(part for part in (self.platform, self.command) if part)
        return f"{scope}: {self.message}" if scope else self.message


class NotConfiguredError(APIError):
    kind = ErrorKind.NOT_CONFIGURED


class NotFoundError(APIError):
    kind = ErrorKind.NOT_FOUND


class PlatformNotFoundError(NotFoundError):
    """Plataforma desconocida; lleva la lista de claves válidas."""

    def __init__(self, platform: str, *, available: Iterable[str] = ()) -> None:
        self.available = list(available)
        hint = f"Available platforms: {', '.join(self.available)}" if self.available else None
        super().__init__(f"Platform '{platform}' not found", hint=hint)
        self.requested = platform


class CommandNotFoundError(NotFoundError):
    """Comando desconocido para una plataforma; nombra los disponibles."""

    def __init__(self, platform: str, command: str, *, available: Iterable[str] = ()) -> None:
        self.available = list(available)
        listing = ", ".join(self.available) or "none"
        super().__init__(
            f"Unknown command '{command}'. Available commands: {listing}",
            platform=platform,
            hint=f"Run `cec commands {platform}` to browse them by category.",
        )
        self.requested = command


class ArgumentValidationError(APIError):
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, *, fields: Iterable[str] = (), **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.fields = list(fields)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "fields": self.fields}


class NetworkError(APIError):
    kind = ErrorKind.NETWORK

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class RequestTimeoutError(APIError):
    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)


class HttpStatusError(APIError):
    """Respuesta HTTP >= 400. `body` es el JSON parseado o el texto crudo."""

    kind = ErrorKind.HTTP_STATUS

    def __init__(self, status_code: int, body: Any, **kwargs: Any) -> None:
        kwargs.setdefault("retryable", is_retryable_status(status_code))
        super().__init__(f"HTTP {status_code}: {_summarize_body(body)}", **kwargs)
        self.status_code = status_code
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "status_code": self.status_code, "body": self.body}


class UnknownAPIError(APIError):
    kind = ErrorKind.UNKNOWN


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


def _summarize_body(body: Any, max_chars: int = 200) -> str:
    if isinstance(body, dict):
        for key in ("message", "error", "detail", "errors"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                body = value
                break
    text = str(body).strip() if body not in (None, "") else "no response body"
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 1].rstrip() + "…"
