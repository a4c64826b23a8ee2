"""Declaraciones de plataformas y comandos.

Por qué declarativo:
- En vez de cientos de funciones que validan a mano su bolsa de opciones,
  cada comando declara método, ruta y campos (requeridos/opcionales con tipo).
- El `CommandExecutor` valida una sola vez, antes de tocar la red.

Estos tipos son inmutables; el único estado "vivo" es la caché del loader de
cada plataforma (memoización, idempotente ante carreras).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cache, cached_property
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Iterable, Iterator, Literal

from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from core.domain.errors import ArgumentValidationError, CommandNotFoundError

if TYPE_CHECKING:
    from core.interfaces.api_client import PlatformClient

Args = dict[str, Any]
Handler = Callable[["PlatformClient", Args], Awaitable[Any]]

ArgType = type[str] | type[int] | type[float] | type[bool] | type[list] | type[dict]

_TYPE_LABELS: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "number",
    bool: "boolean",
    list: "array",
    dict: "object",
}


@dataclass(frozen=True)
class ArgField:
    """Campo declarado de un comando."""

    name: str
    type: ArgType = str
    required: bool = False
    description: str = ""

    @property
    def type_label(self) -> str:
        return _TYPE_LABELS.get(self.type, self.type.__name__)


def required(name: str, type_: ArgType = str, description: str = "") -> ArgField:
    return ArgField(name=name, type=type_, required=True, description=description)


def optional(name: str, type_: ArgType = str, description: str = "") -> ArgField:
    return ArgField(name=name, type=type_, required=False, description=description)


@dataclass(frozen=True)
class CommandSpec:
    """Un comando de una plataforma.

    `handler` es opcional: si falta, el catálogo genera uno a partir de
    `method` + `path` (ver `adapters.platforms.base.endpoint_handler`).
    """

    name: str
    method: str = "GET"
    path: str = ""
    description: str = ""
    category: str = "General"
    args: tuple[ArgField, ...] = ()
    aliases: tuple[str, ...] = ()
    destructive: bool = False
    idempotent: bool | None = None
    handler: Handler | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.handler is None and not self.path:
            raise ValueError(f"Command {self.name!r} needs either a path or a handler")
        object.__setattr__(self, "method", self.method.upper())

    @property
    def is_idempotent(self) -> bool:
        if self.idempotent is not None:
            return self.idempotent
        return self.method == "GET"

    @property
    def required_fields(self) -> list[str]:
        return [arg.name for arg in self.args if arg.required]

    @property
    def optional_fields(self) -> list[str]:
        return [arg.name for arg in self.args if not arg.required]

    @property
    def usage(self) -> str:
        parts = [self.name]
        for arg in self.args:
            token = f"{arg.name}=<{arg.type_label}>"
            parts.append(token if arg.required else f"[{token}]")
        return " ".join(parts)

    @cached_property
    def args_model(self) -> type[BaseModel]:
        fields: dict[str, Any] = {}
        for arg in self.args:
            if arg.required:
                fields[arg.name] = (arg.type, ...)
            else:
                fields[arg.name] = (arg.type | None, None)
        model_name = "".join(part.capitalize() for part in self.name.replace(":", "-").split("-")) + "Args"
        return create_model(
            model_name,
            __config__=ConfigDict(extra="allow", coerce_numbers_to_str=True),
            **fields,
        )

    def normalize_args(self, args: Args | None) -> Args:
        """Valida presencia/tipo de los campos declarados.

        Los args no declarados pasan tal cual (muchas APIs aceptan filtros
        extra que no merece la pena enumerar).
        """

        raw = dict(args or {})
        try:
            parsed = self.args_model.model_validate(raw)
        except ValidationError as exc:
            missing: list[str] = []
            invalid: list[str] = []
            details: list[str] = []
            for error in exc.errors():
                loc = str(error["loc"][0]) if error.get("loc") else "?"
                if error.get("type") == "missing":
                    if loc not in missing:
                        missing.append(loc)
                elif loc not in invalid:
                    invalid.append(loc)
                    details.append(f"{loc} ({error.get('msg')})")
            parts: list[str] = []
            if missing:
                parts.append(f"Missing required field(s): {', '.join(missing)}")
            if invalid:
                parts.append(f"Invalid value for field(s): {', '.join(details)}")
            raise ArgumentValidationError(
                "; ".join(parts) or "Invalid arguments",
                fields=[*missing, *invalid],
                command=self.name,
                hint=f"Usage: {self.usage}",
            ) from exc
        dumped = parsed.model_dump()
        return {key: dumped.get(key, value) for key, value in raw.items()}


class CommandModule:
    """Tabla nombre -> comando de una plataforma (alias incluidos)."""

    def __init__(self, platform: str, commands: Iterable[CommandSpec]) -> None:
        self.platform = platform
        self._commands: list[CommandSpec] = []
        self._index: dict[str, CommandSpec] = {}
        for spec in commands:
            for name in (spec.name, *spec.aliases):
                if name in self._index:
                    raise ValueError(f"Duplicate command name for {platform}: {name}")
                self._index[name] = spec
            self._commands.append(spec)

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[CommandSpec]:
        return iter(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def find(self, name: str) -> CommandSpec | None:
        return self._index.get(name.strip())

    def get(self, name: str) -> CommandSpec:
        spec = self.find(name)
        if spec is None:
            raise CommandNotFoundError(self.platform, name, available=self.names())
        return spec

    def names(self) -> list[str]:
        return [spec.name for spec in self._commands]

    def categories(self) -> list[str]:
        seen: dict[str, None] = {}
        for spec in self._commands:
            seen.setdefault(spec.category, None)
        return list(seen)

    def by_category(self) -> dict[str, list[CommandSpec]]:
        grouped: dict[str, list[CommandSpec]] = {}
        for spec in self._commands:
            grouped.setdefault(spec.category, []).append(spec)
        return grouped


@dataclass(frozen=True)
class AuthScheme:
    """Cómo viaja la API key: header Bearer, header propio o query param."""

    style: Literal["bearer", "header", "query"] = "bearer"
    name: str = "Authorization"

    def apply(self, api_key: str, headers: dict[str, str], params: dict[str, Any]) -> None:
        if self.style == "bearer":
            headers[self.name] = f"Bearer {api_key}"
        elif self.style == "header":
            headers[self.name] = api_key
        else:
            params[self.name] = api_key

    @property
    def secret_names(self) -> set[str]:
        return {self.name.lower()}


BEARER = AuthScheme()


def api_key_header(name: str) -> AuthScheme:
    return AuthScheme(style="header", name=name)


def api_key_query(name: str = "api_key") -> AuthScheme:
    return AuthScheme(style="query", name=name)


def lazy_module(factory: Callable[[], CommandModule]) -> Callable[[], CommandModule]:
    """Carga una sola vez por proceso; los accesos siguientes reutilizan el módulo."""

    return cache(factory)


@dataclass(frozen=True)
class PlatformDescriptor:
    """Metadatos estáticos de una plataforma (listado/selección)."""

    key: str
    display_name: str
    description: str
    default_base_url: str
    loader: Callable[[], CommandModule] = field(compare=False, repr=False)
    auth: AuthScheme = BEARER
    health_path: str | None = None
    version: str = "2.0.0"

    def load_commands(self) -> CommandModule:
        return self.loader()

    @property
    def command_count(self) -> int:
        return len(self.load_commands())

    @property
    def category_count(self) -> int:
        return len(self.load_commands().categories())
