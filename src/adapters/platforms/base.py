"""Generación de handlers a partir de `method` + `path`.

Idea:
- En vez de escribir cientos de funciones "POST a un endpoint fijo",
  cada comando se declara y aquí se construye su handler genérico.

Reglas:
- Los placeholders `{id}` del path se rellenan con args (y se retiran de ellos).
- GET/DELETE: el resto de args va como query params.
- POST/PUT/PATCH: el resto de args va como cuerpo JSON.
"""

from __future__ import annotations

import string
from dataclasses import replace
from typing import Any, Iterable
from urllib.parse import quote

from core.domain.commands import (
    Args,
    ArgField,
    CommandModule,
    CommandSpec,
    Handler,
    optional,
)
from core.domain.errors import ArgumentValidationError
from core.interfaces.api_client import PlatformClient

_BODY_METHODS = {"POST", "PUT", "PATCH"}


def path_fields(template: str) -> list[str]:
    return [name for _, name, _, _ in string.Formatter().parse(template) if name]


def fill_path(template: str, args: Args) -> tuple[str, Args]:
    """Rellena `{campo}` y devuelve `(path, args_restantes)`."""

    names = path_fields(template)
    missing = [name for name in names if args.get(name) in (None, "")]
    if missing:
        raise ArgumentValidationError(
            f"Missing required field(s): {', '.join(missing)}",
            fields=missing,
        )
    values = {name: quote(str(args[name]), safe="@") for name in names}
    remaining = {k: v for k, v in args.items() if k not in names}
    return template.format(**values), remaining


def endpoint_handler(method: str, path: str) -> Handler:
    method = method.upper()

    async def handler(client: PlatformClient, args: Args) -> Any:
        resolved_path, remaining = fill_path(path, args)
        if method in _BODY_METHODS:
            return await client.request(method, resolved_path, json=remaining or None)
        return await client.request(method, resolved_path, params=remaining or None)

    handler.__name__ = f"{method.lower()}_{path.strip('/').replace('/', '_') or 'root'}"
    return handler


def build_module(platform: str, commands: Iterable[CommandSpec]) -> CommandModule:
    """Completa los handlers que faltan y arma el `CommandModule`."""

    resolved: list[CommandSpec] = []
    for spec in commands:
        if spec.handler is None:
            spec = replace(spec, handler=endpoint_handler(spec.method, spec.path))
        resolved.append(spec)
    return CommandModule(platform, resolved)


def pagination(limit_help: str = "Page size") -> tuple[ArgField, ArgField]:
    return (
        optional("limit", int, limit_help),
        optional("offset", int, "Number of records to skip"),
    )
