"""Plataforma: Apollo.io.

La API key viaja en el header `X-Api-Key`. Las búsquedas son POST pero no
modifican nada, así que se marcan como idempotentes (admiten reintento).
"""

from __future__ import annotations

from typing import Any

from adapters.platforms.base import build_module, fill_path
from core.domain.commands import Args, CommandModule, CommandSpec, optional, required
from core.interfaces.api_client import PlatformClient

SEQUENCES = "Sequences"
CONTACTS = "Contacts"
TEMPLATES = "Templates"
ENRICHMENT = "Search & Enrichment"


async def set_sequence_active(client: PlatformClient, args: Args, active: bool) -> Any:
    path, _ = fill_path("/emailer_campaigns/{id}", args)
    return await client.request("PATCH", path, json={"active": active})


async def start_sequence(client: PlatformClient, args: Args) -> Any:
    return await set_sequence_active(client, args, True)


async def pause_sequence(client: PlatformClient, args: Args) -> Any:
    return await set_sequence_active(client, args, False)


async def add_contact(client: PlatformClient, args: Args) -> Any:
    path, remaining = fill_path("/emailer_campaigns/{id}/add_contact_ids", args)
    return await client.request("POST", path, json={"contact_ids": [remaining["contact_id"]]})


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "sequences:list",
        path="/emailer_campaigns",
        description="List sequences",
        category=SEQUENCES,
        aliases=("seq:list",),
    ),
    CommandSpec(
        "sequences:get",
        path="/emailer_campaigns/{id}",
        description="Get a sequence",
        category=SEQUENCES,
        args=(required("id", str),),
        aliases=("seq:get",),
    ),
    CommandSpec(
        "sequences:create",
        method="POST",
        path="/emailer_campaigns",
        description="Create a sequence",
        category=SEQUENCES,
        args=(required("name", str),),
        aliases=("seq:create",),
    ),
    CommandSpec(
        "sequences:start",
        method="PATCH",
        handler=start_sequence,
        description="Activate a sequence",
        category=SEQUENCES,
        args=(required("id", str),),
    ),
    CommandSpec(
        "sequences:pause",
        method="PATCH",
        handler=pause_sequence,
        description="Deactivate a sequence",
        category=SEQUENCES,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "sequences:stats",
        path="/emailer_campaigns/{id}/stats",
        description="Sequence statistics",
        category=SEQUENCES,
        args=(required("id", str),),
        aliases=("seq:stats",),
    ),
    CommandSpec(
        "sequences:contacts:add",
        method="POST",
        handler=add_contact,
        description="Add a contact to a sequence",
        category=SEQUENCES,
        args=(required("id", str), required("contact_id", str)),
    ),
    # Contactos
    CommandSpec(
        "contacts:search",
        method="POST",
        path="/mixed_people/search",
        description="Search people",
        category=CONTACTS,
        args=(optional("q_keywords", str), optional("page", int), optional("per_page", int)),
        aliases=("contacts:list", "contacts:ls"),
        idempotent=True,
    ),
    CommandSpec(
        "contacts:get",
        path="/contacts/{id}",
        description="Get a contact",
        category=CONTACTS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "contacts:create",
        method="POST",
        path="/contacts",
        description="Create a contact",
        category=CONTACTS,
        args=(
            required("first_name", str),
            required("last_name", str),
            optional("email", str),
            optional("organization_name", str),
        ),
        aliases=("contacts:add",),
    ),
    CommandSpec(
        "contacts:update",
        method="PATCH",
        path="/contacts/{id}",
        description="Update a contact",
        category=CONTACTS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "templates:list",
        path="/emailer_templates",
        description="List email templates",
        category=TEMPLATES,
    ),
    CommandSpec(
        "templates:create",
        method="POST",
        path="/emailer_templates",
        description="Create a template",
        category=TEMPLATES,
        args=(required("name", str), required("subject", str), optional("body_html", str)),
    ),
    # Búsqueda y enriquecimiento
    CommandSpec(
        "organizations:search",
        method="POST",
        path="/mixed_companies/search",
        description="Search companies",
        category=ENRICHMENT,
        args=(optional("q_organization_name", str), optional("page", int)),
        idempotent=True,
    ),
    CommandSpec(
        "people:match",
        method="POST",
        path="/people/match",
        description="Enrich a person by email or name",
        category=ENRICHMENT,
        args=(
            optional("email", str),
            optional("first_name", str),
            optional("last_name", str),
            optional("domain", str),
        ),
        idempotent=True,
    ),
    CommandSpec(
        "organizations:enrich",
        method="POST",
        path="/organizations/enrich",
        description="Enrich a company by domain",
        category=ENRICHMENT,
        args=(required("domain", str),),
        idempotent=True,
    ),
)


def load() -> CommandModule:
    return build_module("apollo", COMMANDS)
