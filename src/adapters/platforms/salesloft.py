"""Plataforma: Salesloft (API v2, Bearer)."""

from __future__ import annotations

from adapters.platforms.base import build_module
from core.domain.commands import CommandModule, CommandSpec, optional, required

CADENCES = "Cadences"
PEOPLE = "People"
ACTIVITY = "Activity"
ADMIN = "Admin"

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "cadences:list",
        path="/cadences",
        description="List cadences",
        category=CADENCES,
        args=(optional("per_page", int), optional("page", int)),
    ),
    CommandSpec(
        "cadences:get",
        path="/cadences/{id}",
        description="Get a cadence",
        category=CADENCES,
        args=(required("id", str),),
    ),
    CommandSpec(
        "cadences:create",
        method="POST",
        path="/cadences",
        description="Create a cadence",
        category=CADENCES,
        args=(required("name", str),),
    ),
    CommandSpec(
        "cadences:delete",
        method="DELETE",
        path="/cadences/{id}",
        description="Delete a cadence",
        category=CADENCES,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "cadences:members",
        path="/cadences/{cadence_id}/cadence_memberships",
        description="People enrolled in a cadence",
        category=CADENCES,
        args=(required("cadence_id", str),),
    ),
    CommandSpec(
        "people:list",
        path="/people",
        description="List people",
        category=PEOPLE,
        args=(optional("per_page", int), optional("page", int)),
    ),
    CommandSpec(
        "people:get",
        path="/people/{id}",
        description="Get a person",
        category=PEOPLE,
        args=(required("id", str),),
    ),
    CommandSpec(
        "people:create",
        method="POST",
        path="/people",
        description="Create a person",
        category=PEOPLE,
        args=(required("email_address", str), optional("first_name", str), optional("last_name", str)),
    ),
    CommandSpec(
        "people:delete",
        method="DELETE",
        path="/people/{id}",
        description="Delete a person",
        category=PEOPLE,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "emails:list",
        path="/activities/emails",
        description="List email activities",
        category=ACTIVITY,
    ),
    CommandSpec(
        "calls:list",
        path="/activities/calls",
        description="List call activities",
        category=ACTIVITY,
    ),
    CommandSpec(
        "admin:me",
        path="/me",
        description="Current user",
        category=ADMIN,
    ),
    CommandSpec(
        "admin:team",
        path="/team",
        description="Team details",
        category=ADMIN,
    ),
)


def load() -> CommandModule:
    return build_module("salesloft", COMMANDS)
