"""Plataforma: Amplemarket (Bearer)."""

from __future__ import annotations

from adapters.platforms.base import build_module
from core.domain.commands import CommandModule, CommandSpec, optional, required

ACCOUNT = "Account"
LISTS = "Lead Lists"
CONTACTS = "Contacts"
SEQUENCES = "Sequences"
TASKS = "Tasks"

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "account:info",
        path="/account",
        description="Account details",
        category=ACCOUNT,
    ),
    CommandSpec(
        "users:list",
        path="/users",
        description="List workspace users",
        category=ACCOUNT,
    ),
    CommandSpec(
        "leadlists:list",
        path="/lead-lists",
        description="List lead lists",
        category=LISTS,
    ),
    CommandSpec(
        "leadlists:create",
        method="POST",
        path="/lead-lists",
        description="Create a lead list",
        category=LISTS,
        args=(required("name", str), optional("leads", list)),
    ),
    CommandSpec(
        "leadlists:get",
        path="/lead-lists/{id}",
        description="Get a lead list",
        category=LISTS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "people:search",
        method="POST",
        path="/people/search",
        description="Search people",
        category=CONTACTS,
        args=(
            optional("person_titles", list),
            optional("company_domains", list),
            optional("page", int),
        ),
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
        "contacts:by-email",
        path="/contacts/email/{email}",
        description="Find a contact by email",
        category=CONTACTS,
        args=(required("email", str),),
    ),
    CommandSpec(
        "sequences:list",
        path="/sequences",
        description="List sequences",
        category=SEQUENCES,
    ),
    CommandSpec(
        "sequences:add-leads",
        method="POST",
        path="/sequences/{sequence_id}/leads",
        description="Add leads to a sequence",
        category=SEQUENCES,
        args=(required("sequence_id", str), required("leads", list)),
    ),
    CommandSpec(
        "tasks:list",
        path="/tasks",
        description="List tasks",
        category=TASKS,
        args=(optional("status", str), optional("type", str)),
    ),
    CommandSpec(
        "tasks:complete",
        method="POST",
        path="/tasks/{id}/complete",
        description="Complete a task",
        category=TASKS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "tasks:skip",
        method="POST",
        path="/tasks/{id}/skip",
        description="Skip a task",
        category=TASKS,
        args=(required("id", str),),
    ),
)


def load() -> CommandModule:
    return build_module("amplemarket", COMMANDS)
