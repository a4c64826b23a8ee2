"""Plataforma: Outreach (API v2, JSON:API, Bearer)."""

from __future__ import annotations

from adapters.platforms.base import build_module
from core.domain.commands import CommandModule, CommandSpec, optional, required

SEQUENCES = "Sequences"
PROSPECTS = "Prospects"
MAILBOXES = "Mailboxes"
TEMPLATES = "Templates"
SETTINGS = "Settings"

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "sequences:list",
        path="/sequences",
        description="List sequences",
        category=SEQUENCES,
    ),
    CommandSpec(
        "sequences:get",
        path="/sequences/{id}",
        description="Get a sequence",
        category=SEQUENCES,
        args=(required("id", str),),
    ),
    CommandSpec(
        "sequences:create",
        method="POST",
        path="/sequences",
        description="Create a sequence",
        category=SEQUENCES,
        args=(required("data", dict, "JSON:API resource object"),),
    ),
    CommandSpec(
        "sequences:delete",
        method="DELETE",
        path="/sequences/{id}",
        description="Delete a sequence",
        category=SEQUENCES,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "sequences:states",
        path="/sequences/{sequence_id}/sequenceStates",
        description="Prospect states within a sequence",
        category=SEQUENCES,
        args=(required("sequence_id", str),),
    ),
    CommandSpec(
        "prospects:list",
        path="/prospects",
        description="List prospects",
        category=PROSPECTS,
        args=(optional("sort", str, "Sort field, e.g. -updatedAt"),),
    ),
    CommandSpec(
        "prospects:get",
        path="/prospects/{id}",
        description="Get a prospect",
        category=PROSPECTS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "prospects:create",
        method="POST",
        path="/prospects",
        description="Create a prospect",
        category=PROSPECTS,
        args=(required("data", dict),),
    ),
    CommandSpec(
        "mailboxes:list",
        path="/mailboxes",
        description="List mailboxes",
        category=MAILBOXES,
    ),
    CommandSpec(
        "mailboxes:get",
        path="/mailboxes/{id}",
        description="Get a mailbox",
        category=MAILBOXES,
        args=(required("id", str),),
    ),
    CommandSpec(
        "templates:list",
        path="/templates",
        description="List templates",
        category=TEMPLATES,
    ),
    CommandSpec(
        "settings:me",
        path="/users/me",
        description="Current user profile",
        category=SETTINGS,
    ),
)


def load() -> CommandModule:
    return build_module("outreach", COMMANDS)
