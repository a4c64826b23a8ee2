"""Plataforma: QuickMail (API v1, Bearer)."""

from __future__ import annotations

from adapters.platforms.base import build_module, pagination
from core.domain.commands import CommandModule, CommandSpec, optional, required

CAMPAIGNS = "Campaigns"
OUTREACHES = "Outreaches"
CONTACTS = "Contacts"
ACCOUNTS = "Email Accounts"

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "campaigns:list",
        path="/campaigns",
        description="List campaigns",
        category=CAMPAIGNS,
        args=pagination(),
    ),
    CommandSpec(
        "campaigns:create",
        method="POST",
        path="/campaigns",
        description="Create a campaign",
        category=CAMPAIGNS,
        args=(required("name", str),),
    ),
    CommandSpec(
        "campaigns:get",
        path="/campaigns/{id}",
        description="Get a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "campaigns:update",
        method="PUT",
        path="/campaigns/{id}",
        description="Replace campaign settings",
        category=CAMPAIGNS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "campaigns:delete",
        method="DELETE",
        path="/campaigns/{id}",
        description="Delete a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "campaigns:launch",
        method="POST",
        path="/campaigns/{id}/launch",
        description="Launch a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "campaigns:stop",
        method="POST",
        path="/campaigns/{id}/stop",
        description="Stop a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "outreaches:list",
        path="/outreaches",
        description="List outreach steps",
        category=OUTREACHES,
        args=(optional("campaign_id", str),),
    ),
    CommandSpec(
        "outreaches:create",
        method="POST",
        path="/outreaches",
        description="Create an outreach step",
        category=OUTREACHES,
        args=(
            required("campaign_id", str),
            required("subject", str),
            required("body", str),
            optional("delay_days", int),
        ),
    ),
    CommandSpec(
        "contacts:list",
        path="/contacts",
        description="List contacts",
        category=CONTACTS,
        args=pagination(),
    ),
    CommandSpec(
        "contacts:create",
        method="POST",
        path="/contacts",
        description="Create a contact",
        category=CONTACTS,
        args=(required("email", str), optional("first_name", str), optional("last_name", str)),
    ),
    CommandSpec(
        "contacts:bulk",
        method="POST",
        path="/contacts/bulk",
        description="Create contacts in bulk",
        category=CONTACTS,
        args=(required("contacts", list),),
    ),
    CommandSpec(
        "contacts:delete",
        method="DELETE",
        path="/contacts/{id}",
        description="Delete a contact",
        category=CONTACTS,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "accounts:list",
        path="/email_accounts",
        description="List email accounts",
        category=ACCOUNTS,
    ),
)


def load() -> CommandModule:
    return build_module("quickmail", COMMANDS)
