"""Plataforma: EmailBison (API v1, Bearer)."""

from __future__ import annotations

from adapters.platforms.base import build_module, pagination
from core.domain.commands import CommandModule, CommandSpec, optional, required

CAMPAIGNS = "Campaigns"
LEADS = "Leads"
ACCOUNTS = "Email Accounts"
SEQUENCES = "Sequences"

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
        method="PATCH",
        path="/campaigns/{id}",
        description="Update a campaign",
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
        "campaigns:start",
        method="POST",
        path="/campaigns/{id}/start",
        description="Start a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "campaigns:pause",
        method="POST",
        path="/campaigns/{id}/pause",
        description="Pause a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "leads:list",
        path="/leads",
        description="List leads",
        category=LEADS,
        args=(*pagination(), optional("campaign_id", str), optional("status", str)),
    ),
    CommandSpec(
        "leads:add",
        method="POST",
        path="/campaigns/{campaign_id}/leads",
        description="Add leads to a campaign",
        category=LEADS,
        args=(required("campaign_id", str), required("leads", list)),
    ),
    CommandSpec(
        "leads:validate",
        method="POST",
        path="/campaigns/{campaign_id}/leads/validate",
        description="Validate campaign lead emails",
        category=LEADS,
        args=(required("campaign_id", str),),
    ),
    CommandSpec(
        "accounts:list",
        path="/email-accounts",
        description="List email accounts",
        category=ACCOUNTS,
    ),
    CommandSpec(
        "accounts:health",
        path="/email-accounts/{email}/health",
        description="Account health",
        category=ACCOUNTS,
        args=(required("email", str),),
    ),
    CommandSpec(
        "sequences:list",
        path="/sequences",
        description="List sequences",
        category=SEQUENCES,
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
)


def load() -> CommandModule:
    return build_module("emailbison", COMMANDS)
