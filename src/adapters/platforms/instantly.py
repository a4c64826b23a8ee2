"""Plataforma: Instantly (API v1, Bearer)."""

from __future__ import annotations

from typing import Any

from adapters.platforms.base import build_module, fill_path, pagination
from core.domain.commands import Args, CommandModule, CommandSpec, optional, required
from core.interfaces.api_client import PlatformClient

ACCOUNTS = "Account Management"
CAMPAIGNS = "Campaign Management"
LEADS = "Lead Management"
ANALYTICS = "Analytics"
UNIBOX = "Unibox"


async def set_warmup(client: PlatformClient, args: Args) -> Any:
    path, remaining = fill_path("/account/accounts/{email}/warmup", args)
    return await client.request("PATCH", path, json={"status": remaining.get("status", "start")})


COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "accounts:list",
        path="/account/accounts",
        description="List sending accounts",
        category=ACCOUNTS,
        aliases=("accts",),
    ),
    CommandSpec(
        "accounts:add",
        method="POST",
        path="/account/accounts",
        description="Add a sending account",
        category=ACCOUNTS,
        args=(required("email", str), optional("provider", str)),
        aliases=("add-account",),
    ),
    CommandSpec(
        "accounts:remove",
        method="DELETE",
        path="/account/accounts/{email}",
        description="Remove a sending account",
        category=ACCOUNTS,
        args=(required("email", str),),
        destructive=True,
    ),
    CommandSpec(
        "accounts:warmup",
        method="PATCH",
        handler=set_warmup,
        description="Start or stop warmup (status=start|stop)",
        category=ACCOUNTS,
        args=(required("email", str), optional("status", str)),
        aliases=("warmup",),
    ),
    CommandSpec(
        "campaigns:list",
        path="/campaign/list",
        description="List campaigns",
        category=CAMPAIGNS,
        args=pagination(),
        aliases=("camps",),
    ),
    CommandSpec(
        "campaigns:create",
        method="POST",
        path="/campaign/create",
        description="Create a campaign",
        category=CAMPAIGNS,
        args=(required("name", str),),
        aliases=("camp:create",),
    ),
    CommandSpec(
        "campaigns:get",
        path="/campaign/get/{id}",
        description="Get campaign details",
        category=CAMPAIGNS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "campaigns:launch",
        method="POST",
        path="/campaign/launch/{id}",
        description="Launch a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
        aliases=("camp:start",),
    ),
    CommandSpec(
        "campaigns:pause",
        method="POST",
        path="/campaign/pause/{id}",
        description="Pause a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
        destructive=True,
        aliases=("camp:pause",),
    ),
    CommandSpec(
        "leads:add",
        method="POST",
        path="/campaign/add_leads/{campaign_id}",
        description="Add leads to a campaign",
        category=LEADS,
        args=(required("campaign_id", str), required("leads", list)),
    ),
    CommandSpec(
        "leads:list",
        path="/campaign/leads/{campaign_id}",
        description="List campaign leads",
        category=LEADS,
        args=(required("campaign_id", str),),
    ),
    CommandSpec(
        "leads:verify",
        method="POST",
        path="/leads/verify/{campaign_id}",
        description="Verify lead emails of a campaign",
        category=LEADS,
        args=(required("campaign_id", str),),
    ),
    CommandSpec(
        "analytics:campaign",
        path="/analytics/campaign/{campaign_id}",
        description="Campaign analytics",
        category=ANALYTICS,
        args=(required("campaign_id", str), optional("period", str)),
        aliases=("stats",),
    ),
    CommandSpec(
        "analytics:account",
        path="/analytics/account",
        description="Account-wide analytics",
        category=ANALYTICS,
    ),
    CommandSpec(
        "unibox:messages",
        path="/unibox/messages",
        description="List inbox messages",
        category=UNIBOX,
        args=pagination(),
    ),
    CommandSpec(
        "unibox:reply",
        method="POST",
        path="/unibox/reply/{message_id}",
        description="Reply to an inbox message",
        category=UNIBOX,
        args=(required("message_id", str), required("text", str)),
    ),
)


def load() -> CommandModule:
    return build_module("instantly", COMMANDS)
