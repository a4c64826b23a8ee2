"""Plataforma: SmartLead.

API REST v1 (`https://server.smartlead.ai/api/v1`). La API key viaja como
query param `api_key` en cada petición.
"""

from __future__ import annotations

from typing import Any

from adapters.platforms.base import build_module, fill_path, pagination
from core.domain.commands import Args, CommandModule, CommandSpec, optional, required
from core.interfaces.api_client import PlatformClient

CAMPAIGNS = "Campaign Management"
LEADS = "Lead Management"
ACCOUNTS = "Email Accounts"
SEQUENCES = "Email Sequences"
TEMPLATES = "Email Templates"
ANALYTICS = "Analytics & Reporting"


async def add_leads(client: PlatformClient, args: Args) -> Any:
    # La API espera la lista bajo `lead_list`.
    path, remaining = fill_path("/campaigns/{campaign_id}/leads", args)
    leads = remaining.pop("leads")
    return await client.request("POST", path, json={"lead_list": leads, **remaining})


async def warmup(client: PlatformClient, args: Args, action: str) -> Any:
    path, _ = fill_path("/email-accounts/{email}/warmup", args)
    return await client.request("POST", path, json={"action": action})


async def warmup_start(client: PlatformClient, args: Args) -> Any:
    return await warmup(client, args, "start")


async def warmup_stop(client: PlatformClient, args: Args) -> Any:
    return await warmup(client, args, "stop")


COMMANDS: tuple[CommandSpec, ...] = (
    # Campañas
    CommandSpec(
        "campaigns:list",
        path="/campaigns",
        description="List all campaigns with pagination and filters",
        category=CAMPAIGNS,
        args=(*pagination(), optional("status", str, "Filter by status")),
        aliases=("campaigns", "camps"),
    ),
    CommandSpec(
        "campaigns:create",
        method="POST",
        path="/campaigns",
        description="Create new email campaign",
        category=CAMPAIGNS,
        args=(
            required("name", str, "Campaign name"),
            optional("track_settings", list, "Tracking options, e.g. ['open', 'click']"),
            optional("client_id", int),
        ),
        aliases=("campaign-create", "camp:create"),
    ),
    CommandSpec(
        "campaigns:get",
        path="/campaigns/{id}",
        description="Get detailed campaign information",
        category=CAMPAIGNS,
        args=(required("id", str, "Campaign id"),),
    ),
    CommandSpec(
        "campaigns:update",
        method="PATCH",
        path="/campaigns/{id}",
        description="Update campaign settings",
        category=CAMPAIGNS,
        args=(required("id", str), optional("name", str)),
    ),
    CommandSpec(
        "campaigns:delete",
        method="DELETE",
        path="/campaigns/{id}",
        description="Delete campaign permanently",
        category=CAMPAIGNS,
        args=(required("id", str),),
        destructive=True,
    ),
    CommandSpec(
        "campaigns:start",
        method="POST",
        path="/campaigns/{id}/start",
        description="Start campaign execution",
        category=CAMPAIGNS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "campaigns:pause",
        method="POST",
        path="/campaigns/{id}/pause",
        description="Pause running campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
        destructive=True,
    ),
    # Leads
    CommandSpec(
        "leads:list",
        path="/campaigns/{campaign_id}/leads",
        description="List leads of a campaign",
        category=LEADS,
        args=(required("campaign_id", str), *pagination()),
    ),
    CommandSpec(
        "leads:add",
        method="POST",
        handler=add_leads,
        description="Add leads to a campaign (up to 100 per call)",
        category=LEADS,
        args=(
            required("campaign_id", str),
            required("leads", list, "Lead objects with at least an `email`"),
        ),
    ),
    CommandSpec(
        "leads:update",
        method="PATCH",
        path="/leads/{lead_id}",
        description="Update lead fields",
        category=LEADS,
        args=(required("lead_id", str),),
    ),
    # Cuentas de envío
    CommandSpec(
        "accounts:list",
        path="/email-accounts",
        description="List connected sending accounts",
        category=ACCOUNTS,
        args=pagination(),
        aliases=("a:list",),
    ),
    CommandSpec(
        "accounts:add",
        method="POST",
        path="/email-accounts",
        description="Connect a new SMTP/IMAP sending account",
        category=ACCOUNTS,
        args=(
            required("from_email", str),
            required("from_name", str),
            optional("smtp_host", str),
            optional("smtp_port", int),
            optional("imap_host", str),
            optional("imap_port", int),
        ),
        aliases=("a:add",),
    ),
    CommandSpec(
        "accounts:warmup-start",
        method="POST",
        handler=warmup_start,
        description="Start warmup for an account",
        category=ACCOUNTS,
        args=(required("email", str),),
        aliases=("a:warmup",),
    ),
    CommandSpec(
        "accounts:warmup-stop",
        method="POST",
        handler=warmup_stop,
        description="Stop warmup for an account",
        category=ACCOUNTS,
        args=(required("email", str),),
        destructive=True,
        aliases=("a:stop-warmup",),
    ),
    # Secuencias y plantillas
    CommandSpec(
        "sequences:list",
        path="/sequences",
        description="List email sequences",
        category=SEQUENCES,
        args=(optional("campaign_id", str),),
    ),
    CommandSpec(
        "sequences:create",
        method="POST",
        path="/sequences",
        description="Create a sequence step set",
        category=SEQUENCES,
        args=(required("campaign_id", str), required("sequences", list)),
    ),
    CommandSpec(
        "templates:list",
        path="/templates",
        description="List saved email templates",
        category=TEMPLATES,
    ),
    CommandSpec(
        "templates:create",
        method="POST",
        path="/templates",
        description="Create an email template",
        category=TEMPLATES,
        args=(required("name", str), required("subject", str), required("body", str)),
    ),
    # Analítica
    CommandSpec(
        "analytics:campaign",
        path="/campaigns/{campaign_id}/analytics",
        description="Campaign performance (opens, clicks, replies, bounces)",
        category=ANALYTICS,
        args=(required("campaign_id", str),),
        aliases=("stats",),
    ),
    CommandSpec(
        "analytics:account",
        path="/email-accounts/{email}/analytics",
        description="Deliverability metrics for a sending account",
        category=ANALYTICS,
        args=(required("email", str),),
    ),
)


def load() -> CommandModule:
    return build_module("smartlead", COMMANDS)
