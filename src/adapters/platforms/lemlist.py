"""Plataforma: lemlist (Bearer).

Los leads se direccionan por email dentro de la campaña.
"""

from __future__ import annotations

from adapters.platforms.base import build_module
from core.domain.commands import CommandModule, CommandSpec, optional, required

CAMPAIGNS = "Campaigns"
LEADS = "Leads"
SEQUENCES = "Sequences"
TEMPLATES = "Templates"

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "campaigns:list",
        path="/campaigns",
        description="List campaigns",
        category=CAMPAIGNS,
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
        method="PATCH",
        path="/campaigns/{id}/start",
        description="Start a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "campaigns:pause",
        method="PATCH",
        path="/campaigns/{id}/pause",
        description="Pause a campaign",
        category=CAMPAIGNS,
        args=(required("id", str),),
        destructive=True,
    ),
    # Leads por email dentro de la campaña
    CommandSpec(
        "leads:list",
        path="/campaigns/{campaign_id}/leads",
        description="List campaign leads",
        category=LEADS,
        args=(required("campaign_id", str),),
    ),
    CommandSpec(
        "leads:add",
        method="POST",
        path="/campaigns/{campaign_id}/leads/{email}",
        description="Add a lead to a campaign",
        category=LEADS,
        args=(
            required("campaign_id", str),
            required("email", str),
            optional("firstName", str),
            optional("lastName", str),
            optional("companyName", str),
        ),
    ),
    CommandSpec(
        "leads:get",
        path="/campaigns/{campaign_id}/leads/{email}",
        description="Get a lead",
        category=LEADS,
        args=(required("campaign_id", str), required("email", str)),
    ),
    CommandSpec(
        "leads:delete",
        method="DELETE",
        path="/campaigns/{campaign_id}/leads/{email}",
        description="Remove a lead from a campaign",
        category=LEADS,
        args=(required("campaign_id", str), required("email", str)),
        destructive=True,
    ),
    CommandSpec(
        "leads:unsubscribe",
        method="PATCH",
        path="/campaigns/{campaign_id}/leads/{email}/unsubscribe",
        description="Unsubscribe a lead",
        category=LEADS,
        args=(required("campaign_id", str), required("email", str)),
        destructive=True,
    ),
    CommandSpec(
        "sequences:list",
        path="/sequences",
        description="List sequences",
        category=SEQUENCES,
    ),
    CommandSpec(
        "templates:list",
        path="/templates",
        description="List templates",
        category=TEMPLATES,
    ),
    CommandSpec(
        "templates:create",
        method="POST",
        path="/templates",
        description="Create a template",
        category=TEMPLATES,
        args=(required("name", str), optional("subject", str), optional("html", str)),
    ),
)


def load() -> CommandModule:
    return build_module("lemlist", COMMANDS)
