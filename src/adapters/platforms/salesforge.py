"""Plataforma: Salesforge (API pública v2, Bearer)."""

from __future__ import annotations

from adapters.platforms.base import build_module
from core.domain.commands import CommandModule, CommandSpec, optional, required

SEQUENCES = "Sequences"
AI = "AI Assist"
LEADS = "Leads"
ANALYTICS = "Analytics"

COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        "campaigns:list",
        path="/campaigns",
        description="List campaigns",
        category=SEQUENCES,
    ),
    CommandSpec(
        "sequences:list",
        path="/sequences",
        description="List sequences",
        category=SEQUENCES,
        aliases=("seqs",),
    ),
    CommandSpec(
        "sequences:create",
        method="POST",
        path="/sequences",
        description="Create a sequence",
        category=SEQUENCES,
        args=(required("name", str), optional("steps", list)),
        aliases=("seq:create",),
    ),
    CommandSpec(
        "sequences:analytics",
        path="/sequences/{id}/analytics",
        description="Sequence analytics",
        category=ANALYTICS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "sequences:generate",
        method="POST",
        path="/sequences/generate",
        description="Generate a sequence with AI",
        category=AI,
        args=(required("product", str), optional("audience", str), optional("steps", int)),
        aliases=("ai:generate",),
    ),
    CommandSpec(
        "sequences:optimize",
        method="POST",
        path="/sequences/{id}/optimize",
        description="AI optimization suggestions for a sequence",
        category=AI,
        args=(required("id", str),),
        aliases=("ai:optimize",),
    ),
    CommandSpec(
        "templates:personalize",
        method="POST",
        path="/templates/{id}/personalize",
        description="Personalize a template for a lead",
        category=AI,
        args=(required("id", str), required("lead_id", str)),
        aliases=("ai:personalize",),
    ),
    CommandSpec(
        "leads:list",
        path="/leads",
        description="List leads",
        category=LEADS,
        args=(optional("page", int), optional("limit", int)),
    ),
    CommandSpec(
        "leads:enrich",
        method="POST",
        path="/leads/{id}/enrich",
        description="Enrich a lead",
        category=LEADS,
        args=(required("id", str),),
    ),
    CommandSpec(
        "analytics:performance",
        path="/analytics/performance",
        description="Workspace performance",
        category=ANALYTICS,
        aliases=("analytics",),
    ),
)


def load() -> CommandModule:
    return build_module("salesforge", COMMANDS)
