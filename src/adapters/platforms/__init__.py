"""Catálogo de plataformas soportadas.

Cada entrada es un `PlatformDescriptor` con metadatos estáticos y un loader
perezoso: el módulo de comandos solo se importa la primera vez que se usa la
plataforma (listar plataformas no paga el coste de todos los catálogos).
"""

from __future__ import annotations

from core.domain.commands import (
    BEARER,
    CommandModule,
    PlatformDescriptor,
    api_key_header,
    api_key_query,
    lazy_module,
)


@lazy_module
def _smartlead() -> CommandModule:
    from adapters.platforms import smartlead

    return smartlead.load()


@lazy_module
def _instantly() -> CommandModule:
    from adapters.platforms import instantly

    return instantly.load()


@lazy_module
def _apollo() -> CommandModule:
    from adapters.platforms import apollo

    return apollo.load()


@lazy_module
def _salesforge() -> CommandModule:
    from adapters.platforms import salesforge

    return salesforge.load()


@lazy_module
def _emailbison() -> CommandModule:
    from adapters.platforms import emailbison

    return emailbison.load()


@lazy_module
def _amplemarket() -> CommandModule:
    from adapters.platforms import amplemarket

    return amplemarket.load()


@lazy_module
def _lemlist() -> CommandModule:
    from adapters.platforms import lemlist

    return lemlist.load()


@lazy_module
def _outreach() -> CommandModule:
    from adapters.platforms import outreach

    return outreach.load()


@lazy_module
def _quickmail() -> CommandModule:
    from adapters.platforms import quickmail

    return quickmail.load()


@lazy_module
def _salesloft() -> CommandModule:
    from adapters.platforms import salesloft

    return salesloft.load()


PLATFORM_DESCRIPTORS: tuple[PlatformDescriptor, ...] = (
    PlatformDescriptor(
        key="smartlead",
        display_name="SmartLead",
        description="Campaigns, leads, sending accounts and warmup",
        default_base_url="https://server.smartlead.ai/api/v1",
        loader=_smartlead,
        auth=api_key_query("api_key"),
        health_path="/campaigns",
    ),
    PlatformDescriptor(
        key="instantly",
        display_name="Instantly",
        description="Campaigns, account warmup and unified inbox",
        default_base_url="https://api.instantly.ai/api/v1",
        loader=_instantly,
        auth=BEARER,
        health_path="/account/accounts",
    ),
    PlatformDescriptor(
        key="apollo",
        display_name="Apollo.io",
        description="Sequences, contact search and enrichment",
        default_base_url="https://api.apollo.io/v1",
        loader=_apollo,
        auth=api_key_header("X-Api-Key"),
        health_path="/emailer_campaigns",
    ),
    PlatformDescriptor(
        key="salesforge",
        display_name="Salesforge",
        description="AI-assisted sequences and personalization",
        default_base_url="https://api.salesforge.ai/public/v2",
        loader=_salesforge,
        health_path="/campaigns",
    ),
    PlatformDescriptor(
        key="emailbison",
        display_name="EmailBison",
        description="Campaigns, leads and sending account health",
        default_base_url="https://api.emailbison.com/v1",
        loader=_emailbison,
        health_path="/campaigns",
    ),
    PlatformDescriptor(
        key="amplemarket",
        display_name="Amplemarket",
        description="Lead lists, people search, sequences and tasks",
        default_base_url="https://api.amplemarket.com",
        loader=_amplemarket,
        health_path="/account",
    ),
    PlatformDescriptor(
        key="lemlist",
        display_name="lemlist",
        description="Campaigns, leads by email, sequences and templates",
        default_base_url="https://api.lemlist.com/api",
        loader=_lemlist,
        health_path="/campaigns",
    ),
    PlatformDescriptor(
        key="outreach",
        display_name="Outreach",
        description="Sequences, prospects and mailboxes (JSON:API)",
        default_base_url="https://api.outreach.io/api/v2",
        loader=_outreach,
        health_path="/users/me",
    ),
    PlatformDescriptor(
        key="quickmail",
        display_name="QuickMail",
        description="Campaigns, outreach steps and contacts",
        default_base_url="https://api.quickmail.co/v1",
        loader=_quickmail,
        health_path="/campaigns",
    ),
    PlatformDescriptor(
        key="salesloft",
        display_name="Salesloft",
        description="Cadences, people and activity history",
        default_base_url="https://api.salesloft.com/v2",
        loader=_salesloft,
        health_path="/me",
    ),
)

__all__ = ["PLATFORM_DESCRIPTORS"]
