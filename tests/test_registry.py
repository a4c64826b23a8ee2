"""Tests for the platform registry and the bundled catalogs."""

from __future__ import annotations

import pytest

from conftest import PLATFORM_KEYS
from core.domain.errors import ErrorKind, PlatformNotFoundError
from core.services.registry import PlatformRegistry


class TestRegistry:
    def test_listing_order(self, registry: PlatformRegistry) -> None:
        assert registry.keys() == list(PLATFORM_KEYS)

    def test_get_is_case_insensitive(self, registry: PlatformRegistry) -> None:
        assert registry.get(" SmartLead ").key == "smartlead"

    def test_unknown_platform(self, registry: PlatformRegistry) -> None:
        with pytest.raises(PlatformNotFoundError) as excinfo:
            registry.get("unknown")
        assert excinfo.value.kind is ErrorKind.NOT_FOUND
        assert "'unknown'" in excinfo.value.message
        assert "smartlead" in (excinfo.value.hint or "")

    def test_defaults_cover_every_platform(self, registry: PlatformRegistry) -> None:
        defaults = registry.defaults()
        assert set(defaults) == set(PLATFORM_KEYS)
        assert all(url.startswith("https://") for url in defaults.values())

    def test_loader_is_memoized(self, registry: PlatformRegistry) -> None:
        descriptor = registry.get("lemlist")
        assert descriptor.load_commands() is descriptor.load_commands()

    @pytest.mark.parametrize("key", PLATFORM_KEYS)
    def test_every_catalog_loads(self, registry: PlatformRegistry, key: str) -> None:
        descriptor = registry.get(key)
        module = descriptor.load_commands()

        assert module.platform == key
        assert descriptor.command_count == len(module) > 0
        assert descriptor.health_path
        for spec in module:
            assert spec.handler is not None
            # El modelo de args se construye sin errores para cada comando.
            assert spec.args_model is not None

    def test_smartlead_alias(self, registry: PlatformRegistry) -> None:
        module = registry.get("smartlead").load_commands()
        assert module.get("campaign-create").name == "campaigns:create"


class TestSearch:
    def test_matches_across_platforms(self, registry: PlatformRegistry) -> None:
        platforms = {hit.platform for hit in registry.search("warmup")}
        assert {"smartlead", "instantly"} <= platforms

    def test_restricted_to_platform(self, registry: PlatformRegistry) -> None:
        hits = registry.search("campaign", platform="lemlist")
        assert hits
        assert {hit.platform for hit in hits} == {"lemlist"}

    def test_blank_query(self, registry: PlatformRegistry) -> None:
        assert registry.search("  ") == []
