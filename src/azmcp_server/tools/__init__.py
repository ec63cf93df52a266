"""Command area registration for the Azure MCP server."""

from __future__ import annotations

from azmcp.config import Settings
from azmcp.executor import CommandRunner
from azmcp.registry import CommandRegistry
from azmcp_server.cloud import build_in_memory_services
from azmcp_server.services import ServiceProvider
from azmcp_server.tools import (
    appconfig,
    catalog,
    cosmos,
    keyvault,
    monitor,
    storage,
    subscription,
)


def build_registry(services: ServiceProvider) -> CommandRegistry:
    """Register every command area against ``services`` and seal the registry."""
    registry = CommandRegistry()
    subscription.register(registry, services)
    storage.register(registry, services)
    cosmos.register(registry, services)
    keyvault.register(registry, services)
    appconfig.register(registry, services)
    monitor.register(registry, services)
    catalog.register(registry)
    return registry.seal()


def build_runtime(
    settings: Settings, services: ServiceProvider | None = None
) -> tuple[CommandRegistry, CommandRunner]:
    """Create the sealed registry and the runner that executes its commands."""
    services = services or build_in_memory_services(
        cache_ttl=settings.cache_ttl_seconds
    )
    return build_registry(services), CommandRunner()
