"""Model Context Protocol server for Azure cloud operations."""

from azmcp_server.cloud import CloudState, build_in_memory_services, sample_state
from azmcp_server.services import MemoryCache, ServiceProvider
from azmcp_server.tools import build_registry, build_runtime

__all__ = [
    "CloudState",
    "MemoryCache",
    "ServiceProvider",
    "build_in_memory_services",
    "build_registry",
    "build_runtime",
    "sample_state",
]
