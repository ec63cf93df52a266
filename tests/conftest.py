"""Shared test fixtures."""

from __future__ import annotations

import pytest

from azmcp.executor import CommandRunner
from azmcp.registry import CommandRegistry
from azmcp_server.cloud import (
    SAMPLE_SUBSCRIPTION_ID,
    CloudState,
    build_in_memory_services,
    sample_state,
)
from azmcp_server.services import ServiceProvider
from azmcp_server.tools import build_registry


@pytest.fixture()
def cloud_state() -> CloudState:
    """Provide a fresh in-memory inventory for each test."""
    return sample_state(extra_tenants={"fabrikam-tenant-id": "fabrikam"})


@pytest.fixture()
def services(cloud_state: CloudState) -> ServiceProvider:
    """Wire the in-memory collaborators around ``cloud_state``."""
    return build_in_memory_services(cloud_state)


@pytest.fixture()
def registry(services: ServiceProvider) -> CommandRegistry:
    """Provide the sealed registry with every command area."""
    return build_registry(services)


@pytest.fixture()
def runner() -> CommandRunner:
    """Provide a command runner without a deadline."""
    return CommandRunner()


@pytest.fixture()
def subscription() -> str:
    """Identifier of the populated sample subscription."""
    return SAMPLE_SUBSCRIPTION_ID
