"""Cache and subscription collaborator behavior."""

from __future__ import annotations

import pytest

from azmcp_server.cloud import SAMPLE_TENANT_ID, CloudState
from azmcp_server.models import Subscription
from azmcp_server.services import MemoryCache, ServiceProvider


class TestMemoryCache:
    """Expiry and invalidation of cached entries."""

    def test_returns_live_entries(self) -> None:
        cache = MemoryCache(default_ttl=60)

        cache.set("a", [1])

        assert cache.get("a") == [1]
        assert cache.get("missing") is None

    def test_expired_entries_are_dropped(self) -> None:
        cache = MemoryCache()

        cache.set("a", 1, ttl=0)

        assert cache.get("a") is None

    def test_invalidate_one_or_all(self) -> None:
        cache = MemoryCache()
        cache.set("a", 1)
        cache.set("b", 2)

        cache.invalidate("a")
        assert cache.get("a") is None
        assert cache.get("b") == 2

        cache.invalidate()
        assert cache.get("b") is None


@pytest.mark.anyio()
async def test_subscription_listing_is_cached(
    services: ServiceProvider, cloud_state: CloudState
) -> None:
    """New subscriptions stay invisible until the cache is invalidated."""
    # Arrange
    before = await services.subscriptions.list_subscriptions()
    cloud_state.subscriptions.append(
        Subscription("00000000-0000-0000-0000-000000000009", "Late", SAMPLE_TENANT_ID)
    )

    # Act
    cached = await services.subscriptions.list_subscriptions()
    services.cache.invalidate()
    refreshed = await services.subscriptions.list_subscriptions()

    # Assert
    assert len(cached) == len(before) == 2
    assert [sub.display_name for sub in refreshed][-1] == "Late"
