"""Collaborator interfaces consumed by the command areas.

Every collaborator method takes its typed arguments followed by the keyword
arguments ``tenant``, ``retry_policy`` and ``deadline``, and reports failure
only by raising one of the errors from :mod:`azmcp.errors`.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from azmcp.errors import ErrorKind, RequestFailedError, ServiceError
from azmcp.options import RetryPolicy
from azmcp_server.models import (
    AppConfigStore,
    BlobContainer,
    CosmosAccount,
    KeyValueSetting,
    LogAnalyticsWorkspace,
    MetricResult,
    ResourceGroup,
    StorageAccount,
    Subscription,
    VaultKey,
)


class CosmosError(RequestFailedError):
    """Failure reported by the Cosmos DB data plane with its status code."""


class BucketLimitError(ServiceError):
    """A metrics query produced more time buckets than the caller allows."""

    kind = ErrorKind.VALIDATION


class CredentialProvider(Protocol):
    """Supplies opaque bearer tokens for an optional tenant hint."""

    def get_token(self, tenant: str | None = None) -> str: ...


class CacheService(Protocol):
    """Explicit cross-call memoization shared by collaborators."""

    def get(self, key: str) -> object | None: ...

    def set(self, key: str, value: object, ttl: float | None = None) -> None: ...

    def invalidate(self, key: str | None = None) -> None: ...


class SubscriptionService(Protocol):
    """Lists and resolves the subscriptions visible to a credential."""

    async def list_subscriptions(
        self,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[Subscription]: ...

    async def resolve(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> Subscription: ...


class ResourceGroupService(Protocol):
    """Lists resource groups within one subscription."""

    async def list_resource_groups(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[ResourceGroup]: ...


class StorageService(Protocol):
    """Storage accounts, blob containers, blobs and tables."""

    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[StorageAccount]: ...

    async def list_tables(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]: ...

    async def list_containers(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]: ...

    async def get_container(
        self,
        account: str,
        container: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> BlobContainer: ...

    async def list_blobs(
        self,
        account: str,
        container: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]: ...


class CosmosService(Protocol):
    """Cosmos DB accounts, databases, containers and item queries."""

    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[CosmosAccount]: ...

    async def list_databases(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]: ...

    async def list_containers(
        self,
        account: str,
        database: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]: ...

    async def query_items(
        self,
        account: str,
        database: str,
        container: str,
        query: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[dict[str, object]]: ...


class KeyVaultService(Protocol):
    """Key Vault key listing, lookup and creation."""

    async def list_keys(
        self,
        vault: str,
        include_managed: bool,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]: ...

    async def get_key(
        self,
        vault: str,
        key: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> VaultKey: ...

    async def create_key(
        self,
        vault: str,
        key: str,
        key_type: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> VaultKey: ...


class AppConfigService(Protocol):
    """App Configuration stores and their key-values."""

    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[AppConfigStore]: ...

    async def list_settings(
        self,
        account: str,
        subscription: str,
        key_filter: str | None = None,
        label_filter: str | None = None,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[KeyValueSetting]: ...

    async def get_setting(
        self,
        account: str,
        key: str,
        subscription: str,
        label: str | None = None,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> KeyValueSetting: ...

    async def set_setting(
        self,
        account: str,
        key: str,
        value: str,
        subscription: str,
        label: str | None = None,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> KeyValueSetting: ...

    async def delete_setting(
        self,
        account: str,
        key: str,
        subscription: str,
        label: str | None = None,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> None: ...

    async def set_lock(
        self,
        account: str,
        key: str,
        locked: bool,
        subscription: str,
        label: str | None = None,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> KeyValueSetting: ...


class MonitorService(Protocol):
    """Log Analytics workspaces and metric queries."""

    async def list_workspaces(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[LogAnalyticsWorkspace]: ...

    async def query_metrics(
        self,
        subscription: str,
        resource: str,
        metric_namespace: str,
        metric_names: Sequence[str],
        resource_group: str | None = None,
        interval: str | None = None,
        aggregation: str | None = None,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[MetricResult]: ...


@dataclass(frozen=True)
class ServiceProvider:
    """Bundle of collaborators handed to the command areas at start-up."""

    credentials: CredentialProvider
    cache: CacheService
    subscriptions: SubscriptionService
    resource_groups: ResourceGroupService
    storage: StorageService
    cosmos: CosmosService
    keyvault: KeyVaultService
    appconfig: AppConfigService
    monitor: MonitorService


class MemoryCache:
    """Thread-safe in-process cache with per-entry expiry."""

    def __init__(self, default_ttl: float = 300.0) -> None:
        """Create an empty cache whose entries live ``default_ttl`` seconds."""
        self.default_ttl = default_ttl
        self._entries: dict[str, tuple[float, object]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> object | None:
        """Return a live entry, dropping it if it has expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if expires_at <= time.monotonic():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: object, ttl: float | None = None) -> None:
        """Store ``value`` under ``key``."""
        lifetime = self.default_ttl if ttl is None else ttl
        with self._lock:
            self._entries[key] = (time.monotonic() + lifetime, value)

    def invalidate(self, key: str | None = None) -> None:
        """Drop one entry, or every entry when ``key`` is ``None``."""
        with self._lock:
            if key is None:
                self._entries.clear()
            else:
                self._entries.pop(key, None)
