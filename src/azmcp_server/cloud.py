"""In-memory stand-ins for the Azure collaborators.

This module offers lightweight implementations of the collaborator protocols
in :mod:`azmcp_server.services`. The goal is to provide predictable behavior in
test environments while raising the same error vocabulary a real provider
would, so every classification path of the command areas can be exercised
without network access.
"""

from __future__ import annotations

import json
import logging
import re
import threading
import time
import uuid
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from azmcp.errors import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    RequestFailedError,
    ServiceUnavailableError,
)
from azmcp.options import RetryPolicy
from azmcp_server.models import (
    AppConfigStore,
    BlobContainer,
    CosmosAccount,
    CosmosDatabase,
    KeyValueSetting,
    KeyVault,
    LogAnalyticsWorkspace,
    MetricResult,
    MonitoredResource,
    ResourceGroup,
    StorageAccount,
    Subscription,
    TimeSeries,
    VaultKey,
)
from azmcp_server.services import CacheService, CosmosError, MemoryCache, ServiceProvider

logger = logging.getLogger(__name__)

_QUERY_PATTERN = re.compile(
    r"^\s*SELECT\s+\*\s+FROM\s+(?P<alias>\w+)"
    r"(?:\s+WHERE\s+(?P=alias)\.(?P<field>\w+)\s*=\s*(?P<value>'[^']*'|\S+))?\s*$",
    re.IGNORECASE,
)

_AGGREGATIONS = {
    "average": "avg_buckets",
    "minimum": "min_buckets",
    "maximum": "max_buckets",
    "total": "total_buckets",
    "count": "count_buckets",
}


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _matches(pattern: str | None, value: str | None) -> bool:
    if pattern is None:
        return True
    if value is None:
        return False
    if pattern.endswith("*"):
        return value.startswith(pattern[:-1])
    return value == pattern


@dataclass
class CloudState:
    """Mutable resource inventory, keyed by subscription id where scoped."""

    tenants: dict[str, str] = field(default_factory=dict)
    default_tenant: str | None = None
    subscriptions: list[Subscription] = field(default_factory=list)
    resource_groups: dict[str, list[ResourceGroup]] = field(default_factory=dict)
    storage_accounts: dict[str, dict[str, StorageAccount]] = field(default_factory=dict)
    cosmos_accounts: dict[str, dict[str, CosmosAccount]] = field(default_factory=dict)
    vaults: dict[str, dict[str, KeyVault]] = field(default_factory=dict)
    appconfig_stores: dict[str, dict[str, AppConfigStore]] = field(default_factory=dict)
    workspaces: dict[str, list[LogAnalyticsWorkspace]] = field(default_factory=dict)
    resources: dict[str, dict[str, MonitoredResource]] = field(default_factory=dict)
    offline: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class StaticCredentialProvider:
    """Issue placeholder tokens for the tenants known to a :class:`CloudState`."""

    def __init__(self, state: CloudState) -> None:
        """Create a provider backed by ``state.tenants``."""
        self._state = state

    def get_token(self, tenant: str | None = None) -> str:
        """Return a bearer token for ``tenant`` or the default tenant."""
        tenant_id = self.tenant_id(tenant)
        return f"token-{tenant_id}"

    def tenant_id(self, tenant: str | None) -> str:
        """Resolve a tenant id or display name to its id."""
        if tenant is None:
            if self._state.default_tenant is None:
                raise AuthenticationError(
                    "No default tenant is configured for the credential chain"
                )
            return self._state.default_tenant
        for tenant_id, name in self._state.tenants.items():
            if tenant in (tenant_id, name):
                return tenant_id
        raise AuthenticationError(
            f"Tenant '{tenant}' was not found in the credential chain"
        )


class _InMemoryService:
    """Shared plumbing: connectivity, deadline and credential checks."""

    def __init__(
        self,
        state: CloudState,
        credentials: StaticCredentialProvider,
        subscriptions: InMemorySubscriptionService | None = None,
    ) -> None:
        self._state = state
        self._credentials = credentials
        self._subscriptions = subscriptions

    def _begin(
        self,
        operation: str,
        tenant: str | None,
        retry_policy: RetryPolicy | None,
        deadline: float | None,
    ) -> None:
        logger.debug(
            "%s (tenant=%s, retry_policy=%s)", operation, tenant, retry_policy
        )
        if self._state.offline:
            raise ServiceUnavailableError(
                f"Unable to reach the management endpoint during {operation}"
            )
        if deadline is not None and time.monotonic() > deadline:
            raise TimeoutError(f"{operation} did not complete before its deadline")
        self._credentials.get_token(tenant)

    async def _subscription_id(
        self,
        subscription: str,
        tenant: str | None,
        retry_policy: RetryPolicy | None,
        deadline: float | None,
    ) -> str:
        if self._subscriptions is None:
            raise RuntimeError("Subscription service is not configured")
        resolved = await self._subscriptions.resolve(
            subscription, tenant=tenant, retry_policy=retry_policy, deadline=deadline
        )
        return resolved.subscription_id


class InMemorySubscriptionService(_InMemoryService):
    """Subscription lookups memoized through an injected cache."""

    def __init__(
        self,
        state: CloudState,
        credentials: StaticCredentialProvider,
        cache: CacheService,
    ) -> None:
        super().__init__(state, credentials)
        self._cache = cache

    async def list_subscriptions(
        self,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[Subscription]:
        self._begin("list_subscriptions", tenant, retry_policy, deadline)
        tenant_id = self._credentials.tenant_id(tenant)
        cache_key = f"subscriptions:{tenant_id}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return list(cached)  # type: ignore[call-overload]
        with self._state.lock:
            subscriptions = [
                sub for sub in self._state.subscriptions if sub.tenant_id == tenant_id
            ]
        self._cache.set(cache_key, subscriptions)
        return list(subscriptions)

    async def resolve(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> Subscription:
        """Find a subscription by id, or by display name case-insensitively."""
        candidates = await self.list_subscriptions(
            tenant=tenant, retry_policy=retry_policy, deadline=deadline
        )
        for candidate in candidates:
            if candidate.subscription_id == subscription:
                return candidate
        for candidate in candidates:
            if candidate.display_name.lower() == subscription.lower():
                return candidate
        raise NotFoundError(f"Subscription '{subscription}' not found")


class InMemoryResourceGroupService(_InMemoryService):
    async def list_resource_groups(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[ResourceGroup]:
        self._begin("list_resource_groups", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return list(self._state.resource_groups.get(sub_id, []))


class InMemoryStorageService(_InMemoryService):
    def _account(self, sub_id: str, account: str) -> StorageAccount:
        found = self._state.storage_accounts.get(sub_id, {}).get(account)
        if found is None:
            raise NotFoundError(f"Storage account '{account}' not found")
        return found

    def _container(self, sub_id: str, account: str, container: str) -> BlobContainer:
        found = self._account(sub_id, account).containers.get(container)
        if found is None:
            raise NotFoundError(
                f"Container '{container}' not found in storage account '{account}'"
            )
        return found

    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[StorageAccount]:
        self._begin("list_storage_accounts", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return list(self._state.storage_accounts.get(sub_id, {}).values())

    async def list_tables(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]:
        self._begin("list_tables", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return list(self._account(sub_id, account).tables)

    async def list_containers(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]:
        self._begin("list_containers", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return sorted(self._account(sub_id, account).containers)

    async def get_container(
        self,
        account: str,
        container: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> BlobContainer:
        self._begin("get_container", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return self._container(sub_id, account, container)

    async def list_blobs(
        self,
        account: str,
        container: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]:
        self._begin("list_blobs", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return list(self._container(sub_id, account, container).blobs)


def _literal(raw: str) -> object:
    if raw.startswith("'") and raw.endswith("'"):
        return raw[1:-1]
    try:
        return json.loads(raw)
    except json.JSONDecodeError as error:
        raise CosmosError(
            f"Syntax error, invalid literal '{raw}'.", status=400
        ) from error


class InMemoryCosmosService(_InMemoryService):
    def _database(self, sub_id: str, account: str, database: str) -> CosmosDatabase:
        found = self._state.cosmos_accounts.get(sub_id, {}).get(account)
        if found is None:
            raise NotFoundError(f"Cosmos DB account '{account}' not found")
        db = found.databases.get(database)
        if db is None:
            raise CosmosError(
                f"Resource Not Found. Database '{database}' does not exist.",
                status=404,
            )
        return db

    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[CosmosAccount]:
        self._begin("list_cosmos_accounts", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return list(self._state.cosmos_accounts.get(sub_id, {}).values())

    async def list_databases(
        self,
        account: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]:
        self._begin("list_databases", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            found = self._state.cosmos_accounts.get(sub_id, {}).get(account)
            if found is None:
                raise NotFoundError(f"Cosmos DB account '{account}' not found")
            return sorted(found.databases)

    async def list_containers(
        self,
        account: str,
        database: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]:
        self._begin("list_cosmos_containers", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return sorted(self._database(sub_id, account, database).containers)

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
    ) -> list[dict[str, object]]:
        """Evaluate ``SELECT * FROM c [WHERE c.field = literal]``."""
        self._begin("query_items", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        match = _QUERY_PATTERN.match(query)
        if match is None:
            raise CosmosError(f"Syntax error, incorrect syntax near '{query}'.", status=400)
        with self._state.lock:
            items = self._database(sub_id, account, database).containers.get(container)
            if items is None:
                raise CosmosError(
                    f"Resource Not Found. Container '{container}' does not exist.",
                    status=404,
                )
            items = [dict(item) for item in items]
        if match.group("field") is None:
            return items
        expected = _literal(match.group("value"))
        return [item for item in items if item.get(match.group("field")) == expected]


class InMemoryKeyVaultService(_InMemoryService):
    def _vault(self, sub_id: str, vault: str) -> KeyVault:
        found = self._state.vaults.get(sub_id, {}).get(vault)
        if found is None:
            raise NotFoundError(f"Key vault '{vault}' not found")
        if not found.accessible:
            raise AuthorizationError(
                f"The caller does not have keys permission on key vault '{vault}'"
            )
        return found

    async def list_keys(
        self,
        vault: str,
        include_managed: bool,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[str]:
        self._begin("list_keys", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            keys = self._vault(sub_id, vault).keys.values()
            return sorted(key.name for key in keys if include_managed or not key.managed)

    async def get_key(
        self,
        vault: str,
        key: str,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> VaultKey:
        self._begin("get_key", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            found = self._vault(sub_id, vault).keys.get(key)
        if found is None:
            raise RequestFailedError(
                f"A key with (name/id) {key} was not found in this key vault.",
                status=404,
                details="KeyNotFound",
            )
        return found

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
    ) -> VaultKey:
        self._begin("create_key", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        timestamp = _now()
        with self._state.lock:
            keys = self._vault(sub_id, vault).keys
            existing = keys.get(key)
            created = VaultKey(
                name=key,
                key_type=key_type,
                created_on=existing.created_on if existing else timestamp,
                updated_on=timestamp,
            )
            keys[key] = created
        return created


class InMemoryAppConfigService(_InMemoryService):
    def _store(self, sub_id: str, account: str) -> AppConfigStore:
        found = self._state.appconfig_stores.get(sub_id, {}).get(account)
        if found is None:
            raise NotFoundError(f"App Configuration store '{account}' not found")
        return found

    def _setting(
        self, store: AppConfigStore, key: str, label: str | None
    ) -> KeyValueSetting:
        found = store.settings.get((key, label))
        if found is None:
            raise NotFoundError(
                f"Setting '{key}' with label '{label or '(none)'}' not found"
            )
        return found

    async def list_accounts(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[AppConfigStore]:
        self._begin("list_appconfig_accounts", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return list(self._state.appconfig_stores.get(sub_id, {}).values())

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
    ) -> list[KeyValueSetting]:
        self._begin("list_settings", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            settings = list(self._store(sub_id, account).settings.values())
        return [
            setting
            for setting in settings
            if _matches(key_filter, setting.key) and _matches(label_filter, setting.label)
        ]

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
    ) -> KeyValueSetting:
        self._begin("get_setting", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return self._setting(self._store(sub_id, account), key, label)

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
    ) -> KeyValueSetting:
        self._begin("set_setting", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            store = self._store(sub_id, account)
            existing = store.settings.get((key, label))
            if existing is not None and existing.locked:
                raise RequestFailedError(
                    f"The setting '{key}' is read only.", status=409
                )
            setting = KeyValueSetting(
                key=key,
                value=value,
                label=label,
                content_type=existing.content_type if existing else None,
                last_modified=_now(),
                etag=uuid.uuid4().hex,
            )
            store.settings[(key, label)] = setting
        return setting

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
    ) -> None:
        self._begin("delete_setting", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            store = self._store(sub_id, account)
            existing = store.settings.get((key, label))
            if existing is not None and existing.locked:
                raise RequestFailedError(
                    f"The setting '{key}' is read only.", status=409
                )
            store.settings.pop((key, label), None)

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
    ) -> KeyValueSetting:
        self._begin("set_lock", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            setting = self._setting(self._store(sub_id, account), key, label)
            setting.locked = locked
            setting.last_modified = _now()
            return setting


class InMemoryMonitorService(_InMemoryService):
    def _resource(
        self, sub_id: str, resource: str, resource_group: str | None
    ) -> MonitoredResource:
        resources = self._state.resources.get(sub_id, {})
        if resource.startswith("/"):
            found = resources.get(resource)
        else:
            matches = [
                candidate
                for candidate in resources.values()
                if candidate.name == resource
                and (resource_group is None or candidate.resource_group == resource_group)
            ]
            found = matches[0] if len(matches) == 1 else None
        if found is None:
            raise NotFoundError(f"Resource '{resource}' not found")
        return found

    async def list_workspaces(
        self,
        subscription: str,
        *,
        tenant: str | None = None,
        retry_policy: RetryPolicy | None = None,
        deadline: float | None = None,
    ) -> list[LogAnalyticsWorkspace]:
        self._begin("list_workspaces", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            return list(self._state.workspaces.get(sub_id, []))

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
    ) -> list[MetricResult]:
        self._begin("query_metrics", tenant, retry_policy, deadline)
        sub_id = await self._subscription_id(subscription, tenant, retry_policy, deadline)
        with self._state.lock:
            target = self._resource(sub_id, resource, resource_group)
            namespace = target.metrics.get(metric_namespace.lower())
        if namespace is None:
            raise RequestFailedError(
                f"Metric namespace '{metric_namespace}' is not supported for "
                f"resource '{target.name}'",
                status=400,
            )
        fields = _aggregation_fields(aggregation or "Average")
        results = []
        for name in metric_names:
            values = namespace.get(name)
            if values is None:
                raise RequestFailedError(
                    f"Failed to find metric configuration for provider: "
                    f"{target.resource_type}, metric: {name}",
                    status=400,
                )
            series = TimeSeries(start="2025-01-01T00:00:00Z", interval=interval or "PT1M")
            for field_name in fields:
                setattr(series, field_name, list(values))
            results.append(MetricResult(name=name, unit="Count", time_series=[series]))
        return results


def _aggregation_fields(aggregation: str) -> list[str]:
    fields = []
    for part in aggregation.split(","):
        name = _AGGREGATIONS.get(part.strip().lower())
        if name is None:
            raise RequestFailedError(
                f"Invalid aggregation '{part.strip()}'. Allowed values: "
                "Average, Minimum, Maximum, Total, Count.",
                status=400,
            )
        fields.append(name)
    return fields


def build_in_memory_services(
    state: CloudState | None = None, cache_ttl: float = 300.0
) -> ServiceProvider:
    """Wire every in-memory collaborator around one shared state."""
    state = state if state is not None else sample_state()
    credentials = StaticCredentialProvider(state)
    cache = MemoryCache(default_ttl=cache_ttl)
    subscriptions = InMemorySubscriptionService(state, credentials, cache)
    return ServiceProvider(
        credentials=credentials,
        cache=cache,
        subscriptions=subscriptions,
        resource_groups=InMemoryResourceGroupService(state, credentials, subscriptions),
        storage=InMemoryStorageService(state, credentials, subscriptions),
        cosmos=InMemoryCosmosService(state, credentials, subscriptions),
        keyvault=InMemoryKeyVaultService(state, credentials, subscriptions),
        appconfig=InMemoryAppConfigService(state, credentials, subscriptions),
        monitor=InMemoryMonitorService(state, credentials, subscriptions),
    )


SAMPLE_TENANT_ID = "72f988bf-0000-4000-8000-000000000000"
SAMPLE_SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000001"
EMPTY_SUBSCRIPTION_ID = "00000000-0000-0000-0000-000000000002"


def _index(items: Iterable[object], key: str = "name") -> dict[str, object]:
    return {getattr(item, key): item for item in items}


def _settings(*settings: KeyValueSetting) -> dict[tuple[str, str | None], KeyValueSetting]:
    return {(setting.key, setting.label): setting for setting in settings}


def sample_state(extra_tenants: Mapping[str, str] | None = None) -> CloudState:
    """Build a small, deterministic inventory used by tests and local runs.

    The production subscription holds one resource of each kind; the
    development subscription is empty.
    """
    sub = SAMPLE_SUBSCRIPTION_ID
    web_id = (
        f"/subscriptions/{sub}/resourceGroups/rg-web/providers/"
        "Microsoft.Web/sites/contoso-web"
    )
    return CloudState(
        tenants={SAMPLE_TENANT_ID: "contoso", **(extra_tenants or {})},
        default_tenant=SAMPLE_TENANT_ID,
        subscriptions=[
            Subscription(sub, "Contoso Production", SAMPLE_TENANT_ID),
            Subscription(EMPTY_SUBSCRIPTION_ID, "Contoso Development", SAMPLE_TENANT_ID),
        ],
        resource_groups={
            sub: [
                ResourceGroup("rg-web", f"/subscriptions/{sub}/resourceGroups/rg-web", "eastus"),
                ResourceGroup("rg-data", f"/subscriptions/{sub}/resourceGroups/rg-data", "westus2"),
            ]
        },
        storage_accounts={
            sub: _index(
                [
                    StorageAccount(
                        name="contosodata",
                        resource_group="rg-data",
                        containers=_index(
                            [
                                BlobContainer(
                                    name="logs",
                                    last_modified="2025-01-01T00:00:00+00:00",
                                    etag="0x8DC0000000000001",
                                    metadata={"owner": "ops"},
                                    blobs=["2024/01/app.log", "2024/02/app.log"],
                                ),
                                BlobContainer(
                                    name="images",
                                    last_modified="2025-01-02T00:00:00+00:00",
                                    etag="0x8DC0000000000002",
                                    public_access="blob",
                                ),
                            ]
                        ),
                        tables=["audit", "sessions"],
                    )
                ]
            )
        },
        cosmos_accounts={
            sub: _index(
                [
                    CosmosAccount(
                        name="contoso-cosmos",
                        resource_group="rg-data",
                        databases=_index(
                            [
                                CosmosDatabase(
                                    name="inventory",
                                    containers={
                                        "products": [
                                            {"id": "1", "name": "Widget", "category": "tools", "price": 9.5},
                                            {"id": "2", "name": "Gadget", "category": "toys", "price": 20},
                                        ],
                                        "orders": [],
                                    },
                                )
                            ]
                        ),
                    )
                ]
            )
        },
        vaults={
            sub: _index(
                [
                    KeyVault(
                        name="contoso-kv",
                        keys=_index(
                            [
                                VaultKey("signing-key", "RSA", created_on="2025-01-01T00:00:00+00:00"),
                                VaultKey("managed-key", "EC", managed=True),
                            ]
                        ),
                    ),
                    KeyVault(name="restricted-kv", accessible=False),
                ]
            )
        },
        appconfig_stores={
            sub: _index(
                [
                    AppConfigStore(
                        name="contoso-config",
                        resource_group="rg-web",
                        settings=_settings(
                            KeyValueSetting("App:Color", "blue"),
                            KeyValueSetting("App:Color", "red", label="Production"),
                            KeyValueSetting("App:Name", "Contoso", locked=True),
                        ),
                    )
                ]
            )
        },
        workspaces={
            sub: [LogAnalyticsWorkspace("contoso-logs", "11111111-2222-3333-4444-555555555555")]
        },
        resources={
            sub: {
                web_id: MonitoredResource(
                    id=web_id,
                    name="contoso-web",
                    resource_group="rg-web",
                    resource_type="Microsoft.Web/sites",
                    metrics={
                        "microsoft.web/sites": {
                            "CpuTime": [1.0, 2.0, 3.0, 4.0, 5.0],
                            "Requests": [float(i) for i in range(60)],
                        }
                    },
                )
            }
        },
    )
