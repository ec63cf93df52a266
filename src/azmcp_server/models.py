"""Cloud resource records exchanged between collaborators and command areas.

The records mirror the fields the command areas report; provider-specific
metadata that no command surfaces is left out.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Subscription:
    """Azure subscription visible to the caller."""

    subscription_id: str
    display_name: str
    tenant_id: str
    state: str = "Enabled"


@dataclass
class ResourceGroup:
    """Resource group within a subscription."""

    name: str
    id: str
    location: str


@dataclass
class BlobContainer:
    """Blob container and the names of the blobs it holds."""

    name: str
    last_modified: str
    etag: str
    public_access: str | None = None
    lease_status: str = "unlocked"
    metadata: dict[str, str] = field(default_factory=dict)
    blobs: list[str] = field(default_factory=list)


@dataclass
class StorageAccount:
    """Storage account with its blob containers and tables."""

    name: str
    resource_group: str
    location: str = "eastus"
    kind: str = "StorageV2"
    containers: dict[str, BlobContainer] = field(default_factory=dict)
    tables: list[str] = field(default_factory=list)


@dataclass
class CosmosDatabase:
    """Cosmos DB database mapping container names to their items."""

    name: str
    containers: dict[str, list[dict[str, object]]] = field(default_factory=dict)


@dataclass
class CosmosAccount:
    """Cosmos DB account."""

    name: str
    resource_group: str
    databases: dict[str, CosmosDatabase] = field(default_factory=dict)


@dataclass
class VaultKey:
    """Key stored in a Key Vault."""

    name: str
    key_type: str
    enabled: bool = True
    managed: bool = False
    created_on: str | None = None
    updated_on: str | None = None
    not_before: str | None = None
    expires_on: str | None = None


@dataclass
class KeyVault:
    """Key Vault and whether the caller may use its data plane."""

    name: str
    keys: dict[str, VaultKey] = field(default_factory=dict)
    accessible: bool = True


@dataclass
class KeyValueSetting:
    """App Configuration key-value."""

    key: str
    value: str
    label: str | None = None
    content_type: str | None = None
    locked: bool = False
    last_modified: str | None = None
    etag: str | None = None


@dataclass
class AppConfigStore:
    """App Configuration store keyed by ``(key, label)``."""

    name: str
    resource_group: str
    location: str = "eastus"
    settings: dict[tuple[str, str | None], KeyValueSetting] = field(
        default_factory=dict
    )


@dataclass
class LogAnalyticsWorkspace:
    """Log Analytics workspace."""

    name: str
    customer_id: str
    location: str = "eastus"
    sku: str = "PerGB2018"


@dataclass
class MonitoredResource:
    """Resource emitting metrics, keyed by metric namespace and name."""

    id: str
    name: str
    resource_group: str
    resource_type: str
    metrics: dict[str, dict[str, list[float]]] = field(default_factory=dict)


@dataclass
class TimeSeries:
    """Bucketed values for one metric."""

    start: str
    interval: str
    avg_buckets: list[float] = field(default_factory=list)
    min_buckets: list[float] = field(default_factory=list)
    max_buckets: list[float] = field(default_factory=list)
    total_buckets: list[float] = field(default_factory=list)
    count_buckets: list[float] = field(default_factory=list)

    def bucket_count(self) -> int:
        """Return the length of the longest bucket array."""
        return max(
            len(self.avg_buckets),
            len(self.min_buckets),
            len(self.max_buckets),
            len(self.total_buckets),
            len(self.count_buckets),
        )


@dataclass
class MetricResult:
    """Metric returned by a metrics query."""

    name: str
    unit: str
    time_series: list[TimeSeries] = field(default_factory=list)
