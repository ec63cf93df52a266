"""Azure Monitor commands: Log Analytics workspaces and metrics."""

from __future__ import annotations

import logging

from azmcp.classifier import ErrorClassificationRule, of_type
from azmcp.executor import CommandArgs, CommandContext
from azmcp.options import OptionDefinition, ValueKind
from azmcp.registry import CommandLeaf, CommandRegistry
from azmcp.response import results_or_none
from azmcp.validation import comma_separated, exactly_one_of, positive
from azmcp_server.models import LogAnalyticsWorkspace, MetricResult, TimeSeries
from azmcp_server.services import BucketLimitError, ServiceProvider
from azmcp_server.tools.common import (
    READ_ONLY,
    SUBSCRIPTION_CHAIN,
    call_scope,
    optional_str,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_BUCKETS = 50

RESOURCE_ID = OptionDefinition(
    name="resource-id",
    description="The full Azure resource ID of the resource to query metrics for.",
)

RESOURCE_NAME = OptionDefinition(
    name="resource-name",
    description="The name of the Azure resource to query metrics for.",
)

RESOURCE_GROUP = OptionDefinition(
    name="resource-group",
    description="The name of the resource group containing the resource.",
)

METRIC_NAMESPACE = OptionDefinition(
    name="metric-namespace",
    description=(
        "The metric namespace to query. Obtain this value from the azmcp-monitor-"
        "metrics-definitions command (e.g., 'Microsoft.Web/sites')."
    ),
    required=True,
)

METRIC_NAMES = OptionDefinition(
    name="metric-names",
    description="The names of the metrics to query (comma-separated).",
    required=True,
)

INTERVAL = OptionDefinition(
    name="interval",
    description="The time interval for data points (e.g., PT1H for 1 hour, PT5M for 5 minutes).",
)

AGGREGATION = OptionDefinition(
    name="aggregation",
    description="The aggregation type to use (Average, Maximum, Minimum, Total, Count).",
)

MAX_BUCKETS = OptionDefinition(
    name="max-buckets",
    value_kind=ValueKind.INT,
    description="The maximum number of time buckets to return. Defaults to 50.",
    default=DEFAULT_MAX_BUCKETS,
)

MONITOR_RULES = (ErrorClassificationRule(predicate=of_type(BucketLimitError), status=400),)


def _workspace_to_dict(workspace: LogAnalyticsWorkspace) -> dict[str, object]:
    return {
        "name": workspace.name,
        "customerId": workspace.customer_id,
        "location": workspace.location,
        "sku": workspace.sku,
    }


def _series_to_dict(series: TimeSeries) -> dict[str, object]:
    buckets = {
        "avgBuckets": series.avg_buckets,
        "minBuckets": series.min_buckets,
        "maxBuckets": series.max_buckets,
        "totalBuckets": series.total_buckets,
        "countBuckets": series.count_buckets,
    }
    return {
        "start": series.start,
        "interval": series.interval,
        **{name: values for name, values in buckets.items() if values},
    }


def _metric_to_dict(metric: MetricResult) -> dict[str, object]:
    return {
        "name": metric.name,
        "unit": metric.unit,
        "timeSeries": [_series_to_dict(series) for series in metric.time_series],
    }


def check_bucket_limit(results: list[MetricResult], max_buckets: int) -> None:
    """Raise :class:`BucketLimitError` when any series exceeds ``max_buckets``."""
    for metric in results:
        for series in metric.time_series:
            count = series.bucket_count()
            if count > max_buckets:
                logger.warning(
                    "Bucket limit exceeded. Metric: %s, BucketCount: %d, MaxBuckets: %d",
                    metric.name,
                    count,
                    max_buckets,
                )
                raise BucketLimitError(
                    f"Time series for metric '{metric.name}' contains {count} time "
                    f"buckets, which exceeds the maximum allowed limit of "
                    f"{max_buckets}. To resolve this issue, either query a smaller "
                    "time range, increase the interval size (e.g., use PT1H instead "
                    "of PT5M), or increase the --max-buckets parameter."
                )


def workspace_list_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``monitor workspace list`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        workspaces = await services.monitor.list_workspaces(
            str(args["subscription"]), **call_scope(context, args)
        )
        return results_or_none(
            "workspaces", [_workspace_to_dict(workspace) for workspace in workspaces]
        )

    return CommandLeaf(
        name="list",
        title="List Log Analytics Workspaces",
        description=(
            "List Log Analytics workspaces in a subscription. This command retrieves "
            "all Log Analytics workspaces available in the specified Azure "
            "subscription, displaying their names, IDs, and other key properties."
        ),
        handler=handler,
        contributors=SUBSCRIPTION_CHAIN,
        annotations=READ_ONLY,
    )


def metrics_query_command(services: ServiceProvider) -> CommandLeaf:
    """Create the ``monitor metrics query`` command."""

    async def handler(context: CommandContext, args: CommandArgs) -> object:
        resource = optional_str(args, "resource-id") or str(args["resource-name"])
        metric_names = [name.strip() for name in str(args["metric-names"]).split(",")]
        results = await services.monitor.query_metrics(
            str(args["subscription"]),
            resource,
            str(args["metric-namespace"]),
            metric_names,
            resource_group=optional_str(args, "resource-group"),
            interval=optional_str(args, "interval"),
            aggregation=optional_str(args, "aggregation"),
            **call_scope(context, args),
        )
        check_bucket_limit(results, int(args.get("max-buckets") or DEFAULT_MAX_BUCKETS))
        return results_or_none("results", [_metric_to_dict(metric) for metric in results])

    return CommandLeaf(
        name="query",
        title="Query Azure Monitor Metrics",
        description=(
            "Query Azure Monitor metrics for a resource. Returns time series data for "
            "the specified metrics. Identify the resource either by resource-id, or "
            "by resource-name together with resource-group."
        ),
        handler=handler,
        options=(
            RESOURCE_ID,
            RESOURCE_NAME,
            RESOURCE_GROUP,
            METRIC_NAMESPACE,
            METRIC_NAMES,
            INTERVAL,
            AGGREGATION,
            MAX_BUCKETS,
        ),
        contributors=SUBSCRIPTION_CHAIN,
        validators=(
            exactly_one_of(("resource-id",), ("resource-name", "resource-group")),
            comma_separated("metric-names"),
            positive("max-buckets"),
        ),
        error_rules=MONITOR_RULES,
        annotations=READ_ONLY,
    )


def register(registry: CommandRegistry, services: ServiceProvider) -> None:
    """Register the monitor area."""
    registry.add_group(
        "monitor",
        "Azure Monitor operations - Commands for querying and managing Azure "
        "Monitor resources.",
    )
    registry.add_group("monitor.workspace", "Log Analytics workspace operations")
    registry.add_group("monitor.metrics", "Azure Monitor metrics operations")
    registry.register("monitor.workspace", workspace_list_command(services))
    registry.register("monitor.metrics", metrics_query_command(services))
