"""Entry point of garbage collection for a cluster being deleted."""

from __future__ import annotations

from ..exceptions import ConfigurationError
from ..models import ClusterInfo
from ..models.config import (
    EXTERNAL_RESOURCE_GC_ANNOTATION,
    GC_STRATEGY,
    STRATEGY_ENUMERATION,
    STRATEGY_TAG_SEARCH,
    SUPPORTED_STRATEGIES,
)
from ..utils import get_logger, parse_bool
from .cleanup import ResourceCleaner
from .clients import AWSClients
from .collectors import ResourceCollector
from .context import GCContext
from .strategy import (
    EnumerationStrategy,
    GCStrategy,
    ResourceCleanupFuncs,
    ResourceCollectFuncs,
    TagSearchStrategy,
)

logger = get_logger()


class GarbageCollectionService:
    """Deletes the AWS resources a workload cluster created through its CCM."""

    def __init__(self, cluster: ClusterInfo, strategy: GCStrategy):
        self.cluster = cluster
        self.strategy = strategy

    def should_gc(self) -> bool:
        """Read the opt-out annotation. Missing means garbage collection is on.

        Raises:
            ConfigurationError: if the annotation is not a boolean
        """
        value = self.cluster.annotations.get(EXTERNAL_RESOURCE_GC_ANNOTATION)
        if value is None:
            return True
        try:
            return parse_bool(value)
        except ValueError as e:
            raise ConfigurationError(
                f"converting value {value} of annotation "
                f"{EXTERNAL_RESOURCE_GC_ANNOTATION} to bool",
                cause=e,
            ) from e

    def reconcile_delete(self, ctx: GCContext | None = None) -> bool:
        """
        Garbage collect the cluster's load balancer resources if it has not opted out.

        Returns:
            True if garbage collection ran, False if the cluster opted out

        Raises:
            GarbageCollectionError: on any configuration, discovery or deletion
                failure; the caller retries the whole pass later
        """
        logger.info(
            "reconciling deletion for garbage collection",
            extra={"cluster_name": self.cluster.name, "region": self.cluster.region},
        )

        if not self.should_gc():
            logger.info(
                "cluster opted-out of garbage collection",
                extra={"cluster_name": self.cluster.name},
            )
            return False

        logger.info(
            "deleting aws resources created by tenant cluster",
            extra={"cluster_name": self.cluster.name, "strategy": self.strategy.name},
        )
        self.strategy.cleanup(ctx or GCContext())
        return True


def build_strategy(
    name: str, cluster: ClusterInfo, clients: AWSClients, dry_run: bool
) -> GCStrategy:
    cleaner = ResourceCleaner(clients, dry_run=dry_run)
    cleanups = ResourceCleanupFuncs(cleaner.default_cleanups())

    if name == STRATEGY_TAG_SEARCH:
        return TagSearchStrategy(cluster.name, clients.tagging, cleanups)
    if name == STRATEGY_ENUMERATION:
        collector = ResourceCollector(clients, cluster.name)
        return EnumerationStrategy(
            ResourceCollectFuncs(collector.default_collectors()), cleanups
        )
    raise ConfigurationError(
        f"unknown garbage collection strategy {name!r}, "
        f"expected one of {sorted(SUPPORTED_STRATEGIES)}"
    )


def new_service(
    cluster: ClusterInfo,
    clients: AWSClients | None = None,
    strategy: str | None = None,
    dry_run: bool = False,
) -> GarbageCollectionService:
    """Assemble a service with the configured strategy and cleanup pipeline.

    Deletes for real unless ``dry_run`` is set. The Lambda handler passes the
    ``DRY_RUN`` environment setting explicitly.
    """
    strategy_name = (strategy or GC_STRATEGY).lower()
    if strategy_name not in SUPPORTED_STRATEGIES:
        raise ConfigurationError(
            f"unknown garbage collection strategy {strategy_name!r}, "
            f"expected one of {sorted(SUPPORTED_STRATEGIES)}"
        )

    if clients is None:
        clients = AWSClients.for_region(cluster.region)

    return GarbageCollectionService(
        cluster, build_strategy(strategy_name, cluster, clients, dry_run)
    )
