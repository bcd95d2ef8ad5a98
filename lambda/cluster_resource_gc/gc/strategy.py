"""Garbage collection strategies.

A strategy pairs one way of discovering resources with the ordered cleanup
pipeline. ``TagSearchStrategy`` asks the Resource Groups Tagging API for
everything carrying the cluster tag in one query. ``EnumerationStrategy``
lists each service separately and looks the tags up in batches, for resource
types the tagging API does not report reliably.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DiscoveryError, GarbageCollectionError
from ..models import AWSResource
from ..models.config import RESOURCE_LIFECYCLE_OWNED
from ..utils import get_logger
from .context import GCContext
from .matching import cluster_tag_key

logger = get_logger()

ResourceCollectFunc = Callable[[GCContext], list[AWSResource]]
ResourceCleanupFunc = Callable[[GCContext, Sequence[AWSResource]], None]


class ResourceCollectFuncs:
    """Collect functions run in order; their results are concatenated."""

    def __init__(self, funcs: Iterable[ResourceCollectFunc]):
        self._funcs = tuple(funcs)

    def __len__(self) -> int:
        return len(self._funcs)

    def execute(self, ctx: GCContext) -> list[AWSResource]:
        resources: list[AWSResource] = []
        for collect in self._funcs:
            resources.extend(collect(ctx))
        return resources


class ResourceCleanupFuncs:
    """Cleanup functions run in order against the same resource list."""

    def __init__(self, funcs: Iterable[ResourceCleanupFunc]):
        self._funcs = tuple(funcs)

    def __len__(self) -> int:
        return len(self._funcs)

    def execute(self, ctx: GCContext, resources: Sequence[AWSResource]) -> None:
        for cleanup in self._funcs:
            cleanup(ctx, resources)


class GCStrategy(ABC):
    """Discovers the cluster's leftover resources and deletes them."""

    name: str = ""

    def __init__(self, cleanups: ResourceCleanupFuncs):
        self.cleanups = cleanups

    @abstractmethod
    def collect(self, ctx: GCContext) -> list[AWSResource]:
        """Return candidate resources. Any failure aborts the pass."""

    def cleanup(self, ctx: GCContext) -> None:
        resources = self.collect(ctx)
        logger.info(
            f"Found {len(resources)} candidate resources",
            extra={"strategy": self.name},
        )

        try:
            self.cleanups.execute(ctx, resources)
        except GarbageCollectionError as e:
            raise GarbageCollectionError("deleting resources", cause=e) from e


class TagSearchStrategy(GCStrategy):
    """Primary strategy: one cross-service tag query."""

    name = "tag-search"

    def __init__(
        self,
        cluster_name: str,
        tagging_client: Any,
        cleanups: ResourceCleanupFuncs,
    ):
        super().__init__(cleanups)
        self.cluster_name = cluster_name
        self.tagging_client = tagging_client

    def collect(self, ctx: GCContext) -> list[AWSResource]:
        tag_filters = [
            {
                "Key": cluster_tag_key(self.cluster_name),
                "Values": [RESOURCE_LIFECYCLE_OWNED],
            }
        ]

        ctx.check("tag:GetResources")
        mappings = []
        try:
            paginator = self.tagging_client.get_paginator("get_resources")
            for page in paginator.paginate(TagFilters=tag_filters):
                mappings.extend(page.get("ResourceTagMappingList", []))
                ctx.check("tag:GetResources")
        except (ClientError, BotoCoreError) as e:
            raise DiscoveryError("tag:GetResources", e) from e

        return [
            AWSResource.from_tag_list(mapping["ResourceARN"], mapping.get("Tags"))
            for mapping in mappings
        ]


class EnumerationStrategy(GCStrategy):
    """Fallback strategy: per-service listing plus batched tag lookups."""

    name = "enumeration"

    def __init__(self, collects: ResourceCollectFuncs, cleanups: ResourceCleanupFuncs):
        super().__init__(cleanups)
        self.collects = collects

    def collect(self, ctx: GCContext) -> list[AWSResource]:
        return self.collects.execute(ctx)
