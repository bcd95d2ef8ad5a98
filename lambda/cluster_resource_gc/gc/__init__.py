"""Garbage collection of AWS resources left behind by a deleted cluster."""

from .clients import AWSClients
from .context import GCContext
from .matching import (
    cluster_tag_key,
    is_matching_resource,
    is_elb_resource_to_delete,
    is_security_group_to_delete,
)
from .collectors import ResourceCollector
from .cleanup import ResourceCleaner
from .strategy import (
    GCStrategy,
    TagSearchStrategy,
    EnumerationStrategy,
    ResourceCollectFuncs,
    ResourceCleanupFuncs,
)
from .service import GarbageCollectionService, new_service

__all__ = [
    "AWSClients",
    "GCContext",
    "cluster_tag_key",
    "is_matching_resource",
    "is_elb_resource_to_delete",
    "is_security_group_to_delete",
    "ResourceCollector",
    "ResourceCleaner",
    "GCStrategy",
    "TagSearchStrategy",
    "EnumerationStrategy",
    "ResourceCollectFuncs",
    "ResourceCleanupFuncs",
    "GarbageCollectionService",
    "new_service",
]
