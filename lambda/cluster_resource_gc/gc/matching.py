"""Tag and category rules deciding which resources belong to the cluster."""

from __future__ import annotations
from typing import Mapping

from ..models import AWSResource
from ..models.config import (
    CLUSTER_TAG_PREFIX,
    EC2_SERVICE,
    EKS_CLUSTER_NAME_TAG,
    ELB_SERVICE,
    RESOURCE_LIFECYCLE_OWNED,
    SECURITY_GROUP_RESOURCE,
    SERVICE_NAME_TAG,
)
from ..utils import get_logger

logger = get_logger()


def cluster_tag_key(cluster_name: str) -> str:
    """Tag key the cloud provider puts on resources it creates for a cluster."""
    return f"{CLUSTER_TAG_PREFIX}{cluster_name}"


def is_matching_resource(
    resource: AWSResource, service_name: str, resource_name: str
) -> bool:
    """Check the resource is of the given service and resource type.

    The type must be followed by ``/`` so ``loadbalancer`` does not match
    ``loadbalancer2/...``.
    """
    if resource.arn.service != service_name:
        logger.debug(
            "Resource not for service",
            extra={
                "arn": str(resource.arn),
                "service_name": service_name,
                "resource_name": resource_name,
            },
        )
        return False
    if not resource.arn.resource.startswith(resource_name + "/"):
        logger.debug(
            "Resource type does not match",
            extra={
                "arn": str(resource.arn),
                "service_name": service_name,
                "resource_name": resource_name,
            },
        )
        return False
    return True


def is_cluster_owned(tags: Mapping[str, str], cluster_name: str) -> bool:
    return tags.get(cluster_tag_key(cluster_name)) == RESOURCE_LIFECYCLE_OWNED


def is_eks_managed(tags: Mapping[str, str]) -> bool:
    """Resources created by EKS itself are not ours to delete."""
    return bool(tags.get(EKS_CLUSTER_NAME_TAG))


def has_service_origin(tags: Mapping[str, str]) -> bool:
    return bool(tags.get(SERVICE_NAME_TAG))


def is_elb_resource_to_delete(resource: AWSResource, resource_name: str) -> bool:
    """Load balancer or target group created by the CCM for a Service."""
    if not is_matching_resource(resource, ELB_SERVICE, resource_name):
        return False

    if not has_service_origin(resource.tags):
        logger.info(
            "Resource wasn't created for a Service via CCM",
            extra={"arn": str(resource.arn), "resource_name": resource_name},
        )
        return False

    if is_eks_managed(resource.tags):
        logger.info(
            "Resource was created by EKS directly",
            extra={
                "arn": str(resource.arn),
                "cluster_name": resource.tags[EKS_CLUSTER_NAME_TAG],
            },
        )
        return False

    return True


def is_security_group_to_delete(resource: AWSResource) -> bool:
    if not is_matching_resource(resource, EC2_SERVICE, SECURITY_GROUP_RESOURCE):
        return False

    if is_eks_managed(resource.tags):
        logger.debug(
            "Security group was created by EKS directly",
            extra={
                "arn": str(resource.arn),
                "cluster_name": resource.tags[EKS_CLUSTER_NAME_TAG],
            },
        )
        return False

    return True


def is_collectable(
    resource: AWSResource, cluster_name: str, require_service_origin: bool
) -> bool:
    """Filter applied by the enumeration collectors after the tag lookup."""
    if not is_cluster_owned(resource.tags, cluster_name):
        return False
    if is_eks_managed(resource.tags):
        return False
    if require_service_origin and not has_service_origin(resource.tags):
        return False
    return True
