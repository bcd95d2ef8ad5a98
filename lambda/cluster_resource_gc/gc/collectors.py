"""Per-service discovery of cluster-owned load balancer resources.

Used by the enumeration strategy when the tagging API cannot be relied on.
Each collector lists every resource of one type in the region, looks the tags
up in batches of ``MAX_DESCRIBE_TAGS_REQUEST`` and keeps only what the cluster
owns.
"""

from __future__ import annotations
from typing import Any, Callable

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DiscoveryError
from ..models import AWSResource
from ..models.config import (
    EC2_SERVICE,
    ELB_SERVICE,
    LOAD_BALANCER_RESOURCE,
    SECURITY_GROUP_RESOURCE,
)
from ..utils import chunk_resources, compose_arn, get_logger
from .clients import AWSClients
from .context import GCContext
from .matching import is_collectable

logger = get_logger()


class ResourceCollector:
    """Enumeration-based collectors for one cluster."""

    def __init__(self, clients: AWSClients, cluster_name: str):
        self.clients = clients
        self.cluster_name = cluster_name

    def collect_classic_load_balancers(self, ctx: GCContext) -> list[AWSResource]:
        """Classic ELBs tagged as owned by the cluster and created for a Service."""
        names = self._list_all(
            ctx,
            self.clients.elb,
            "describe_load_balancers",
            "LoadBalancerDescriptions",
            "LoadBalancerName",
            "elb:DescribeLoadBalancers",
        )
        if not names:
            return []

        resources = []
        for chunk in chunk_resources(names):
            output = self._call(
                ctx,
                "elb:DescribeTags",
                self.clients.elb.describe_tags,
                LoadBalancerNames=chunk,
            )
            for description in output.get("TagDescriptions", []):
                arn = compose_arn(
                    ELB_SERVICE,
                    f"{LOAD_BALANCER_RESOURCE}/{description['LoadBalancerName']}",
                )
                resources.append(
                    AWSResource.from_tag_list(arn, description.get("Tags"))
                )

        return self._keep_owned(resources, "classic load balancers", True)

    def collect_load_balancers_v2(self, ctx: GCContext) -> list[AWSResource]:
        """Application and network load balancers owned by the cluster."""
        arns = self._list_all(
            ctx,
            self.clients.elbv2,
            "describe_load_balancers",
            "LoadBalancers",
            "LoadBalancerArn",
            "elbv2:DescribeLoadBalancers",
        )
        resources = self._describe_elbv2_tags(ctx, arns)
        return self._keep_owned(resources, "v2 load balancers", True)

    def collect_target_groups(self, ctx: GCContext) -> list[AWSResource]:
        arns = self._list_all(
            ctx,
            self.clients.elbv2,
            "describe_target_groups",
            "TargetGroups",
            "TargetGroupArn",
            "elbv2:DescribeTargetGroups",
        )
        resources = self._describe_elbv2_tags(ctx, arns)
        return self._keep_owned(resources, "target groups", True)

    def collect_security_groups(self, ctx: GCContext) -> list[AWSResource]:
        """Security groups owned by the cluster.

        Security groups do not carry the service-name tag, so only ownership
        and the EKS exclusion apply.
        """
        group_ids = self._list_all(
            ctx,
            self.clients.ec2,
            "describe_security_groups",
            "SecurityGroups",
            "GroupId",
            "ec2:DescribeSecurityGroups",
        )
        if not group_ids:
            return []

        resources = []
        for chunk in chunk_resources(group_ids):
            tags_by_id: dict[str, list[dict[str, str]]] = {}
            for tag in self._describe_ec2_tags(ctx, chunk):
                tags_by_id.setdefault(tag["ResourceId"], []).append(
                    {"Key": tag["Key"], "Value": tag["Value"]}
                )
            for group_id in chunk:
                arn = compose_arn(EC2_SERVICE, f"{SECURITY_GROUP_RESOURCE}/{group_id}")
                resources.append(
                    AWSResource.from_tag_list(arn, tags_by_id.get(group_id))
                )

        return self._keep_owned(resources, "security groups", False)

    def default_collectors(self) -> list[Callable[[GCContext], list[AWSResource]]]:
        return [
            self.collect_classic_load_balancers,
            self.collect_load_balancers_v2,
            self.collect_target_groups,
            self.collect_security_groups,
        ]

    def _describe_elbv2_tags(
        self, ctx: GCContext, arns: list[str]
    ) -> list[AWSResource]:
        resources = []
        for chunk in chunk_resources(arns):
            output = self._call(
                ctx,
                "elbv2:DescribeTags",
                self.clients.elbv2.describe_tags,
                ResourceArns=chunk,
            )
            for description in output.get("TagDescriptions", []):
                resources.append(
                    AWSResource.from_tag_list(
                        description["ResourceArn"], description.get("Tags")
                    )
                )
        return resources

    def _describe_ec2_tags(
        self, ctx: GCContext, resource_ids: list[str]
    ) -> list[dict[str, str]]:
        """All tags of one batch of EC2 resources, following every page."""
        ctx.check("ec2:DescribeTags")
        tags: list[dict[str, str]] = []
        try:
            paginator = self.clients.ec2.get_paginator("describe_tags")
            for page in paginator.paginate(
                Filters=[{"Name": "resource-id", "Values": resource_ids}]
            ):
                tags.extend(page.get("Tags", []))
                ctx.check("ec2:DescribeTags")
        except (ClientError, BotoCoreError) as e:
            raise DiscoveryError("ec2:DescribeTags", e) from e
        return tags

    def _keep_owned(
        self,
        resources: list[AWSResource],
        label: str,
        require_service_origin: bool,
    ) -> list[AWSResource]:
        owned = [
            resource
            for resource in resources
            if is_collectable(resource, self.cluster_name, require_service_origin)
        ]
        logger.info(
            f"Collected {len(owned)} of {len(resources)} {label}",
            extra={"cluster_name": self.cluster_name},
        )
        return owned

    @staticmethod
    def _list_all(
        ctx: GCContext,
        client: Any,
        operation: str,
        result_key: str,
        id_key: str,
        label: str,
    ) -> list[str]:
        """Walk every page of a describe call and return the ids in order."""
        ctx.check(label)
        ids: list[str] = []
        try:
            for page in client.get_paginator(operation).paginate():
                ids.extend(item[id_key] for item in page.get(result_key, []))
                ctx.check(label)
        except (ClientError, BotoCoreError) as e:
            raise DiscoveryError(label, e) from e
        return ids

    @staticmethod
    def _call(ctx: GCContext, label: str, method: Callable[..., Any], **kwargs):
        ctx.check(label)
        try:
            return method(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise DiscoveryError(label, e) from e
