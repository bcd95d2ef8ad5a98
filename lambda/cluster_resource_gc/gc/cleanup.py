"""Deletion of collected resources, one category per operation."""

from __future__ import annotations
from typing import Any, Callable, Sequence

from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import DeletionError
from ..models import AWSResource
from ..models.config import (
    LOAD_BALANCER_RESOURCE,
    SECURITY_GROUP_RESOURCE,
    TARGET_GROUP_RESOURCE,
)
from ..utils import get_error_code, get_logger, is_not_found_error
from .clients import AWSClients
from .context import GCContext
from .matching import is_elb_resource_to_delete, is_security_group_to_delete

logger = get_logger()

_ALB_PREFIX = f"{LOAD_BALANCER_RESOURCE}/app/"
_NLB_PREFIX = f"{LOAD_BALANCER_RESOURCE}/net/"
_CLASSIC_PREFIX = f"{LOAD_BALANCER_RESOURCE}/"


def _is_classic_name(name: str) -> bool:
    """Classic ELB paths are ``loadbalancer/<name>`` with no further segments."""
    return bool(name) and "/" not in name


class ResourceCleaner:
    """
    Cleanup operations applied to the resources a strategy collected.

    Each operation re-checks the category of every resource, skips what is
    not its own, and stops at the first failed deletion. A delete answered
    with "not found" counts as done.
    """

    def __init__(self, clients: AWSClients, dry_run: bool = False):
        self.clients = clients
        self.dry_run = dry_run

    def default_cleanups(
        self,
    ) -> list[Callable[[GCContext, Sequence[AWSResource]], None]]:
        """Load balancers go first: target groups cannot be deleted while in use."""
        return [
            self.delete_load_balancers,
            self.delete_target_groups,
            self.delete_security_groups,
        ]

    def delete_load_balancers(
        self, ctx: GCContext, resources: Sequence[AWSResource]
    ) -> None:
        for resource in resources:
            if not is_elb_resource_to_delete(resource, LOAD_BALANCER_RESOURCE):
                logger.debug(
                    "Resource not a load balancer for deletion",
                    extra={"arn": str(resource.arn)},
                )
                continue

            path = resource.arn.resource
            arn = str(resource.arn)
            if path.startswith(_ALB_PREFIX):
                logger.info("Deleting ALB for Service", extra={"arn": arn})
                self._delete(
                    ctx,
                    "ALB",
                    arn,
                    self.clients.elbv2.delete_load_balancer,
                    LoadBalancerArn=arn,
                )
            elif path.startswith(_NLB_PREFIX):
                logger.info("Deleting NLB for Service", extra={"arn": arn})
                self._delete(
                    ctx,
                    "NLB",
                    arn,
                    self.clients.elbv2.delete_load_balancer,
                    LoadBalancerArn=arn,
                )
            elif _is_classic_name(path[len(_CLASSIC_PREFIX) :]):
                name = path[len(_CLASSIC_PREFIX) :]
                logger.info(
                    "Deleting classic ELB for Service",
                    extra={"arn": arn, "lb_name": name},
                )
                self._delete(
                    ctx,
                    "classic ELB",
                    name,
                    self.clients.elb.delete_load_balancer,
                    LoadBalancerName=name,
                )
            else:
                logger.debug(
                    "Unexpected elasticloadbalancing resource, ignoring",
                    extra={"arn": arn},
                )

        logger.info("Finished processing tagged resources for load balancers")

    def delete_target_groups(
        self, ctx: GCContext, resources: Sequence[AWSResource]
    ) -> None:
        for resource in resources:
            if not is_elb_resource_to_delete(resource, TARGET_GROUP_RESOURCE):
                logger.debug(
                    "Resource not a target group for deletion",
                    extra={"arn": str(resource.arn)},
                )
                continue

            arn = str(resource.arn)
            logger.info("Deleting target group for Service", extra={"arn": arn})
            self._delete(
                ctx,
                "target group",
                arn,
                self.clients.elbv2.delete_target_group,
                TargetGroupArn=arn,
            )

        logger.debug("Finished processing resources for target group deletion")

    def delete_security_groups(
        self, ctx: GCContext, resources: Sequence[AWSResource]
    ) -> None:
        for resource in resources:
            if not is_security_group_to_delete(resource):
                logger.debug(
                    "Resource not a security group for deletion",
                    extra={"arn": str(resource.arn)},
                )
                continue

            group_id = resource.arn.resource[len(SECURITY_GROUP_RESOURCE) + 1 :]
            logger.info(
                "Deleting security group",
                extra={"arn": str(resource.arn), "group_id": group_id},
            )
            self._delete(
                ctx,
                "security group",
                group_id,
                self.clients.ec2.delete_security_group,
                GroupId=group_id,
            )

        logger.debug("Finished processing resources for security group deletion")

    def _delete(
        self,
        ctx: GCContext,
        category: str,
        identifier: str,
        method: Callable[..., Any],
        **kwargs,
    ) -> None:
        ctx.check(f"delete {category} {identifier}")

        if self.dry_run:
            logger.info(f"[DRY-RUN] Would delete {category}: {identifier}")
            return

        try:
            method(**kwargs)
        except ClientError as e:
            if is_not_found_error(e):
                logger.info(
                    f"{category} {identifier} already deleted",
                    extra={"error_code": get_error_code(e)},
                )
                return
            retryable = get_error_code(e) == "DependencyViolation"
            if retryable:
                logger.info(
                    f"{category} {identifier} still has dependencies, "
                    "will retry on next reconciliation",
                )
            raise DeletionError(category, identifier, e, retryable=retryable) from e
        except BotoCoreError as e:
            raise DeletionError(category, identifier, e) from e

        logger.info(f"Deleted {category}: {identifier}")
