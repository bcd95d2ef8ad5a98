"""Main Lambda handler for cluster resource garbage collection."""

from __future__ import annotations
import json
import time
from typing import Any

from .exceptions import ConfigurationError, GarbageCollectionError
from .gc import GCContext, new_service
from .models import ClusterInfo
from .models.config import DRY_RUN, GC_STRATEGY, MIN_REMAINING_TIME_MS
from .utils import get_logger

logger = get_logger()


def parse_event(event: dict[str, Any]) -> ClusterInfo:
    """Build the cluster description from the invocation event."""
    missing = [key for key in ("cluster_name", "region") if not event.get(key)]
    if missing:
        raise ConfigurationError(f"event is missing required fields: {missing}")

    annotations = event.get("annotations") or {}
    if not isinstance(annotations, dict):
        raise ConfigurationError("event field 'annotations' must be an object")

    return ClusterInfo(
        name=event["cluster_name"],
        region=event["region"],
        annotations={str(k): str(v) for k, v in annotations.items()},
    )


def lambda_handler(event: dict[str, Any], context: Any) -> dict[str, Any]:
    """
    Garbage collect the load balancer resources of one deleted cluster.

    Expected event:
        {"cluster_name": "demo", "region": "us-east-1",
         "annotations": {...}, "strategy": "tag-search"}

    Any failure is logged and re-raised so the invocation fails and the
    caller retries the whole pass.
    """
    start_time = time.time()

    try:
        cluster = parse_event(event)
        strategy = event.get("strategy") or GC_STRATEGY

        service = new_service(cluster, strategy=strategy, dry_run=DRY_RUN)
        ctx = GCContext(lambda_context=context, min_remaining_ms=MIN_REMAINING_TIME_MS)
        gc_enabled = service.reconcile_delete(ctx)

        logger.info(
            "Garbage collection complete",
            extra={
                "cluster_name": cluster.name,
                "region": cluster.region,
                "gc_enabled": gc_enabled,
                "dry_run": DRY_RUN,
                "duration_seconds": round(time.time() - start_time, 2),
            },
        )

        return {
            "statusCode": 200,
            "body": json.dumps(
                {
                    "cluster_name": cluster.name,
                    "region": cluster.region,
                    "strategy": service.strategy.name,
                    "dry_run": DRY_RUN,
                    "gc_enabled": gc_enabled,
                }
            ),
        }

    except GarbageCollectionError as e:
        logger.error(
            f"Garbage collection failed: {e}",
            extra={"error": e.to_dict()},
        )
        raise
    except Exception as e:
        logger.error(f"Lambda execution failed: {e}")
        raise
