"""Exception hierarchy for cluster resource garbage collection.

    GarbageCollectionError
    ├── ConfigurationError      bad opt-out annotation, unknown strategy, bad event
    ├── DiscoveryError          tag search / listing / tag lookup failed
    │   └── InvalidArnError     an API returned an identifier we cannot parse
    ├── DeletionError           a delete call failed for a reason other than "not found"
    └── CleanupCancelledError   the run was cancelled before an API call

Every error aborts the current sweep. Callers re-run the whole sweep later.
"""

from __future__ import annotations
from typing import Any


class GarbageCollectionError(Exception):
    """Base class for all garbage collection failures."""

    def __init__(
        self,
        message: str,
        cause: BaseException | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    @property
    def retryable(self) -> bool:
        """True when the next reconciliation pass is expected to succeed."""
        if self.details.get("retryable"):
            return True
        return bool(getattr(self.cause, "retryable", False))

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
            "retryable": self.retryable,
        }


class ConfigurationError(GarbageCollectionError):
    """Invalid configuration. Raised before any AWS call is made."""


class DiscoveryError(GarbageCollectionError):
    """Collecting candidate resources failed."""

    def __init__(
        self,
        operation: str,
        cause: BaseException | None = None,
        resource: str | None = None,
    ):
        message = f"{operation} failed"
        if resource:
            message = f"{operation} failed for {resource}"
        super().__init__(message, cause, {"operation": operation})
        self.operation = operation
        self.resource = resource
        if resource:
            self.details["resource"] = resource


class InvalidArnError(DiscoveryError):
    """A resource identifier returned by AWS could not be parsed."""

    def __init__(self, arn: str, cause: BaseException | None = None):
        super().__init__("parsing resource arn", cause, resource=arn)
        self.arn = arn


class DeletionError(GarbageCollectionError):
    """Deleting a resource failed."""

    def __init__(
        self,
        category: str,
        resource: str,
        cause: BaseException | None = None,
        retryable: bool = False,
    ):
        super().__init__(
            f"deleting {category} {resource}",
            cause,
            {"category": category, "resource": resource, "retryable": retryable},
        )
        self.category = category
        self.resource = resource


class CleanupCancelledError(GarbageCollectionError):
    """The run was cancelled before an AWS call could be issued."""

    def __init__(self, operation: str, reason: str = "cancelled"):
        super().__init__(
            f"{operation} aborted: {reason}",
            details={"operation": operation, "reason": reason},
        )
        self.operation = operation
