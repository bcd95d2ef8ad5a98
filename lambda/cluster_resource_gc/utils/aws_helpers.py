"""AWS helper functions."""

from __future__ import annotations
from typing import Sequence

from botocore.exceptions import ClientError

from ..models.config import (
    FAKE_ACCOUNT,
    FAKE_PARTITION,
    FAKE_REGION,
    MAX_DESCRIBE_TAGS_REQUEST,
    NOT_FOUND_ERROR_CODES,
)

# Boolean spellings accepted in Kubernetes annotation values
_TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def chunk_resources(
    names: Sequence[str], size: int = MAX_DESCRIBE_TAGS_REQUEST
) -> list[list[str]]:
    """
    Split identifiers into DescribeTags-sized batches.

    Order is preserved and only the last chunk may be shorter than ``size``.
    An empty input gives no chunks, so callers issue no request at all.
    """
    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    return [list(names[i : i + size]) for i in range(0, len(names), size)]


def compose_arn(service: str, resource: str) -> str:
    """Compose an ARN with the real service and resource but fake partition, region and account.

    Only the service and resource path take part in matching, so the other
    components do not need to be looked up.
    """
    return f"arn:{FAKE_PARTITION}:{service}:{FAKE_REGION}:{FAKE_ACCOUNT}:{resource}"


def get_error_code(error: ClientError) -> str:
    """Extract the AWS error code from a ClientError."""
    return error.response.get("Error", {}).get("Code", "")


def is_not_found_error(error: ClientError) -> bool:
    """True when a delete failed only because the resource is already gone."""
    return get_error_code(error) in NOT_FOUND_ERROR_CODES


def parse_bool(value: str) -> bool:
    """Parse a boolean annotation value.

    Raises:
        ValueError: if the value is not a recognised boolean spelling
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"invalid boolean value {value!r}")
