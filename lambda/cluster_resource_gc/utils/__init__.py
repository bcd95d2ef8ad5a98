"""Utility helpers shared across the garbage collection engine."""

from .logging_config import get_logger
from .aws_helpers import (
    chunk_resources,
    compose_arn,
    get_error_code,
    is_not_found_error,
    parse_bool,
)

__all__ = [
    "get_logger",
    "chunk_resources",
    "compose_arn",
    "get_error_code",
    "is_not_found_error",
    "parse_bool",
]
