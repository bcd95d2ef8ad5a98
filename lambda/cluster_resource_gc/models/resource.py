"""Canonical representation of a discovered AWS resource."""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from botocore.utils import ArnParser

from ..exceptions import InvalidArnError

_arn_parser = ArnParser()


@dataclass(frozen=True)
class ResourceArn:
    """Parsed ARN. ``resource`` is the ``type/name`` path."""

    partition: str
    service: str
    region: str
    account: str
    resource: str

    @classmethod
    def parse(cls, arn: str) -> ResourceArn:
        """Parse an ARN string.

        Raises:
            InvalidArnError: if the string is not a well-formed ARN
        """
        if not isinstance(arn, str) or not arn.startswith("arn:"):
            raise InvalidArnError(str(arn), ValueError("missing arn: prefix"))
        try:
            parts = _arn_parser.parse_arn(arn)
        except (ValueError, TypeError, AttributeError) as e:
            raise InvalidArnError(str(arn), e) from e

        for required in ("partition", "service", "resource"):
            if not parts[required]:
                raise InvalidArnError(arn, ValueError(f"missing {required}"))

        return cls(
            partition=parts["partition"],
            service=parts["service"],
            region=parts["region"],
            account=parts["account"],
            resource=parts["resource"],
        )

    @property
    def resource_type(self) -> str:
        """First segment of the resource path, e.g. ``loadbalancer``."""
        return self.resource.split("/", 1)[0]

    def __str__(self) -> str:
        return (
            f"arn:{self.partition}:{self.service}:{self.region}:"
            f"{self.account}:{self.resource}"
        )


@dataclass(frozen=True)
class AWSResource:
    """A resource found during discovery: its identity plus the tags it carried."""

    arn: ResourceArn
    tags: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

    @classmethod
    def from_tag_list(
        cls, arn: str, tags: list[dict[str, str]] | None
    ) -> AWSResource:
        """Build from an ARN string and an AWS ``[{"Key": ..., "Value": ...}]`` tag list."""
        tag_map = {tag["Key"]: tag["Value"] for tag in tags} if tags else {}
        return cls(arn=ResourceArn.parse(arn), tags=tag_map)

    def __str__(self) -> str:
        return str(self.arn)
