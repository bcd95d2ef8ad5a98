"""AWS clients used by the garbage collector."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

import boto3


@dataclass(frozen=True)
class AWSClients:
    """The four service clients one garbage collection pass talks to."""

    elb: Any
    elbv2: Any
    ec2: Any
    tagging: Any

    @classmethod
    def for_region(cls, region: str) -> AWSClients:
        return cls(
            elb=boto3.client("elb", region_name=region),
            elbv2=boto3.client("elbv2", region_name=region),
            ec2=boto3.client("ec2", region_name=region),
            tagging=boto3.client("resourcegroupstaggingapi", region_name=region),
        )
