"""Cluster being deleted."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class ClusterInfo:
    """The workload cluster whose leftover resources are collected.

    ``annotations`` are the annotations on the cluster's infrastructure object.
    """

    name: str
    region: str
    annotations: Mapping[str, str] = field(default_factory=dict)
