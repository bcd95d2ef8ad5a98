"""Data models for cluster resource garbage collection."""

from .cluster import ClusterInfo
from .resource import AWSResource, ResourceArn

__all__ = ["AWSResource", "ClusterInfo", "ResourceArn"]
