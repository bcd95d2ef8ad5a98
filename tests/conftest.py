"""Pytest configuration and shared fixtures for cluster resource GC tests."""

from __future__ import annotations
import pytest
from typing import Any
from unittest.mock import Mock

from cluster_resource_gc.gc import AWSClients, GCContext
from cluster_resource_gc.models import AWSResource, ClusterInfo

CLUSTER_NAME = "demo"
REGION = "us-east-1"
ACCOUNT = "123456789012"


class ResourceBuilder:
    """Builder pattern for creating test AWS resources.

    Produces ``AWSResource`` objects with real-looking ARNs and the tag
    combinations the cloud-controller-manager puts on what it creates.
    """

    def __init__(self):
        self._service = "elasticloadbalancing"
        self._resource = "loadbalancer/test-lb"
        self._tags: dict[str, str] = {}

    def classic_load_balancer(self, name: str) -> ResourceBuilder:
        """Classic ELB: ``loadbalancer/<name>``."""
        self._service = "elasticloadbalancing"
        self._resource = f"loadbalancer/{name}"
        return self

    def application_load_balancer(self, name: str) -> ResourceBuilder:
        self._service = "elasticloadbalancing"
        self._resource = f"loadbalancer/app/{name}/50dc6c495c0c9188"
        return self

    def network_load_balancer(self, name: str) -> ResourceBuilder:
        self._service = "elasticloadbalancing"
        self._resource = f"loadbalancer/net/{name}/a1b2c3d4e5f6a7b8"
        return self

    def target_group(self, name: str) -> ResourceBuilder:
        self._service = "elasticloadbalancing"
        self._resource = f"targetgroup/{name}/73e2d6bc24d8a067"
        return self

    def security_group(self, group_id: str) -> ResourceBuilder:
        self._service = "ec2"
        self._resource = f"security-group/{group_id}"
        return self

    def with_arn_parts(self, service: str, resource: str) -> ResourceBuilder:
        self._service = service
        self._resource = resource
        return self

    def owned_by(self, cluster_name: str = CLUSTER_NAME) -> ResourceBuilder:
        """Add ``kubernetes.io/cluster/<name>=owned``."""
        self._tags[f"kubernetes.io/cluster/{cluster_name}"] = "owned"
        return self

    def for_service(self, service_name: str = "default/svc1") -> ResourceBuilder:
        """Add the ``kubernetes.io/service-name`` tag."""
        self._tags["kubernetes.io/service-name"] = service_name
        return self

    def eks_managed(self, cluster_name: str = CLUSTER_NAME) -> ResourceBuilder:
        self._tags["aws:eks:cluster-name"] = cluster_name
        return self

    def with_tag(self, key: str, value: str) -> ResourceBuilder:
        self._tags[key] = value
        return self

    @property
    def arn(self) -> str:
        return f"arn:aws:{self._service}:{REGION}:{ACCOUNT}:{self._resource}"

    def tag_list(self) -> list[dict[str, str]]:
        """Tags in the AWS ``[{"Key": ..., "Value": ...}]`` shape."""
        return [{"Key": k, "Value": v} for k, v in self._tags.items()]

    def tag_mapping(self) -> dict[str, Any]:
        """Entry as returned in ``ResourceTagMappingList`` by the tagging API."""
        return {"ResourceARN": self.arn, "Tags": self.tag_list()}

    def build(self) -> AWSResource:
        return AWSResource.from_tag_list(self.arn, self.tag_list())


def make_paginated_client(pages: dict[str, list[dict[str, Any]]] | None = None) -> Mock:
    """Mock boto3 client whose paginators return the given pages per operation."""
    pages = pages or {}
    client = Mock()

    def get_paginator(operation_name):
        paginator = Mock()
        paginator.paginate.return_value = pages.get(operation_name, [{}])
        return paginator

    client.get_paginator.side_effect = get_paginator
    return client


# Shared fixtures


@pytest.fixture
def resource_builder():
    """Fixture that returns a new ResourceBuilder."""
    return ResourceBuilder()


@pytest.fixture
def new_resource():
    """Factory fixture, for tests that need several resources."""
    return ResourceBuilder


@pytest.fixture
def cluster():
    return ClusterInfo(name=CLUSTER_NAME, region=REGION)


@pytest.fixture
def ctx():
    return GCContext()


@pytest.fixture
def mock_clients():
    """AWSClients with every client mocked and empty listings."""
    return AWSClients(
        elb=make_paginated_client(),
        elbv2=make_paginated_client(),
        ec2=make_paginated_client(),
        tagging=make_paginated_client(),
    )


@pytest.fixture
def tagging_client_returning():
    """Factory for a tagging client whose get_resources pages hold the given mappings."""

    def _create(*pages: list[dict[str, Any]]) -> Mock:
        return make_paginated_client(
            {
                "get_resources": [
                    {"ResourceTagMappingList": mappings} for mappings in pages
                ]
                or [{"ResourceTagMappingList": []}]
            }
        )

    return _create


@pytest.fixture
def paginated_client():
    """Factory fixture for mock clients with paginated listings."""
    return make_paginated_client


@pytest.fixture
def calls_made():
    """Helper returning every call made on any of the clients, paginators included."""

    def _calls(clients: AWSClients) -> list:
        calls = []
        for client in (clients.elb, clients.elbv2, clients.ec2, clients.tagging):
            calls.extend(client.mock_calls)
        return calls

    return _calls
