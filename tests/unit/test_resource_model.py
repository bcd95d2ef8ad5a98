"""Unit tests for the resource model and ARN parsing."""

from __future__ import annotations
import pytest

from cluster_resource_gc.exceptions import DiscoveryError, InvalidArnError
from cluster_resource_gc.models import AWSResource, ResourceArn


@pytest.mark.unit
@pytest.mark.gc
class TestResourceArn:
    """Test ARN parsing and rendering."""

    def test_parses_all_components(self):
        arn = ResourceArn.parse(
            "arn:aws:elasticloadbalancing:us-east-1:123456789012:loadbalancer/app/web/50dc6c495c0c9188"
        )

        assert arn.partition == "aws"
        assert arn.service == "elasticloadbalancing"
        assert arn.region == "us-east-1"
        assert arn.account == "123456789012"
        assert arn.resource == "loadbalancer/app/web/50dc6c495c0c9188"
        assert arn.resource_type == "loadbalancer"

    def test_round_trips_to_string(self):
        raw = "arn:aws-cn:ec2:cn-north-1:123456789012:security-group/sg-0abc"

        assert str(ResourceArn.parse(raw)) == raw

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "not-an-arn",
            "arn:aws:ec2",
            "urn:aws:ec2:us-east-1:123456789012:security-group/sg-1",
            "arn:aws:ec2:us-east-1:123456789012:",
            "arn::ec2:us-east-1:123456789012:security-group/sg-1",
        ],
    )
    def test_garbled_arn_is_a_discovery_error(self, raw):
        """
        GIVEN an identifier that is not a well-formed ARN
        WHEN it is parsed
        THEN InvalidArnError (a DiscoveryError) should be raised, never skipped
        """
        with pytest.raises(InvalidArnError) as exc_info:
            ResourceArn.parse(raw)

        assert isinstance(exc_info.value, DiscoveryError)
        assert exc_info.value.arn == raw


@pytest.mark.unit
@pytest.mark.gc
class TestAWSResource:
    """Test AWSResource construction from API responses."""

    def test_builds_from_tag_list(self):
        resource = AWSResource.from_tag_list(
            "arn:aws:ec2:us-east-1:123456789012:security-group/sg-1",
            [
                {"Key": "kubernetes.io/cluster/demo", "Value": "owned"},
                {"Key": "Name", "Value": "k8s-elb-a1b2"},
            ],
        )

        assert resource.arn.service == "ec2"
        assert resource.tags == {
            "kubernetes.io/cluster/demo": "owned",
            "Name": "k8s-elb-a1b2",
        }

    def test_missing_tags_give_empty_mapping(self):
        resource = AWSResource.from_tag_list(
            "arn:aws:ec2:us-east-1:123456789012:security-group/sg-1", None
        )

        assert dict(resource.tags) == {}

    def test_tags_are_read_only(self, resource_builder):
        resource = resource_builder.owned_by().build()

        with pytest.raises(TypeError):
            resource.tags["new"] = "value"

    def test_tags_are_copied_from_source(self):
        source = {"Name": "lb"}
        resource = AWSResource(
            arn=ResourceArn.parse(
                "arn:aws:elasticloadbalancing:us-east-1:1:loadbalancer/lb"
            ),
            tags=source,
        )

        source["Name"] = "changed"

        assert resource.tags["Name"] == "lb"
