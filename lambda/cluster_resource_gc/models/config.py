"""Configuration from environment variables."""

import os

# Configuration from environment variables
DRY_RUN = os.environ.get("DRY_RUN", "false").lower() == "true"

# Which discovery strategy to use: "tag-search" or "enumeration"
GC_STRATEGY = os.environ.get("GC_STRATEGY", "tag-search").lower()

# Treat the run as cancelled once the Lambda has less time left than this
MIN_REMAINING_TIME_MS = int(os.environ.get("MIN_REMAINING_TIME_MS", "10000"))

# Logging configuration
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

STRATEGY_TAG_SEARCH = "tag-search"
STRATEGY_ENUMERATION = "enumeration"
SUPPORTED_STRATEGIES = frozenset({STRATEGY_TAG_SEARCH, STRATEGY_ENUMERATION})

# Cluster annotation that opts a cluster out of garbage collection
EXTERNAL_RESOURCE_GC_ANNOTATION = "aws.cluster.x-k8s.io/external-resource-gc"

# Well-known tags
CLUSTER_TAG_PREFIX = "kubernetes.io/cluster/"
RESOURCE_LIFECYCLE_OWNED = "owned"
SERVICE_NAME_TAG = "kubernetes.io/service-name"
EKS_CLUSTER_NAME_TAG = "aws:eks:cluster-name"

# Service names as they appear in ARNs
ELB_SERVICE = "elasticloadbalancing"
EC2_SERVICE = "ec2"

# Resource types (first ARN resource path segment)
LOAD_BALANCER_RESOURCE = "loadbalancer"
TARGET_GROUP_RESOURCE = "targetgroup"
SECURITY_GROUP_RESOURCE = "security-group"

# Maximum number of resources per DescribeTags request
# https://docs.aws.amazon.com/elasticloadbalancing/latest/APIReference/API_DescribeTags.html
MAX_DESCRIBE_TAGS_REQUEST = 20

# ARN components used when an API only hands back a name or id
FAKE_PARTITION = "aws"
FAKE_REGION = "fake-region"
FAKE_ACCOUNT = "fake-account"

# Error codes meaning the resource is already gone
NOT_FOUND_ERROR_CODES = frozenset(
    {
        "LoadBalancerNotFound",
        "TargetGroupNotFound",
        "InvalidGroup.NotFound",
        "InvalidGroupId.NotFound",
    }
)

