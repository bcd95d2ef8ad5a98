#!/usr/bin/env python3
"""CDK app for the cluster resource garbage collection Lambda."""

import os
import aws_cdk as cdk
from stacks.cluster_gc_stack import ClusterGCStack

app = cdk.App()

ClusterGCStack(
    app,
    "ClusterResourceGCStack",
    description="Garbage collection of ELB, target group and security group leftovers of deleted clusters",
    env=cdk.Environment(
        account=os.getenv('CDK_DEFAULT_ACCOUNT'),
        region=os.getenv('CDK_DEFAULT_REGION', 'us-east-2')
    ),
    tags={
        "Project": "PlatformEngineering",
        "ManagedBy": "CDK",
        "iit-billing-tag": "cluster-resource-gc"
    }
)

app.synth()
