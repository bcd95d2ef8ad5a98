"""CDK Stack for the cluster resource garbage collection Lambda."""

from aws_cdk import (
    Stack,
    Duration,
    aws_lambda as lambda_,
    aws_iam as iam,
    aws_logs as logs,
    CfnParameter,
    CfnOutput,
    Tags
)
from constructs import Construct


class ClusterGCStack(Stack):
    """
    CDK Stack for garbage collecting load balancer resources of deleted clusters.

    The function is invoked by the cluster deletion path with the cluster name
    and region, and removes:
    - Classic ELBs, ALBs and NLBs created for Services of type LoadBalancer
    - Their target groups
    - Their security groups
    """

    def __init__(self, scope: Construct, construct_id: str, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # Parameters
        dry_run_param = CfnParameter(
            self, "DryRunMode",
            type="String",
            default="false",
            allowed_values=["true", "false"],
            description="Set to 'true' to discover and log resources without deleting them. A dry run still reports success, so only use it for inspection."
        )

        strategy_param = CfnParameter(
            self, "GCStrategy",
            type="String",
            default="tag-search",
            allowed_values=["tag-search", "enumeration"],
            description="[DISCOVERY] 'tag-search' uses one Resource Groups Tagging API query. 'enumeration' lists each service and looks tags up in batches of 20, for accounts where the tagging API is incomplete."
        )

        min_remaining_param = CfnParameter(
            self, "MinRemainingTimeMs",
            type="Number",
            default=10000,
            min_value=1000,
            max_value=60000,
            description="[SAFETY] Abort the pass before the next AWS call once less than this much Lambda time is left. The caller retries the whole pass."
        )

        # Logging
        log_retention_param = CfnParameter(
            self, "LogRetentionDays",
            type="Number",
            default=30,
            description="[LOGGING] CloudWatch log retention period in days. Valid options: 1, 3, 7, 14, 30, 60, 90, 120, 180."
        )

        log_level_param = CfnParameter(
            self, "LogLevel",
            type="String",
            default="INFO",
            allowed_values=["DEBUG", "INFO", "WARNING", "ERROR"],
            description="[LOGGING] Log verbosity. DEBUG includes every skipped resource and why."
        )

        # IAM Role for Lambda
        lambda_role = iam.Role(
            self, "ClusterGCRole",
            role_name="RoleClusterResourceGC",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name(
                    "service-role/AWSLambdaBasicExecutionRole"
                )
            ]
        )

        # Discovery
        lambda_role.add_to_policy(iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=[
                "tag:GetResources",
                "elasticloadbalancing:DescribeLoadBalancers",
                "elasticloadbalancing:DescribeTargetGroups",
                "elasticloadbalancing:DescribeTags",
                "ec2:DescribeSecurityGroups",
                "ec2:DescribeTags",
            ],
            resources=["*"]
        ))

        # Deletion
        lambda_role.add_to_policy(iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=[
                "elasticloadbalancing:DeleteLoadBalancer",
                "elasticloadbalancing:DeleteTargetGroup",
                "ec2:DeleteSecurityGroup",
            ],
            resources=["*"]
        ))

        log_retention_mapping = {
            1: logs.RetentionDays.ONE_DAY,
            3: logs.RetentionDays.THREE_DAYS,
            7: logs.RetentionDays.ONE_WEEK,
            14: logs.RetentionDays.TWO_WEEKS,
            30: logs.RetentionDays.ONE_MONTH,
            60: logs.RetentionDays.TWO_MONTHS,
            90: logs.RetentionDays.THREE_MONTHS,
            120: logs.RetentionDays.FOUR_MONTHS,
            180: logs.RetentionDays.SIX_MONTHS,
        }

        gc_lambda = lambda_.Function(
            self, "ClusterGCLambda",
            function_name="LambdaClusterResourceGC",
            description="Deletes load balancers, target groups and security groups left behind by deleted Kubernetes clusters",
            runtime=lambda_.Runtime.PYTHON_3_13,
            architecture=lambda_.Architecture.ARM_64,
            handler="cluster_resource_gc.handler.lambda_handler",
            code=lambda_.Code.from_asset("lambda"),
            role=lambda_role,
            timeout=Duration.seconds(300),
            memory_size=256,
            log_retention=log_retention_mapping.get(
                log_retention_param.value_as_number,
                logs.RetentionDays.ONE_MONTH
            ),
            environment={
                "DRY_RUN": dry_run_param.value_as_string,
                "GC_STRATEGY": strategy_param.value_as_string,
                "MIN_REMAINING_TIME_MS": min_remaining_param.value_as_string,
                "LOG_LEVEL": log_level_param.value_as_string
            }
        )

        Tags.of(gc_lambda).add("iit-billing-tag", "cluster-resource-gc")

        # Outputs
        CfnOutput(
            self, "LambdaFunctionName",
            description="Name of the Lambda function",
            value=gc_lambda.function_name,
            export_name="ClusterResourceGCLambdaName"
        )

        CfnOutput(
            self, "LambdaFunctionArn",
            description="ARN of the Lambda function",
            value=gc_lambda.function_arn,
            export_name="ClusterResourceGCLambdaArn"
        )

        CfnOutput(
            self, "DryRunModeOutput",
            description="Current dry-run mode setting",
            value=dry_run_param.value_as_string
        )
