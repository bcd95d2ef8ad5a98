"""Logging configuration using AWS Lambda Powertools."""

from aws_lambda_powertools import Logger

from ..models.config import LOG_LEVEL

# Structured JSON logging with Lambda context injection when running in Lambda
logger = Logger(
    service="cluster-resource-gc",
    level=LOG_LEVEL,
)


def get_logger():
    """Get the configured logger instance.

    Returns the Powertools Logger shared by every module, so all garbage
    collection log lines carry the same service name and can be filtered
    together in CloudWatch Logs Insights.
    """
    return logger
