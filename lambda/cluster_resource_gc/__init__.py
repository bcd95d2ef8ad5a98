"""Garbage collection of AWS load balancer resources left by deleted Kubernetes clusters."""

__version__ = "0.1.0"
