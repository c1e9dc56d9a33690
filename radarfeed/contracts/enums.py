"""Enumerations shared across radarfeed contracts."""

from enum import Enum


class SelectorMode(str, Enum):
    """How a load balancer selection was resolved."""
    HOSTNAME = "hostname"
    INDEX = "index"
    LATENCY = "latency"
    RANDOM = "random"
