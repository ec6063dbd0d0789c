"""
Infrastructure module exports.

Configuration and bootstrap for all gateway backends.
"""

from .config import (
    InfraConfig,
    get_config,
    OracleBackendType,
    IncidentStoreBackendType,
    DeliveryBackendType,
)
from .bootstrap import GatewayBootstrap, bootstrap_gateway

__all__ = [
    "InfraConfig",
    "get_config",
    "OracleBackendType",
    "IncidentStoreBackendType",
    "DeliveryBackendType",
    "GatewayBootstrap",
    "bootstrap_gateway",
]
