"""
Infrastructure initialization and bootstrap.

Singleton pattern for creating the gateway's backends from configuration.
"""

from typing import Optional

from gateway.handler import InboundMessageHandler

from .config import InfraConfig, get_config


class GatewayBootstrap:
    """
    Bootstrap the gateway based on configuration.

    Singleton pattern - single instance per process.
    """

    _instance: Optional["GatewayBootstrap"] = None

    def __init__(self, config: Optional[InfraConfig] = None):
        """Initialize bootstrap with configuration."""
        self.config = config or get_config()
        self.handler = self.config.create_handler()

    @classmethod
    def get_instance(cls, config: Optional[InfraConfig] = None) -> "GatewayBootstrap":
        """
        Get singleton instance.

        Args:
            config: Optional custom configuration (only used first time)

        Returns:
            Singleton GatewayBootstrap instance
        """
        if cls._instance is None:
            cls._instance = cls(config)
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset singleton (for testing)."""
        cls._instance = None

    def get_handler(self) -> InboundMessageHandler:
        """Get the inbound message handler."""
        return self.handler

    def __repr__(self) -> str:
        """String representation showing configured backends."""
        return (
            f"GatewayBootstrap(oracle={self.config.oracle_backend}, "
            f"incidents={self.config.incident_store_backend}"
            f"{'+serialized' if self.config.incident_store_serialized else ''}, "
            f"delivery={self.config.delivery_backend})"
        )


def bootstrap_gateway(config: Optional[InfraConfig] = None) -> GatewayBootstrap:
    """
    Bootstrap all gateway backends.

    Args:
        config: Optional custom configuration

    Returns:
        GatewayBootstrap instance with all backends initialized
    """
    return GatewayBootstrap.get_instance(config)
