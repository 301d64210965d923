"""
Config Service Interface Module.

Defines the interface for centralized configuration management.
The config service loads and provides access to all QR reader settings.

Follows:
- SRP: Only handles configuration management
- DIP: Other components depend on this abstraction
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IConfigService(ABC):
    """
    Interface for configuration management.

    Supports dot notation for nested config access.
    """

    @abstractmethod
    def loadConfig(self, configPath: str) -> bool:
        """
        Load configuration from a JSON file.

        Args:
            configPath: Path to the configuration file.

        Returns:
            bool: True if loaded successfully, False otherwise.
        """
        pass

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.

        Supports dot notation for nested access:
        - "logging" -> config["logging"]
        - "qr_detection.backend" -> config["qr_detection"]["backend"]

        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.

        Returns:
            Configuration value or default.
        """
        pass

    @abstractmethod
    def getServiceConfig(self, serviceName: str) -> Dict[str, Any]:
        """
        Get all configuration for one section.

        Args:
            serviceName: Section name (e.g., "qr_detection", "enhancement").

        Returns:
            Dictionary with section configuration (empty if missing).
        """
        pass

    @abstractmethod
    def getAllConfig(self) -> Dict[str, Any]:
        """
        Get the complete configuration dictionary.

        Returns:
            Dict: Complete configuration.
        """
        pass
