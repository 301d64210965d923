"""
Config Service Implementation.

Centralized configuration management for the QR reader.
Loads configuration from application_config.json organized by section.
When no file is given, every getter falls back to its built-in default.

Follows:
- SRP: Only handles configuration management
- DIP: Provides configuration to other components via interface
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


from services.interfaces.config_service_interface import IConfigService


logger = logging.getLogger(__name__)


class ConfigService(IConfigService):
    """
    Implementation of IConfigService.

    Configuration is organized by section (app, qr_detection, enhancement,
    debug, logging).
    """

    def __init__(self, configPath: Optional[str] = "config/application_config.json"):
        """
        Initialize ConfigService.

        Args:
            configPath: Path to the configuration file, or None for defaults.

        Raises:
            RuntimeError: If a path is given and the file cannot be loaded.
        """
        self._config: Dict[str, Any] = {}
        self._configPath = Path(configPath) if configPath else None

        if configPath is None:
            logger.info("No configuration file given, using built-in defaults")
            return

        if not self.loadConfig(configPath):
            raise RuntimeError(f"Failed to load configuration from: {configPath}")

    def loadConfig(self, configPath: str) -> bool:
        """Load configuration from JSON file."""
        path = Path(configPath)
        if not path.exists():
            logger.error(f"Config file not found: {configPath}")
            return False

        try:
            with open(path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            return False
        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            return False

        if not isinstance(config, dict):
            logger.error(f"Config root must be an object: {configPath}")
            return False

        self._config = config
        logger.info(f"Configuration loaded from: {path.absolute()}")
        return True

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Generic Config Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key with dot notation support.

        Examples:
            get("qr_detection.backend") -> "opencv"
            get("enhancement.clipLimit") -> 2.0
        """
        value = self._config
        for part in key.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(part)
            if value is None:
                return default
        return value

    def getServiceConfig(self, serviceName: str) -> Dict[str, Any]:
        config = self._config.get(serviceName, {})
        return config if isinstance(config, dict) else {}

    def getAllConfig(self) -> Dict[str, Any]:
        return self._config.copy()

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # App Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getOutputDirectory(self) -> str:
        """Get directory for result reports and visualizations."""
        return self.get("app.outputDirectory", ".")

    def getBatchReportName(self) -> str:
        """Get base filename of the batch report."""
        return self.get("app.batchReportName", "qr_results")

    def isSaveVisualization(self) -> bool:
        """Check if annotated images are saved for successes."""
        return self.get("app.saveVisualization", True)

    def getCameraIndex(self) -> int:
        """Get default camera index for webcam input."""
        return self.get("app.cameraIndex", 0)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # QR Detection Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getQrBackend(self) -> str:
        """Get QR decoder backend ("opencv", "zxing" or "wechat")."""
        return self.get("qr_detection.backend", "opencv")

    def isPreprocessingEnabled(self) -> bool:
        """Check if the enhanced retry is enabled."""
        return self.get("qr_detection.preprocessingEnabled", True)

    def isMultipleQrEnabled(self) -> bool:
        """Get the reserved multi-symbol flag."""
        return self.get("qr_detection.multipleQrEnabled", False)

    def getZxingTryRotate(self) -> bool:
        return self.get("qr_detection.zxingTryRotate", True)

    def getZxingTryDownscale(self) -> bool:
        return self.get("qr_detection.zxingTryDownscale", True)

    def getWechatModelDir(self) -> str:
        return self.get("qr_detection.wechatModelDir", "models/wechat")

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Enhancement Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getClipLimit(self) -> float:
        """Get CLAHE clip limit."""
        return self.get("enhancement.clipLimit", 2.0)

    def getTileGridSize(self) -> Tuple[int, int]:
        """Get CLAHE tile grid size."""
        return tuple(self.get("enhancement.tileGridSize", [8, 8]))

    def getMorphKernelSize(self) -> int:
        """Get morphological closing kernel size."""
        return self.get("enhancement.morphKernelSize", 3)

    def getMinDimension(self) -> int:
        """Get shorter-side threshold below which images are upscaled."""
        return self.get("enhancement.minDimension", 300)

    def getTargetDimension(self) -> int:
        """Get shorter side after upscaling."""
        return self.get("enhancement.targetDimension", 600)

    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug & Logging Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

    def getDebugDirectory(self) -> str:
        """Get directory for debug_original/debug_enhanced images."""
        return self.get("debug.artifactDirectory", ".")

    def isDebugEnabled(self) -> bool:
        """Check if debug images are written on failure."""
        return self.get("debug.enabled", True)

    def getLogLevel(self) -> str:
        """Get log level name (DEBUG, INFO, WARNING, ERROR)."""
        return str(self.get("logging.level", "INFO")).upper()
