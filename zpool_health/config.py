"""
zpool-health Configuration Module

Centralizes environment variable loading for the plugin and the HTTP service.
Keys are read with the `ZPOOL_HEALTH_` prefix, e.g. `ZPOOL_HEALTH_TIMEOUT`.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml

from .zfs_operations.core.exceptions.validation_exceptions import ThresholdSpecError, ThresholdsFileError
from .zfs_operations.services.threshold_registry import ThresholdRegistry, ThresholdRegistryBuilder

logger = logging.getLogger(__name__)


@dataclass
class CheckConfig:
    """Pool selection, thresholds and command settings"""
    timeout: int = 15
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    warning: List[str] = field(default_factory=list)
    critical: List[str] = field(default_factory=list)
    thresholds_file: Optional[str] = None


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class ServerConfig:
    """HTTP service settings"""
    host: str = "127.0.0.1"
    port: int = 8000
    enable_docs: bool = True


def load_thresholds_file(path: str) -> dict:
    """
    Read a YAML thresholds file of the form:

        thresholds:
          "*":
            scrub: {warning: 40, critical: 80}
          tank:
            capacity: {warning: 85, critical: 95}
    """
    try:
        with open(Path(path).expanduser(), 'r') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ThresholdsFileError(path, str(e))
    if not isinstance(data, dict):
        raise ThresholdSpecError(path, "thresholds file must contain a mapping")
    thresholds = data.get('thresholds', {})
    if not isinstance(thresholds, dict):
        raise ThresholdSpecError(path, "'thresholds' must be a mapping of pools")
    return thresholds


class MonitorConfig:
    """
    zpool-health settings loaded from environment variables.
    """

    ENV_PREFIX = "ZPOOL_HEALTH_"

    def __init__(self):
        self.check = CheckConfig()
        self.logging = LoggingConfig()
        self.server = ServerConfig()

        self._load_environment_variables()
        self._validate_configuration()

    def _load_environment_variables(self):
        # ==== CHECK CONFIG ====
        self.check.timeout = self._get_int("TIMEOUT", self.check.timeout)
        self.check.include = self._get_list("INCLUDE", self.check.include)
        self.check.exclude = self._get_list("EXCLUDE", self.check.exclude)
        self.check.warning = self._get_list("WARNING", self.check.warning)
        self.check.critical = self._get_list("CRITICAL", self.check.critical)
        self.check.thresholds_file = self._get_string("THRESHOLDS_FILE", "") or None

        # ==== LOGGING CONFIG ====
        self.logging.level = self._get_string("LOG_LEVEL", self.logging.level).upper()

        # ==== SERVER CONFIG ====
        self.server.host = self._get_string("HOST", self.server.host)
        self.server.port = self._get_int("PORT", self.server.port)
        self.server.enable_docs = self._get_bool("ENABLE_DOCS", self.server.enable_docs)

    def _get_string(self, key: str, default: str) -> str:
        """Get string value from environment"""
        value = os.getenv(f"{self.ENV_PREFIX}{key}")
        return value if value is not None else default

    def _get_int(self, key: str, default: int) -> int:
        value = self._get_string(key, str(default))
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid integer value for {key}: {value}, using default: {default}")
            return default

    def _get_bool(self, key: str, default: bool) -> bool:
        value = self._get_string(key, str(default)).lower()
        return value in ("true", "1", "yes", "on")

    def _get_list(self, key: str, default: List[str]) -> List[str]:
        value = self._get_string(key, "")
        if not value:
            return list(default)
        return [item.strip() for item in value.split(",") if item.strip()]

    def _validate_configuration(self):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.logging.level not in valid_levels:
            logger.warning(f"Invalid log level: {self.logging.level}, using WARNING")
            self.logging.level = "WARNING"

        if self.check.timeout <= 0:
            logger.warning(f"Invalid timeout: {self.check.timeout}, using default: 15")
            self.check.timeout = 15

        if not (1 <= self.server.port <= 65535):
            logger.warning(f"Invalid port: {self.server.port}, using default: 8000")
            self.server.port = 8000

    def registry_builder(self) -> ThresholdRegistryBuilder:
        """Builder seeded with the thresholds file, then WARNING/CRITICAL overrides."""
        builder = ThresholdRegistryBuilder()
        if self.check.thresholds_file:
            builder.with_mapping(load_thresholds_file(self.check.thresholds_file))
        return builder.with_warnings(self.check.warning).with_criticals(self.check.critical)

    def build_registry(self) -> ThresholdRegistry:
        return self.registry_builder().build()

    def get_summary(self) -> dict:
        return {
            "check": {
                "timeout": self.check.timeout,
                "include": self.check.include,
                "exclude": self.check.exclude,
                "warning": self.check.warning,
                "critical": self.check.critical,
                "thresholds_file": self.check.thresholds_file,
            },
            "logging": {"level": self.logging.level},
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "enable_docs": self.server.enable_docs,
            },
        }


config = MonitorConfig()


def get_config() -> MonitorConfig:
    """Get the global configuration instance"""
    return config


def reload_config() -> MonitorConfig:
    """Re-read the environment; used by tests and the plugin entry point"""
    global config
    config = MonitorConfig()
    return config
