"""
Configuration Management System for NavKit

Settings are merged with the precedence: environment → project → user →
system defaults. Defaults ship as YAML next to this package.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class OverlapPolicy(str, Enum):
    """What a coordinator does when asked to navigate while a session is pending."""
    REJECT = "reject"
    CANCEL_AND_REPLACE = "cancel_and_replace"


class NavigationConfig(BaseModel):
    """Navigation coordinator behaviour"""
    model_config = ConfigDict(extra='forbid')

    overlap_policy: OverlapPolicy = Field(default=OverlapPolicy.REJECT, description="Single-flight overlap policy")
    restore_stack_on_teardown: bool = Field(default=False, description="Pop the pushed screen when a session is torn down")


class BusConfig(BaseModel):
    """Result bus configuration"""
    model_config = ConfigDict(extra='forbid')

    idle_timeout: float = Field(default=60.0, ge=0.1, le=600.0, description="Max wait for pending handlers (seconds)")


class LoggingConfig(BaseModel):
    """Logging configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO", description="Root / file log level")
    console_level: str = Field(default="WARNING", description="Console log level")
    log_file: Optional[str] = Field(default=None, description="Rotating log file path")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024, description="Log file size before rotation")
    backup_count: int = Field(default=5, ge=0, le=50, description="Rotated log files to keep")


class DemoConfig(BaseModel):
    """Demo app configuration"""
    model_config = ConfigDict(extra='forbid')

    assets_refresh_interval: Optional[float] = Field(default=None, ge=0.01, description="Re-emit the assets list every N seconds (None: once)")


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    navigation: NavigationConfig = Field(default_factory=NavigationConfig)
    bus: BusConfig = Field(default_factory=BusConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    demo: DemoConfig = Field(default_factory=DemoConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


# env var -> (section, key, converter)
ENV_MAP = {
    'NAVKIT_OVERLAP_POLICY': ('navigation', 'overlap_policy', str),
    'NAVKIT_RESTORE_STACK_ON_TEARDOWN': ('navigation', 'restore_stack_on_teardown', bool),
    'NAVKIT_BUS_IDLE_TIMEOUT': ('bus', 'idle_timeout', float),
    'NAVKIT_LOG_LEVEL': ('logging', 'level', str),
    'NAVKIT_CONSOLE_LOG_LEVEL': ('logging', 'console_level', str),
    'NAVKIT_LOG_FILE': ('logging', 'log_file', str),
    'NAVKIT_ASSETS_REFRESH_INTERVAL': ('demo', 'assets_refresh_interval', float),
}


class ConfigManager:
    """Centralized configuration manager with 4-tier precedence hierarchy"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        """Load system default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")

            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user-level configuration"""
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        """Load project-specific configuration"""
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → system"""
        merged = self._load_system_defaults().model_dump(mode="json")

        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())

        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, converter) in ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if converter is bool:
                converted: Any = value.lower() in ('true', '1', 'yes', 'on')
            elif converter is float:
                try:
                    converted = float(value)
                except ValueError:
                    logger.warning(f"Ignoring non-numeric {env_key}={value!r}")
                    continue
            else:
                converted = value

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ConfigurationError("system", f"failed validation: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_project_config(self, config_updates: Dict[str, Any]) -> bool:
        """Save project-specific configuration updates"""
        project_path = self.config_dir / "project.yaml"

        existing_config = self._load_yaml_file(project_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(project_path, existing_config)
        if success:
            # Clear cached project config to force reload
            self._project_config = None

        return success

    def reload_config(self) -> None:
        """Clear cached configurations and reload from files"""
        self._system_config = None
        self._user_config = None
        self._project_config = None


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    """Get current system configuration"""
    return get_config_manager().get_config(validation_level)
