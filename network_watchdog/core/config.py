"""Configuration management for network-watchdog."""

import json
import platform
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from network_watchdog.core.constants import CONFIG_DIR, LOG_FILE, LOG_LEVEL, STREAM_BUFFER_SIZE


class Config:
    """Manages network-watchdog configuration."""

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.config_data: Dict[str, Any] = {}
        self._load_config()

    @staticmethod
    def _get_default_config_path() -> Path:
        """Get default configuration path based on platform."""
        if CONFIG_DIR:
            config_dir = Path(CONFIG_DIR)
        else:
            system = platform.system()
            home = Path.home()

            if system == "Windows":
                config_dir = home / "AppData" / "Roaming" / "network-watchdog"
            elif system == "Darwin":
                config_dir = home / "Library" / "Application Support" / "network-watchdog"
            else:  # Linux and others
                config_dir = home / ".config" / "network-watchdog"

        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir / "config.json"

    def _load_config(self) -> None:
        """Load configuration from file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, "r", encoding="utf-8") as f:
                    loaded = json.load(f)
                # Keys missing from older files fall back to defaults
                self.config_data = {**self._get_default_config(), **loaded}
            except (json.JSONDecodeError, IOError, TypeError) as e:
                logger.error(f"Error loading config: {e}. Using default configuration.")
                self.config_data = self._get_default_config()
        else:
            self.config_data = self._get_default_config()
            self.save()

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "log_level": LOG_LEVEL.lower(),
            "log_file": LOG_FILE,
            "stream_buffer_size": STREAM_BUFFER_SIZE,
        }

    def save(self) -> None:
        """Save configuration to file."""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(self.config_data, f, indent=2)

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value.

        Args:
            key: Configuration key (supports dot notation, e.g., 'stream.size')
            default: Default value if key doesn't exist

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.config_data
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set configuration value.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        data = self.config_data
        for k in keys[:-1]:
            if not isinstance(data.get(k), dict):
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    @property
    def log_level(self) -> str:
        return str(self.get("log_level", LOG_LEVEL)).upper()

    @property
    def log_file(self) -> Optional[str]:
        return self.get("log_file")

    @property
    def stream_buffer_size(self) -> int:
        """Buffer size for live state streams, never below 1."""
        try:
            size = int(self.get("stream_buffer_size", STREAM_BUFFER_SIZE))
        except (TypeError, ValueError):
            logger.warning("Invalid stream_buffer_size in config, using default")
            return STREAM_BUFFER_SIZE
        return max(1, size)

    def import_config(self, config_file: Path, file_format: str = "json") -> bool:
        """Import configuration from file.

        Args:
            config_file: Path to configuration file
            file_format: File format ('json' or 'yaml')

        Returns:
            True if successful, False otherwise
        """
        try:
            with open(config_file, "r", encoding="utf-8") as f:
                if file_format.lower() == "yaml":
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            logger.error(f"Error importing config: {e}")
            return False

        # Merge with existing config
        if isinstance(data, dict):
            self.config_data.update(data)
            self.save()
            return True
        logger.error(f"Error importing config: {config_file} does not contain a mapping")
        return False

    def export_config(self, output_file: Path, file_format: str = "json") -> bool:
        """Export configuration to file.

        Args:
            output_file: Path to output file
            file_format: File format ('json' or 'yaml')

        Returns:
            True if successful, False otherwise
        """
        try:
            with open(output_file, "w", encoding="utf-8") as f:
                if file_format.lower() == "yaml":
                    yaml.dump(self.config_data, f, default_flow_style=False)
                else:
                    json.dump(self.config_data, f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Error exporting config: {e}")
        return False
