"""Configuration management for Bao."""

import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .utils.datetime import (
    DATE_ONLY_FORMAT,
    DISPLAY_DATE_FORMAT,
    DISPLAY_DATETIME_FORMAT,
    INPUT_DATETIME_FORMAT,
)


logger = logging.getLogger(__name__)

HOME_ENV_VAR = "BAO_HOME"


def _default_data_dir() -> str:
    return os.environ.get(HOME_ENV_VAR) or "~/.bao"


@dataclass
class ConfigModel:
    """Global configuration model for Bao."""

    # File paths
    data_dir: str = ""
    data_file: str = "tasks.md"
    log_file: str = "bao.log"

    # Date formats
    input_datetime_format: str = INPUT_DATETIME_FORMAT
    date_only_format: str = DATE_ONLY_FORMAT
    display_datetime_format: str = DISPLAY_DATETIME_FORMAT
    display_date_format: str = DISPLAY_DATE_FORMAT

    # UI
    no_color: bool = False
    show_banner: bool = True

    def __post_init__(self):
        """Expand user paths and make sure the data directory exists."""
        self.data_dir = os.path.expanduser(self.data_dir or _default_data_dir())
        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        return yaml.dump(asdict(self), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ValueError("Configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def get_data_path(self) -> Path:
        """Get the task file path."""
        path = Path(os.path.expanduser(self.data_file))
        if path.is_absolute():
            return path
        return Path(self.data_dir) / path

    def get_log_path(self) -> Path:
        """Get the log file path."""
        return Path(self.data_dir) / self.log_file

    def get_config_path(self) -> Path:
        """Get the config file path."""
        return Path(self.data_dir) / "config.yaml"


class Config:
    """Configuration manager for Bao."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Load configuration from file or create default."""
        if cls._instance is not None:
            return cls._instance

        config = ConfigModel()

        if config_path is None:
            config_path = config.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, "r", encoding="utf-8") as f:
                    yaml_content = f.read()
                config = ConfigModel.from_yaml(yaml_content)
                logger.info(f"Loaded configuration from {config_path}")
            except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {config_path}: {e}; using defaults")
        else:
            cls.save(config, config_path)
            logger.info(f"Created default configuration at {config_path}")

        cls._instance = config
        return config

    @classmethod
    def save(cls, config: ConfigModel, config_path: Optional[Path] = None) -> None:
        """Save configuration to file."""
        if config_path is None:
            config_path = config.get_config_path()

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w", encoding="utf-8") as f:
                f.write(config.to_yaml())
            logger.debug(f"Configuration saved to {config_path}")
        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")

    @classmethod
    def get(cls) -> ConfigModel:
        """Get the current configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reload(cls, config_path: Optional[Path] = None) -> ConfigModel:
        """Reload configuration from file."""
        cls._instance = None
        return cls.load(config_path)


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file."""
    return Config.load(config_path)


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""
    Config.save(config, config_path)
