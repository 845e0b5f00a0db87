"""
Filesys Configuration Loader

Configuration management for the filesystem backends:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Dot-notation access and runtime updates

Loaders are plain objects: every caller that needs a configuration
builds or receives one explicitly.

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import asdict, dataclass, field, fields, is_dataclass, replace
from pathlib import Path
from typing import Any, Optional

from filesys.exceptions import FileSystemException


BACKENDS = ("virtual", "os")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigValidationError(FileSystemException):
    """Raised when configuration loading or validation fails."""

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(
            message=message,
            operation="config",
            error_code=4100,
            context={"key": key} if key else None
        )
        self.key = key


@dataclass
class FilesystemConfig:
    """Filesystem backend settings."""
    backend: str = "virtual"
    working_dir: Optional[str] = None
    dir_mode: int = 0o777
    file_mode: int = 0o666


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = False
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Example JSON:
        {
            "filesystem": {"backend": "virtual", "working_dir": "/home"},
            "logging": {"level": "DEBUG", "console_output": true}
        }
    """
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    'filesystem': FilesystemConfig,
    'logging': LoggingConfig,
}


class ConfigLoader:
    """
    Configuration loader.

    Handles loading configuration from JSON files or dictionaries and
    validating the settings.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('filesys.json')
        >>> config.filesystem.backend
        'virtual'
    """

    def __init__(self, config: Optional[Config] = None) -> None:
        self._config = config or Config()

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigValidationError: If the file cannot be read, parsed or validated
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigValidationError(f"Configuration file not found: {config_path}")

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid JSON in configuration file: {e}") from e
        except OSError as e:
            raise ConfigValidationError(f"Cannot read configuration file: {e}") from e

        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be an object")

        return self.from_dict(data)

    def from_dict(self, data: dict[str, Any]) -> Config:
        """
        Build and validate a Config from parsed JSON.

        Missing sections and keys keep their defaults; unknown ones are
        rejected so that typos do not pass silently.
        """
        config = Config()

        for section, values in data.items():
            if section not in _SECTIONS:
                raise ConfigValidationError(f"Unknown configuration section: {section}", key=section)
            if not isinstance(values, dict):
                raise ConfigValidationError(f"Section must be an object: {section}", key=section)

            known = {f.name for f in fields(_SECTIONS[section])}
            for name in values:
                if name not in known:
                    raise ConfigValidationError(
                        f"Unknown configuration key: {section}.{name}",
                        key=f"{section}.{name}"
                    )
            setattr(config, section, replace(getattr(config, section), **values))

        self.validate(config)
        self._config = config
        return config

    @staticmethod
    def validate(config: Config) -> None:
        """
        Check a configuration for invalid values.

        Raises:
            ConfigValidationError: On the first invalid value found
        """
        if config.filesystem.backend not in BACKENDS:
            raise ConfigValidationError(
                f"Unknown backend: {config.filesystem.backend!r}",
                key="filesystem.backend"
            )
        for key in ('dir_mode', 'file_mode'):
            value = getattr(config.filesystem, key)
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 0o7777:
                raise ConfigValidationError(
                    f"Invalid permission mode: {value!r}",
                    key=f"filesystem.{key}"
                )
        working_dir = config.filesystem.working_dir
        if working_dir is not None and (not isinstance(working_dir, str) or not working_dir):
            raise ConfigValidationError(
                f"Invalid working directory: {working_dir!r}",
                key="filesystem.working_dir"
            )
        level = config.logging.level
        if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
            raise ConfigValidationError(
                f"Unknown log level: {level!r}",
                key="logging.level"
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'filesystem.backend')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        The change is validated; an invalid value leaves the previous
        value in place.
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not is_dataclass(obj) or not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self.validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to plain JSON-compatible data."""
        return asdict(self._config)


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Load a configuration, or return the defaults when no path is given.

    Args:
        config_path: Optional path to a JSON configuration file

    Returns:
        Config object
    """
    loader = ConfigLoader()
    if config_path is None:
        return loader.config
    return loader.load(config_path)
