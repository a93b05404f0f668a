"""
Configuration management for SchemaPlug.
"""
import os
import json
import functools
import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
from copy import deepcopy
from utils.logging_config import get_logger, LoggerFactory
from utils.exceptions import ConfigurationError
from engine.schema_validator import SchemaValidator

logger = get_logger(__name__)

ENV_PREFIX = "SCHEMAPLUG_"
ENV_NESTING_SEPARATOR = "__"

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Settings sections are checked with the library's own validators
SETTINGS_SCHEMAS: Dict[str, Dict[str, Any]] = {
    'validation': {
        'strict': {'type': 'boolean', 'required': False},
    },
    'logging': {
        'log_level': {'type': 'oneOf', 'items': LOG_LEVELS, 'required': False},
        'enable_console': {'type': 'boolean', 'required': False},
        'enable_file': {'type': 'boolean', 'required': False},
        'structured': {'type': 'boolean', 'required': False},
    },
}


_ABSENT = object()


@functools.lru_cache(maxsize=None)
def _settings_validator(section: str) -> SchemaValidator:
    return SchemaValidator(SETTINGS_SCHEMAS[section])


class Config:
    """Configuration container with dot notation access."""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data = data or {}

    def __getattr__(self, key: str) -> Any:
        """Get config value using dot notation."""
        if key.startswith('_'):
            return object.__getattribute__(self, key)

        if key not in self._data:
            raise AttributeError(f"Config has no attribute '{key}'")

        value = self._data[key]
        if isinstance(value, dict):
            return Config(value)
        return value

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __setitem__(self, key: str, value: Any):
        self._data[key] = value

    def __contains__(self, key: str) -> bool:
        return self.get(key, _ABSENT) is not _ABSENT

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key (``validation.strict``)."""
        try:
            value = self._data
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any):
        """Set a value by dotted key, creating intermediate sections."""
        keys = key.split('.')
        data = self._data
        for k in keys[:-1]:
            if not isinstance(data.get(k), dict):
                data[k] = {}
            data = data[k]
        data[keys[-1]] = value

    def to_dict(self) -> Dict[str, Any]:
        return deepcopy(self._data)

    def update(self, other: Dict[str, Any]):
        """Update configuration with another dict."""
        self._deep_update(self._data, other)

    @staticmethod
    def _deep_update(base: Dict, update: Dict):
        """Recursively update nested dictionaries."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                Config._deep_update(base[key], value)
            else:
                base[key] = deepcopy(value)


def validate_settings(data: Dict[str, Any]) -> None:
    """
    Check known settings sections.

    Raises:
        ConfigurationError: if a section is not a mapping or holds invalid values
    """
    errors = []
    for section in SETTINGS_SCHEMAS:
        if section not in data:
            continue
        values = data[section]
        if not isinstance(values, dict):
            raise ConfigurationError(
                f"Configuration section '{section}' must be a mapping",
                details={'section': section, 'actual_type': type(values).__name__}
            )
        result = _settings_validator(section).validate(values)
        errors.extend(
            {'section': section, **failure.to_dict()} for failure in result.failures
        )

    if errors:
        raise ConfigurationError(
            "Invalid configuration",
            details={'errors': errors}
        )


class ConfigManager:
    """
    Configuration from files, environment variables and dictionaries.

    Every load is merged into the current configuration and the result
    is checked with ``validate_settings``.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._config = Config()
        self.logger = get_logger(self.__class__.__name__)
        if data:
            self.load_from_dict(data)

    def _merge(self, data: Dict[str, Any], source: str):
        candidate = self._config.to_dict()
        Config._deep_update(candidate, data)
        validate_settings(candidate)
        self._config = Config(candidate)
        self.logger.info(f"Loaded configuration from {source}")

    def load_from_file(self, filepath: Union[str, Path]):
        """
        Load configuration from a JSON or YAML file.

        Args:
            filepath: Path to configuration file
        """
        path = Path(filepath)

        if not path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {filepath}",
                details={'filepath': str(path)}
            )

        if path.suffix not in ['.yaml', '.yml', '.json']:
            raise ConfigurationError(
                f"Unsupported file format: {path.suffix}",
                details={'filepath': str(path)}
            )

        try:
            with open(path, 'r') as f:
                if path.suffix == '.json':
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {filepath}: {e}",
                details={'filepath': str(path), 'error': str(e)}
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {filepath}",
                details={'filepath': str(path)}
            )

        self._merge(data, str(path))

    def load_from_env(self, prefix: str = ENV_PREFIX):
        """
        Load configuration from environment variables.

        ``SCHEMAPLUG_VALIDATION__STRICT=true`` sets ``validation.strict``.
        Values are decoded as JSON when possible, otherwise kept as strings.

        Args:
            prefix: Prefix for environment variables
        """
        env_config = Config()
        count = 0

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue

            config_key = key[len(prefix):].lower().replace(ENV_NESTING_SEPARATOR, '.')
            if not config_key:
                continue

            try:
                parsed_value = json.loads(value)
            except json.JSONDecodeError:
                parsed_value = value

            env_config.set(config_key, parsed_value)
            count += 1

        self._merge(env_config.to_dict(), f"{count} environment variables")

    def load_from_dict(self, data: Dict[str, Any]):
        """Load configuration from a dictionary."""
        self._merge(data, "dictionary")

    def save_to_file(self, filepath: Union[str, Path], format: str = 'yaml'):
        """
        Save configuration to file.

        Args:
            filepath: Path to save configuration
            format: File format ('yaml' or 'json')
        """
        if format not in ('yaml', 'json'):
            raise ConfigurationError(f"Unsupported format: {format}")

        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, 'w') as f:
                if format == 'yaml':
                    yaml.safe_dump(self._config.to_dict(), f, default_flow_style=False)
                else:
                    json.dump(self._config.to_dict(), f, indent=2)
        except OSError as e:
            raise ConfigurationError(
                f"Failed to save configuration to {filepath}: {e}",
                details={'filepath': str(path), 'error': str(e)}
            ) from e

        self.logger.info(f"Saved configuration to {filepath}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any):
        """Set a configuration value. The result must still pass validation."""
        candidate = Config(self._config.to_dict())
        candidate.set(key, value)
        validate_settings(candidate.to_dict())
        self._config = candidate
        self.logger.debug(f"Set config: {key} = {value}")

    def get_config(self) -> Config:
        return self._config

    def clear(self):
        """Clear all configuration."""
        self._config = Config()
        self.logger.info("Cleared all configuration")


def configure_logging(config: Union[Config, ConfigManager]):
    """Apply the ``logging`` section of a configuration."""
    LoggerFactory.configure(
        log_dir=config.get('logging.log_dir', 'logs'),
        log_level=config.get('logging.log_level', 'INFO'),
        enable_console=config.get('logging.enable_console', True),
        enable_file=config.get('logging.enable_file', False),
        enable_structured=config.get('logging.structured', False),
        force=True
    )


# Global configuration manager instance
_global_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _global_config_manager
    if _global_config_manager is None:
        _global_config_manager = ConfigManager()
    return _global_config_manager


def load_config(filepath: Union[str, Path]):
    """Load configuration from file into global manager."""
    get_config_manager().load_from_file(filepath)


def get_config(key: str, default: Any = None) -> Any:
    """Get configuration value from global manager."""
    return get_config_manager().get(key, default)


def set_config(key: str, value: Any):
    """Set configuration value in global manager."""
    get_config_manager().set(key, value)
