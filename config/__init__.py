"""
Configuration management for SchemaPlug.
"""
from .config_manager import (
    Config,
    ConfigManager,
    validate_settings,
    configure_logging,
    get_config_manager,
    load_config,
    get_config,
    set_config
)
from .presets import ConfigPresets

__all__ = [
    'Config',
    'ConfigManager',
    'validate_settings',
    'configure_logging',
    'get_config_manager',
    'load_config',
    'get_config',
    'set_config',
    'ConfigPresets',
]
