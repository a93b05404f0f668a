"""
Predefined configuration presets.
"""
from typing import Dict, Any


class ConfigPresets:
    """Collection of predefined configuration presets."""

    @staticmethod
    def default() -> Dict[str, Any]:
        """Lenient validation, console logging."""
        return {
            'validation': {
                'strict': False
            },
            'logging': {
                'log_level': 'INFO',
                'enable_console': True,
                'enable_file': False,
                'structured': False
            }
        }

    @staticmethod
    def strict() -> Dict[str, Any]:
        """Reject undeclared fields, log failures as JSON."""
        return {
            'validation': {
                'strict': True
            },
            'logging': {
                'log_level': 'WARNING',
                'enable_console': True,
                'enable_file': False,
                'structured': True
            }
        }

    @staticmethod
    def debug() -> Dict[str, Any]:
        """Verbose logging to console and rotating file."""
        return {
            'validation': {
                'strict': False
            },
            'logging': {
                'log_level': 'DEBUG',
                'log_dir': 'logs/debug',
                'enable_console': True,
                'enable_file': True,
                'structured': False
            }
        }

    @staticmethod
    def get_preset(name: str) -> Dict[str, Any]:
        """Get a preset by name."""
        presets = {
            'default': ConfigPresets.default,
            'strict': ConfigPresets.strict,
            'debug': ConfigPresets.debug,
        }
        if name not in presets:
            raise ValueError(f"Unknown preset: {name}. Available: {list(presets.keys())}")
        return presets[name]()
