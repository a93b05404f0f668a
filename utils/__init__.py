"""
Utility modules for SchemaPlug.
"""
from .logging_config import get_logger, LoggerFactory, StructuredFormatter
from .exceptions import (
    SchemaPlugError,
    SchemaError,
    RegistryError,
    UnknownPluginError,
    ValidationError,
    ConfigurationError
)
from .error_handlers import ErrorContext

__all__ = [
    'get_logger',
    'LoggerFactory',
    'StructuredFormatter',
    'SchemaPlugError',
    'SchemaError',
    'RegistryError',
    'UnknownPluginError',
    'ValidationError',
    'ConfigurationError',
    'ErrorContext',
]
