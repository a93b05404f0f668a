"""
Custom exception hierarchy for SchemaPlug.
"""
from typing import Any, Dict, Optional


class SchemaPlugError(Exception):
    """Base exception for all SchemaPlug errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'details': self.details
        }


# Schema Exceptions
class SchemaError(SchemaPlugError):
    """Raised when a schema document or node declaration is malformed."""
    pass


# Registry Exceptions
class RegistryError(SchemaPlugError):
    """Raised when plugin registration or lookup fails."""
    pass


class UnknownPluginError(RegistryError):
    """Raised when no plugin exists for a declared type name."""
    pass


# Data Exceptions
class ValidationError(SchemaPlugError):
    """Raised when data validation fails."""
    pass


# Configuration Exceptions
class ConfigurationError(SchemaPlugError):
    """Raised when configuration is invalid."""
    pass
