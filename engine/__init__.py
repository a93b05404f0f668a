"""
Validation engine for SchemaPlug.
"""
from .results import ValidationFailure, FailureCollector, ValidationResult
from .schema_validator import SchemaValidator

__all__ = [
    'ValidationFailure',
    'FailureCollector',
    'ValidationResult',
    'SchemaValidator',
]
