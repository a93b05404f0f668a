"""
Constraint validators. Importing this package registers them.
"""
from .one_of import OneOfValidator, is_one_of, strict_equals

__all__ = [
    'OneOfValidator',
    'is_one_of',
    'strict_equals',
]
