"""
Type extractors. Importing this package registers them.
"""
from .boolean import BooleanExtractor, extract_boolean

__all__ = [
    'BooleanExtractor',
    'extract_boolean',
]
