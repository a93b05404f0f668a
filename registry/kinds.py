"""
Plugin kinds understood by the registry.
"""
from enum import Enum
from typing import List, Union

from utils.exceptions import UnknownPluginError


class PluginKind(str, Enum):
    """Declared schema type names mapped to plugin implementations."""

    BOOLEAN = 'boolean'
    ONE_OF = 'oneOf'

    @classmethod
    def names(cls) -> List[str]:
        """List all declared type names."""
        return [kind.value for kind in cls]

    @classmethod
    def from_name(cls, name: Union[str, 'PluginKind']) -> 'PluginKind':
        """Resolve a declared type name. Names are case-sensitive."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise UnknownPluginError(
                f"Unknown schema type: {name!r}",
                details={'available_types': cls.names()}
            ) from None
