"""
Shared plugin shapes.

Extractors type-check a raw value and report failures through the schema
node's ``on_validation_failed`` hook. Validators are pure predicates over
a schema template and a value.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

from utils.exceptions import RegistryError
from .kinds import PluginKind


class Plugin(ABC):
    """Base class for every registered plugin."""

    KIND: PluginKind

    @classmethod
    def kind(cls) -> PluginKind:
        """Return the schema type this plugin handles."""
        kind = getattr(cls, 'KIND', None)
        if not isinstance(kind, PluginKind):
            raise RegistryError(
                f"{cls.__name__} must define KIND",
                details={'plugin': cls.__name__, 'available_types': PluginKind.names()}
            )
        return kind

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(kind={self.kind().value!r})"


class Extractor(Plugin):
    """Plugin that returns the value when it has the expected type."""

    @abstractmethod
    def extract(self, node, value: Any) -> Optional[Any]:
        """Return ``value`` on success, ``None`` after reporting a failure."""
        pass


class Validator(Plugin):
    """Plugin that checks a value against a schema-declared constraint."""

    # Reason code the engine reports when is_valid returns False
    FAILURE_REASON = 'invalid'

    @abstractmethod
    def is_valid(self, template, value: Any) -> bool:
        """Return True when ``value`` satisfies ``template``."""
        pass
