"""
Registry mapping plugin kinds to plugin instances.
"""
import importlib
from typing import Dict, Iterable, List, Type, Union

from utils.logging_config import get_logger
from utils.exceptions import RegistryError
from .kinds import PluginKind
from .plugins import Plugin, Extractor, Validator

logger = get_logger(__name__)

# Modules whose import registers the built-in plugins
BUILTIN_PLUGIN_MODULES = ('extractors', 'validation')

_registered: Dict[PluginKind, Type[Plugin]] = {}


def register_plugin(cls: Type[Plugin]) -> Type[Plugin]:
    """Decorator for registering a plugin class with the default registry."""
    kind = cls.kind()
    existing = _registered.get(kind)
    if existing is not None and existing is not cls:
        raise RegistryError(
            f"Plugin kind '{kind.value}' already registered by {existing.__name__}",
            details={'kind': kind.value, 'existing': existing.__name__, 'new': cls.__name__}
        )
    _registered[kind] = cls
    logger.debug(f"Registered {cls.__name__} for '{kind.value}'")
    return cls


def registered_plugins() -> Dict[PluginKind, Type[Plugin]]:
    """Return a copy of the registered plugin classes."""
    return dict(_registered)


class PluginRegistry:
    """
    Immutable lookup table from ``PluginKind`` to plugin instance.

    Lookups accept either a ``PluginKind`` or its declared name.
    """

    def __init__(self, plugins: Iterable[Plugin]):
        table: Dict[PluginKind, Plugin] = {}
        for plugin in plugins:
            kind = plugin.kind()
            if kind in table:
                raise RegistryError(
                    f"Duplicate plugin for kind '{kind.value}'",
                    details={'kind': kind.value}
                )
            table[kind] = plugin
        self._plugins = table

    def kinds(self) -> List[PluginKind]:
        """List supported kinds."""
        return list(self._plugins)

    def supports(self, kind: Union[str, PluginKind]) -> bool:
        """Check whether a plugin exists for ``kind``."""
        try:
            return PluginKind.from_name(kind) in self._plugins
        except RegistryError:
            return False

    def get(self, kind: Union[str, PluginKind]) -> Plugin:
        """Get the plugin for ``kind``."""
        resolved = PluginKind.from_name(kind)
        if resolved not in self._plugins:
            raise RegistryError(
                f"No plugin registered for '{resolved.value}'",
                details={'available_types': [k.value for k in self._plugins]}
            )
        return self._plugins[resolved]

    def is_extractor(self, kind: Union[str, PluginKind]) -> bool:
        return isinstance(self.get(kind), Extractor)

    def extractor(self, kind: Union[str, PluginKind]) -> Extractor:
        """Get the extractor for ``kind``."""
        plugin = self.get(kind)
        if not isinstance(plugin, Extractor):
            raise RegistryError(
                f"Plugin for '{plugin.kind().value}' is not an extractor",
                details={'plugin': plugin.__class__.__name__}
            )
        return plugin

    def validator(self, kind: Union[str, PluginKind]) -> Validator:
        """Get the validator for ``kind``."""
        plugin = self.get(kind)
        if not isinstance(plugin, Validator):
            raise RegistryError(
                f"Plugin for '{plugin.kind().value}' is not a validator",
                details={'plugin': plugin.__class__.__name__}
            )
        return plugin

    def __contains__(self, kind) -> bool:
        return self.supports(kind)

    def __len__(self) -> int:
        return len(self._plugins)


def default_registry() -> PluginRegistry:
    """Build a registry holding every built-in plugin."""
    for module_name in BUILTIN_PLUGIN_MODULES:
        importlib.import_module(module_name)
    return PluginRegistry(cls() for cls in _registered.values())
