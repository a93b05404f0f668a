"""
Plugin registry for SchemaPlug.
"""
from .kinds import PluginKind
from .plugins import Plugin, Extractor, Validator
from .plugin_registry import (
    PluginRegistry,
    register_plugin,
    registered_plugins,
    default_registry
)

__all__ = [
    'PluginKind',
    'Plugin',
    'Extractor',
    'Validator',
    'PluginRegistry',
    'register_plugin',
    'registered_plugins',
    'default_registry',
]
