"""
Boolean extractor.
"""
from typing import Any, Optional

from registry import Extractor, PluginKind, register_plugin
from nodes.schema_node import SchemaNode, NOT_A_BOOLEAN
from nodes.hydration import hydrate_schema


@register_plugin
class BooleanExtractor(Extractor):
    """
    Accepts exactly ``True`` or ``False``.

    Anything else, including ``0``, ``1``, ``"true"`` and ``None``, is
    reported through the node's failure hook with ``not_a_boolean`` and
    yields ``None``.
    """

    KIND = PluginKind.BOOLEAN

    def extract(self, node: SchemaNode, value: Any) -> Optional[bool]:
        hydrate_schema(node)

        if value is True or value is False:
            return value

        node.on_validation_failed(node, value, NOT_A_BOOLEAN)
        return None


_extractor = BooleanExtractor()


def extract_boolean(node: SchemaNode, value: Any) -> Optional[bool]:
    """Extract a boolean using the shared extractor instance."""
    return _extractor.extract(node, value)
