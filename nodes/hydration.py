"""
Schema node hydration.

Hydration normalizes a node into its runtime shape: a resolved
``PluginKind``, list-typed ``items`` and a failure hook. It is idempotent,
a node already marked hydrated is returned as is.
"""
from typing import Any

from utils.logging_config import get_logger
from utils.exceptions import SchemaError
from registry.kinds import PluginKind
from .schema_node import SchemaNode

logger = get_logger(__name__)


def log_validation_failure(node: SchemaNode, value: Any, reason: str) -> None:
    """Default failure hook: log the failure and carry on."""
    logger.warning(
        f"Validation failed for '{node.name}': {reason} (value={value!r})",
        extra={'field': node.name, 'reason': reason}
    )


def hydrate_schema(node: SchemaNode) -> SchemaNode:
    """Normalize ``node`` in place and return it."""
    if node.hydrated:
        return node

    node.kind = PluginKind.from_name(node.kind)

    if node.kind is PluginKind.ONE_OF:
        if not isinstance(node.items, (list, tuple)):
            raise SchemaError(
                f"'{node.name}': oneOf requires a list of items, got {type(node.items).__name__}",
                details={'field': node.name}
            )
        node.items = list(node.items)

    if node.on_validation_failed is None:
        node.on_validation_failed = log_validation_failure
    elif not callable(node.on_validation_failed):
        raise SchemaError(
            f"'{node.name}': on_validation_failed must be callable",
            details={'field': node.name}
        )

    node.hydrated = True
    logger.debug(f"Hydrated schema node '{node.name}' ({node.kind.value})")
    return node
