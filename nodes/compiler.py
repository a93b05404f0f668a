"""
Schema compilation: declarations in, hydrated schema nodes out.
"""
import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

import yaml

from utils.logging_config import get_logger
from utils.exceptions import SchemaError, UnknownPluginError
from utils.error_handlers import ErrorContext
from registry.kinds import PluginKind
from registry.plugin_registry import PluginRegistry, default_registry
from .schema_node import SchemaNode, MISSING
from .hydration import hydrate_schema

logger = get_logger(__name__)

DECLARATION_KEYS = frozenset({'type', 'items', 'required', 'default', 'description'})


class CompiledSchema:
    """Ordered collection of hydrated schema nodes keyed by field name."""

    def __init__(self, nodes: Dict[str, SchemaNode], name: str = "schema"):
        self.name = name
        self._nodes = dict(nodes)

    @property
    def field_names(self) -> List[str]:
        return list(self._nodes)

    def nodes(self) -> List[SchemaNode]:
        return list(self._nodes.values())

    def get(self, field: str) -> Optional[SchemaNode]:
        return self._nodes.get(field)

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to a schema document."""
        return {field: node.to_dict() for field, node in self._nodes.items()}

    def __getitem__(self, field: str) -> SchemaNode:
        return self._nodes[field]

    def __contains__(self, field: object) -> bool:
        return field in self._nodes

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"CompiledSchema(name={self.name!r}, fields={self.field_names})"


class SchemaCompiler:
    """
    Compile schema documents into hydrated nodes.

    A document maps field names to declarations. A declaration is either
    a type name (``"boolean"``) or a mapping with ``type`` and optional
    ``items``, ``required``, ``default`` and ``description`` keys.
    """

    def __init__(self, registry: Optional[PluginRegistry] = None):
        self.registry = registry or default_registry()
        self.logger = get_logger(self.__class__.__name__)

    def compile(self, document: Mapping[str, Any], name: str = "schema") -> CompiledSchema:
        """Compile a schema document."""
        if not isinstance(document, Mapping):
            raise SchemaError(
                f"Schema document must be a mapping, got {type(document).__name__}",
                details={'schema': name}
            )

        nodes = {}
        for field, declaration in document.items():
            if not isinstance(field, str) or not field:
                raise SchemaError(
                    f"Field names must be non-empty strings, got {field!r}",
                    details={'schema': name}
                )
            nodes[field] = self.compile_node(field, declaration)

        self.logger.debug(f"Compiled schema '{name}' with {len(nodes)} fields")
        return CompiledSchema(nodes, name=name)

    def compile_node(self, field: str, declaration: Any) -> SchemaNode:
        """Compile and hydrate a single field declaration."""
        if isinstance(declaration, str):
            declaration = {'type': declaration}

        if not isinstance(declaration, Mapping):
            raise SchemaError(
                f"Declaration for '{field}' must be a type name or a mapping",
                details={'field': field, 'actual_type': type(declaration).__name__}
            )

        unknown_keys = set(declaration) - DECLARATION_KEYS
        if unknown_keys:
            raise SchemaError(
                f"Unknown keys in declaration for '{field}': {sorted(unknown_keys)}",
                details={'field': field, 'allowed': sorted(DECLARATION_KEYS)}
            )

        if 'type' not in declaration:
            raise SchemaError(
                f"Declaration for '{field}' is missing 'type'",
                details={'field': field}
            )

        kind = PluginKind.from_name(declaration['type'])
        if not self.registry.supports(kind):
            raise UnknownPluginError(
                f"No plugin registered for '{kind.value}' (field '{field}')",
                details={'field': field, 'available_types': [k.value for k in self.registry.kinds()]}
            )

        required = declaration.get('required', True)
        if not isinstance(required, bool):
            raise SchemaError(
                f"'required' for '{field}' must be a boolean",
                details={'field': field}
            )

        node = SchemaNode(
            kind=kind,
            name=field,
            items=declaration.get('items'),
            required=required,
            default=declaration.get('default', MISSING),
            description=declaration.get('description')
        )
        hydrate_schema(node)
        if node.has_default:
            self._check_default(node)
        return node

    def _check_default(self, node: SchemaNode) -> None:
        """Run a declared default through the node's plugin once."""
        reasons = []
        bound = node.with_hook(lambda _node, _value, reason: reasons.append(reason))

        if self.registry.is_extractor(node.kind):
            self.registry.extractor(node.kind).extract(bound, node.default)
        else:
            validator = self.registry.validator(node.kind)
            if not validator.is_valid(bound, node.default):
                reasons.append(validator.FAILURE_REASON)

        if reasons:
            raise SchemaError(
                f"Default for '{node.name}' is invalid: {reasons[0]}",
                details={'field': node.name, 'default': node.default, 'reason': reasons[0]}
            )

    def compile_file(self, filepath: Union[str, Path]) -> CompiledSchema:
        """
        Load and compile a schema document from a YAML or JSON file.

        The schema is named after the file stem. An empty file compiles
        to an empty schema.
        """
        path = Path(filepath)

        if not path.exists():
            raise SchemaError(
                f"Schema file not found: {filepath}",
                details={'filepath': str(path)}
            )

        if path.suffix not in ['.yaml', '.yml', '.json']:
            raise SchemaError(
                f"Unsupported schema file format: {path.suffix}",
                details={'filepath': str(path)}
            )

        with ErrorContext(f"compile schema {path.name}"):
            try:
                with open(path, 'r') as f:
                    if path.suffix == '.json':
                        document = json.load(f)
                    else:
                        document = yaml.safe_load(f)
            except (OSError, ValueError, yaml.YAMLError) as e:
                raise SchemaError(
                    f"Failed to load schema from {filepath}: {e}",
                    details={'filepath': str(path), 'error': str(e)}
                ) from e

            if document is None:
                document = {}
            schema = self.compile(document, name=path.stem)

        self.logger.info(f"Loaded schema '{schema.name}' from {filepath}")
        return schema


def compile_schema(
    document: Mapping[str, Any],
    name: str = "schema",
    registry: Optional[PluginRegistry] = None
) -> CompiledSchema:
    """Compile a schema document with the default registry."""
    return SchemaCompiler(registry).compile(document, name=name)


def compile_schema_file(
    filepath: Union[str, Path],
    registry: Optional[PluginRegistry] = None
) -> CompiledSchema:
    """Compile a schema file with the default registry."""
    return SchemaCompiler(registry).compile_file(filepath)
