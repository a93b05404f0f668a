"""
Validation engine: dispatches schema fields to their plugins.
"""
from copy import deepcopy
from typing import Any, Dict, Mapping, Optional, Union

from utils.logging_config import get_logger
from utils.exceptions import ValidationError
from registry.plugin_registry import PluginRegistry, default_registry
from nodes.schema_node import SchemaNode, MISSING_REQUIRED, UNEXPECTED_FIELD
from nodes.compiler import CompiledSchema, SchemaCompiler
from .results import FailureCollector, ValidationResult

logger = get_logger(__name__)


class SchemaValidator:
    """
    Validate mappings against a compiled schema.

    All failures of a run are collected, validation never stops at the
    first one. Fields whose extractor returns an empty result or whose
    validator rejects the value are left out of the cleaned data.

    Args:
        schema: Compiled schema, or a schema document to compile
        registry: Plugin registry, defaults to the built-in plugins
        strict: If True, report keys not declared in the schema
    """

    def __init__(
        self,
        schema: Union[CompiledSchema, Mapping[str, Any]],
        registry: Optional[PluginRegistry] = None,
        strict: bool = False
    ):
        self.registry = registry or default_registry()
        if not isinstance(schema, CompiledSchema):
            schema = SchemaCompiler(self.registry).compile(schema)
        self.schema = schema
        self.strict = strict

    @classmethod
    def from_config(cls, schema, config, registry: Optional[PluginRegistry] = None) -> 'SchemaValidator':
        """Build a validator using the ``validation`` section of a config."""
        return cls(schema, registry=registry, strict=bool(config.get('validation.strict', False)))

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """Validate ``data`` and return the cleaned data with all failures."""
        if not isinstance(data, Mapping):
            raise ValidationError(
                f"Expected a mapping, got {type(data).__name__}",
                details={'schema': self.schema.name, 'actual_type': type(data).__name__}
            )

        collector = FailureCollector()
        cleaned: Dict[str, Any] = {}

        for field in self.schema:
            node = self.schema[field]

            if field not in data:
                if node.has_default:
                    cleaned[field] = deepcopy(node.default)
                elif node.required:
                    collector.record(field, None, MISSING_REQUIRED)
                continue

            value = data[field]
            bound = node.with_hook(collector)
            if self._check_field(bound, value):
                cleaned[field] = value

        for key in data:
            if key in self.schema:
                continue
            if self.strict:
                collector.record(key, data[key], UNEXPECTED_FIELD)
            else:
                cleaned[key] = data[key]

        result = ValidationResult(cleaned, collector.failures, schema_name=self.schema.name)
        logger.debug(
            f"Validated against '{self.schema.name}': "
            f"{len(cleaned)} fields kept, {len(result.failures)} failures"
        )
        return result

    def _check_field(self, node: SchemaNode, value: Any) -> bool:
        """Run the node's plugin. Failures are reported through the node's hook."""
        if self.registry.is_extractor(node.kind):
            return self.registry.extractor(node.kind).extract(node, value) is not None

        validator = self.registry.validator(node.kind)
        if validator.is_valid(node, value):
            return True
        node.on_validation_failed(node, value, validator.FAILURE_REASON)
        return False

    def validate_or_raise(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """Validate ``data`` and return the cleaned data, raising on any failure."""
        return self.validate(data).raise_for_failures()

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self.validate(data).valid
