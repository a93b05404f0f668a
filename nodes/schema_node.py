"""
Schema node representation.
"""
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, List, Optional, Union

from registry.kinds import PluginKind


class _Missing:
    """Marker for an absent value, distinct from ``None``."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

# Failure reason codes
NOT_A_BOOLEAN = 'not_a_boolean'
NOT_ONE_OF = 'not_one_of'
MISSING_REQUIRED = 'missing_required'
UNEXPECTED_FIELD = 'unexpected_field'

FailureHook = Callable[['SchemaNode', Any, str], Any]


@dataclass(eq=False)
class SchemaNode:
    """
    One validation unit of a schema.

    ``kind`` holds the raw declared type name until the node is hydrated,
    a ``PluginKind`` afterwards. ``on_validation_failed`` is called by
    extractors as ``hook(node, value, reason)``.
    """
    kind: Union[PluginKind, str]
    name: str = 'value'
    items: Optional[List[Any]] = None
    required: bool = True
    default: Any = MISSING
    description: Optional[str] = None
    on_validation_failed: Optional[FailureHook] = None
    hydrated: bool = False

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def with_hook(self, hook: FailureHook) -> 'SchemaNode':
        """Return a copy of this node reporting failures to ``hook``."""
        return replace(self, on_validation_failed=hook)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the declarative part of the node."""
        kind = self.kind.value if isinstance(self.kind, PluginKind) else self.kind
        data: Dict[str, Any] = {'type': kind, 'required': self.required}
        if self.items is not None:
            data['items'] = list(self.items)
        if self.has_default:
            data['default'] = self.default
        if self.description:
            data['description'] = self.description
        return data
