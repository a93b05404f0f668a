"""
OneOf validator: membership of a value in a declared list of literals.
"""
from typing import Any

from registry import Validator, PluginKind, register_plugin
from nodes.schema_node import NOT_ONE_OF

_NUMBER_TYPES = (int, float)
_TEXT_TYPES = (str, bytes)


def strict_equals(left: Any, right: Any) -> bool:
    """
    Strict, non-coercing equality.

    Booleans only equal booleans, ints and floats compare numerically,
    strings and bytes compare by value within their own type, NaN equals
    nothing. Every other object compares by identity, so two distinct
    dicts with the same content are not equal.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, _NUMBER_TYPES) and isinstance(right, _NUMBER_TYPES):
        return left == right
    for text_type in _TEXT_TYPES:
        if isinstance(left, text_type) and isinstance(right, text_type):
            return left == right
    return left is right


@register_plugin
class OneOfValidator(Validator):
    """True when the value strictly equals one of ``template.items``."""

    KIND = PluginKind.ONE_OF
    FAILURE_REASON = NOT_ONE_OF

    def is_valid(self, template, value: Any) -> bool:
        for item in template.items:
            if strict_equals(item, value):
                return True
        return False


_validator = OneOfValidator()


def is_one_of(template, value: Any) -> bool:
    """Check membership using the shared validator instance."""
    return _validator.is_valid(template, value)
