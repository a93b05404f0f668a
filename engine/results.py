"""
Failure accumulation and validation results.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from utils.exceptions import ValidationError


@dataclass(frozen=True)
class ValidationFailure:
    """A single failed field."""
    field: str
    value: Any
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {'field': self.field, 'value': self.value, 'reason': self.reason}


class FailureCollector:
    """
    Failure hook that records failures instead of acting on them.

    Instances are called as ``collector(node, value, reason)``, the same
    way extractors call ``node.on_validation_failed``. One collector
    belongs to one validation run.
    """

    def __init__(self):
        self._failures: List[ValidationFailure] = []

    def __call__(self, node, value: Any, reason: str) -> None:
        self._failures.append(ValidationFailure(node.name, value, reason))

    def record(self, field: str, value: Any, reason: str) -> None:
        """Record a failure that was not reported through a node."""
        self._failures.append(ValidationFailure(field, value, reason))

    @property
    def failures(self) -> List[ValidationFailure]:
        return list(self._failures)

    def __len__(self) -> int:
        return len(self._failures)

    def __bool__(self) -> bool:
        return bool(self._failures)


class ValidationResult:
    """Cleaned data plus every failure found while producing it."""

    def __init__(self, data: Dict[str, Any], failures: List[ValidationFailure], schema_name: Optional[str] = None):
        self.data = data
        self.failures = failures
        self.schema_name = schema_name

    @property
    def valid(self) -> bool:
        return not self.failures

    def reasons_for(self, field: str) -> List[str]:
        """Reason codes reported for ``field``, in order."""
        return [failure.reason for failure in self.failures if failure.field == field]

    def failed_fields(self) -> List[str]:
        seen = []
        for failure in self.failures:
            if failure.field not in seen:
                seen.append(failure.field)
        return seen

    def raise_for_failures(self) -> Dict[str, Any]:
        """Return the cleaned data, or raise ``ValidationError`` if anything failed."""
        if self.failures:
            raise ValidationError(
                f"Validation failed for fields: {', '.join(self.failed_fields())}",
                details={
                    'schema': self.schema_name,
                    'errors': [failure.to_dict() for failure in self.failures]
                }
            )
        return self.data

    def __bool__(self) -> bool:
        return self.valid

    def __repr__(self) -> str:
        return f"ValidationResult(valid={self.valid}, failures={len(self.failures)})"
