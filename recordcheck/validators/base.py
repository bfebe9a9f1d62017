"""Base rule — abstract class implementing the Strategy Pattern.

Each rule is a standalone, independently testable unit bound to one record
field. New rules are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from recordcheck.models.record import Record
from recordcheck.validators.models import Violation, ViolationKind


@dataclass(frozen=True)
class BaseRule(ABC):
    """Abstract base for all field rules.

    Contract:
        - check() is deterministic: same value → same outcome
        - check() never mutates the record
        - evaluate() returns a Violation or None
    """

    field: str

    # Python types this rule can be bound to; None accepts any field
    value_types = None

    @property
    @abstractmethod
    def kind(self) -> ViolationKind:
        ...

    @abstractmethod
    def check(self, value: Any) -> bool:
        """Return True when the value satisfies the rule."""
        ...

    @abstractmethod
    def describe_failure(self, value: Any) -> str:
        """Human-readable message for a failing value."""
        ...

    def evaluate(self, record: Record) -> Optional[Violation]:
        """Run the rule against one record field."""
        value = getattr(record, self.field)
        if self.check(value):
            return None
        return self._violation(self.describe_failure(value), evidence=value)

    def supports(self, annotation: Any) -> bool:
        """Whether the rule can be bound to a field with this type."""
        return self.value_types is None or annotation in self.value_types

    # ── Helper Methods ──

    def _violation(self, message: str, evidence: Any = None) -> Violation:
        """Convenience method to create a Violation for this rule."""
        return Violation(
            field=self.field,
            kind=self.kind,
            message=message,
            evidence=None if evidence is None else str(evidence),
        )
