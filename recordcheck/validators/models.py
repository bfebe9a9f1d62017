"""Validation models — violation kinds and result structure.

All validation is deterministic: same input → same output, no hidden state.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class ViolationKind(str, Enum):
    """Deterministic codes for every rule and structural check.

    Field rules come first, tree checks after.
    """

    # Field rules
    REQUIRED = "required"
    RANGE = "range"
    EMAIL_FORMAT = "email_format"

    # Tree checks
    TAG_MISMATCH = "tag_mismatch"
    MISSING_ELEMENT = "missing_element"
    DUPLICATE_ELEMENT = "duplicate_element"
    UNEXPECTED_ELEMENT = "unexpected_element"
    STRUCTURE = "structure"


class Violation(BaseModel):
    """A single failed rule or structural check."""

    field: str                       # Record field, or a /slash/path on the tree path
    kind: ViolationKind
    message: str
    evidence: Optional[str] = None   # The offending value, when there is one

    model_config = {"frozen": True, "use_enum_values": True}


class ValidationResult(BaseModel):
    """Outcome of one validation call."""

    passed: bool = Field(description="True if no violations were found")
    violations: list[Violation] = Field(default_factory=list)
    summary: dict[str, int] = Field(
        default_factory=dict,
        description="Count of violations by kind",
    )

    @classmethod
    def build(cls, violations: list[Violation]) -> "ValidationResult":
        """Build a result from violations, keeping their order."""
        summary: dict[str, int] = {}
        for violation in violations:
            summary[violation.kind] = summary.get(violation.kind, 0) + 1

        return cls(
            passed=not violations,
            violations=list(violations),
            summary=summary,
        )

    def fields(self) -> list[str]:
        """Fields (or paths) with at least one violation, in report order."""
        seen: list[str] = []
        for violation in self.violations:
            if violation.field not in seen:
                seen.append(violation.field)
        return seen
