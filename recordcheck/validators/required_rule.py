"""Required rule — the field must not hold its type's zero value."""

from dataclasses import dataclass
from typing import Any

from recordcheck.validators.base import BaseRule
from recordcheck.validators.models import ViolationKind


@dataclass(frozen=True)
class Required(BaseRule):
    """Fails when the value equals its type's zero value.

    Decoding fills absent fields with zero values, so an absent field and a
    present-but-empty one (``""``, ``0``) are reported the same way.
    """

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.REQUIRED

    def check(self, value: Any) -> bool:
        if value is None:
            return False
        return value != type(value)()

    def describe_failure(self, value: Any) -> str:
        return f"'{self.field}' is required"
