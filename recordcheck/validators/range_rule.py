"""Range rule — inclusive numeric bounds."""

from dataclasses import dataclass
from typing import Any

from recordcheck.exceptions import RuleConfigurationError
from recordcheck.validators.base import BaseRule
from recordcheck.validators.models import ViolationKind


@dataclass(frozen=True)
class Range(BaseRule):
    """Fails when ``value < min`` or ``value > max``. Both bounds are inclusive."""

    min: int = 0
    max: int = 0

    value_types = (int,)

    def __post_init__(self):
        if self.min > self.max:
            raise RuleConfigurationError(
                f"Range for '{self.field}' has min {self.min} greater than max {self.max}"
            )

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.RANGE

    def check(self, value: Any) -> bool:
        return self.min <= value <= self.max

    def describe_failure(self, value: Any) -> str:
        return f"'{self.field}' must be between {self.min} and {self.max}, got {value}"
