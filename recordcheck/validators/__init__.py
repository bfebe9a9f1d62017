"""Record Validator — declarative field rules over decoded records.

Usage:
    from recordcheck.validators import ConstraintValidator, default_user_rules

    validator = ConstraintValidator(default_user_rules())
    result = validator.check(raw_bytes, "json")
    if not result.passed:
        # Present result.violations to the caller
"""

from recordcheck.validators.base import BaseRule
from recordcheck.validators.email_rule import EmailFormat
from recordcheck.validators.engine import (
    ConstraintValidator,
    RuleSet,
    check,
    default_user_rules,
    validate,
)
from recordcheck.validators.models import ValidationResult, Violation, ViolationKind
from recordcheck.validators.range_rule import Range
from recordcheck.validators.required_rule import Required

__all__ = [
    "BaseRule",
    "ConstraintValidator",
    "EmailFormat",
    "Range",
    "Required",
    "RuleSet",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "check",
    "default_user_rules",
    "validate",
]
