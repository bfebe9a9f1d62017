"""Validation Engine — runs a rule set over a record and produces a result.

This is the main entry point for record validation. Every rule is
evaluated; violations are collected in declaration order.

Usage:
    validator = ConstraintValidator(default_user_rules())
    result = validator.validate(record)
    if not result.passed:
        # Present result.violations to the caller
"""

import time
from typing import Iterable, Iterator, Optional, Union

import structlog

from recordcheck.config import Settings, get_settings
from recordcheck.decoder import decode
from recordcheck.exceptions import RuleConfigurationError
from recordcheck.models.record import Format, Record
from recordcheck.validators.base import BaseRule
from recordcheck.validators.models import ValidationResult, Violation

from recordcheck.validators.required_rule import Required
from recordcheck.validators.range_rule import Range
from recordcheck.validators.email_rule import EmailFormat

logger = structlog.get_logger()


class RuleSet:
    """An ordered, read-only collection of field rules.

    Every rule is checked against the ``Record`` fields when the set is
    built, so a misconfigured rule fails at startup rather than mid-call.
    """

    __slots__ = ("_rules",)

    def __init__(self, rules: Iterable[BaseRule]):
        rules = tuple(rules)
        for rule in rules:
            field_info = Record.model_fields.get(rule.field)
            if field_info is None:
                raise RuleConfigurationError(
                    f"{type(rule).__name__} names unknown field '{rule.field}'"
                )
            if not rule.supports(field_info.annotation):
                raise RuleConfigurationError(
                    f"{type(rule).__name__} cannot be applied to "
                    f"'{rule.field}' of type {field_info.annotation.__name__}"
                )
        self._rules = rules

    def __iter__(self) -> Iterator[BaseRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)!r})"


def default_user_rules(settings: Optional[Settings] = None) -> RuleSet:
    """The standard user rules: name and email required, age in range, email well-formed."""
    settings = settings or get_settings()
    return RuleSet([
        Required("name"),
        Range("age", min=settings.AGE_MIN, max=settings.AGE_MAX),
        Required("email"),
        EmailFormat("email"),
    ])


RuleSource = Union[RuleSet, Iterable[BaseRule], None]


def _as_rule_set(rules: RuleSource) -> RuleSet:
    if rules is None:
        return default_user_rules()
    if isinstance(rules, RuleSet):
        return rules
    return RuleSet(rules)


class ConstraintValidator:
    """Runs a fixed rule set against records.

    Design principles:
        - Deterministic: same record → same result
        - Not fail-fast: every rule runs, so callers see every problem at once
        - Read-only after init: build once, share freely between callers
    """

    def __init__(self, rules: RuleSource = None):
        """Initialize with the default user rules or a custom rule list."""
        self._rules = _as_rule_set(rules)

    @property
    def rules(self) -> RuleSet:
        return self._rules

    def validate(self, record: Record) -> ValidationResult:
        """Run all rules against the record and produce a result."""
        start_time = time.perf_counter()

        violations: list[Violation] = []
        for rule in self._rules:
            violation = rule.evaluate(record)
            if violation is not None:
                violations.append(violation)

        result = ValidationResult.build(violations)

        logger.debug(
            "validation_complete",
            passed=result.passed,
            summary=result.summary,
            rules=len(self._rules),
            duration_ms=round((time.perf_counter() - start_time) * 1000, 3),
        )

        return result

    def check(self, data: Union[bytes, str], fmt: Union[Format, str]) -> ValidationResult:
        """Decode raw input and validate it. DecodeError propagates."""
        return self.validate(decode(data, fmt))


def validate(record: Record, rules: RuleSource = None) -> ValidationResult:
    """Validate one record against a rule set (default user rules when None)."""
    return ConstraintValidator(rules).validate(record)


def check(
    data: Union[bytes, str],
    fmt: Union[Format, str],
    rules: RuleSource = None,
) -> ValidationResult:
    """Decode raw input and validate the resulting record."""
    return ConstraintValidator(rules).check(data, fmt)
