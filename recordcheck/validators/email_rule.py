"""Email format rule — ``localpart@domain.tld``."""

import re
from dataclasses import dataclass
from typing import Any

from recordcheck.validators.base import BaseRule
from recordcheck.validators.models import ViolationKind

# RFC 5322 atext plus dots for the local part
_LOCAL_PART = r"[A-Za-z0-9!#$%&'*+/=?^_`{|}~.-]+"

# At least two labels; a label never starts or ends with a hyphen
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]*[A-Za-z0-9])?"

EMAIL_PATTERN = re.compile(rf"^{_LOCAL_PART}@{_LABEL}(?:\.{_LABEL})+$")


@dataclass(frozen=True)
class EmailFormat(BaseRule):
    """Fails unless the value has exactly one ``@``, a non-empty local part,
    and a dotted domain with non-empty labels on both sides of every dot.

    An empty string fails too; pair with ``Required`` to get a clearer
    message for absent values.
    """

    value_types = (str,)

    @property
    def kind(self) -> ViolationKind:
        return ViolationKind.EMAIL_FORMAT

    def check(self, value: Any) -> bool:
        return isinstance(value, str) and EMAIL_PATTERN.fullmatch(value) is not None

    def describe_failure(self, value: Any) -> str:
        return f"'{self.field}' is not a valid email address: '{value}'"
