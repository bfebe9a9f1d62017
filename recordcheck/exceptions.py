"""Exception hierarchy for decoding and structural validation.

Rule violations are values (see ``recordcheck.validators.models.Violation``),
never exceptions. Everything here is terminal for the call that raised it.
"""

from typing import Optional


class RecordCheckError(Exception):
    """Base class for all recordcheck errors."""


class DecodeError(RecordCheckError):
    """Raw bytes could not be turned into a record or a tree."""

    def __init__(self, message: str, fmt: Optional[str] = None):
        self.fmt = fmt
        prefix = f"error decoding {fmt}: " if fmt else ""
        super().__init__(f"{prefix}{message}")


class RuleConfigurationError(RecordCheckError, ValueError):
    """A rule names an unknown field or a field of the wrong type."""


class TreeValidationError(RecordCheckError):
    """Base class for tree validation failures."""

    path: str = "/"


class StructureError(TreeValidationError):
    """A schema or data tree is missing its root or is otherwise unusable."""

    def __init__(self, message: str, path: str = "/"):
        self.path = path
        super().__init__(message)


class TreeMismatchError(TreeValidationError):
    """The data tree does not conform to the schema tree."""

    def __init__(
        self,
        kind: str,
        message: str,
        path: str,
        expected: Optional[str] = None,
        actual: Optional[str] = None,
    ):
        self.kind = kind
        self.path = path
        self.expected = expected
        self.actual = actual
        super().__init__(message)
