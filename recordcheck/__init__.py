"""recordcheck — decode user records from JSON or XML and validate them.

Two validation paths share one result shape:

    from recordcheck import check, load_schema, parse_tree, TreeValidator

    result = check(raw_json, "json")                    # field rules
    schema = load_schema(schema_xml)
    result = TreeValidator().report(schema, parse_tree(raw_xml, "xml"))
"""

from recordcheck.decoder import decode
from recordcheck.exceptions import (
    DecodeError,
    RecordCheckError,
    RuleConfigurationError,
    StructureError,
    TreeMismatchError,
    TreeValidationError,
)
from recordcheck.models.record import Format, Record
from recordcheck.tree import MatchPolicy, Node, TreeValidator, load_schema, parse_tree, validate_tree
from recordcheck.validators import (
    ConstraintValidator,
    EmailFormat,
    Range,
    Required,
    RuleSet,
    ValidationResult,
    Violation,
    ViolationKind,
    check,
    default_user_rules,
    validate,
)

__version__ = "1.0.0"

__all__ = [
    "ConstraintValidator",
    "DecodeError",
    "EmailFormat",
    "Format",
    "MatchPolicy",
    "Node",
    "Range",
    "RecordCheckError",
    "Record",
    "Required",
    "RuleConfigurationError",
    "RuleSet",
    "StructureError",
    "TreeMismatchError",
    "TreeValidationError",
    "TreeValidator",
    "ValidationResult",
    "Violation",
    "ViolationKind",
    "check",
    "decode",
    "default_user_rules",
    "load_schema",
    "parse_tree",
    "validate",
    "validate_tree",
]
