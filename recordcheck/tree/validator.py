"""Tree Validator — structural conformance of a data tree to a schema tree.

Both trees are read-only ``TreeNode`` values. The first mismatch is raised
immediately; ``TreeValidator.report`` turns that outcome into the same
``ValidationResult`` shape the record path produces.

Child matching policies:
    by_tag      Schema children are matched to data children with the same
                tag, in occurrence order. Order in the data does not matter.
                Missing and surplus occurrences are reported by name; tags
                the schema never declares are ignored unless
                ``allow_extra=False``.
    positional  The Nth schema child is checked against the Nth data child.
                Any difference in child count is a mismatch.
"""

from collections import Counter
from enum import Enum
from typing import Optional, Sequence, Union

import structlog

from recordcheck.config import Settings, get_settings
from recordcheck.exceptions import StructureError, TreeMismatchError, TreeValidationError
from recordcheck.tree.nodes import TreeNode
from recordcheck.validators.models import ValidationResult, Violation, ViolationKind

logger = structlog.get_logger()


class MatchPolicy(str, Enum):
    """How schema children are paired with data children."""

    BY_TAG = "by_tag"
    POSITIONAL = "positional"


def _child_path(parent: str, tag: str, occurrence: int, declared: int) -> str:
    # 1-based index only when the schema declares the tag more than once
    if declared > 1:
        return f"{parent}/{tag}[{occurrence + 1}]"
    return f"{parent}/{tag}"


class TreeValidator:
    """Checks data trees against schema trees under a fixed policy.

    Read-only after init: build once, share freely between callers.
    """

    def __init__(
        self,
        policy: Union[MatchPolicy, str] = MatchPolicy.BY_TAG,
        allow_extra: bool = True,
    ):
        self.policy = MatchPolicy(policy)
        self.allow_extra = allow_extra

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "TreeValidator":
        settings = settings or get_settings()
        return cls(policy=settings.TREE_MATCH_POLICY, allow_extra=settings.TREE_ALLOW_EXTRA)

    def validate(self, schema: Optional[TreeNode], data: Optional[TreeNode]) -> None:
        """Validate ``data`` against ``schema``.

        Raises:
            StructureError: either root is missing
            TreeMismatchError: the first structural difference found
        """
        if schema is None or not isinstance(schema, TreeNode):
            raise StructureError("invalid schema document: no root element")
        if data is None or not isinstance(data, TreeNode):
            raise StructureError("invalid data document: no root element")

        self._validate_node(schema, data, f"/{schema.tag}")
        logger.debug("tree_validated", root=schema.tag, policy=self.policy.value)

    def report(self, schema: Optional[TreeNode], data: Optional[TreeNode]) -> ValidationResult:
        """Validate and return a result with at most one violation."""
        try:
            self.validate(schema, data)
        except TreeMismatchError as e:
            return ValidationResult.build([
                Violation(field=e.path, kind=e.kind, message=str(e), evidence=e.actual)
            ])
        except TreeValidationError as e:
            return ValidationResult.build([
                Violation(field=e.path, kind=ViolationKind.STRUCTURE, message=str(e))
            ])
        return ValidationResult.build([])

    # ── Recursion ──

    def _validate_node(self, schema: TreeNode, data: TreeNode, path: str) -> None:
        if schema.tag != data.tag:
            raise TreeMismatchError(
                kind=ViolationKind.TAG_MISMATCH,
                message=f"element tags mismatch at {path}: expected '{schema.tag}', got '{data.tag}'",
                path=path,
                expected=schema.tag,
                actual=data.tag,
            )

        schema_children = [child for child in schema.children if child is not None]
        data_children = [child for child in data.children if child is not None]

        if self.policy is MatchPolicy.POSITIONAL:
            self._match_positional(schema_children, data_children, path)
        else:
            self._match_by_tag(schema_children, data_children, path)

    def _match_by_tag(
        self,
        schema_children: Sequence[TreeNode],
        data_children: Sequence[TreeNode],
        path: str,
    ) -> None:
        declared = Counter(child.tag for child in schema_children)
        by_tag: dict[str, list[TreeNode]] = {}
        for child in data_children:
            by_tag.setdefault(child.tag, []).append(child)

        seen: Counter = Counter()
        for schema_child in schema_children:
            tag = schema_child.tag
            occurrence = seen[tag]
            seen[tag] += 1
            child_path = _child_path(path, tag, occurrence, declared[tag])

            candidates = by_tag.get(tag, [])
            if occurrence >= len(candidates):
                raise TreeMismatchError(
                    kind=ViolationKind.MISSING_ELEMENT,
                    message=f"missing element '{tag}' under {path}",
                    path=child_path,
                    expected=tag,
                )
            self._validate_node(schema_child, candidates[occurrence], child_path)

        # Surplus occurrences of declared tags, then undeclared tags
        for tag, count in declared.items():
            found = len(by_tag.get(tag, []))
            if found > count:
                raise TreeMismatchError(
                    kind=ViolationKind.DUPLICATE_ELEMENT,
                    message=f"element '{tag}' appears {found} times under {path}, expected {count}",
                    path=f"{path}/{tag}",
                    expected=tag,
                    actual=tag,
                )

        if not self.allow_extra:
            for child in data_children:
                if child.tag not in declared:
                    raise TreeMismatchError(
                        kind=ViolationKind.UNEXPECTED_ELEMENT,
                        message=f"unexpected element '{child.tag}' under {path}",
                        path=f"{path}/{child.tag}",
                        actual=child.tag,
                    )

    def _match_positional(
        self,
        schema_children: Sequence[TreeNode],
        data_children: Sequence[TreeNode],
        path: str,
    ) -> None:
        declared = Counter(child.tag for child in schema_children)
        seen: Counter = Counter()

        for index, schema_child in enumerate(schema_children):
            tag = schema_child.tag
            child_path = _child_path(path, tag, seen[tag], declared[tag])
            seen[tag] += 1

            if index >= len(data_children):
                raise TreeMismatchError(
                    kind=ViolationKind.MISSING_ELEMENT,
                    message=(
                        f"missing element '{tag}' under {path}: expected "
                        f"{len(schema_children)} children, got {len(data_children)}"
                    ),
                    path=child_path,
                    expected=tag,
                )
            self._validate_node(schema_child, data_children[index], child_path)

        if len(data_children) > len(schema_children):
            surplus = data_children[len(schema_children)]
            raise TreeMismatchError(
                kind=ViolationKind.UNEXPECTED_ELEMENT,
                message=(
                    f"unexpected element '{surplus.tag}' under {path}: expected "
                    f"{len(schema_children)} children, got {len(data_children)}"
                ),
                path=f"{path}/{surplus.tag}",
                actual=surplus.tag,
            )


def validate_tree(
    schema: Optional[TreeNode],
    data: Optional[TreeNode],
    policy: Union[MatchPolicy, str] = MatchPolicy.BY_TAG,
    allow_extra: bool = True,
) -> None:
    """Validate one data tree against one schema tree. Raises on the first mismatch."""
    TreeValidator(policy=policy, allow_extra=allow_extra).validate(schema, data)
