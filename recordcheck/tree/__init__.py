"""Tree validation — structural checks of generic labeled trees."""

from recordcheck.tree.nodes import Node, TreeNode, from_element, from_json, node, parse_tree
from recordcheck.tree.schema_loader import load_schema, schema_from_element
from recordcheck.tree.validator import MatchPolicy, TreeValidator, validate_tree

__all__ = [
    "MatchPolicy",
    "Node",
    "TreeNode",
    "TreeValidator",
    "from_element",
    "from_json",
    "load_schema",
    "node",
    "parse_tree",
    "schema_from_element",
    "validate_tree",
]
