"""Schema loader — builds a schema tree from an XSD-like document.

Only element names and nesting are read. ``type=`` annotations such as
``xs:string`` or ``xs:positiveInteger`` are not enforced.
"""

from typing import Optional, Union

import structlog
from lxml import etree

from recordcheck.decoder import element_children, local_name, parse_xml
from recordcheck.exceptions import StructureError
from recordcheck.tree.nodes import Node, from_element

logger = structlog.get_logger()

SCHEMA_ROOT = "schema"
ELEMENT_DECLARATION = "element"

# Containers that may sit between an element and its child declarations
CONTENT_MODELS = {"complexType", "sequence", "all", "choice", "complexContent", "extension"}


def _declared_name(declaration: etree._Element) -> str:
    name = declaration.get("name") or declaration.get("ref")
    if not name:
        raise StructureError(
            f"element declaration on line {declaration.sourceline} has neither 'name' nor 'ref'"
        )
    # ref="xs:foo" → foo
    return name.rsplit(":", 1)[-1]


def _declared_children(container: etree._Element) -> list[Node]:
    children: list[Node] = []
    for child in element_children(container):
        tag = local_name(child)
        if tag == ELEMENT_DECLARATION:
            children.append(_declaration_to_node(child))
        elif tag in CONTENT_MODELS:
            children.extend(_declared_children(child))
    return children


def _declaration_to_node(declaration: etree._Element) -> Node:
    return Node(
        tag=_declared_name(declaration),
        children=tuple(_declared_children(declaration)),
    )


def schema_from_element(root: etree._Element, root_name: Optional[str] = None) -> Node:
    """Build a schema tree from a parsed schema document.

    Args:
        root: Root element of the schema document
        root_name: Which top-level element declaration to use; the first
            one when None

    Returns:
        The schema tree. A root that is not ``schema`` is taken as an
        example-shaped document whose own nesting is the schema.
    """
    if local_name(root) != SCHEMA_ROOT:
        return from_element(root)

    declarations = [
        child for child in element_children(root)
        if local_name(child) == ELEMENT_DECLARATION
    ]
    for declaration in declarations:
        if root_name is None or _declared_name(declaration) == root_name:
            schema = _declaration_to_node(declaration)
            logger.debug("schema_loaded", root=schema.tag, children=len(schema.children))
            return schema

    if root_name is None:
        raise StructureError("schema declares no top-level element")
    raise StructureError(f"schema declares no top-level element named '{root_name}'")


def load_schema(data: Union[bytes, str], root_name: Optional[str] = None) -> Node:
    """Parse a schema document and build its schema tree."""
    return schema_from_element(parse_xml(data), root_name=root_name)
