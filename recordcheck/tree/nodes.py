"""Generic labeled trees and adapters that build them from documents.

Tree validation only needs "has a tag and ordered children", so anything
exposing those two attributes is a ``TreeNode``. ``Node`` is the concrete
immutable implementation produced by the adapters below.
"""

import json
from typing import Any, Protocol, Sequence, Union, runtime_checkable

from lxml import etree
from pydantic import BaseModel

from recordcheck.decoder import element_children, local_name, parse_xml
from recordcheck.exceptions import DecodeError
from recordcheck.models.record import Format

JSON_ARRAY_ITEM = "item"


@runtime_checkable
class TreeNode(Protocol):
    """Anything with a tag and ordered children."""

    tag: str
    children: Sequence["TreeNode"]


class Node(BaseModel):
    """An immutable labeled tree node."""

    tag: str
    children: tuple["Node", ...] = ()

    model_config = {"frozen": True}

    def child_tags(self) -> list[str]:
        return [child.tag for child in self.children]


def node(tag: str, *children: Union["Node", str]) -> Node:
    """Shorthand builder: bare strings become leaf nodes.

    ``node("user", "name", "age", node("address", "city"))``
    """
    return Node(
        tag=tag,
        children=tuple(
            Node(tag=child) if isinstance(child, str) else child
            for child in children
        ),
    )


def from_element(element: etree._Element) -> Node:
    """Convert an lxml element (and its subtree) into a Node.

    Namespace prefixes are dropped; text, attributes, comments and
    processing instructions are not part of the structure.
    """
    return Node(
        tag=local_name(element),
        children=tuple(from_element(child) for child in element_children(element)),
    )


def from_json(value: Any, tag: str) -> Node:
    """Convert decoded JSON into a Node tagged ``tag``.

    Object keys become child tags. An array under a key becomes one child per
    item, each tagged with that key, like a repeated XML element. Array items
    anywhere else are tagged ``item``. Scalars are leaves.
    """
    if isinstance(value, dict):
        children = []
        for key, item in value.items():
            if isinstance(item, list):
                children.extend(from_json(element, key) for element in item)
            else:
                children.append(from_json(item, key))
        return Node(tag=tag, children=tuple(children))

    if isinstance(value, list):
        return Node(
            tag=tag,
            children=tuple(from_json(item, JSON_ARRAY_ITEM) for item in value),
        )

    return Node(tag=tag)


def parse_tree(
    data: Union[bytes, str],
    fmt: Union[Format, str],
    root_tag: str = "root",
) -> Node:
    """Parse a JSON or XML document into a Node.

    XML keeps its own root tag; a JSON document has none, so it is given
    ``root_tag``.
    """
    try:
        fmt = Format(fmt.lower() if isinstance(fmt, str) else fmt)
    except ValueError as e:
        raise DecodeError(f"unsupported format '{fmt}'") from e

    if fmt is Format.XML:
        return from_element(parse_xml(data))

    try:
        document = json.loads(data)
    except (ValueError, RecursionError) as e:
        raise DecodeError(str(e), fmt=Format.JSON.value) from e

    try:
        return from_json(document, root_tag)
    except RecursionError as e:
        raise DecodeError("document is nested too deeply", fmt=Format.JSON.value) from e
