"""
Schema Loader and Tree Adapter Tests

Schema documents and data documents (XML and JSON) become generic trees
that the tree validator can compare.
"""

import pytest

from recordcheck.exceptions import DecodeError, StructureError, TreeMismatchError
from recordcheck.tree import (
    Node,
    TreeValidator,
    from_json,
    load_schema,
    node,
    parse_tree,
    validate_tree,
)


def test_xsd_schema_becomes_user_tree(xsd_user):
    """Element names and nesting are kept; type annotations are not."""
    assert load_schema(xsd_user) == node("user", "name", "age", "email")


def test_sample_xml_conforms_to_schema(xsd_user, xml_user):
    validate_tree(load_schema(xsd_user), parse_tree(xml_user, "xml"))


def test_xml_missing_element_is_reported(xsd_user):
    data = parse_tree(b"<user><name>Jane</name><age>25</age></user>", "xml")

    with pytest.raises(TreeMismatchError, match="missing element 'email'"):
        validate_tree(load_schema(xsd_user), data)


def test_sample_json_conforms_with_schema_root(xsd_user, json_user):
    schema = load_schema(xsd_user)

    result = TreeValidator().report(schema, parse_tree(json_user, "json", root_tag=schema.tag))

    assert result.passed


def test_example_shaped_schema(xml_user):
    """A schema whose root is not <schema> is read as an example document."""
    schema = load_schema(b"<user><name/><age/><email/></user>")

    assert schema == node("user", "name", "age", "email")
    validate_tree(schema, parse_tree(xml_user, "xml"))


def test_nested_declarations_and_refs():
    schema = load_schema(b"""
        <xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
            <xs:element name="user">
                <xs:complexType>
                    <xs:all>
                        <xs:element ref="xs:name"/>
                        <xs:element name="address">
                            <xs:complexType>
                                <xs:sequence>
                                    <xs:element name="city"/>
                                    <xs:choice>
                                        <xs:element name="zip"/>
                                    </xs:choice>
                                </xs:sequence>
                            </xs:complexType>
                        </xs:element>
                    </xs:all>
                </xs:complexType>
            </xs:element>
        </xs:schema>
    """)

    assert schema == node("user", "name", node("address", "city", "zip"))


def test_root_name_selects_top_level_element():
    document = b"""
        <xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
            <xs:element name="admin"><xs:complexType><xs:sequence>
                <xs:element name="role"/>
            </xs:sequence></xs:complexType></xs:element>
            <xs:element name="user"/>
        </xs:schema>
    """

    assert load_schema(document).tag == "admin"
    assert load_schema(document, root_name="user") == Node(tag="user")
    with pytest.raises(StructureError, match="no top-level element named 'guest'"):
        load_schema(document, root_name="guest")


def test_empty_schema_is_structure_error():
    with pytest.raises(StructureError, match="declares no top-level element"):
        load_schema(b'<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema"/>')


def test_unnamed_declaration_is_structure_error():
    with pytest.raises(StructureError, match="neither 'name' nor 'ref'"):
        load_schema(b'<schema><element type="string"/></schema>')


def test_malformed_schema_is_decode_error():
    with pytest.raises(DecodeError):
        load_schema(b"<xs:schema>")


class TestTreeAdapters:

    def test_xml_namespaces_are_dropped(self):
        tree = parse_tree(b'<u:user xmlns:u="urn:users"><u:name/></u:user>', "xml")

        assert tree == node("user", "name")

    def test_json_objects_become_children(self):
        tree = from_json({"name": "John", "address": {"city": "Oslo"}}, "user")

        assert tree == node("user", "name", node("address", "city"))

    def test_json_arrays_repeat_their_key(self):
        tree = from_json({"phone": ["1", "2"], "tags": []}, "user")

        assert tree.child_tags() == ["phone", "phone"]

    def test_nested_json_arrays_use_item(self):
        assert from_json([1, [2]], "root") == node("root", "item", node("item", "item"))

    def test_malformed_json_is_decode_error(self):
        with pytest.raises(DecodeError):
            parse_tree(b'{"name":', "json")

    def test_unknown_format(self):
        with pytest.raises(DecodeError, match="unsupported format"):
            parse_tree(b"", "csv")


@pytest.mark.parametrize("depth", [600, 100_000])
def test_deeply_nested_json_tree_is_decode_error(depth):
    """Both the parser and the tree conversion reject excessive nesting."""
    deep = b"[" * depth + b"]" * depth

    with pytest.raises(DecodeError) as exc_info:
        parse_tree(deep, "json")

    assert exc_info.value.fmt == "json"
