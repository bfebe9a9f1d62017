"""
Record Decoder Tests

Covers JSON and XML decoding into Record, zero-value defaults for absent
fields, and DecodeError for malformed or wrongly typed input.
"""

import pytest
from pydantic import ValidationError

from recordcheck.decoder import decode
from recordcheck.exceptions import DecodeError
from recordcheck.models.record import Format, Record


def test_decode_sample_json(json_user):
    """The sample JSON payload decodes to John's record."""
    record = decode(json_user, Format.JSON)

    assert record == Record(name="John", age=30, email="john@example.com")


def test_decode_sample_xml(xml_user):
    """The sample XML payload decodes even with whitespace before the prolog."""
    record = decode(xml_user, "xml")

    assert record == Record(name="Jane", age=25, email="jane@example.com")


def test_decode_accepts_str_and_uppercase_format():
    record = decode('{"name": "John", "age": 30, "email": "john@example.com"}', "JSON")

    assert record.name == "John"


def test_decoded_record_is_immutable(json_user):
    record = decode(json_user, "json")

    with pytest.raises(ValidationError):
        record.age = 99
    assert record.age == 30


def test_unknown_format_rejected():
    with pytest.raises(DecodeError, match="unsupported format 'yaml'"):
        decode(b"name: John", "yaml")


class TestJsonDecoding:
    """JSON-specific decoding rules."""

    def test_truncated_json_is_decode_error(self):
        """A truncated document never becomes a partially populated record."""
        with pytest.raises(DecodeError) as exc_info:
            decode(b'{"name":', "json")

        assert exc_info.value.fmt == "json"
        assert "error decoding json" in str(exc_info.value)

    def test_missing_keys_take_zero_values(self):
        assert decode(b"{}", "json") == Record(name="", age=0, email="")

    def test_null_behaves_like_missing(self):
        record = decode(b'{"name": null, "age": null, "email": "a@b.co"}', "json")

        assert record == Record(name="", age=0, email="a@b.co")

    def test_unknown_keys_ignored(self):
        record = decode(b'{"name": "John", "nickname": "Johnny"}', "json")

        assert record.name == "John"

    @pytest.mark.parametrize("age", ['"30"', "30.5", "true"])
    def test_wrongly_typed_age_is_decode_error(self, age):
        with pytest.raises(DecodeError, match="age"):
            decode(f'{{"name": "John", "age": {age}}}'.encode(), "json")

    def test_numeric_name_is_decode_error(self):
        with pytest.raises(DecodeError, match="name"):
            decode(b'{"name": 42}', "json")

    def test_non_object_document_is_decode_error(self):
        with pytest.raises(DecodeError, match="expected a JSON object, got list"):
            decode(b'[{"name": "John"}]', "json")


class TestXmlDecoding:
    """XML-specific decoding rules."""

    def test_malformed_xml_is_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            decode(b"<user><name>Jane</name>", "xml")

        assert exc_info.value.fmt == "xml"

    def test_wrong_root_is_decode_error(self):
        with pytest.raises(DecodeError, match="expected root element <user>, got <person>"):
            decode(b"<person><name>Jane</name></person>", "xml")

    def test_missing_children_take_zero_values(self):
        assert decode(b"<user><name>Jane</name></user>", "xml") == Record(name="Jane")

    def test_age_is_trimmed_and_converted(self):
        record = decode(b"<user><age> 42 </age></user>", "xml")

        assert record.age == 42

    def test_empty_age_is_zero(self):
        assert decode(b"<user><age></age></user>", "xml").age == 0

    def test_negative_age_decodes(self):
        """Range checks belong to the validator, not the decoder."""
        assert decode(b"<user><age>-3</age></user>", "xml").age == -3

    @pytest.mark.parametrize("age", ["abc", "2.5", "1_000"])
    def test_non_integer_age_is_decode_error(self, age):
        with pytest.raises(DecodeError, match="is not an integer"):
            decode(f"<user><age>{age}</age></user>".encode(), "xml")

    def test_repeated_element_last_wins(self):
        record = decode(b"<user><name>First</name><name>Last</name></user>", "xml")

        assert record.name == "Last"

    def test_comments_are_ignored(self):
        record = decode(b"<user><!-- primary --><name>Jane</name></user>", "xml")

        assert record.name == "Jane"


def test_deeply_nested_json_is_decode_error():
    """Nesting past the interpreter's recursion limit is still a decode failure."""
    deep = b"[" * 100_000 + b"]" * 100_000

    with pytest.raises(DecodeError) as exc_info:
        decode(deep, "json")

    assert exc_info.value.fmt == "json"
