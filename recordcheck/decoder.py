"""Record Decoder — turns JSON or XML bytes into a ``Record``.

Decoding is a format → decoder-function table, so validators never see the
input format. Absent fields take zero values here; whether that is
acceptable is the Required rule's business, not the decoder's.
"""

import json
import re
from typing import Any, Callable, Union

import structlog
from lxml import etree
from pydantic import ValidationError

from recordcheck.exceptions import DecodeError
from recordcheck.models.record import Format, Record

logger = structlog.get_logger()

RECORD_ROOT = "user"
RECORD_FIELDS = ("name", "age", "email")

_INTEGER = re.compile(r"[+-]?[0-9]+")


def _to_bytes(data: Union[bytes, str]) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def parse_xml(data: Union[bytes, str]) -> etree._Element:
    """Parse an XML document and return its root element.

    Entity resolution and network access are disabled; leading whitespace
    before the prolog is tolerated.
    """
    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        return etree.fromstring(_to_bytes(data).lstrip(), parser=parser)
    except etree.XMLSyntaxError as e:
        raise DecodeError(str(e), fmt=Format.XML.value) from e


def local_name(element: etree._Element) -> str:
    """Element tag without any namespace."""
    return etree.QName(element).localname


def element_children(element: etree._Element) -> list[etree._Element]:
    """Child elements only; unresolved entity references are skipped."""
    return [child for child in element if isinstance(child.tag, str)]


def _build_record(fields: dict, fmt: Format) -> Record:
    try:
        return Record.model_validate(fields)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise DecodeError(problems, fmt=fmt.value) from e


def _decode_json(data: bytes) -> Record:
    try:
        document: Any = json.loads(data)
    except (ValueError, RecursionError) as e:
        raise DecodeError(str(e), fmt=Format.JSON.value) from e

    if not isinstance(document, dict):
        raise DecodeError(
            f"expected a JSON object, got {type(document).__name__}",
            fmt=Format.JSON.value,
        )

    # null behaves like an absent key
    fields = {
        key: document[key]
        for key in RECORD_FIELDS
        if document.get(key) is not None
    }
    return _build_record(fields, Format.JSON)


def _decode_xml(data: bytes) -> Record:
    root = parse_xml(data)

    if local_name(root) != RECORD_ROOT:
        raise DecodeError(
            f"expected root element <{RECORD_ROOT}>, got <{local_name(root)}>",
            fmt=Format.XML.value,
        )

    fields: dict[str, Any] = {}
    for child in element_children(root):
        tag = local_name(child)
        if tag in RECORD_FIELDS:
            # Repeated elements: the last one wins
            fields[tag] = "".join(child.itertext())

    age_text = fields.get("age", "").strip()
    if not age_text:
        fields.pop("age", None)
    elif _INTEGER.fullmatch(age_text):
        fields["age"] = int(age_text)
    else:
        raise DecodeError(f"age: '{age_text}' is not an integer", fmt=Format.XML.value)

    return _build_record(fields, Format.XML)


DECODERS: dict[Format, Callable[[bytes], Record]] = {
    Format.JSON: _decode_json,
    Format.XML: _decode_xml,
}


def decode(data: Union[bytes, str], fmt: Union[Format, str]) -> Record:
    """Decode raw bytes in the given format into a Record.

    Args:
        data: Raw document (``str`` is encoded as UTF-8)
        fmt: ``Format.JSON``/``Format.XML`` or ``"json"``/``"xml"``

    Returns:
        The decoded, immutable Record

    Raises:
        DecodeError: unknown format, malformed syntax, or wrongly typed fields
    """
    try:
        fmt = Format(fmt.lower() if isinstance(fmt, str) else fmt)
    except ValueError as e:
        raise DecodeError(f"unsupported format '{fmt}'") from e

    record = DECODERS[fmt](_to_bytes(data))
    logger.debug("record_decoded", format=fmt.value, size=len(data))
    return record
