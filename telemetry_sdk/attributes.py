"""
Encoding of metric and common block attributes.

Attributes come either as a mapping of scalar values, which is encoded here,
or as a pre-serialized JSON object which is trusted and copied into the
payload verbatim. When both are given the pre-serialized JSON wins.
"""

import io
import numbers

from telemetry_sdk.utils import JSONObjectWriter, get_type_name

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any
    from typing import Optional

    from telemetry_sdk._types import Attributes, RawJSON


EMPTY_OBJECT = b"{}"


def raw_json_bytes(attributes_json: "Optional[RawJSON]") -> "Optional[bytes]":
    if not attributes_json:
        return None
    if isinstance(attributes_json, str):
        return attributes_json.encode("utf-8")
    return bytes(attributes_json)


def write_attribute(writer: "JSONObjectWriter", key: str, value: "Any") -> None:
    # bool is a subclass of int and has to be checked first
    if isinstance(value, str):
        writer.string_field(key, value)
    elif isinstance(value, bool):
        writer.bool_field(key, value)
    elif isinstance(value, numbers.Integral):
        writer.int_field(key, value)
    elif isinstance(value, numbers.Real):
        writer.float_field(key, value)
    else:
        writer.string_field(key, get_type_name(type(value)) or "")


def encode_attributes(
    attributes: "Optional[Attributes]" = None,
    attributes_json: "Optional[RawJSON]" = None,
) -> bytes:
    """Returns the attributes as a JSON object.

    Raw JSON is not validated. Malformed input produces a malformed payload
    rather than an error.
    """
    raw = raw_json_bytes(attributes_json)
    if raw is not None:
        return raw

    out = io.BytesIO()
    out.write(b"{")
    if attributes:
        writer = JSONObjectWriter(out)
        for key, value in attributes.items():
            write_attribute(writer, str(key), value)
    out.write(b"}")
    return out.getvalue()


def write_attributes_field(
    writer: "JSONObjectWriter",
    attributes: "Optional[Attributes]",
    attributes_json: "Optional[RawJSON]",
) -> None:
    """Adds an ``attributes`` field unless the encoded set is empty."""
    encoded = encode_attributes(attributes, attributes_json)
    if encoded != EMPTY_OBJECT:
        writer.raw_field("attributes", encoded)
