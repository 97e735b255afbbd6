import json
from decimal import Decimal
from fractions import Fraction

import pytest

from telemetry_sdk.attributes import encode_attributes


class Point:
    pass


@pytest.mark.parametrize(
    "value, expected",
    [
        ("string", '"string"'),
        ("", '""'),
        ('quo"te', '"quo\\"te"'),
        (True, "true"),
        (False, "false"),
        (1, "1"),
        (0, "0"),
        (-42, "-42"),
        (2**64, "18446744073709551616"),
        (1.0, "1"),
        (1.5, "1.5"),
        (-0.25, "-0.25"),
        (0.1, "0.1"),
        (1 / 3, "0.3333333333333333"),
        (1e300, "1e+300"),
        (float("nan"), "null"),
        (float("inf"), "null"),
        (Fraction(1, 2), "0.5"),
        (lambda: None, '"function"'),
        (None, '"NoneType"'),
        ([1, 2], '"list"'),
        (Decimal("1.5"), '"Decimal"'),
        (Point(), '"Point"'),
    ],
)
def test_attribute_value_coercion(value, expected):
    assert encode_attributes({"key": value}) == ('{"key":%s}' % expected).encode()


def test_bool_is_not_encoded_as_integer():
    assert encode_attributes({"a": True, "b": 1}) == b'{"a":true,"b":1}'


def test_encoded_attributes_are_valid_json():
    attributes = {
        "str": "sé\n",
        "bool": False,
        "int": 7,
        "float": 2.5,
        "other": object(),
    }
    assert json.loads(encode_attributes(attributes)) == {
        "str": "sé\n",
        "bool": False,
        "int": 7,
        "float": 2.5,
        "other": "object",
    }


def test_empty_attributes():
    assert encode_attributes() == b"{}"
    assert encode_attributes({}) == b"{}"
    assert encode_attributes(None, b"") == b"{}"


def test_raw_json_wins_over_mapping():
    assert (
        encode_attributes({"zip": "zap"}, b'{"zing":"zang"}') == b'{"zing":"zang"}'
    )


def test_raw_json_as_text():
    assert encode_attributes(None, '{"zing":"zang"}') == b'{"zing":"zang"}'


def test_raw_json_is_not_validated():
    assert encode_attributes(None, b'{"broken"') == b'{"broken"'


def test_non_string_keys_are_stringified():
    assert json.loads(encode_attributes({1: "one"})) == {"1": "one"}
