import gzip
import io
import json
import logging
import math
from datetime import datetime, timedelta, timezone

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any
    from typing import Optional
    from typing import Union


epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ONE_MILLISECOND = timedelta(milliseconds=1)


# The logger is created here but initialized in the debug support module
logger = logging.getLogger("telemetry_sdk.errors")


class BadEndpoint(ValueError):
    """Raised on invalid endpoint URLs."""


class UnableToSplitError(Exception):
    """Raised when a payload is over the size limit but holds a single metric
    (or no metric at all), so halving it cannot make it fit.
    """

    def __init__(self, size: int, limit: int) -> None:
        Exception.__init__(
            self,
            "unable to split large payload further (%s bytes, limit %s bytes)"
            % (size, limit),
        )
        self.size = size
        self.limit = limit


def json_dumps(data: "Any") -> bytes:
    """Serialize data into a compact JSON representation encoded as UTF-8."""
    return json.dumps(data, allow_nan=False, separators=(",", ":")).encode("utf-8")


def format_number(value: "Union[int, float]") -> bytes:
    """Render a number the way the ingest API expects it.

    Integral floats lose their fractional part (``100.0`` renders as ``100``)
    and non-finite floats render as ``null``.
    """
    if isinstance(value, int):
        return str(value).encode("ascii")
    value = float(value)
    if not math.isfinite(value):
        return b"null"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value)).encode("ascii")
    return repr(value).encode("ascii")


def to_milliseconds(value: "datetime") -> int:
    """Milliseconds since the Unix epoch. Naive datetimes are read as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - epoch) // _ONE_MILLISECOND


def duration_to_milliseconds(value: "timedelta") -> int:
    return value // _ONE_MILLISECOND


def get_type_name(cls: "Optional[type]") -> "Optional[str]":
    return getattr(cls, "__qualname__", None) or getattr(cls, "__name__", None)


def compress(data: bytes, level: int) -> bytes:
    body = io.BytesIO()
    # A fixed mtime keeps the output identical for identical input.
    with gzip.GzipFile(fileobj=body, mode="w", compresslevel=level, mtime=0) as f:
        f.write(data)
    return body.getvalue()


class JSONObjectWriter:
    """Writes the fields of one JSON object into a binary file object.

    Keys are written in call order, which is how the encoders keep the field
    order of the wire format fixed. The caller writes the braces.
    """

    def __init__(self, f: "Any") -> None:
        self.f = f
        self._needs_comma = False

    def _key(self, key: str) -> None:
        if self._needs_comma:
            self.f.write(b",")
        else:
            self._needs_comma = True
        self.f.write(json_dumps(key))
        self.f.write(b":")

    def raw_field(self, key: str, value: bytes) -> None:
        self._key(key)
        self.f.write(value)

    def string_field(self, key: str, value: str) -> None:
        self.raw_field(key, json_dumps(value))

    def bool_field(self, key: str, value: bool) -> None:
        self.raw_field(key, value and b"true" or b"false")

    def int_field(self, key: str, value: int) -> None:
        self.raw_field(key, str(int(value)).encode("ascii"))

    def float_field(self, key: str, value: float) -> None:
        self.raw_field(key, format_number(value))
