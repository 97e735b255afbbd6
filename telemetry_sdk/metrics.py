import io

from telemetry_sdk.attributes import write_attributes_field
from telemetry_sdk.utils import (
    JSONObjectWriter,
    duration_to_milliseconds,
    format_number,
    to_milliseconds,
)

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime, timedelta
    from typing import Optional

    from telemetry_sdk._types import Attributes, RawJSON


class Metric:
    """Base class of the data points that can be sent to the metric API.

    Instances are plain value containers; the SDK never modifies them.
    """

    __slots__ = ("name", "attributes", "attributes_json", "timestamp")

    TYPE = ""

    def __init__(
        self,
        name: str = "",
        attributes: "Optional[Attributes]" = None,
        attributes_json: "Optional[RawJSON]" = None,
        timestamp: "Optional[datetime]" = None,
    ) -> None:
        self.name = name
        self.attributes = dict(attributes) if attributes is not None else None
        self.attributes_json = attributes_json
        self.timestamp = timestamp

    def __repr__(self) -> str:
        return "<%s name=%r>" % (type(self).__name__, self.name)

    def _write_value(self, writer: "JSONObjectWriter") -> None:
        raise NotImplementedError()

    def _get_interval(self) -> "Optional[timedelta]":
        return None

    def write_json(self, writer: "JSONObjectWriter") -> None:
        writer.string_field("name", self.name)
        writer.string_field("type", self.TYPE)
        self._write_value(writer)
        if self.timestamp is not None:
            writer.int_field("timestamp", to_milliseconds(self.timestamp))
        interval = self._get_interval()
        if interval:
            writer.int_field("interval.ms", duration_to_milliseconds(interval))
        write_attributes_field(writer, self.attributes, self.attributes_json)

    def to_json(self) -> bytes:
        out = io.BytesIO()
        out.write(b"{")
        self.write_json(JSONObjectWriter(out))
        out.write(b"}")
        return out.getvalue()


class Count(Metric):
    """The number of occurrences of an event over ``interval``."""

    __slots__ = ("value", "interval")

    TYPE = "count"

    def __init__(
        self,
        name: str = "",
        value: float = 0,
        attributes: "Optional[Attributes]" = None,
        attributes_json: "Optional[RawJSON]" = None,
        timestamp: "Optional[datetime]" = None,
        interval: "Optional[timedelta]" = None,
    ) -> None:
        Metric.__init__(self, name, attributes, attributes_json, timestamp)
        self.value = value
        self.interval = interval

    def _write_value(self, writer: "JSONObjectWriter") -> None:
        writer.float_field("value", self.value)

    def _get_interval(self) -> "Optional[timedelta]":
        return self.interval


class Gauge(Metric):
    """A single value at a point in time. Gauges have no interval."""

    __slots__ = ("value",)

    TYPE = "gauge"

    def __init__(
        self,
        name: str = "",
        value: float = 0,
        attributes: "Optional[Attributes]" = None,
        attributes_json: "Optional[RawJSON]" = None,
        timestamp: "Optional[datetime]" = None,
    ) -> None:
        Metric.__init__(self, name, attributes, attributes_json, timestamp)
        self.value = value

    def _write_value(self, writer: "JSONObjectWriter") -> None:
        writer.float_field("value", self.value)


class Summary(Metric):
    """Pre-aggregated count, sum, min and max of a set of measurements taken
    over ``interval``.
    """

    __slots__ = ("count", "sum", "min", "max", "interval")

    TYPE = "summary"

    def __init__(
        self,
        name: str = "",
        count: float = 0,
        sum: float = 0,
        min: float = 0,
        max: float = 0,
        attributes: "Optional[Attributes]" = None,
        attributes_json: "Optional[RawJSON]" = None,
        timestamp: "Optional[datetime]" = None,
        interval: "Optional[timedelta]" = None,
    ) -> None:
        Metric.__init__(self, name, attributes, attributes_json, timestamp)
        self.count = count
        self.sum = sum
        self.min = min
        self.max = max
        self.interval = interval

    def _write_value(self, writer: "JSONObjectWriter") -> None:
        writer.raw_field(
            "value",
            b'{"sum":%s,"count":%s,"min":%s,"max":%s}'
            % (
                format_number(self.sum),
                format_number(self.count),
                format_number(self.min),
                format_number(self.max),
            ),
        )

    def _get_interval(self) -> "Optional[timedelta]":
        return self.interval
