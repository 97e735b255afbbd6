import io

from telemetry_sdk.attributes import write_attributes_field
from telemetry_sdk.utils import (
    JSONObjectWriter,
    duration_to_milliseconds,
    to_milliseconds,
)

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime, timedelta
    from typing import Any
    from typing import Iterable
    from typing import Iterator
    from typing import Optional
    from typing import Sequence
    from typing import Tuple

    from telemetry_sdk._types import Attributes, RawJSON
    from telemetry_sdk.metrics import Metric


class MetricCommonBlock:
    """Fields shared by every metric of a batch, sent once per batch.

    A common block may be shared by several batches (the halves of a split
    batch hold the very same object), so it must not be modified once handed
    to the SDK.
    """

    __slots__ = ("timestamp", "interval", "attributes", "attributes_json")

    def __init__(
        self,
        timestamp: "Optional[datetime]" = None,
        interval: "Optional[timedelta]" = None,
        attributes: "Optional[Attributes]" = None,
        attributes_json: "Optional[RawJSON]" = None,
    ) -> None:
        self.timestamp = timestamp
        self.interval = interval
        self.attributes = dict(attributes) if attributes is not None else None
        self.attributes_json = attributes_json

    def write_json(self, writer: "JSONObjectWriter") -> None:
        if self.timestamp is not None:
            writer.int_field("timestamp", to_milliseconds(self.timestamp))
        if self.interval:
            writer.int_field("interval.ms", duration_to_milliseconds(self.interval))
        write_attributes_field(writer, self.attributes, self.attributes_json)

    def to_json(self) -> bytes:
        out = io.BytesIO()
        out.write(b"{")
        self.write_json(JSONObjectWriter(out))
        out.write(b"}")
        return out.getvalue()

    def __repr__(self) -> str:
        return "<MetricCommonBlock timestamp=%r interval=%r>" % (
            self.timestamp,
            self.interval,
        )


class Batch:
    """A common block paired with the metrics it applies to.

    Metrics keep their insertion order all the way into the payload.
    """

    __slots__ = ("common", "metrics")

    def __init__(
        self,
        metrics: "Iterable[Metric]" = (),
        common: "Optional[MetricCommonBlock]" = None,
    ) -> None:
        self.common = common
        self.metrics = tuple(metrics)  # type: Tuple[Metric, ...]

    def __len__(self) -> int:
        return len(self.metrics)

    def __iter__(self) -> "Iterator[Metric]":
        return iter(self.metrics)

    def __repr__(self) -> str:
        return "<Batch common=%r metrics=%r>" % (self.common, self.metrics)

    def split(self) -> "Optional[Tuple[Batch, Batch]]":
        """Halves the batch by metric count.

        Returns ``None`` when there is nothing left to split (zero or one
        metric). Both halves reference this batch's common block; with an odd
        number of metrics the second half gets the extra one.
        """
        n = len(self.metrics)
        if n < 2:
            return None
        middle = n // 2
        return (
            Batch(self.metrics[:middle], common=self.common),
            Batch(self.metrics[middle:], common=self.common),
        )

    def serialize_into(self, f: "Any") -> None:
        f.write(b"{")
        writer = JSONObjectWriter(f)
        if self.common is not None:
            writer.raw_field("common", self.common.to_json())
        writer.raw_field("metrics", b"")
        f.write(b"[")
        for i, metric in enumerate(self.metrics):
            if i:
                f.write(b",")
            f.write(b"{")
            metric.write_json(JSONObjectWriter(f))
            f.write(b"}")
        f.write(b"]")
        f.write(b"}")


def serialize_batches_into(f: "Any", batches: "Sequence[Batch]") -> None:
    f.write(b"[")
    for i, batch in enumerate(batches):
        if i:
            f.write(b",")
        batch.serialize_into(f)
    f.write(b"]")


def serialize_batches(batches: "Sequence[Batch]") -> bytes:
    """Returns the uncompressed JSON envelope for the given batches."""
    out = io.BytesIO()
    serialize_batches_into(out, batches)
    return out.getvalue()
