from telemetry_sdk.consts import VERSION
from telemetry_sdk.envelope import Batch, MetricCommonBlock
from telemetry_sdk.metrics import Count, Gauge, Metric, Summary
from telemetry_sdk.request import MetricRequestFactory, Request, build_requests
from telemetry_sdk.utils import BadEndpoint, UnableToSplitError

__all__ = [  # noqa
    "BadEndpoint",
    "Batch",
    "Count",
    "Gauge",
    "Metric",
    "MetricCommonBlock",
    "MetricRequestFactory",
    "Request",
    "Summary",
    "UnableToSplitError",
    "VERSION",
    "build_requests",
]
