import itertools
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any, Dict, Optional


DEFAULT_METRICS_ENDPOINT = "https://metric-api.newrelic.com/metric/v1"

# The ingest API rejects request bodies larger than 1MB after compression.
MAX_COMPRESSED_SIZE_BYTES = 1 << 20

DEFAULT_COMPRESSION_LEVEL = 6

API_KEY_HEADER = "Api-Key"
LICENSE_KEY_HEADER = "X-License-Key"

API_KEY_ENV = "TELEMETRY_SDK_API_KEY"
LICENSE_KEY_ENV = "TELEMETRY_SDK_LICENSE_KEY"
ENDPOINT_ENV = "TELEMETRY_SDK_METRICS_ENDPOINT"


class RequestFactoryConstructor:
    """Keyword arguments accepted by
    :py:class:`telemetry_sdk.request.MetricRequestFactory`.

    The signature of ``__init__`` is the single source of the option names and
    their defaults; ``DEFAULT_OPTIONS`` is derived from it.
    """

    def __init__(
        self,
        *,
        api_key: "Optional[str]" = None,
        license_key: "Optional[str]" = None,
        no_default_key: bool = False,
        endpoint: "Optional[str]" = None,
        user_agent_product: "Optional[str]" = None,
        user_agent_product_version: "Optional[str]" = None,
        max_payload_size: int = MAX_COMPRESSED_SIZE_BYTES,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
        debug: bool = False,
    ) -> None:
        """Initialize the request factory with the given options.

        :param api_key: The API (insert) key sent in the ``Api-Key`` header.
            Falls back to the ``TELEMETRY_SDK_API_KEY`` environment variable.

        :param license_key: The license key sent in the ``X-License-Key``
            header. Falls back to the ``TELEMETRY_SDK_LICENSE_KEY`` environment
            variable.

        :param no_default_key: Build requests without any key header. Useful
            when a proxy in front of the ingest API adds credentials, and in
            tests.

        :param endpoint: Full URL of the metric ingest API. Falls back to the
            ``TELEMETRY_SDK_METRICS_ENDPOINT`` environment variable, then to
            the public metric API.

        :param user_agent_product: Name of the product embedding the SDK,
            appended to the ``User-Agent`` header.

        :param user_agent_product_version: Version of that product.

        :param max_payload_size: Maximum size in bytes of a compressed request
            body. Payloads above it are split into several requests.

        :param compression_level: gzip compression level, from 0 to 9.

        :param debug: Print debug information about request construction to
            stderr.
        """
        pass


def _get_default_options() -> "Dict[str, Any]":
    import inspect

    a = inspect.getfullargspec(RequestFactoryConstructor.__init__)
    defaults = a.defaults or ()
    kwonlydefaults = a.kwonlydefaults or {}

    return dict(
        itertools.chain(
            zip(a.args[-len(defaults) :], defaults),
            kwonlydefaults.items(),
        )
    )


DEFAULT_OPTIONS = _get_default_options()
del _get_default_options


VERSION = "0.1.0"

USER_AGENT = "TelemetrySDK-Python/%s" % VERSION
