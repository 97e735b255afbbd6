import io
import os

import urllib3

from telemetry_sdk.consts import (
    API_KEY_ENV,
    API_KEY_HEADER,
    DEFAULT_METRICS_ENDPOINT,
    DEFAULT_OPTIONS,
    ENDPOINT_ENV,
    LICENSE_KEY_ENV,
    LICENSE_KEY_HEADER,
    USER_AGENT,
)
from telemetry_sdk.envelope import Batch, serialize_batches
from telemetry_sdk.utils import BadEndpoint, UnableToSplitError, compress, logger

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any
    from typing import Callable
    from typing import Dict
    from typing import List
    from typing import Optional
    from typing import Sequence
    from typing import Tuple


def _get_options(**kwargs: "Any") -> "Dict[str, Any]":
    rv = dict(DEFAULT_OPTIONS)
    for key, value in kwargs.items():
        if key not in rv:
            raise TypeError("Unknown option %r" % (key,))
        rv[key] = value

    if rv["api_key"] is None:
        rv["api_key"] = os.environ.get(API_KEY_ENV)

    if rv["license_key"] is None:
        rv["license_key"] = os.environ.get(LICENSE_KEY_ENV)

    if rv["endpoint"] is None:
        rv["endpoint"] = os.environ.get(ENDPOINT_ENV) or DEFAULT_METRICS_ENDPOINT

    return rv


def _parse_endpoint(value: str) -> str:
    url = urllib3.util.parse_url(value)
    if url.scheme not in ("http", "https"):
        raise BadEndpoint("Unsupported scheme %r" % url.scheme)
    if not url.host:
        raise BadEndpoint("Missing host in endpoint %r" % value)
    return url.url


class Request:
    """A ready to send HTTP request holding a compressed metric payload.

    The body is kept as bytes so it can be read any number of times, for
    example once to inspect it and once more to send it.
    """

    method = "POST"

    def __init__(
        self,
        url: str,
        body: bytes,
        headers: "Optional[Dict[str, str]]" = None,
    ) -> None:
        self.url = url
        self.body = body
        self.headers = urllib3.HTTPHeaderDict(headers or {})
        self.headers["Content-Length"] = str(len(body))

    @property
    def content_length(self) -> int:
        return len(self.body)

    def get_body(self) -> "io.BytesIO":
        """Returns a fresh stream over the compressed body."""
        return io.BytesIO(self.body)

    def __repr__(self) -> str:
        return "<Request %s %s (%s bytes)>" % (
            self.method,
            self.url,
            self.content_length,
        )


class MetricRequestFactory:
    """Turns batches of metrics into requests for the metric ingest API.

    Takes the options documented on
    :py:class:`telemetry_sdk.consts.RequestFactoryConstructor` as keyword
    arguments.
    """

    def __init__(self, **kwargs: "Any") -> None:
        self.options = options = _get_options(**kwargs)

        if options["debug"]:
            from telemetry_sdk.debug import init_debug_support

            init_debug_support()

        if not (
            options["no_default_key"] or options["api_key"] or options["license_key"]
        ):
            raise ValueError(
                "An API key or license key is required, "
                "pass no_default_key=True to build requests without one"
            )

        if not 0 <= options["compression_level"] <= 9:
            raise ValueError(
                "Invalid compression_level %r, must be between 0 and 9"
                % (options["compression_level"],)
            )

        if options["max_payload_size"] <= 0:
            raise ValueError(
                "Invalid max_payload_size %r, must be positive"
                % (options["max_payload_size"],)
            )

        self.url = _parse_endpoint(options["endpoint"])
        self.user_agent = self._get_user_agent()

    def _get_user_agent(self) -> str:
        rv = USER_AGENT
        product = self.options["user_agent_product"]
        if product:
            rv = "%s %s" % (rv, product)
            version = self.options["user_agent_product_version"]
            if version:
                rv = "%s/%s" % (rv, version)
        return rv

    def _get_headers(self) -> "Dict[str, str]":
        headers = {
            "Content-Type": "application/json",
            "Content-Encoding": "gzip",
            "User-Agent": self.user_agent,
        }
        if not self.options["no_default_key"]:
            if self.options["api_key"]:
                headers[API_KEY_HEADER] = self.options["api_key"]
            if self.options["license_key"]:
                headers[LICENSE_KEY_HEADER] = self.options["license_key"]
        return headers

    @property
    def max_payload_size(self) -> int:
        return self.options["max_payload_size"]

    def build_request(self, batches: "Sequence[Batch]") -> "Request":
        """Builds a single request for all batches, whatever its size."""
        body = compress(serialize_batches(batches), self.options["compression_level"])
        return Request(self.url, body, headers=self._get_headers())

    def build_requests(self, batches: "Sequence[Batch]") -> "List[Request]":
        """Builds as many requests as needed to keep every payload under
        ``max_payload_size``.
        """
        return build_requests(batches, self)


def _split_payload(
    batches: "Sequence[Batch]",
) -> "Optional[Tuple[List[Batch], List[Batch]]]":
    # Keep batches whole for as long as there are several of them, and only
    # start halving metrics once a payload is down to a single batch.
    if len(batches) > 1:
        middle = len(batches) // 2
        return list(batches[:middle]), list(batches[middle:])
    if len(batches) == 1:
        halves = batches[0].split()
        if halves is not None:
            return [halves[0]], [halves[1]]
    return None


def build_requests(
    batches: "Sequence[Batch]",
    factory: "MetricRequestFactory",
    needs_split: "Optional[Callable[[Request], bool]]" = None,
) -> "List[Request]":
    """Encodes the batches into requests, halving the payload recursively
    until every request fits.

    ``needs_split`` decides whether a request is too large; it defaults to
    comparing the compressed body with the factory's ``max_payload_size``.
    Raises :py:class:`UnableToSplitError` if a payload that cannot be split
    any further is still too large. In that case no request is returned.
    """
    if needs_split is None:
        limit = factory.max_payload_size

        def needs_split(request: "Request") -> bool:
            return request.content_length > limit

    request = factory.build_request(batches)
    if not needs_split(request):
        logger.debug(
            "Built request with %s batches (%s bytes)",
            len(batches),
            request.content_length,
        )
        return [request]

    halves = _split_payload(batches)
    if halves is None:
        logger.error(
            "Payload of %s bytes is over the limit of %s bytes and cannot be split",
            request.content_length,
            factory.max_payload_size,
        )
        raise UnableToSplitError(request.content_length, factory.max_payload_size)

    logger.debug(
        "Payload of %s bytes is over the limit of %s bytes, splitting",
        request.content_length,
        factory.max_payload_size,
    )
    rv = []  # type: List[Request]
    for half in halves:
        rv.extend(build_requests(half, factory, needs_split))
    return rv
