import gzip
import json

import pytest

from telemetry_sdk import MetricRequestFactory
from telemetry_sdk.consts import API_KEY_ENV, ENDPOINT_ENV, LICENSE_KEY_ENV

from tests import _warning_recorder, _warning_recorder_mgr


@pytest.fixture(autouse=True)
def _clean_environ(monkeypatch):
    """
    Keeps keys and endpoints of the machine running the tests out of the
    factory options.
    """
    for name in (API_KEY_ENV, LICENSE_KEY_ENV, ENDPOINT_ENV):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True, scope="session")
def _capture_internal_warnings():
    yield

    _warning_recorder_mgr.__exit__(None, None, None)
    recorder = _warning_recorder

    for warning in recorder:
        if isinstance(warning.message, ResourceWarning):
            continue

        if "telemetry_sdk" not in str(warning.filename):
            continue

        pytest.fail("Unexpected warning: {}".format(warning))


@pytest.fixture
def make_factory():
    def inner(**kwargs):
        kwargs.setdefault("no_default_key", True)
        return MetricRequestFactory(**kwargs)

    return inner


def decode_body(request):
    return gzip.decompress(request.get_body().read()).decode("utf-8")


def compact_json(value):
    """Strips the whitespace of an indented JSON literal."""
    return json.dumps(json.loads(value), separators=(",", ":"))


@pytest.fixture
def request_json(make_factory):
    """Encodes the batches into exactly one request and returns its
    uncompressed body.
    """

    def inner(batches, **kwargs):
        requests = make_factory(**kwargs).build_requests(batches)
        assert len(requests) == 1, requests
        return decode_body(requests[0])

    return inner
