"""Shared test fixtures."""

import pytest

from prismic_kit.api import Api
from prismic_kit.core.cache import ApiCache
from tests.unit.fakes import (
    API_URL,
    SEARCH_URL,
    FakeTransport,
    make_descriptor,
    make_search_response,
)


@pytest.fixture
def fake_transport() -> FakeTransport:
    """A FakeTransport serving the descriptor and an empty search page."""
    transport = FakeTransport()
    transport.add_response(API_URL, make_descriptor())
    transport.add_response(SEARCH_URL, make_search_response())
    return transport


@pytest.fixture
def api(fake_transport: FakeTransport) -> Api:
    """An Api with its descriptor loaded, using a private cache."""
    return Api(API_URL, transport=fake_transport, cache=ApiCache()).get()
