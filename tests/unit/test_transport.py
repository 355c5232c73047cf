"""Tests for RequestsTransport: HTTP GET, errors and max-age caching."""

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from prismic_kit.core.cache import ApiCache
from prismic_kit.errors import TransportError
from prismic_kit.transport import RequestsTransport, parse_max_age

URL = "https://repo.prismic.io/api"


def _make_response(
    data: Any, *, status: int = 200, headers: dict[str, str] | None = None
) -> MagicMock:
    """Create a mock HTTP response with given JSON data."""
    response = MagicMock()
    response.status_code = status
    response.json.return_value = data
    response.headers = headers or {}
    return response


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock()
    session.headers = {}
    return session


def test_fetch_returns_parsed_json(mock_session: MagicMock) -> None:
    mock_session.get.return_value = _make_response({"refs": []})
    transport = RequestsTransport(session=mock_session)

    result = transport.fetch(URL)

    assert result.data == {"refs": []}
    assert result.max_age is None
    mock_session.get.assert_called_once_with(URL, timeout=transport.timeout)


def test_session_asks_for_json(mock_session: MagicMock) -> None:
    RequestsTransport(session=mock_session)

    assert mock_session.headers["Accept"] == "application/json"
    assert mock_session.headers["User-Agent"].startswith("prismic-kit/")


def test_non_2xx_raises_transport_error(mock_session: MagicMock) -> None:
    mock_session.get.return_value = _make_response({}, status=404)
    transport = RequestsTransport(session=mock_session)

    with pytest.raises(TransportError, match=r"Unexpected status code \[404\]") as excinfo:
        transport.fetch(URL)

    assert excinfo.value.status == 404
    assert excinfo.value.url == URL


def test_network_error_raises_transport_error(mock_session: MagicMock) -> None:
    mock_session.get.side_effect = requests.ConnectionError("refused")
    transport = RequestsTransport(session=mock_session)

    with pytest.raises(TransportError, match="refused") as excinfo:
        transport.fetch(URL)

    assert excinfo.value.status is None


def test_invalid_json_raises_transport_error(mock_session: MagicMock) -> None:
    response = _make_response(None)
    response.json.side_effect = ValueError("Expecting value")
    mock_session.get.return_value = response
    transport = RequestsTransport(session=mock_session)

    with pytest.raises(TransportError, match="invalid JSON"):
        transport.fetch(URL)


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        ("max-age=60", 60),
        ("public, max-age=315360000", 315360000),
        ("no-cache", None),
        (None, None),
    ],
)
def test_parse_max_age(header: str | None, expected: int | None) -> None:
    assert parse_max_age(header) == expected


def test_responses_with_max_age_are_cached(mock_session: MagicMock) -> None:
    mock_session.get.return_value = _make_response(
        {"results": []}, headers={"Cache-Control": "max-age=30"}
    )
    transport = RequestsTransport(session=mock_session, cache=ApiCache())

    first = transport.fetch(URL)
    second = transport.fetch(URL)

    assert first.max_age == 30
    assert second is first
    assert mock_session.get.call_count == 1


def test_responses_without_max_age_are_not_cached(mock_session: MagicMock) -> None:
    mock_session.get.return_value = _make_response({"results": []})
    transport = RequestsTransport(session=mock_session, cache=ApiCache())

    transport.fetch(URL)
    transport.fetch(URL)

    assert mock_session.get.call_count == 2
