from urllib.parse import parse_qsl

import httpx
import pytest

from ur_ly.exceptions import ParseError, PollError
from ur_ly.ur_client import UR_API_HEADERS, fetch_property_availability

from conftest import UR_API_URL


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_posts_form_payload_with_ur_headers():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"count": 3, "room": [{}, {}, {}]})

    availability = fetch_property_availability("20", "7140", _client(handler), api_url=UR_API_URL)

    assert availability.count == 3
    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == UR_API_URL
    for name, value in UR_API_HEADERS.items():
        assert request.headers[name] == value
    fields = dict(parse_qsl(request.content.decode(), keep_blank_values=True))
    assert fields["shisya"] == "20"
    assert fields["danchi"] == "7140"


def test_non_2xx_raises_poll_error():
    client = _client(lambda request: httpx.Response(503, text="busy"))

    with pytest.raises(PollError) as exc_info:
        fetch_property_availability("20", "7140", client)
    assert not isinstance(exc_info.value, ParseError)


def test_transport_error_raises_poll_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PollError):
        fetch_property_availability("20", "7140", _client(handler))


def test_invalid_json_raises_parse_error():
    client = _client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))

    with pytest.raises(ParseError):
        fetch_property_availability("20", "7140", client)


def test_missing_count_raises_parse_error():
    client = _client(lambda request: httpx.Response(200, json={"room": []}))

    with pytest.raises(ParseError):
        fetch_property_availability("20", "7140", client)
