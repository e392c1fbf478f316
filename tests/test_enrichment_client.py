import httpx
import pytest

from music_library_api.app.core.exceptions import UpstreamError
from music_library_api.app.services.enrichment_client import EnrichmentClient

BASE_URL = "http://enrichment.test/info"


def _client(handler) -> EnrichmentClient:
    return EnrichmentClient(BASE_URL, timeout=1.0, client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_fetch_song_details_sends_escaped_query():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(
            200,
            json={"releaseDate": "16.07.2006", "text": "Ooh baby\n\nOoh", "link": "https://youtu.be/x"},
        )

    detail = _client(handler).fetch_song_details("Muse & Friends", "Supermassive Black Hole")

    assert seen["url"].params["group"] == "Muse & Friends"
    assert seen["url"].params["song"] == "Supermassive Black Hole"
    assert seen["url"].path == "/info"
    assert detail.release_date == "16.07.2006"
    assert detail.text == "Ooh baby\n\nOoh"
    assert detail.link == "https://youtu.be/x"


def test_non_200_status_is_upstream_error():
    client = _client(lambda request: httpx.Response(404, json={"error": "not found"}))
    with pytest.raises(UpstreamError) as excinfo:
        client.fetch_song_details("Muse", "Uprising")
    assert excinfo.value.message == "Failed to fetch song details"
    assert "404" in excinfo.value.reason


def test_undecodable_body_is_upstream_error():
    client = _client(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(UpstreamError):
        client.fetch_song_details("Muse", "Uprising")


def test_wrong_json_shape_is_upstream_error():
    client = _client(lambda request: httpx.Response(200, json=["not", "an", "object"]))
    with pytest.raises(UpstreamError):
        client.fetch_song_details("Muse", "Uprising")


def test_connection_error_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        _client(handler).fetch_song_details("Muse", "Uprising")


def test_timeout_is_upstream_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamError) as excinfo:
        _client(handler).fetch_song_details("Muse", "Uprising")
    assert excinfo.value.reason == "timeout"
