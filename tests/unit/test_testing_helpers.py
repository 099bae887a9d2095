"""Tests for the hyperclient_core.testing helpers."""

import httpx
import pytest

from hyperclient_core.testing import RecordingTransport, json_response, text_response


class TestRecordingTransport:
    @pytest.mark.unit
    def test_default_handler_answers_200_and_records(self):
        transport = RecordingTransport()

        with httpx.Client(transport=transport) as client:
            response = client.get("http://x/")

        assert response.status_code == 200
        assert len(transport.requests) == 1
        assert str(transport.last_request.url) == "http://x/"

    @pytest.mark.unit
    def test_explicit_handler_sees_request(self):
        transport = RecordingTransport(lambda request: text_response(request.url.path, status_code=201))

        with httpx.Client(transport=transport) as client:
            response = client.post("http://x/things", content=b"payload")

        assert response.status_code == 201
        assert response.text == "/things"
        assert transport.last_request.content == b"payload"

    @pytest.mark.unit
    def test_reassigned_handler_keeps_recording(self):
        transport = RecordingTransport()
        transport.handler = lambda request: json_response({"a": 1}, status_code=202)

        with httpx.Client(transport=transport) as client:
            first = client.get("http://x/one")
            second = client.get("http://x/two")

        assert first.status_code == second.status_code == 202
        assert [request.url.path for request in transport.requests] == ["/one", "/two"]

    @pytest.mark.unit
    def test_snapshots_are_independent_of_later_changes(self):
        transport = RecordingTransport()
        request = httpx.Request("GET", "http://x/")

        with httpx.Client(transport=transport) as client:
            client.send(request)
            request.headers["Authorization"] = "Digest abc"
            client.send(request)

        assert "Authorization" not in transport.requests[0].headers
        assert transport.requests[1].headers["Authorization"] == "Digest abc"

    @pytest.mark.unit
    def test_last_request_without_traffic(self):
        with pytest.raises(AssertionError):
            RecordingTransport().last_request


@pytest.mark.unit
def test_json_response_sets_content_type():
    response = json_response({"a": 1}, headers={"X-Id": "1"})

    assert response.headers["content-type"] == "application/json"
    assert response.headers["x-id"] == "1"
    assert response.json() == {"a": 1}
