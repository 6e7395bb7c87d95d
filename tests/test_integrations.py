"""Provider clients against a mocked HTTP transport."""
import json

import httpx
import pytest

from medicall.common.integrations import BlandAIClient, ElevenLabsClient
from medicall.common.integrations.bland_ai import (
    generate_appointment_reminder_script, generate_medication_reminder_script,
)
from medicall.common.utils.exceptions import UpstreamError


@pytest.fixture
def mock_http(monkeypatch):
    """Route every httpx.AsyncClient through a handler; returns the captured requests."""
    requests = []
    responses = {}
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return responses["next"]

    def client_factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", client_factory)

    def respond_with(response: httpx.Response):
        responses["next"] = response
        return requests

    return respond_with


async def test_make_call_posts_task_and_metadata(mock_http):
    requests = mock_http(httpx.Response(200, json={"status": "success", "call_id": "c-42"}))
    client = BlandAIClient(api_key="k", base_url="https://bland.example/v1", voice="nat")

    call_id = await client.make_call("5551234567", "Hello there", {"patient_id": "p1"})

    assert call_id == "c-42"
    request = requests[0]
    assert request.url == "https://bland.example/v1/calls"
    assert request.headers["Authorization"] == "Bearer k"
    body = json.loads(request.content)
    assert body["task"] == "Hello there"
    assert body["metadata"] == {"patient_id": "p1"}
    assert body["webhook"].endswith("/bland-ai/webhook")


async def test_make_call_error_status_raises_upstream(mock_http):
    mock_http(httpx.Response(500, json={"error": "boom"}))
    client = BlandAIClient(api_key="k")

    with pytest.raises(UpstreamError) as exc_info:
        await client.make_call("5551234567", "Hello", {})

    assert exc_info.value.status_code == 502


async def test_clone_voice_returns_voice_id(mock_http):
    requests = mock_http(httpx.Response(200, json={"voice_id": "v-1"}))
    client = ElevenLabsClient(api_key="xi", base_url="https://eleven.example/v1")

    voice_id = await client.clone_voice("sample.mp3", b"audio", "audio/mpeg", "Dr. Sarah Lee", "Cardiology")

    assert voice_id == "v-1"
    assert requests[0].url == "https://eleven.example/v1/voices/add"
    assert requests[0].headers["xi-api-key"] == "xi"
    assert b"Dr. Sarah Lee" in requests[0].content


async def test_clone_voice_missing_id_raises_upstream(mock_http):
    mock_http(httpx.Response(200, json={"detail": "queued"}))

    with pytest.raises(UpstreamError):
        await ElevenLabsClient(api_key="xi").clone_voice("a.wav", b"audio", None, "Dr. X")


async def test_clone_voice_non_object_body_raises_upstream(mock_http):
    mock_http(httpx.Response(200, json=["v-1"]))

    with pytest.raises(UpstreamError):
        await ElevenLabsClient(api_key="xi").clone_voice("a.wav", b"audio", None, "Dr. X")


async def test_make_call_html_reply_raises_upstream(mock_http):
    mock_http(httpx.Response(200, text="<html>gateway</html>", headers={"Content-Type": "text/html"}))

    with pytest.raises(UpstreamError) as exc_info:
        await BlandAIClient(api_key="k").make_call("5551234567", "Hello", {})

    assert exc_info.value.status_code == 502


async def test_delete_voice_error_raises_upstream(mock_http):
    mock_http(httpx.Response(404))

    with pytest.raises(UpstreamError):
        await ElevenLabsClient(api_key="xi").delete_voice("v-404")


def test_reminder_scripts_mention_the_details():
    medication = generate_medication_reminder_script("John", "Metformin", "500mg", "08:00")
    appointment = generate_appointment_reminder_script("John", "Sarah Lee", "March 15, 2030", "10:30")

    assert "Metformin" in medication and "500mg" in medication and "08:00" in medication
    assert "Dr. Sarah Lee" in appointment and "March 15, 2030" in appointment
