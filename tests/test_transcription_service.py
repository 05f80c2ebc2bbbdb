"""
Tests for the speech-to-text client using httpx.MockTransport.
"""

import httpx
import pytest

from complaint_backend.errors import ResponseParseError, UpstreamServiceError
from complaint_backend.services.transcription_service import AudioUpload, SpeechToTextClient

AUDIO = AudioUpload("voice.mp3", b"ID3-audio-bytes", "audio/mpeg")


def make_client(handler):
    return SpeechToTextClient(
        "stt-key",
        model="whisper-1",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_transcribe_posts_multipart_and_reads_text():
    captured = {}

    def handler(request):
        captured["auth"] = request.headers["Authorization"]
        captured["content_type"] = request.headers["Content-Type"]
        captured["body"] = request.content
        return httpx.Response(200, json={"text": "My card was charged twice"})

    text = make_client(handler).transcribe(AUDIO)

    assert text == "My card was charged twice"
    assert captured["auth"] == "Bearer stt-key"
    assert captured["content_type"].startswith("multipart/form-data")
    assert b"ID3-audio-bytes" in captured["body"]
    assert b'name="file"; filename="voice.mp3"' in captured["body"]
    assert b"whisper-1" in captured["body"]


def test_missing_text_field_is_parse_error():
    client = make_client(lambda request: httpx.Response(200, json={"transcript": "hi"}))

    with pytest.raises(ResponseParseError):
        client.transcribe(AUDIO)


def test_malformed_json_is_parse_error():
    client = make_client(lambda request: httpx.Response(200, text="not json"))

    with pytest.raises(ResponseParseError):
        client.transcribe(AUDIO)


def test_non_2xx_is_upstream_error_without_retry():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500, json={"error": {"message": "server error"}})

    with pytest.raises(UpstreamServiceError) as exc_info:
        make_client(handler).transcribe(AUDIO)

    assert exc_info.value.status_code == 500
    assert len(calls) == 1


def test_timeout_is_upstream_error():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(UpstreamServiceError):
        make_client(handler).transcribe(AUDIO)
