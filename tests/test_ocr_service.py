"""
Tests for the OCR.space client using httpx.MockTransport.
"""

from urllib.parse import parse_qs

import httpx
import pytest

from complaint_backend.errors import ResponseParseError, UpstreamServiceError
from complaint_backend.services.ocr_service import OcrSpaceClient

IMAGE = "data:image/png;base64,iVBORw0KGgo="


def make_client(handler):
    return OcrSpaceClient(
        "ocr-key",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_extract_text_sends_form_and_reads_first_result():
    captured = {}

    def handler(request):
        captured["url"] = str(request.url)
        captured["form"] = parse_qs(request.content.decode())
        return httpx.Response(200, json={
            "ParsedResults": [{"ParsedText": "My card was charged twice"}, {"ParsedText": "ignored"}],
            "IsErroredOnProcessing": False,
        })

    text = make_client(handler).extract_text(IMAGE)

    assert text == "My card was charged twice"
    assert captured["url"] == "https://api.ocr.space/parse/image"
    assert captured["form"]["base64Image"] == [IMAGE]
    assert captured["form"]["language"] == ["eng"]
    assert captured["form"]["apikey"] == ["ocr-key"]
    assert captured["form"]["OCREngine"] == ["2"]


def test_parse_image_returns_raw_response():
    body = {"ParsedResults": [{"ParsedText": "hello"}], "OCRExitCode": 1}
    client = make_client(lambda request: httpx.Response(200, json=body))

    assert client.parse_image(IMAGE) == body


@pytest.mark.parametrize("body", [
    {"ParsedResults": []},
    {"ParsedResults": [{"TextOverlay": {}}]},
    {"OCRExitCode": 99},
])
def test_missing_parsed_text_is_parse_error(body):
    client = make_client(lambda request: httpx.Response(200, json=body))

    with pytest.raises(ResponseParseError):
        client.extract_text(IMAGE)


def test_processing_error_is_upstream_error():
    body = {"IsErroredOnProcessing": True, "ErrorMessage": ["Unable to recognize the file type"]}
    client = make_client(lambda request: httpx.Response(200, json=body))

    with pytest.raises(UpstreamServiceError) as exc_info:
        client.extract_text(IMAGE)

    assert "Unable to recognize the file type" in exc_info.value.message


def test_http_error_status_is_upstream_error():
    client = make_client(lambda request: httpx.Response(403, text="invalid key"))

    with pytest.raises(UpstreamServiceError) as exc_info:
        client.extract_text(IMAGE)

    assert exc_info.value.status_code == 403


def test_malformed_json_is_parse_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>oops</html>"))

    with pytest.raises(ResponseParseError):
        client.extract_text(IMAGE)


def test_network_failure_is_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamServiceError):
        make_client(handler).extract_text(IMAGE)
