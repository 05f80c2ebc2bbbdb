from typing import Any, Dict, Optional
import logging

import httpx

from complaint_backend.errors import ResponseParseError, UpstreamServiceError

logger = logging.getLogger(__name__)


class OcrSpaceClient:
    """
    Client for the OCR.space parse/image API.
    Takes an image as a base64 data URL and returns the parsed text.
    """

    def __init__(self, api_key: str,
                 api_url: str = "https://api.ocr.space/parse/image",
                 language: str = "eng",
                 ocr_engine: str = "2",
                 http_client: Optional[httpx.Client] = None,
                 timeout_seconds: float = 30.0):
        self.api_key = api_key
        self.api_url = api_url
        self.language = language
        self.ocr_engine = ocr_engine
        self.http_client = http_client or httpx.Client(timeout=timeout_seconds)

    def parse_image(self, base64_image: str) -> Dict[str, Any]:
        """
        Submit the image and return OCR.space's JSON response as-is
        """
        form = {
            "base64Image": base64_image,
            "language": self.language,
            "apikey": self.api_key,
            "OCREngine": self.ocr_engine,
        }

        try:
            response = self.http_client.post(self.api_url, data=form)
        except httpx.HTTPError as e:
            logger.error(f"OCR request failed: {str(e)}")
            raise UpstreamServiceError(f"OCR request failed: {str(e)}", service="ocr") from e

        if response.status_code >= 400:
            logger.error(f"OCR API returned HTTP {response.status_code}")
            raise UpstreamServiceError(
                f"OCR API returned HTTP {response.status_code}: {response.text[:200]}",
                service="ocr",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseParseError("OCR API returned malformed JSON", service="ocr") from e

        if not isinstance(data, dict):
            raise ResponseParseError("OCR API response is not a JSON object", service="ocr")
        return data

    def extract_text(self, base64_image: str) -> str:
        data = self.parse_image(base64_image)

        if data.get("IsErroredOnProcessing"):
            message = data.get("ErrorMessage") or "OCR processing failed"
            if isinstance(message, list):
                message = "; ".join(str(m) for m in message)
            raise UpstreamServiceError(str(message), service="ocr")

        parsed_results = data.get("ParsedResults")
        if not isinstance(parsed_results, list) or not parsed_results:
            raise ResponseParseError("OCR response contains no parsed results", service="ocr")

        first = parsed_results[0]
        text = first.get("ParsedText") if isinstance(first, dict) else None
        if not isinstance(text, str):
            raise ResponseParseError("OCR response is missing ParsedText", service="ocr")

        logger.info(f"OCR extracted {len(text)} characters")
        return text
