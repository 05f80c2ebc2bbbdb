from typing import NamedTuple, Optional
import logging

import httpx

from complaint_backend.errors import ResponseParseError, UpstreamServiceError

logger = logging.getLogger(__name__)


class AudioUpload(NamedTuple):
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class SpeechToTextClient:
    """
    Client for an OpenAI-compatible audio transcription endpoint.
    Sends the raw audio as multipart form data and reads "text" from the JSON answer.
    """

    def __init__(self, api_key: str,
                 api_url: str = "https://api.openai.com/v1/audio/transcriptions",
                 model: str = "whisper-1",
                 http_client: Optional[httpx.Client] = None,
                 timeout_seconds: float = 30.0):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.http_client = http_client or httpx.Client(timeout=timeout_seconds)

    def transcribe(self, audio: AudioUpload) -> str:
        files = {"file": (audio.filename or "voice.mp3", audio.content, audio.content_type)}
        form = {"model": self.model, "response_format": "json"}

        try:
            response = self.http_client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                data=form,
                files=files,
            )
        except httpx.HTTPError as e:
            logger.error(f"Transcription request failed: {str(e)}")
            raise UpstreamServiceError(f"Transcription request failed: {str(e)}", service="speech_to_text") from e

        if response.status_code >= 400:
            logger.error(f"Transcription API returned HTTP {response.status_code}")
            raise UpstreamServiceError(
                f"Transcription API returned HTTP {response.status_code}: {response.text[:200]}",
                service="speech_to_text",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ResponseParseError("Transcription API returned malformed JSON", service="speech_to_text") from e

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            raise ResponseParseError("Transcription response is missing the text field", service="speech_to_text")

        logger.info(f"Transcribed {len(audio.content)} bytes of audio into {len(text)} characters")
        return text
