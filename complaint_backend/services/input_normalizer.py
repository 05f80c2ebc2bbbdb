from typing import NamedTuple, Optional
import base64
import logging

from complaint_backend.errors import InputValidationError
from complaint_backend.services.ocr_service import OcrSpaceClient
from complaint_backend.services.transcription_service import AudioUpload, SpeechToTextClient

logger = logging.getLogger(__name__)


class NormalizedInput(NamedTuple):
    text: str
    source: str  # "text", "audio" or "image"


def image_to_data_url(content: bytes, content_type: Optional[str] = None) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type or 'image/png'};base64,{encoded}"


class InputNormalizer:
    """
    Turns one of the three input modalities into complaint text.

    Precedence is text > audio > image: the first usable input wins and
    the collaborators for the others are never called.
    """

    def __init__(self, transcriber: SpeechToTextClient, ocr: OcrSpaceClient):
        self.transcriber = transcriber
        self.ocr = ocr

    def normalize(self, text: Optional[str] = None,
                  audio: Optional[AudioUpload] = None,
                  image_data_url: Optional[str] = None) -> NormalizedInput:
        if text and text.strip():
            return NormalizedInput(text, "text")

        if audio is not None and audio.content:
            logger.info(f"Normalizing audio input ({len(audio.content)} bytes)")
            return NormalizedInput(self.transcriber.transcribe(audio), "audio")

        if image_data_url and image_data_url.strip():
            logger.info("Normalizing image input")
            return NormalizedInput(self.ocr.extract_text(image_data_url), "image")

        raise InputValidationError("A complaint text, audio file or image is required")
