from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool
import logging

from complaint_backend.api.dependencies import ServiceContainer, get_services
from complaint_backend.errors import InputValidationError
from complaint_backend.models.request_models import ExtractTextRequest
from complaint_backend.models.response_models import TranscriptionResponse
from complaint_backend.services.transcription_service import AudioUpload

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/transcribe", response_model=TranscriptionResponse)
async def transcribe_audio(voice: UploadFile = File(...), services: ServiceContainer = Depends(get_services)):
    """
    Convert an uploaded audio file to text
    """
    content = await voice.read()
    if not content:
        raise InputValidationError("Audio file is empty")

    audio = AudioUpload(voice.filename or "voice.mp3", content, voice.content_type or "application/octet-stream")
    text = await run_in_threadpool(services.transcriber.transcribe, audio)
    return TranscriptionResponse(text=text)

@router.post("/extract-text")
def extract_text(request: ExtractTextRequest, services: ServiceContainer = Depends(get_services)):
    """
    Run OCR on a base64 data URL and return the OCR service's response
    """
    if not request.base64_string:
        raise InputValidationError("base64String is required")

    data = services.ocr.parse_image(request.base64_string)
    return {"data": data}
