from typing import Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
import logging

from complaint_backend.api.dependencies import ServiceContainer, get_services
from complaint_backend.services.input_normalizer import image_to_data_url
from complaint_backend.services.transcription_service import AudioUpload

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/submit-complaint")
async def submit_complaint(
    company: str = Form(...),
    query: str = Form(""),
    voice: Optional[UploadFile] = File(None),
    image: Optional[UploadFile] = File(None),
    base64_string: str = Form("", alias="base64String"),
    services: ServiceContainer = Depends(get_services),
):
    """
    Full submission: normalize the input, classify it and store the result.
    Text wins over audio, audio wins over image.
    """
    audio = None
    if voice is not None:
        content = await voice.read()
        if content:
            audio = AudioUpload(voice.filename or "voice.mp3", content, voice.content_type or "application/octet-stream")

    image_data_url = base64_string or None
    if image is not None and not image_data_url:
        content = await image.read()
        if content:
            image_data_url = image_to_data_url(content, image.content_type)

    result = await run_in_threadpool(
        services.orchestrator.submit,
        company,
        query,
        audio,
        image_data_url,
    )

    if result.get("error"):
        body = {"error": result["error"], "errorType": result.get("error_type")}
        if result.get("classification"):
            body["classification"] = result["classification"]
        if result.get("persist_outcome"):
            body.update({k: v for k, v in result["persist_outcome"].items() if k != "error"})
        status_code = 400 if result.get("error_type") == "validation_error" else 502
        return JSONResponse(status_code=status_code, content=body)

    body = {
        "classification": result["classification"],
        "inputSource": result["input_source"],
    }
    body.update(result["persist_outcome"])
    return body
