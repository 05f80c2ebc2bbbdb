# Service configuration loaded from environment variables
import os
from typing import Dict, Mapping, Optional

from pydantic import BaseModel

from complaint_backend.errors import ConfigurationError

# Environment variable -> Settings field, for values the service cannot start without
REQUIRED_ENV_VARS: Dict[str, str] = {
    "SUPABASE_URL": "supabase_url",
    "SUPABASE_SERVICE_ROLE_KEY": "supabase_service_key",
    "QDRANT_URL": "qdrant_url",
    "GOOGLE_API_KEY": "google_api_key",
    "OCR_API_KEY": "ocr_api_key",
    "STT_API_KEY": "stt_api_key",
}

OPTIONAL_ENV_VARS: Dict[str, str] = {
    "QDRANT_API_KEY": "qdrant_api_key",
    "QDRANT_COLLECTION": "qdrant_collection",
    "COMPLAINTS_TABLE": "complaints_table",
    "LLM_MODEL": "llm_model",
    "LLM_MAX_OUTPUT_TOKENS": "llm_max_output_tokens",
    "EMBEDDING_MODEL": "embedding_model",
    "EMBEDDING_DIMENSIONS": "embedding_dimensions",
    "OCR_API_URL": "ocr_api_url",
    "OCR_LANGUAGE": "ocr_language",
    "OCR_ENGINE": "ocr_engine",
    "STT_API_URL": "stt_api_url",
    "STT_MODEL": "stt_model",
    "REQUEST_TIMEOUT_SECONDS": "request_timeout_seconds",
    "LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Runtime settings for the complaint service"""

    # Relational store (Supabase)
    supabase_url: str
    supabase_service_key: str
    complaints_table: str = "complaints"

    # Vector store (Qdrant)
    qdrant_url: str
    qdrant_api_key: Optional[str] = None
    qdrant_collection: str = "complaints_vector_db"

    # LLM + embeddings (Google Generative AI)
    google_api_key: str
    llm_model: str = "gemini-2.5-flash"
    llm_max_output_tokens: int = 2048
    embedding_model: str = "models/text-embedding-004"
    embedding_dimensions: int = 768

    # OCR (OCR.space)
    ocr_api_key: str
    ocr_api_url: str = "https://api.ocr.space/parse/image"
    ocr_language: str = "eng"
    ocr_engine: str = "2"

    # Speech-to-text (OpenAI compatible transcription endpoint)
    stt_api_key: str
    stt_api_url: str = "https://api.openai.com/v1/audio/transcriptions"
    stt_model: str = "whisper-1"

    # Applied to every outbound call
    request_timeout_seconds: float = 30.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from the environment.
        Raises ConfigurationError listing every missing required variable.
        """
        environ = os.environ if environ is None else environ

        missing = [name for name in REQUIRED_ENV_VARS if not environ.get(name, "").strip()]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        values = {field: environ[name].strip() for name, field in REQUIRED_ENV_VARS.items()}
        for name, field in OPTIONAL_ENV_VARS.items():
            value = environ.get(name)
            if value is not None and value.strip():
                values[field] = value.strip()

        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")
