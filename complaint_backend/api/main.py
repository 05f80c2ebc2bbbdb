# Load environment variables from .env file first, before any other imports
from dotenv import load_dotenv
load_dotenv()

import logging

from complaint_backend.api.app import create_app
from complaint_backend.api.dependencies import build_services
from complaint_backend.config import Settings

# Fails at startup when a required credential is missing
settings = Settings.from_env()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = create_app(build_services(settings))

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
