# Exception hierarchy for the complaint service
from typing import Any, Dict, Optional


class ComplaintServiceError(Exception):
    """
    Base error for the complaint pipeline.
    Carries the name of the external service that caused it (if any)
    so routes and logs can tell collaborators apart.
    """

    error_type = "internal_error"

    def __init__(self, message: str, service: Optional[str] = None):
        self.message = message
        self.service = service
        super().__init__(message)

    def __str__(self) -> str:
        if self.service:
            return f"[{self.service}] {self.message}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        return {"message": self.message, "service": self.service, "type": self.error_type}


class ConfigurationError(ComplaintServiceError):
    """Raised at startup when required settings are missing"""

    error_type = "configuration_error"


class InputValidationError(ComplaintServiceError):
    """Raised before any external call when the request cannot be processed"""

    error_type = "validation_error"


class UpstreamServiceError(ComplaintServiceError):
    """Network failure, timeout or non-2xx answer from an external collaborator"""

    error_type = "upstream_error"

    def __init__(self, message: str, service: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message, service)
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


class ResponseParseError(ComplaintServiceError):
    """The collaborator answered but its response could not be interpreted"""

    error_type = "parse_error"


class ClassificationParseError(ResponseParseError):
    """LLM output is not the expected classification JSON"""

    error_type = "classification_parse_error"

    def __init__(self, message: str, raw_output: str = "", service: Optional[str] = "llm"):
        super().__init__(message, service)
        self.raw_output = raw_output


class StoreWriteError(ComplaintServiceError):
    """Insert or upsert rejected by one of the stores"""

    error_type = "store_write_error"

    def __init__(self, message: str, service: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, service)
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        # store details never replace message/service/type
        for key, value in self.details.items():
            data.setdefault(key, value)
        return data


class StoreReadError(ComplaintServiceError):
    """Select or search rejected by one of the stores"""

    error_type = "store_read_error"
