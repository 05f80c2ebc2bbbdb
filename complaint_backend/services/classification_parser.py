"""
Decoding of the LLM's classification output.

The model is told to answer with plain JSON but regularly wraps it in
markdown fences or prefixes a "json" language tag. Those known artefacts
are stripped, then the remainder must be a JSON object matching
ClassificationResult exactly. Anything else is a ClassificationParseError.
"""
import json
import re

from pydantic import ValidationError

from complaint_backend.errors import ClassificationParseError
from complaint_backend.models.complaint_models import ClassificationResult

_FENCE_RE = re.compile(r"^```[ \t]*([A-Za-z]*)[ \t]*\n?(.*?)\n?[ \t]*```$", re.DOTALL)
_LANGUAGE_TAG_RE = re.compile(r"^json\b[ \t]*:?[ \t]*\n?", re.IGNORECASE)


def strip_wrapping_artifacts(raw_output: str) -> str:
    """Remove surrounding whitespace, triple-backtick fences and a leading json tag"""
    text = raw_output.strip()

    match = _FENCE_RE.match(text)
    if match:
        text = match.group(2).strip()

    text = _LANGUAGE_TAG_RE.sub("", text, count=1).strip()
    return text


def parse_classification(raw_output: str) -> ClassificationResult:
    if not isinstance(raw_output, str) or not raw_output.strip():
        raise ClassificationParseError("Classifier returned an empty response", raw_output=str(raw_output or ""))

    cleaned = strip_wrapping_artifacts(raw_output)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ClassificationParseError(
            f"Could not interpret classifier response as JSON: {e.msg}", raw_output=raw_output
        ) from e

    if not isinstance(data, dict):
        raise ClassificationParseError(
            f"Classifier response must be a JSON object, got {type(data).__name__}", raw_output=raw_output
        )

    try:
        return ClassificationResult.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        raise ClassificationParseError(
            f"Classifier response does not match the expected schema ({fields})", raw_output=raw_output
        ) from e
