from typing import Any, List, Tuple
import logging

from langchain_google_genai import ChatGoogleGenerativeAI

# LangSmith tracing
from langsmith import traceable

from complaint_backend.errors import ClassificationParseError, UpstreamServiceError
from complaint_backend.models.complaint_models import ClassificationResult
from complaint_backend.services.category_registry import CategoryRegistry, CategorySnapshot
from complaint_backend.services.classification_parser import parse_classification

logger = logging.getLogger(__name__)

SYSTEM_PROMPT_TEMPLATE = """You are an intelligent AI that can detect complaints in text, decide whether it is a complaint, summarize them, and assign them categories.

Detect the complaint in the given text and summarize it. Also assign it a product category and product sub category.

Try using the following categories by default: {categories}
And the following sub categories: {subcategories}

ONLY CREATE NEW CATEGORIES IF NECESSARY OR IS APPROPRIATE TO DO SO.

When using categories and subcategories try not to create new ones if you don't need to and just use previously created ones.

DO NOT INCLUDE BACKTICKS OR SAY JSON ANYWHERE, JUST RETURN THE PLAIN JSON.

Return the following JSON output:

{{
  "isComplaint": boolean,
  "summary": string,
  "category": string,
  "subcategory": string
}}
"""


def build_system_prompt(snapshot: CategorySnapshot) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        categories=", ".join(snapshot.categories),
        subcategories=", ".join(snapshot.subcategories),
    )


def _message_text(content: Any) -> str:
    """Chat models may return a plain string or a list of content blocks"""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content or "")


class ComplaintClassifier:
    """
    Classifies normalized complaint text with a chat model.

    One call per classification, no retries. The registry snapshot is
    embedded in the system prompt and the registry is updated with the
    labels of every successful classification.
    """

    def __init__(self, chat_model: Any, registry: CategoryRegistry):
        self.chat_model = chat_model
        self.registry = registry

    @classmethod
    def from_settings(cls, settings, registry: CategoryRegistry) -> "ComplaintClassifier":
        chat_model = ChatGoogleGenerativeAI(
            model=settings.llm_model,
            google_api_key=settings.google_api_key,
            max_output_tokens=settings.llm_max_output_tokens,
            timeout=settings.request_timeout_seconds,
            max_retries=1,  # a single attempt
        )
        return cls(chat_model, registry)

    def build_messages(self, text: str) -> List[Tuple[str, str]]:
        return [
            ("system", build_system_prompt(self.registry.snapshot())),
            ("human", text),
        ]

    @traceable(name="classify_complaint")
    def classify(self, text: str) -> ClassificationResult:
        messages = self.build_messages(text)

        try:
            response = self.chat_model.invoke(messages)
        except Exception as e:
            logger.error(f"LLM classification call failed: {str(e)}")
            raise UpstreamServiceError(
                f"Error interacting with the language model: {str(e)}",
                service="llm",
                status_code=getattr(e, "status_code", None),
            ) from e

        raw_output = _message_text(getattr(response, "content", response))

        try:
            result = parse_classification(raw_output)
        except ClassificationParseError:
            logger.error(f"Could not parse classifier output: {raw_output[:200]!r}")
            raise

        added = self.registry.record_category(result.category, result.subcategory)
        logger.info(
            f"Classified text: isComplaint={result.is_complaint}, "
            f"category={result.category!r}, subcategory={result.subcategory!r}, registry_added={added}"
        )
        return result
