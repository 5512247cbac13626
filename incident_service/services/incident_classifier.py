"""
Severity and category classification for incidents.

The classifier asks an LLM for a JSON verdict and falls back to a keyword
scan of the reply when the verdict cannot be decoded. Results are always
normalized into the closed severity and category sets.
"""

import logging
from typing import Optional

from pydantic import BaseModel, ValidationError

from ..core.exceptions import ClassificationFailed
from ..models.incidents import (
    AICategory,
    AISeverity,
    ClassificationResult,
    DEFAULT_CATEGORY,
    DEFAULT_SEVERITY,
)
from .langchain_llm_client import LangChainLLMClient

logger = logging.getLogger(__name__)


CLASSIFICATION_PROMPT = """
Analyze the following incident and determine:
1. Severity: Choose from "low", "medium", or "high"
2. Category: Choose from "network", "software", "hardware", or "security"

Consider these guidelines:
- Severity: Based on potential impact, urgency, and scope
- Category: Based on the type of issue described

Incident Title: {title}
Incident Description: {description}

Respond with a JSON object in this exact format:
{{
  "severity": "low|medium|high",
  "category": "network|software|hardware|security"
}}
"""


class RawClassification(BaseModel):
    """Shape of the JSON object the model is asked to return."""

    severity: str = ""
    category: str = ""


def parse_structured(text: str) -> Optional[RawClassification]:
    """
    Decode a JSON verdict from the reply.

    The whole reply is tried first, then the outermost ``{...}`` span, since
    models often wrap JSON in a markdown block.
    """
    candidates = [text]
    start_index = text.find("{")
    end_index = text.rfind("}")
    if start_index != -1 and end_index > start_index:
        candidates.append(text[start_index : end_index + 1])

    for candidate in candidates:
        try:
            return RawClassification.model_validate_json(candidate)
        except ValidationError:
            continue
    return None


def scan_text(text: str) -> RawClassification:
    """
    Pick severity and category by keyword containment.

    Keywords are checked in a fixed priority order, not by position in the
    text. Without a "category" mention the whole text is scanned for
    hardware, network, then security.
    """
    text = text.lower()
    severity = DEFAULT_SEVERITY.value
    category = DEFAULT_CATEGORY.value

    if "severity" in text:
        if "low" in text:
            severity = AISeverity.LOW.value
        elif "high" in text:
            severity = AISeverity.HIGH.value

    if "category" in text:
        keywords = (AICategory.NETWORK, AICategory.HARDWARE, AICategory.SECURITY)
    else:
        keywords = (AICategory.HARDWARE, AICategory.NETWORK, AICategory.SECURITY)

    for keyword in keywords:
        if keyword.value in text:
            category = keyword.value
            break

    return RawClassification(severity=severity, category=category)


def normalize(raw: RawClassification) -> ClassificationResult:
    """Map raw values onto the closed sets, replacing anything unknown with defaults."""
    severity = raw.severity.lower()
    category = raw.category.lower()

    try:
        ai_severity = AISeverity(severity)
    except ValueError:
        ai_severity = DEFAULT_SEVERITY
    try:
        ai_category = AICategory(category)
    except ValueError:
        ai_category = DEFAULT_CATEGORY

    return ClassificationResult(severity=ai_severity, category=ai_category)


def parse_classification(text: str) -> ClassificationResult:
    """Parse a model reply into a classification, structured first, keywords second."""
    raw = parse_structured(text)
    if raw is None:
        logger.debug("Classification reply is not JSON, scanning text for keywords")
        raw = scan_text(text)
    return normalize(raw)


class IncidentClassifier:
    """
    Classifies incidents through an LLM client.

    Without a client the classifier runs in static mode and always answers
    with the default pair.
    """

    def __init__(self, llm_client: Optional[LangChainLLMClient] = None):
        self.llm_client = llm_client

    @property
    def is_live(self) -> bool:
        return self.llm_client is not None

    def classify(self, title: str, description: str) -> ClassificationResult:
        """
        Determine severity and category for an incident.

        Args:
            title: Incident title
            description: Incident description

        Returns:
            ClassificationResult drawn from the closed sets

        Raises:
            ClassificationFailed: If the endpoint errors or returns nothing
        """
        if self.llm_client is None:
            return ClassificationResult()

        prompt = CLASSIFICATION_PROMPT.format(title=title, description=description)

        try:
            content = self.llm_client.complete(prompt)
        except Exception as e:
            raise ClassificationFailed(f"LLM request failed: {e}") from e

        if not content:
            raise ClassificationFailed("LLM returned an empty response")

        result = parse_classification(content)
        logger.info(
            f"Classified incident: severity={result.severity.value}, "
            f"category={result.category.value}"
        )
        return result
