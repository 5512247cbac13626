from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional
from enum import Enum


class IncidentStatus(str, Enum):
    """Lifecycle status of an incident"""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class IncidentPriority(str, Enum):
    """Caller-assigned priority"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class AISeverity(str, Enum):
    """Severity assigned by the classifier"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AICategory(str, Enum):
    """Category assigned by the classifier"""
    NETWORK = "network"
    SOFTWARE = "software"
    HARDWARE = "hardware"
    SECURITY = "security"


DEFAULT_STATUS = IncidentStatus.OPEN
DEFAULT_PRIORITY = IncidentPriority.MEDIUM
DEFAULT_SEVERITY = AISeverity.MEDIUM
DEFAULT_CATEGORY = AICategory.SOFTWARE


class NewIncidentRequest(BaseModel):
    """
    Candidate incident as submitted by a caller.

    Every field is optional at the parsing stage so that missing values are
    reported by the validator rather than by the JSON parser. Unknown keys
    such as ``id`` or ``created_at`` are ignored.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    ai_severity: Optional[str] = None
    ai_category: Optional[str] = None


class ClassificationResult(BaseModel):
    severity: AISeverity = DEFAULT_SEVERITY
    category: AICategory = DEFAULT_CATEGORY


class Incident(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    status: IncidentStatus = DEFAULT_STATUS
    priority: IncidentPriority = DEFAULT_PRIORITY
    ai_severity: AISeverity = DEFAULT_SEVERITY
    ai_category: AICategory = DEFAULT_CATEGORY
    created_at: datetime
    updated_at: datetime
