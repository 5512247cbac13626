import logging
from typing import List

from ..models.incidents import (
    ClassificationResult,
    DEFAULT_PRIORITY,
    DEFAULT_STATUS,
    Incident,
    NewIncidentRequest,
)
from ..services.incident_classifier import IncidentClassifier
from .exceptions import ClassificationFailed, ValidationFailed
from .incident_repository import IncidentRepository
from .validator import IncidentValidator

logger = logging.getLogger(__name__)


class IncidentPipeline:
    """Validates, classifies and persists incidents."""

    def __init__(
        self,
        repository: IncidentRepository,
        classifier: IncidentClassifier,
        validator: IncidentValidator,
    ):
        self.repository = repository
        self.classifier = classifier
        self.validator = validator

    def create_incident(self, candidate: NewIncidentRequest) -> Incident:
        """
        Create an incident enriched with an AI classification.

        Classification problems never block creation: the default severity
        and category are used instead. Caller-supplied ai_severity and
        ai_category are always overwritten.

        Args:
            candidate: The incident submitted by a caller

        Returns:
            The persisted incident with id and timestamps

        Raises:
            ValidationFailed: If the candidate violates field constraints
            PersistenceError: If the incident cannot be stored
        """
        errors = self.validator.validate(candidate)
        if errors:
            raise ValidationFailed(errors)

        status = candidate.status or DEFAULT_STATUS.value
        priority = candidate.priority or DEFAULT_PRIORITY.value

        try:
            classification = self.classifier.classify(
                candidate.title, candidate.description
            )
        except ClassificationFailed as e:
            logger.warning(f"AI analysis failed, using default values: {e}")
            classification = ClassificationResult()

        return self.repository.create(
            title=candidate.title,
            description=candidate.description,
            status=status,
            priority=priority,
            ai_severity=classification.severity.value,
            ai_category=classification.category.value,
        )

    def get_all_incidents(self) -> List[Incident]:
        """Return every stored incident; raises PersistenceError on failure."""
        return self.repository.get_all()
