"""Pytest configuration and shared fixtures for incident service tests."""

import pytest
from typing import Dict, Any
from unittest.mock import Mock

from incident_service.core.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from incident_service.core.incident_pipeline import IncidentPipeline
from incident_service.core.incident_repository import IncidentRepository
from incident_service.core.validator import IncidentValidator
from incident_service.models.incidents import NewIncidentRequest
from incident_service.services.incident_classifier import IncidentClassifier


# ============================================================================
# Core Test Data Fixtures
# ============================================================================


@pytest.fixture
def sample_incident_dict() -> Dict[str, Any]:
    """
    Provides incident data as dictionary for API tests.

    Returns:
        Dict[str, Any]: Incident data suitable for JSON serialization
    """
    return {
        "title": "Critical Security Breach",
        "description": "Unauthorized access detected on the admin portal",
    }


@pytest.fixture
def sample_new_incident_request(sample_incident_dict) -> NewIncidentRequest:
    """
    Provides a valid candidate incident.

    Returns:
        NewIncidentRequest: A valid incident creation request
    """
    return NewIncidentRequest(**sample_incident_dict)


# ============================================================================
# Persistence Fixtures
# ============================================================================


@pytest.fixture
def db_engine():
    """
    Provides an in-memory SQLite engine with the schema created.
    """
    engine = create_db_engine("sqlite://")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repository(db_engine) -> IncidentRepository:
    return IncidentRepository(create_session_factory(db_engine))


# ============================================================================
# Classifier Fixtures
# ============================================================================


@pytest.fixture
def mock_llm_client() -> Mock:
    """
    Provides a mock LLM client returning a well-formed JSON verdict.

    Returns:
        Mock: Mock client with a complete() method
    """
    client = Mock()
    client.complete = Mock(
        return_value='{"severity": "high", "category": "security"}'
    )
    return client


@pytest.fixture
def static_classifier() -> IncidentClassifier:
    """Classifier without an LLM client (static default mode)."""
    return IncidentClassifier(llm_client=None)


@pytest.fixture
def live_classifier(mock_llm_client) -> IncidentClassifier:
    return IncidentClassifier(llm_client=mock_llm_client)


@pytest.fixture
def validator() -> IncidentValidator:
    return IncidentValidator()


# ============================================================================
# Pipeline Fixtures
# ============================================================================


@pytest.fixture
def pipeline(repository, static_classifier, validator) -> IncidentPipeline:
    """
    Provides a pipeline over an in-memory store with the static classifier.
    """
    return IncidentPipeline(
        repository=repository,
        classifier=static_classifier,
        validator=validator,
    )
