from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, List
import logging

from ..core.exceptions import PersistenceError, ValidationFailed
from ..core.incident_pipeline import IncidentPipeline
from ..models.incidents import Incident, NewIncidentRequest

router = APIRouter()
logger = logging.getLogger(__name__)


def get_incident_pipeline(request: Request) -> IncidentPipeline:
    """Return the pipeline composed at startup."""
    pipeline = getattr(request.app.state, "incident_pipeline", None)
    if pipeline is None:
        logger.error("Incident pipeline not initialized")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Incident pipeline not available.",
        )
    return pipeline


def error_response(status_code: int, error: str, details: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": error, "details": details}
    )


@router.post(
    "/incidents",
    status_code=status.HTTP_201_CREATED,
    response_model=Incident,
)
def create_incident(
    request: NewIncidentRequest,
    pipeline: IncidentPipeline = Depends(get_incident_pipeline),
):
    """
    Create a new incident.

    The incident is validated, classified by severity and category, and
    stored. Classification falls back to defaults when the AI is unavailable.
    """
    try:
        return pipeline.create_incident(request)
    except ValidationFailed as e:
        logger.info(f"Rejected incident: {e.errors}")
        return error_response(
            status.HTTP_400_BAD_REQUEST, "Validation failed", e.errors
        )
    except PersistenceError as e:
        logger.error(f"Failed to create incident: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to create incident", str(e)
        )


@router.get("/incidents", response_model=List[Incident])
def get_all_incidents(
    pipeline: IncidentPipeline = Depends(get_incident_pipeline),
):
    """Retrieve all incidents."""
    try:
        return pipeline.get_all_incidents()
    except PersistenceError as e:
        logger.error(f"Failed to retrieve incidents: {e}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to retrieve incidents",
            str(e),
        )
