import logging
from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from incident_service.api import incidents
from incident_service.config import (
    SERVICE_MESSAGE,
    SERVICE_VERSION,
    get_database_url,
    get_llm_api_key,
)
from incident_service.core.database import (
    create_db_engine,
    create_session_factory,
    init_db,
)
from incident_service.core.exceptions import MalformedRequest
from incident_service.core.incident_pipeline import IncidentPipeline
from incident_service.core.incident_repository import IncidentRepository
from incident_service.core.validator import IncidentValidator
from incident_service.services.incident_classifier import IncidentClassifier
from incident_service.services.langchain_llm_client import (
    LangChainLLMClient,
    LLMConfig,
)

load_dotenv()
app = FastAPI(title="Incident Management API", version=SERVICE_VERSION)


# Define a filter to exclude /health endpoint from logs
class HealthCheckFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return "GET /health" not in record.getMessage()


# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Add the filter to the uvicorn access logger
logging.getLogger("uvicorn.access").addFilter(HealthCheckFilter())

app.include_router(incidents.router)
app.include_router(incidents.router, prefix="/api/v1", include_in_schema=False)


def format_request_errors(exc: RequestValidationError) -> str:
    """Flatten FastAPI request errors into a single parser message."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "invalid input")
        cause = (error.get("ctx") or {}).get("error")
        if isinstance(cause, str) and cause:
            message = f"{message} ({cause})"
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    error = MalformedRequest(format_request_errors(exc))
    logger.info(f"Malformed request to {request.url.path}: {error}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid JSON format", "details": str(error)},
    )


def build_classifier() -> IncidentClassifier:
    """
    Create the classifier in live mode when an API key is configured.

    Malformed LLM settings raise ValueError so that startup fails loudly.
    """
    llm_client = None
    if get_llm_api_key():
        llm_client = LangChainLLMClient(LLMConfig.from_env())
    else:
        logger.warning("LLM_API_KEY not set, AI classification will use default values")

    classifier = IncidentClassifier(llm_client=llm_client)
    logger.info(
        f"Incident classifier initialized in {'live' if classifier.is_live else 'static'} mode."
    )
    return classifier


@app.on_event("startup")
def startup_event():
    database_url = get_database_url()
    app.state.db_engine = create_db_engine(database_url)
    init_db(app.state.db_engine)

    repository = IncidentRepository(create_session_factory(app.state.db_engine))
    app.state.incident_pipeline = IncidentPipeline(
        repository=repository,
        classifier=build_classifier(),
        validator=IncidentValidator(),
    )
    logger.info("Incident pipeline initialized.")


@app.on_event("shutdown")
def shutdown_event():
    engine = getattr(app.state, "db_engine", None)
    if engine is not None:
        engine.dispose()
        logger.info("Database engine disposed")


@app.get("/health")
def read_health():
    """
    Checks the health of the application.
    """
    return {"status": "ok", "message": SERVICE_MESSAGE, "version": SERVICE_VERSION}


def run():
    import os
    import uvicorn

    uvicorn.run(
        "incident_service.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8080")),
    )


if __name__ == "__main__":
    run()
