from uuid import uuid4
from typing import List
from datetime import datetime, timezone
import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session

from ..models.incidents import Incident
from ..models.records import IncidentRecord
from .exceptions import PersistenceError

logger = logging.getLogger(__name__)


class IncidentRepository:
    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    def create(
        self,
        title: str,
        description: str,
        status: str,
        priority: str,
        ai_severity: str,
        ai_category: str,
    ) -> Incident:
        """
        Persist a new incident.

        The repository generates the identifier and stamps both timestamps
        with the same instant.

        Returns:
            The incident as stored, with id and timestamps

        Raises:
            PersistenceError: If the write fails
        """
        now = datetime.now(timezone.utc)
        record = IncidentRecord(
            id=str(uuid4()),
            title=title,
            description=description,
            status=status,
            priority=priority,
            ai_severity=ai_severity,
            ai_category=ai_category,
            created_at=now,
            updated_at=now,
        )

        try:
            with self._session_factory() as session:
                session.add(record)
                session.commit()
                session.refresh(record)
                incident = Incident.model_validate(record)
        except SQLAlchemyError as e:
            logger.error(f"Failed to save incident: {e}", exc_info=True)
            raise PersistenceError("Could not save incident", cause=e) from e

        logger.info(f"Created incident {incident.id}")
        return incident

    def get_all(self) -> List[Incident]:
        """
        Retrieve every stored incident in store order.

        Raises:
            PersistenceError: If the read fails
        """
        try:
            with self._session_factory() as session:
                records = session.scalars(select(IncidentRecord)).all()
                return [Incident.model_validate(record) for record in records]
        except SQLAlchemyError as e:
            logger.error(f"Failed to load incidents: {e}", exc_info=True)
            raise PersistenceError("Could not load incidents", cause=e) from e
