import logging
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models.records import Base

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str) -> Engine:
    """
    Create a SQLAlchemy engine for the given URL.

    SQLite connections are shared across the request thread pool, and
    in-memory SQLite URLs are pinned to a single connection so every session
    sees the same database.

    Args:
        database_url: SQLAlchemy database URL

    Returns:
        Engine: The configured engine
    """
    url = make_url(database_url)
    kwargs = {}

    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)
    logger.info(f"Created database engine for {url.render_as_string(hide_password=True)}")
    return engine


def init_db(engine: Engine) -> None:
    """Create the schema if it does not exist yet."""
    Base.metadata.create_all(engine)
    logger.info("Database initialized successfully")


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)
