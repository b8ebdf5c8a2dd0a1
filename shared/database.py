from typing import Callable, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str) -> Engine:
    """Create the engine for a service store."""
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # Test stores only: every session shares one connection so the
            # in-memory database survives, and a rollback in one session also
            # discards uncommitted work of any other open session.
            return create_engine(database_url, echo=False, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, echo=False, connect_args=connect_args)
    return create_engine(database_url, echo=False, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create the session factory bound to an engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def session_dependency(session_factory: sessionmaker) -> Callable[[], Iterator[Session]]:
    """Build a FastAPI dependency yielding one session per request."""

    def get_db() -> Iterator[Session]:
        """Get database session."""
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    return get_db
