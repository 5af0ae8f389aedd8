"""
SQLAlchemy engine and session handling for the ledger database.

Repositories receive a ``Session`` from ``get_db`` (per HTTP request) or
``get_db_context`` (scripts and the CLI) and commit their own writes.
"""
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from api.config import settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def _engine_kwargs(url: str) -> Dict[str, Any]:
    """Engine options for the configured backend.

    SQLite takes no pool sizing; an in-memory SQLite database uses a
    StaticPool so every session sees the same database.
    """
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True, "pool_size": 10, "max_overflow": 20}

    kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if ":memory:" in url:
        kwargs["poolclass"] = StaticPool
    return kwargs


engine = create_engine(
    settings.database_url,
    echo=settings.db_echo,
    **_engine_kwargs(settings.database_url),
)

SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a session closed after the response."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        logger.debug("Rolling back request session", exc_info=True)
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_context() -> Iterator[Session]:
    """Session for use outside a request; commits on clean exit."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        logger.exception("Rolling back session")
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create every ledger table that does not exist yet."""
    import api.models  # noqa: F401 - register ORM models on Base

    Base.metadata.create_all(bind=engine)
    logger.info("Ledger tables ready on %s", engine.url.render_as_string(hide_password=True))


def drop_db() -> None:
    """Drop every ledger table, data included."""
    import api.models  # noqa: F401

    logger.warning("Dropping ledger tables on %s", engine.url.render_as_string(hide_password=True))
    Base.metadata.drop_all(bind=engine)
