import logging
from contextlib import contextmanager
from typing import Iterator
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
from evalbank.core.config import settings

logger = logging.getLogger(__name__)

def _engine_kwargs() -> dict:
    if settings.is_sqlite():
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
    return {
        "pool_pre_ping": True,
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_timeout": settings.DATABASE_POOL_TIMEOUT,
    }

engine = create_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO, **_engine_kwargs())
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@contextmanager
def transaction(db: Session) -> Iterator[Session]:
    """Commit everything done inside the block, or roll all of it back."""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise

def init_db() -> None:
    """Create tables. In production, use Alembic migrations instead."""
    from evalbank.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ensured")
