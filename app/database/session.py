from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.orm import declarative_base

from app.config import settings
from app.core.exceptions import ConflictError
from app.core.logging_config import get_logger

logger = get_logger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL

# SQLAlchemy setup
if SQLALCHEMY_DATABASE_URL.startswith("sqlite"):
    # SQLite has no server-side pool; one connection shared across threads
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
    )
else:
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        echo=False,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE
    )
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """
    Commit the unit of work on success, roll back on any error.

    A unique index violation surfacing at flush/commit is reported as a
    ConflictError so callers see the same kind as the explicit existence checks.
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Integrity error, rolled back: {e.orig}")
        raise ConflictError(
            "Resource already exists with the same values",
            error_code="DUPLICATE_RESOURCE",
        ) from e
    except Exception:
        db.rollback()
        raise
