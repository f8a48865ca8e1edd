"""
Create every table known to the models if it does not exist yet.
"""
from app.core.logging_config import get_logger
from app.database.session import Base, engine
import app.models  # noqa: F401  registers the mapped tables on Base.metadata

logger = get_logger(__name__)


def create_tables(bind=None):
    """Initialize the database and create all tables."""
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database initialization completed")
    except Exception as e:
        logger.error(f"Database initialization failed: {str(e)}")
        raise


if __name__ == "__main__":
    create_tables()
