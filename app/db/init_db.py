import logging

from app.db.session import engine
from app.db.base import Base
import app.db.models  # noqa: F401  registers User and Application

logger = logging.getLogger(__name__)


def init_db():
    """Create any missing tables."""
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ensured")
