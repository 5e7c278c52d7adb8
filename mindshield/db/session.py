"""
Database session management.
"""
import logging
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from mindshield.core.config import settings
from mindshield.db.base import Base

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DB_ECHO,
    pool_pre_ping=True,
    pool_recycle=3600,
    connect_args=connect_args
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Session:
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """Initialize database tables."""
    # Register every model on the metadata before creating tables
    import mindshield.models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


class DatabaseStatus:
    """Connectivity probe injected into request handlers."""
    
    def __init__(self, bind=None):
        self.bind = bind or engine
    
    def is_connected(self) -> bool:
        try:
            with self.bind.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database connectivity check failed: {e}")
            return False


def get_db_status() -> DatabaseStatus:
    """Dependency for the database connectivity probe."""
    return DatabaseStatus()
