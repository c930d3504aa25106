from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from cms.config import settings

# Configure engine parameters based on the database and environment
if settings.is_sqlite:
    # Local files and tests; the API hands sessions across threadpool workers
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False, "timeout": 30},
        echo=settings.debug,
    )

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

elif settings.is_production:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=5,  # allow parallel requests
        max_overflow=10,  # allow spike load briefly
        pool_timeout=30,  # timeout before erroring
        pool_recycle=1800,  # recycle every 30min to avoid stale connections
        echo=False,
    )
else:
    # Local development - Larger pool
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        echo=settings.debug,
    )

# Create session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """Dependency for code that opens its own sessions outside the request one."""
    return SessionLocal
