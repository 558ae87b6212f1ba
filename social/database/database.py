from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from social.core.config import settings

DATABASE_URL = settings.DATABASE_URL
if not DATABASE_URL:
    raise ValueError("DATABASE_URL is not set in the .env file")

if DATABASE_URL.startswith("sqlite"):
    # sqlite waits on a locked database file instead of a pool slot
    engine_options = {
        "connect_args": {"check_same_thread": False, "timeout": settings.DB_TIMEOUT_SECONDS},
    }
else:
    engine_options = {
        "pool_timeout": settings.DB_TIMEOUT_SECONDS,
        "connect_args": {"connect_timeout": settings.DB_TIMEOUT_SECONDS},
    }

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    **engine_options
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)

Base = declarative_base()


def get_db():
    """
    Opens a database session for each request.
    Closes it once the request is done.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory():
    """
    Session factory for work that outlives the request session
    (background side effects run after the response is sent).
    """
    return SessionLocal
