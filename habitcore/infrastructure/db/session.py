"""
Read-only database access for the snapshot loaders
"""
from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from habitcore.config import get_settings


class Base(DeclarativeBase):
    pass


_engine = None
_SessionLocal = None


def get_engine():
    """Engine for Settings.DATABASE_URL, created on first use"""
    global _engine
    if _engine is None:
        _engine = create_engine(get_settings().get_sqlalchemy_url(), pool_pre_ping=True)
    return _engine


def get_db() -> Session:
    """FastAPI dependency yielding one session per request"""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False)
    db = _SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connection() -> None:
    """Raises sqlalchemy.exc.OperationalError when the database is unreachable"""
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
