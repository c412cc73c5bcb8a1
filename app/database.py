# app/database.py
"""
Database connection, session management, and table creation for the local backend.
Only used when BACKEND_MODE=local; the hosted API owns the tables otherwise.
All models are auto-imported here so create_tables() creates every table in one call.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from app.config import settings

# SQLite connections are shared across FastAPI's worker threads
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,          # Auto-reconnect if DB connection drops
    connect_args=_connect_args,
    echo=False,                  # Set True to log all SQL queries (debug only)
)

SessionLocal = sessionmaker(autoflush=False, bind=engine)

Base = declarative_base()


def create_tables(bind=None):
    """
    Creates all DB tables. Safe to call multiple times.
    Import all models here so SQLAlchemy knows about them.
    """
    from app.models.vehicle import Vehicle                 # noqa
    from app.models.driver import Driver                   # noqa
    from app.models.trip import Trip                       # noqa
    from app.models.maintenance import MaintenanceRecord   # noqa
    from app.models.user import User                       # noqa

    Base.metadata.create_all(bind=bind or engine)
