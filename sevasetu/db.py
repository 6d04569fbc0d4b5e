# sevasetu/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sevasetu.config import get_settings


settings = get_settings()

_connect_args = {}
if settings.database_url.startswith("sqlite"):
    # FastAPI may touch the connection from a worker thread
    _connect_args["check_same_thread"] = False

engine = create_engine(
    settings.database_url,
    echo=False,  # set True if you want to see SQL queries
    future=True,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


class Base(DeclarativeBase):
    """
    Base class for ORM models.
    """
    pass
