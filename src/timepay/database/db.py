from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config.settings import DATABASE_URL, DEBUG


def create_db_engine(url: str = DATABASE_URL):
    """Create engine; SQLite connections are shared across threads"""
    kwargs = {"echo": DEBUG}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in url or url == "sqlite://":
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


# Create database engine
engine = create_db_engine()

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()


def init_db(bind=None):
    """Create all tables"""
    from . import models  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)
