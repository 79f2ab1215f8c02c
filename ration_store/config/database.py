# ration_store/config/database.py
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from .settings import settings


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine with the connection options each backend needs"""
    engine_kwargs = {
        "pool_pre_ping": True,
        "echo": echo,
    }

    if database_url.startswith("sqlite"):
        # Sessions are used from the server threadpool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs["pool_recycle"] = 300
        if settings.db_sslmode:
            engine_kwargs["connect_args"] = {"sslmode": settings.db_sslmode}

    return create_engine(database_url, **engine_kwargs)


# Create engine
engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models
Base = declarative_base()


def create_tables(bind: Engine = engine) -> None:
    """Create every table registered on Base"""
    # Register the models on Base.metadata
    from ration_store.shared.database import models  # noqa: F401

    Base.metadata.create_all(bind=bind)


# Database dependency
def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
