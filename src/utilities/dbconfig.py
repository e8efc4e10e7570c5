from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from config import settings


# Base class (must be defined before models for Alembic)

Base = declarative_base()

# Database URL
DATABASE_URL = settings.SQLALCHEMY_DATABASE_URL

if not DATABASE_URL:
    raise ValueError("SQLALCHEMY_DATABASE_URL is not set in environment variables")


def build_engine(url: str):
    """Create an engine; SQLite gets a single shared connection instead of a pool."""
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=settings.DB_ECHO,
        )
    return create_engine(
        url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_pre_ping=True,
        echo=settings.DB_ECHO,
    )


# SQLAlchemy Engine

engine = build_engine(DATABASE_URL)

# SessionLocal

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# Dependency for FastAPI

def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
