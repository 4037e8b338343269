from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..config import get_settings

Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Engine for the article store; SQLite for local runs and tests, pooled otherwise."""
    if not database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
            pool_recycle=300,
            echo=echo
        )

    options = {"connect_args": {"check_same_thread": False}, "echo": echo}
    if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
        # One shared connection, otherwise every session gets its own empty database
        options["poolclass"] = StaticPool
    return create_engine(database_url, **options)


def session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


settings = get_settings()
engine = build_engine(settings.database_url, echo=settings.debug)
SessionLocal = session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def ping(db: Session) -> None:
    """Round-trip to the store; raises the driver error when it is unreachable."""
    db.execute(text("SELECT 1"))


def create_tables(bind: Engine = None):
    # enriched_articles must be registered on Base before create_all
    from ..models import article  # noqa: F401
    Base.metadata.create_all(bind=bind or engine)


def drop_tables(bind: Engine = None):
    Base.metadata.drop_all(bind=bind or engine)
