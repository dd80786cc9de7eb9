"""PostgreSQL connection and session management."""

from collections.abc import Generator
from dataclasses import dataclass

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    pool_timeout=settings.DB_POOL_TIMEOUT_SEC,
    connect_args={
        "connect_timeout": settings.DB_CONNECT_TIMEOUT_SEC,
        "options": f"-c statement_timeout={int(settings.DB_STATEMENT_TIMEOUT_SEC * 1000)}",
    },
    echo=settings.DEBUG,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@dataclass(frozen=True)
class StoreStatus:
    """Result of a store connectivity probe; last_error is an error class name, never driver text."""

    connected: bool
    last_error: str | None = None


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_store(db: Session) -> StoreStatus:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return StoreStatus(connected=True)
    except SQLAlchemyError as e:
        db.rollback()
        return StoreStatus(connected=False, last_error=type(e).__name__)
