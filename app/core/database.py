"""Database engine and session management (PostgreSQL in production, SQLite for local runs)."""

from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    """Per-dialect engine options; in-memory SQLite must share one connection across threads."""
    if url.startswith("sqlite"):
        options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True}


def build_engine(url: str) -> Engine:
    """Create the engine for url; called once per process."""
    return create_engine(url, echo=settings.DEBUG, **_engine_options(url))


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency that yields a DB session and closes it when done."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False


def missing_tables(db: Session, required: tuple[str, ...]) -> list[str]:
    """Names in required that do not exist yet (migrations not applied)."""
    present = set(inspect(db.connection()).get_table_names())
    return [name for name in required if name not in present]


def dispose_engine() -> None:
    """Release pooled connections; called on application shutdown."""
    engine.dispose()
