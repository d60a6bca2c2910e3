"""Migrations for the users and reviews tables, against settings.DATABASE_URL."""

from alembic import context
from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from app.core.config import settings
from app.models import Base

# SQLite cannot ALTER most constraints in place; batch mode recreates the table instead.
RENDER_AS_BATCH = settings.DATABASE_URL.startswith("sqlite")


def run() -> None:
    options = {
        "target_metadata": Base.metadata,
        "render_as_batch": RENDER_AS_BATCH,
        "compare_type": True,
    }
    if context.is_offline_mode():
        context.configure(
            url=settings.DATABASE_URL,
            literal_binds=True,
            dialect_opts={"paramstyle": "named"},
            **options,
        )
        with context.begin_transaction():
            context.run_migrations()
        return

    engine = create_engine(settings.DATABASE_URL, poolclass=NullPool)
    with engine.connect() as connection:
        context.configure(connection=connection, **options)
        with context.begin_transaction():
            context.run_migrations()


run()
