"""Alembic environment for the pet adoption schema."""

from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from petadopt.core.config import get_settings
from petadopt.db.base import Base
from petadopt.models import *  # noqa: F401,F403

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# DATABASE_URL and SYNC_DATABASE_URL win over alembic.ini.
config.set_main_option(
    "sqlalchemy.url", get_settings().migration_url.replace("%", "%%")
)


def _configure(**options: object) -> None:
    context.configure(target_metadata=Base.metadata, compare_type=True, **options)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_offline() -> None:
    _configure(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )


def run_migrations_online() -> None:
    engine = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with engine.connect() as connection:
        # SQLite cannot ALTER most constraints in place.
        _configure(
            connection=connection,
            render_as_batch=connection.dialect.name == "sqlite",
        )


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
