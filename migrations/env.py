"""Alembic environment for keydash."""
from __future__ import annotations

import os

from alembic import context
from sqlalchemy import engine_from_config, pool

from keydash.config import Config

config = context.config


def _database_url() -> str:
    return os.getenv('DATABASE_URL') or f"sqlite:///{Config.DATABASE_PATH}"


def run_migrations_offline() -> None:
    context.configure(url=_database_url(), literal_binds=True, dialect_opts={'paramstyle': 'named'})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    section = config.get_section(config.config_ini_section) or {}
    section['sqlalchemy.url'] = _database_url()
    connectable = engine_from_config(section, prefix='sqlalchemy.', poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
