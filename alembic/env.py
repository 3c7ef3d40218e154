"""Alembic environment — reads DATABASE_URL through leadcheck.config."""
from logging.config import fileConfig

from alembic import context

from leadcheck.database import Base, engine
import leadcheck.models.lead  # noqa: F401  registers the leads table

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=str(engine.url),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )
    with context.begin_transaction():
        context.run_migrations()


def _run_with(connection) -> None:
    context.configure(connection=connection, target_metadata=target_metadata)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    # A caller may hand over its own connection via Config.attributes
    connection = config.attributes.get('connection')
    if connection is not None:
        _run_with(connection)
        return
    with engine.connect() as connection:
        _run_with(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
