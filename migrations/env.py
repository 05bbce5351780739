# migrations/env.py
from alembic import context
from sqlalchemy import engine_from_config, pool

from fitness_api.core.config import get_settings
from fitness_api.db.base import Base, import_models
from fitness_api.db.session import normalize_database_url

config = context.config

# (1) URL: alembic.ini / bootstrap override, otherwise the app settings (.env)
db_url = config.get_main_option("sqlalchemy.url")
if not db_url or db_url.strip() == "":
    db_url = get_settings().DATABASE_URL
config.set_main_option("sqlalchemy.url", normalize_database_url(db_url).replace("%", "%%"))

# (2) metadata with every table registered
import_models()
target_metadata = Base.metadata


def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(url=url, target_metadata=target_metadata, literal_binds=True, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


def _run_with(connection):
    context.configure(connection=connection, target_metadata=target_metadata, render_as_batch=True)
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    # bootstrap hands over an open connection so in-memory databases see the tables
    connection = config.attributes.get("connection")
    if connection is not None:
        _run_with(connection)
        return
    connectable = engine_from_config(config.get_section(config.config_ini_section), prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        _run_with(connection)


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
