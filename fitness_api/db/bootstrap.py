# fitness_api/db/bootstrap.py
import logging
import os

from alembic import command
from alembic.config import Config

from fitness_api.core.config import Settings
from fitness_api.core.errors import ConfigurationError
from fitness_api.db.base import Base, import_models
from fitness_api.db.init_db import init_db
from fitness_api.db.session import Database

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def alembic_config(database_url: str) -> Config:
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))
    # configparser interpolation: escape % in passwords
    cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return cfg


def run_migrations_and_seed(database: Database, settings: Settings) -> None:
    mode = (settings.DB_BOOTSTRAP or "none").lower()
    if mode == "migrate":
        cfg = alembic_config(database.url)
        with database.engine.begin() as connection:
            # env.py reuses this connection (needed for in-memory sqlite)
            cfg.attributes["connection"] = connection
            command.upgrade(cfg, "head")
        logger.info("migrations applied")
    elif mode == "create_all":
        import_models()
        Base.metadata.create_all(bind=database.engine)
        logger.info("tables created")
    elif mode != "none":
        raise ConfigurationError(f"Unknown DB_BOOTSTRAP mode: {settings.DB_BOOTSTRAP!r}")

    if settings.SEED_PLANS and mode != "none":
        with database.session() as db:
            init_db(db, settings.DEFAULT_CURRENCY)
