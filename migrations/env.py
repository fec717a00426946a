import logging
from logging.config import fileConfig

from alembic import context
from rsvpkit.app import create_app, db

# models register their tables on db.metadata when rsvpkit.app is imported
config = context.config
fileConfig(config.config_file_name)
logger = logging.getLogger("alembic.env")

app = create_app()
target_metadata = db.metadata


def _configure(**kwargs) -> None:
    url = kwargs.get("url") or app.config["SQLALCHEMY_DATABASE_URI"]
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # sqlite cannot ALTER most constraints in place
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    url = config.get_main_option("sqlalchemy.url") or app.config["SQLALCHEMY_DATABASE_URI"]
    logger.info("[MIGRATE] offline url=%s", url.split("@")[-1])
    _configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with app.app_context(), db.engine.connect() as connection:
        logger.info("[MIGRATE] online dialect=%s", connection.dialect.name)
        _configure(connection=connection)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
