from __future__ import annotations

from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from proposal_pricing.infra.db.config import database_url

# special_offers, bundle_rules, lifestyle_upsells, proposal_offers, proposal_addons
from proposal_pricing.infra.db.models import Base


config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _migration_url() -> str:
    """
    `alembic -x db_url=...` targets another database (e.g. a throwaway test
    schema); otherwise DATABASE_URL is used, same as the API.
    """
    overrides = context.get_x_argument(as_dictionary=True)
    return overrides.get("db_url") or database_url()


def _configure(**kwargs) -> None:
    context.configure(target_metadata=target_metadata, compare_type=True, **kwargs)
    with context.begin_transaction():
        context.run_migrations()


def run_offline(url: str) -> None:
    _configure(url=url, literal_binds=True, dialect_opts={"paramstyle": "named"})


def run_online(url: str) -> None:
    section = config.get_section(config.config_ini_section) or {}
    section["sqlalchemy.url"] = url
    engine = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with engine.connect() as connection:
        _configure(connection=connection)


if context.is_offline_mode():
    run_offline(_migration_url())
else:
    run_online(_migration_url())
