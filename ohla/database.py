"""SQLModel database engine, schema setup and lightweight migrations."""

import logging

from sqlalchemy import event, inspect, text
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from ohla.config import settings

logger = logging.getLogger(__name__)

SINGLE_ACTIVE_INDEX = "ix_node_profiles_single_active"


def build_engine(database_url: str) -> Engine:
    """Create an engine whose transactions are serialized against each other.

    SQLite transactions are opened with BEGIN IMMEDIATE so the write lock is
    taken before the first read; other engines run at SERIALIZABLE.
    """
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False, isolation_level="SERIALIZABLE")

    new_engine = create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False, "timeout": 30},
    )

    @event.listens_for(new_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        # pysqlite would otherwise defer BEGIN until the first write
        dbapi_connection.isolation_level = None

    @event.listens_for(new_engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return new_engine


engine = build_engine(settings.database_url)


def _run_migrations(db_engine: Engine):
    """Bring databases written by the first backend release up to date."""
    if db_engine.dialect.name != "sqlite":
        return

    inspector = inspect(db_engine)
    tables = set(inspector.get_table_names())

    if "node_configs" in tables and "node_profiles" not in tables:
        logger.info("Migrating: renaming node_configs -> node_profiles")
        with db_engine.connect() as conn:
            conn.execute(text("ALTER TABLE node_configs RENAME TO node_profiles"))
            conn.commit()
        tables.add("node_profiles")

    if "node_profiles" not in tables:
        return

    columns = {col["name"] for col in inspect(db_engine).get_columns("node_profiles")}
    if "seq" not in columns:
        logger.info("Migrating: adding node_profiles.seq")
        with db_engine.connect() as conn:
            conn.execute(text("ALTER TABLE node_profiles ADD COLUMN seq INTEGER NOT NULL DEFAULT 0"))
            # Number existing rows in creation order
            conn.execute(text(
                "UPDATE node_profiles SET seq = ("
                " SELECT COUNT(*) FROM node_profiles AS p"
                " WHERE p.created_at < node_profiles.created_at"
                " OR (p.created_at = node_profiles.created_at AND p.id <= node_profiles.id))"
            ))
            conn.commit()


def _ensure_indexes(db_engine: Engine):
    """Create indexes that create_all skips on tables that already existed."""
    if db_engine.dialect.name != "sqlite":
        return

    existing_indexes = inspect(db_engine).get_indexes("node_profiles")
    has_single_active = any(idx["name"] == SINGLE_ACTIVE_INDEX for idx in existing_indexes)
    if not has_single_active:
        with db_engine.connect() as conn:
            active_count = conn.execute(
                text("SELECT COUNT(*) FROM node_profiles WHERE is_active = 1")
            ).scalar_one()
            if active_count > 1:
                logger.warning(
                    f"Migrating: {active_count} node profiles are active; "
                    "keeping only the most recently created one active"
                )
                conn.execute(text(
                    "UPDATE node_profiles SET is_active = 0 "
                    "WHERE is_active = 1 AND id NOT IN ("
                    " SELECT id FROM node_profiles WHERE is_active = 1"
                    " ORDER BY created_at DESC, seq DESC LIMIT 1)"
                ))
            conn.execute(text(
                f"CREATE UNIQUE INDEX {SINGLE_ACTIVE_INDEX} "
                "ON node_profiles (is_active) WHERE is_active = 1"
            ))
            conn.commit()


def create_db_and_tables(db_engine: Engine | None = None):
    """Create all tables. Called on startup."""
    from ohla.models import NodeProfile  # noqa: F401

    db_engine = db_engine or engine
    _run_migrations(db_engine)
    SQLModel.metadata.create_all(db_engine)
    _ensure_indexes(db_engine)
