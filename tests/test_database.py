"""Tests for schema setup, the legacy-table migration and bootstrap seeding."""

from sqlalchemy import inspect, text

from ohla.config import Settings
from ohla.database import SINGLE_ACTIVE_INDEX, build_engine, create_db_and_tables
from ohla.services.node_store import NodeProfileStore, seed_profile_from_settings

from conftest import make_profile

LEGACY_SCHEMA = """
CREATE TABLE node_configs (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    rpc_url TEXT NOT NULL,
    rpc_user TEXT NOT NULL,
    rpc_password TEXT NOT NULL,
    network TEXT NOT NULL,
    is_active INTEGER NOT NULL DEFAULT 0,
    created_at INTEGER NOT NULL
)
"""


def test_create_db_and_tables_is_idempotent(engine):
    create_db_and_tables(engine)
    create_db_and_tables(engine)

    inspector = inspect(engine)
    assert "node_profiles" in inspector.get_table_names()
    assert SINGLE_ACTIVE_INDEX in {idx["name"] for idx in inspector.get_indexes("node_profiles")}


def test_legacy_node_configs_table_is_migrated(tmp_path):
    db_engine = build_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with db_engine.connect() as conn:
        conn.execute(text(LEGACY_SCHEMA))
        conn.execute(text(
            "INSERT INTO node_configs VALUES "
            "('old', 'old', 'http://a', 'u', 'p', 'main', 1, 100), "
            "('new', 'new', 'http://b', 'u', 'p', 'test', 0, 200)"
        ))
        conn.commit()

    create_db_and_tables(db_engine)

    inspector = inspect(db_engine)
    assert "node_configs" not in inspector.get_table_names()
    assert SINGLE_ACTIVE_INDEX in {idx["name"] for idx in inspector.get_indexes("node_profiles")}

    store = NodeProfileStore(db_engine)
    assert [p.id for p in store.list_profiles()] == ["new", "old"]
    assert store.get_active().id == "old"

    created = store.create(make_profile("third"))
    assert created.seq == 3
    assert created.is_active is False
    db_engine.dispose()


def test_seed_creates_active_profile_from_settings(store):
    settings = Settings(
        btc_rpc_url="http://127.0.0.1:8332",
        btc_rpc_user="rpc",
        btc_rpc_pass="secret",
        btc_network="signet",
        btc_node_name="env node",
    )

    profile = seed_profile_from_settings(store, settings)

    assert profile is not None
    assert profile.is_active is True
    assert profile.network == "signet"
    assert store.get_active().name == "env node"


def test_seed_skips_when_store_has_profiles(store):
    existing = store.create(make_profile("mine"))
    settings = Settings(btc_rpc_url="http://127.0.0.1:8332", btc_rpc_user="rpc", btc_rpc_pass="secret")

    assert seed_profile_from_settings(store, settings) is None
    assert [p.id for p in store.list_profiles()] == [existing.id]


def test_seed_skips_without_url(store):
    assert seed_profile_from_settings(store, Settings(btc_rpc_url="")) is None
    assert store.list_profiles() == []


def test_legacy_table_with_several_active_rows_keeps_newest(tmp_path, caplog):
    db_engine = build_engine(f"sqlite:///{tmp_path / 'legacy.db'}")
    with db_engine.connect() as conn:
        conn.execute(text(LEGACY_SCHEMA))
        conn.execute(text(
            "INSERT INTO node_configs VALUES "
            "('old', 'old', 'http://a', 'u', 'p', 'main', 1, 100), "
            "('new', 'new', 'http://b', 'u', 'p', 'test', 1, 200), "
            "('idle', 'idle', 'http://c', 'u', 'p', 'test', 0, 300)"
        ))
        conn.commit()

    with caplog.at_level("WARNING"):
        create_db_and_tables(db_engine)

    assert "2 node profiles are active" in caplog.text
    inspector = inspect(db_engine)
    assert SINGLE_ACTIVE_INDEX in {idx["name"] for idx in inspector.get_indexes("node_profiles")}

    store = NodeProfileStore(db_engine)
    assert store.get_active().id == "new"
    assert [p.id for p in store.list_profiles() if p.is_active] == ["new"]
    db_engine.dispose()
