"""Shared fixtures: a throwaway SQLite database per test and an API client bound to it."""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from ohla.api.deps import get_store
from ohla.database import build_engine, create_db_and_tables
from ohla.main import app
from ohla.schemas.node_profile import NodeProfileCreate
from ohla.services.node_store import NodeProfileStore


@pytest.fixture
def engine(tmp_path):
    db_engine = build_engine(f"sqlite:///{tmp_path / 'ohla-test.db'}")
    create_db_and_tables(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture
def store(engine) -> NodeProfileStore:
    return NodeProfileStore(engine)


@pytest.fixture
def api(store):
    app.dependency_overrides[get_store] = lambda: store
    # No context manager: the lifespan (which touches the real database) is skipped
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_profile(name: str = "local", network: str = "regtest") -> NodeProfileCreate:
    return NodeProfileCreate(
        name=name,
        rpc_url="http://127.0.0.1:18443",
        rpc_user="alice",
        rpc_password="hunter2",
        network=network,
    )


def fake_http_response(body, status_code: int = 200) -> MagicMock:
    """Stand-in for requests.Response; ``body`` may be a dict or raw text."""
    resp = MagicMock()
    resp.status_code = status_code
    if isinstance(body, str):
        resp.json.side_effect = json.JSONDecodeError("Expecting value", body, 0)
    else:
        resp.json.return_value = body
    return resp


BLOCKCHAIN_INFO = {
    "chain": "main",
    "blocks": 840000,
    "headers": 840000,
    "bestblockhash": "0000000000000000000320283a032748cef8227873ff4872689bf23f1cda83a5",
    "difficulty": 86388558925171.02,
    "verificationprogress": 0.9999987,
    "initialblockdownload": False,
    "size_on_disk": 642000000000,
    "pruned": False,
    "warnings": "",
}
