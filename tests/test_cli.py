"""Tests for the admin CLI."""

import sys

import pytest

from ohla import cli

from conftest import make_profile


@pytest.fixture
def cli_engine(engine, monkeypatch):
    monkeypatch.setattr(cli, "engine", engine)
    return engine


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["ohla", *args])
    cli.main()


def test_list_nodes_marks_active(cli_engine, store, monkeypatch, capsys):
    a = store.create(make_profile("alpha"))
    store.create(make_profile("beta"))

    _run(monkeypatch, "list-nodes")

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[1].startswith(f"* {a.id}")
    assert lines[0].startswith("  ")


def test_activate_node(cli_engine, store, monkeypatch, capsys):
    store.create(make_profile("alpha"))
    b = store.create(make_profile("beta"))

    _run(monkeypatch, "activate-node", b.id)

    assert store.get_active().id == b.id
    assert "is now active" in capsys.readouterr().out


def test_activate_unknown_node_exits_with_error(cli_engine, monkeypatch, capsys):
    with pytest.raises(SystemExit) as exc_info:
        _run(monkeypatch, "activate-node", "missing")

    assert exc_info.value.code == 1
    assert "not found" in capsys.readouterr().out


def test_add_node_interactive(cli_engine, store, monkeypatch, capsys):
    answers = iter(["home", "http://127.0.0.1:8332", "alice", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    monkeypatch.setattr(cli.getpass, "getpass", lambda prompt="": "hunter2")

    _run(monkeypatch, "add-node")

    profile = store.get_active()
    assert profile.name == "home"
    assert profile.network == "mainnet"
    assert "now active" in capsys.readouterr().out


def test_unknown_command_exits(monkeypatch, capsys):
    with pytest.raises(SystemExit):
        _run(monkeypatch, "frobnicate")
    assert "Unknown command" in capsys.readouterr().out
