"""Tests for the launcher's argument handling and catalog preload."""

import json
import sys

import pytest
import uvicorn

import item_database
import start_server
from item_database import get_database, reset_database


@pytest.fixture()
def fresh_global(monkeypatch, tmp_path):
    monkeypatch.setattr(item_database, 'DEFAULT_NDJSON_PATH', tmp_path / 'eden_items.ndjson')
    monkeypatch.setattr(item_database, 'DEFAULT_XML_PATHS', [])
    reset_database()
    yield tmp_path
    reset_database()


@pytest.fixture()
def runs(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, 'run', lambda app, **kwargs: calls.append((app, kwargs)))
    return calls


def test_items_with_reload_is_rejected(monkeypatch, runs, capsys):
    monkeypatch.setattr(sys, 'argv', ['start_server.py', '--reload', '--items', 'items_alb.xml'])
    with pytest.raises(SystemExit) as exc:
        start_server.main()
    assert exc.value.code == 2
    assert '--items cannot be combined with --reload' in capsys.readouterr().err
    assert runs == []


def test_reload_without_items(monkeypatch, runs):
    monkeypatch.setattr(sys, 'argv', ['start_server.py', '--reload', '--port', '9000'])
    start_server.main()
    assert runs == [('api:app', {'host': '127.0.0.1', 'port': 9000, 'reload': True})]


def test_items_are_preloaded(monkeypatch, runs, fresh_global):
    path = fresh_global / 'extra.ndjson'
    path.write_text(json.dumps({'name': 'Dump Cloak', 'item_type': '26', 'realm': '3'}), encoding='utf-8')
    monkeypatch.setattr(sys, 'argv', ['start_server.py', '--items', str(path)])

    start_server.main()

    assert get_database().get_item('hibernia_cloak_dump_cloak') is not None
    assert len(runs) == 1
    assert runs[0][1] == {'host': '127.0.0.1', 'port': 8000}
