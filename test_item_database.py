"""Tests for the in-memory item catalog."""

import json

import pytest
import requests

import item_database
from models import Position
from item_database import (
    ItemDatabase, detect_format, combine_items, toggle_owned,
    get_database, reset_database,
)
from conftest import make_item


XML_FEED = """<items>
  <item><name>Feed Helm</name><position>HELMETS</position><realm>Albion</realm>
    <effect id="STRENGTH">4</effect></item>
  <item><name>Feed Ring</name><position>RINGS</position>
    <effect id="PARRY">1</effect><effect id="RES_HEAT">2</effect></item>
</items>"""

NDJSON_FEED = '\n'.join(json.dumps(r) for r in [
    {'name': 'Feed Helm', 'item_type': '21', 'object_type': '36', 'realm': '1'},
    {'name': 'Dump Bracer', 'item_type': '33', 'realm': '2', 'bonus_types': '3', 'bonus_values': '6'},
])


class _FakeResponse:
    def __init__(self, text, status=200):
        self.text = text
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


@pytest.fixture()
def db():
    database = ItemDatabase()
    database.load_text(XML_FEED, 'items_alb.xml')
    return database


@pytest.fixture()
def fresh_global(monkeypatch, tmp_path):
    monkeypatch.setattr(item_database, 'DEFAULT_NDJSON_PATH', tmp_path / 'eden_items.ndjson')
    monkeypatch.setattr(item_database, 'DEFAULT_XML_PATHS', [tmp_path / 'items_alb.xml'])
    reset_database()
    yield tmp_path
    reset_database()


@pytest.mark.parametrize('text, filename, expected', [
    ('anything', 'items.xml', 'xml'),
    ('anything', 'items.ndjson', 'ndjson'),
    ('anything', 'items.jsonl', 'ndjson'),
    ('  <items/>', '', 'xml'),
    ('{"name": "x"}', '', 'ndjson'),
    ('<items/>', 'upload.bin', 'xml'),
])
def test_detect_format(text, filename, expected):
    assert detect_format(text, filename) == expected


class TestItemDatabase:

    def test_load_xml(self, db):
        assert len(db) == 2
        assert db.sources == ['items_alb.xml']
        assert db.get_item('albion_helmets_feed_helm').effects == {'STRENGTH': 4}

    def test_merge_by_id(self, db):
        added = db.load_text(NDJSON_FEED, 'eden_items.ndjson')
        assert added == 1
        assert len(db) == 3
        # later feeds replace items with the same id
        assert db.get_item('albion_helmets_feed_helm').armor_type == 'PLATE'

    def test_reload_does_not_grow(self, db):
        assert db.load_text(XML_FEED, 'items_alb.xml') == 0
        assert len(db) == 2

    def test_empty_feed(self, db):
        assert db.load_text('not xml at all', 'broken.xml') == 0
        assert len(db) == 2

    def test_lookups(self, db):
        db.load_text(NDJSON_FEED, 'eden_items.ndjson')
        assert [i.name for i in db.get_items_for_position(Position.RINGS)] == ['Feed Ring']
        assert [i.name for i in db.get_items_for_slot('ring2')] == ['Feed Ring']
        assert [i.name for i in db.get_items_for_slot('bracer1')] == ['Dump Bracer']
        assert db.get_items_for_slot('pocket') == []
        assert [i.name for i in db.search_items('feed')] == ['Feed Helm', 'Feed Ring']
        # the NDJSON helm replaced the XML one and carries no effects
        assert db.all_effect_ids() == ['CONSTITUTION', 'PARRY', 'RES_HEAT']
        assert db.get_item('missing') is None

    def test_load_file(self, tmp_path):
        path = tmp_path / 'eden_items.ndjson'
        path.write_text(NDJSON_FEED, encoding='utf-8')
        database = ItemDatabase()
        assert database.load_file(path) == 2
        assert database.sources == ['eden_items.ndjson']

    def test_load_url(self, monkeypatch):
        calls = []

        def fake_get(url, timeout):
            calls.append(url)
            return _FakeResponse(XML_FEED)

        monkeypatch.setattr(item_database.requests, 'get', fake_get)
        database = ItemDatabase()
        assert database.load_url('https://example.com/items_alb.xml?v=2') == 2
        assert calls == ['https://example.com/items_alb.xml?v=2']
        assert database.sources == ['https://example.com/items_alb.xml']

    def test_load_url_failure(self, monkeypatch):
        monkeypatch.setattr(item_database.requests, 'get', lambda url, timeout: _FakeResponse('', 500))
        database = ItemDatabase()
        assert database.load_url('https://example.com/items_alb.xml') == 0
        assert len(database) == 0


def test_combine_items_prefers_owned(db):
    owned = make_item('Feed Helm', Position.HELMETS, effects={'STRENGTH': 99})
    combined = combine_items(db.all_items(), [owned])
    assert len(combined) == 2
    helm = [i for i in combined if i.id == owned.id][0]
    assert helm.effects == {'STRENGTH': 99}


def test_toggle_owned(helmet, ring):
    owned = toggle_owned([], helmet)
    assert owned == [helmet]
    owned = toggle_owned(owned, ring)
    assert owned == [helmet, ring]
    assert toggle_owned(owned, helmet) == [ring]


class TestGlobalDatabase:

    def test_empty_when_no_default_files(self, fresh_global):
        database = get_database()
        assert len(database) == 0
        assert get_database() is database

    def test_autoloads_default_files(self, fresh_global):
        (fresh_global / 'eden_items.ndjson').write_text(NDJSON_FEED, encoding='utf-8')
        (fresh_global / 'items_alb.xml').write_text(XML_FEED, encoding='utf-8')
        database = get_database()
        assert len(database) == 3
        assert database.sources == ['eden_items.ndjson', 'items_alb.xml']
