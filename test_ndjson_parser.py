"""Tests for the NDJSON item dump decoder."""

import json

from models import Position, Realm
from ndjson_parser import (
    parse_ndjson, parse_ndjson_item, parse_effects, parse_class_restrictions,
    parse_proc, load_ndjson_file,
)


HAMMER = {
    'name': 'Crushing Hammer',
    'item_type': '10',
    'object_type': '2',
    'realm': '1',
    'level': '50',
    'quality': '99',
    'damage_type': '1',
    'bonus_types': '1,17,1,10',
    'bonus_values': '5,4,3,0',
    'allowed_classes': 'Armsman;;Paladin',
    'proc1_json': json.dumps({'Name': 'Flame Burst', 'Attributes': [['Type', 'DirectDamage'], ['Damage', 100]]}),
    'passive_json': 'not json',
}

OFF_HAND = {
    'name': 'Left Blade', 'item_type': '11', 'object_type': '3',
    'realm': '1', 'damage_type': '2',
}

HELM = {
    'name': 'Plate Helm', 'item_type': '21', 'object_type': '36',
    'realm': '0', 'bonus_types': '2', 'bonus_values': '7',
    'allowed_classes': ';;',
}


def _dump(*records):
    return '\n'.join(json.dumps(r) if isinstance(r, dict) else r for r in records)


class TestParseItem:

    def test_weapon_record(self):
        item = parse_ndjson_item(HAMMER)
        assert item.id == 'albion_weapons_crushing_hammer'
        assert item.position == Position.WEAPONS
        assert item.realm == Realm.ALBION
        assert item.level == 50
        assert item.quality == 99
        assert item.weapon_type == 'CRUSH'
        assert item.damage_type == 'CRUSH'
        assert item.armor_type is None
        assert item.effects == {'STRENGTH': 8, 'RES_SLASH': 4}
        assert item.class_restrictions == ['Armsman', 'Paladin']

    def test_malformed_proc_is_dropped(self):
        item = parse_ndjson_item(HAMMER)
        assert len(item.procs) == 1
        proc = item.procs[0]
        assert proc.name == 'Flame Burst'
        assert proc.type == 'DirectDamage'
        assert proc.attributes['Damage'] == '100'
        assert proc.source == 'proc'

    def test_off_hand_gets_left_suffix(self):
        item = parse_ndjson_item(OFF_HAND)
        assert item.weapon_type == 'SLASH_LEFT'
        assert item.damage_type == 'SLASH'
        assert item.procs is None

    def test_armor_record(self):
        item = parse_ndjson_item(HELM)
        assert item.position == Position.HELMETS
        assert item.realm is None
        assert item.id == 'any_helmets_plate_helm'
        assert item.armor_type == 'PLATE'
        assert item.weapon_type is None
        assert item.level == 51
        assert item.quality == 100
        assert item.class_restrictions == []

    def test_misc_and_nameless_records_skipped(self):
        assert parse_ndjson_item({'name': 'Potion', 'item_type': '40'}) is None
        assert parse_ndjson_item({'item_type': '21'}) is None


class TestParseFile:

    def test_skips_bad_lines_and_duplicates(self):
        text = _dump(HAMMER, '', 'not json', '[1, 2]', HELM, dict(HAMMER, level='40'))
        items = parse_ndjson(text)
        assert [i.name for i in items] == ['Crushing Hammer', 'Plate Helm']
        # first occurrence wins
        assert items[0].level == 50

    def test_deeply_nested_line_is_skipped(self):
        items = parse_ndjson(_dump(HAMMER, '[' * 100000, HELM))
        assert [i.name for i in items] == ['Crushing Hammer', 'Plate Helm']

    def test_empty_input(self):
        assert parse_ndjson('') == []
        assert parse_ndjson('\n\n') == []

    def test_load_file(self, tmp_path):
        path = tmp_path / 'items.ndjson'
        path.write_text(_dump(HAMMER, OFF_HAND), encoding='utf-8')
        assert len(load_ndjson_file(path)) == 2
        assert load_ndjson_file(tmp_path / 'missing.ndjson') == []


def test_parse_effects():
    assert parse_effects('1,1,11', '2,3,-4') == {'STRENGTH': 5, 'RES_BODY': -4}
    assert parse_effects('9999', '1') == {'UNKNOWN_9999': 1}
    assert parse_effects('1,2', '0,abc') == {}
    assert parse_effects(None, '1') == {}
    assert parse_effects('', '') == {}


def test_parse_class_restrictions():
    assert parse_class_restrictions(None) == []
    assert parse_class_restrictions(';;') == []
    assert parse_class_restrictions('Armsman;;') == ['Armsman']
    assert parse_class_restrictions('Hero;;Champion') == ['Hero', 'Champion']


def test_parse_proc():
    assert parse_proc('{broken', 'proc') is None
    assert parse_proc('{"Attributes": []}', 'proc') is None
    proc = parse_proc('{"Name": "Shield", "Attributes": null}', 'reactive')
    assert proc.name == 'Shield'
    assert proc.type == ''
    assert proc.source == 'reactive'
