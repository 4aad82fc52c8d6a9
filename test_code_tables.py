"""Tests for the static code tables and their lookup helpers."""

import pytest

from models import Realm, Position, SLOT_IDS
from code_tables import (
    resolve_realm, resolve_position, resolve_damage_type, resolve_armor_type,
    resolve_weapon_type, resolve_bonus_type, parse_realm_name, parse_position_name,
    effect_display_name, get_slot_display,
    EFFECT_FULL_NAMES, FULL_NAME_TO_EFFECT, BONUS_NAME_TO_ID, ZENKCRAFT_SLOT_NAMES,
    XML_POS_TO_SLOTS, CLASSES_BY_REALM, CLASS_ARMOR_TYPES, CLASS_WEAPON_TYPES,
    BONUS_CAPS,
)
from conftest import make_item


@pytest.mark.parametrize('code, expected', [
    ('0', None),
    ('1', Realm.ALBION),
    ('2', Realm.MIDGARD),
    ('3', Realm.HIBERNIA),
    ('9', None),
    (None, None),
])
def test_resolve_realm(code, expected):
    assert resolve_realm(code) == expected


def test_resolve_position():
    assert resolve_position('21') == Position.HELMETS
    assert resolve_position('11') == Position.WEAPONS
    assert resolve_position('37') == Position.MYTHIRIAN
    assert resolve_position('99') is None
    assert resolve_position(None) is None


def test_resolve_damage_and_armor():
    assert resolve_damage_type('1') == 'CRUSH'
    assert resolve_damage_type('2') == 'SLASH'
    assert resolve_damage_type('3') == 'THRUST'
    assert resolve_damage_type('0') is None
    assert resolve_armor_type('36') == 'PLATE'
    assert resolve_armor_type('37') == 'REINFORCED'
    assert resolve_armor_type('38') == 'SCALE'
    assert resolve_armor_type('2') is None


@pytest.mark.parametrize('object_type, item_type, shield_size, expected', [
    ('3', '10', None, 'SLASH'),
    ('3', '11', None, 'SLASH_LEFT'),
    ('2', '11', None, 'CRUSH_LEFT'),
    ('11', '11', None, 'SWORD'),        # only Albion types get _LEFT
    ('42', '11', '3', 'SHIELD_LARGE'),
    ('42', '11', '2', 'SHIELD_MEDIUM'),
    ('42', '11', '1', 'SHIELD_SMALL'),
    ('42', '11', None, 'SHIELD_SMALL'),
    ('9', '13', None, 'LONGBOW'),
    ('26', '12', None, 'SCYTHE'),
    ('999', '10', None, None),
])
def test_resolve_weapon_type(object_type, item_type, shield_size, expected):
    assert resolve_weapon_type(object_type, item_type, shield_size) == expected


def test_resolve_bonus_type():
    assert resolve_bonus_type(1) == 'STRENGTH'
    assert resolve_bonus_type(156) == 'ACUITY'
    assert resolve_bonus_type(173) == 'MELEE_DAMAGE_BONUS'
    assert resolve_bonus_type(201) == 'CAP_STRENGTH'
    assert resolve_bonus_type(9999) == 'UNKNOWN_9999'


def test_parse_names():
    assert parse_realm_name('Hibernia') == Realm.HIBERNIA
    assert parse_realm_name('Atlantis') is None
    assert parse_realm_name(None) is None
    assert parse_position_name('CLOAK') == Position.CLOAK
    assert parse_position_name('POCKET') is None
    assert parse_position_name(None) is None


def test_full_name_maps_are_inverse():
    for effect_id, name in EFFECT_FULL_NAMES.items():
        assert FULL_NAME_TO_EFFECT[name] == effect_id
    assert BONUS_NAME_TO_ID['AF'] == 'AF_BONUS'
    assert BONUS_NAME_TO_ID['Armor Factor'] == 'AF_BONUS'
    assert BONUS_NAME_TO_ID['Debuff Effectiveness'] == 'REDUCE_MAGIC_RESISTS'


def test_slot_tables_cover_every_slot():
    assert [slot for slot, _ in ZENKCRAFT_SLOT_NAMES] == list(SLOT_IDS)
    mapped = {slot for slots in XML_POS_TO_SLOTS.values() for slot in slots}
    assert mapped == set(SLOT_IDS)
    assert set(XML_POS_TO_SLOTS) == set(Position)


def test_every_class_has_allowances():
    for classes in CLASSES_BY_REALM.values():
        for cls in classes:
            assert cls in CLASS_ARMOR_TYPES
            assert cls in CLASS_WEAPON_TYPES
            assert 'CLOTH' in CLASS_ARMOR_TYPES[cls]


def test_bonus_cap_tiers():
    assert BONUS_CAPS['HEALING_BONUS'] == 25
    assert BONUS_CAPS['MELEE_DAMAGE_BONUS'] == 10
    assert BONUS_CAPS['AF_BONUS'] == 50
    assert BONUS_CAPS['FATIGUE'] == 25
    assert BONUS_CAPS['ALL_MELEE_BONUS'] == 11
    assert BONUS_CAPS['ALL_MAGIC_FOCUS'] == 50


def test_effect_display_name():
    assert effect_display_name('CRITICAL_STRIKE') == 'CRITICAL STRIKE'
    assert effect_display_name('critical_strike') == 'Critical Strike'
    assert effect_display_name('PARRY') == 'Parry'


def test_get_slot_display():
    assert get_slot_display(make_item('Helm', Position.HELMETS)) == 'A - Head'
    assert get_slot_display(make_item('Ring', Position.RINGS)) == 'J - Ring'
    assert get_slot_display(make_item('Blade', Position.WEAPONS, weapon_type='SLASH')) == 'W - Slash'
    assert get_slot_display(make_item('Thing', Position.WEAPONS)) == 'W - ?'
    assert get_slot_display(make_item('Odd', Position.WEAPONS, weapon_type='THROWN')) == 'W - THROWN'
