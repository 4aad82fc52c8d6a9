"""Shared test fixtures."""

import pytest

from models import Item, Template, Position, Realm, empty_slots


def make_item(name='Test Item', position=Position.HELMETS, realm=Realm.ALBION,
              effects=None, **kwargs) -> Item:
    """Build an Item with a proper deterministic id."""
    return Item(
        id=Item.make_id(realm, position, name),
        name=name,
        position=position,
        realm=realm,
        effects=dict(effects or {}),
        **kwargs,
    )


def make_template(**slots) -> Template:
    filled = empty_slots()
    filled.update(slots)
    return Template(
        id='1700000000000_abc1234',
        name='Test Template',
        realm=Realm.ALBION,
        character_class='Armsman',
        level=50,
        slots=filled,
        created_at='2024-01-01T00:00:00.000Z',
        updated_at='2024-01-01T00:00:00.000Z',
    )


@pytest.fixture()
def helmet() -> Item:
    return make_item(
        'Test Helm', Position.HELMETS,
        effects={'STRENGTH': 10, 'HITPOINTS': 20, 'RES_SLASH': 5},
        armor_type='PLATE', armor_af=102,
    )


@pytest.fixture()
def ring() -> Item:
    return make_item(
        'Test Ring', Position.RINGS, realm=None,
        effects={'ALL_MELEE_BONUS': 2, 'PARRY': 1},
    )


@pytest.fixture()
def sword() -> Item:
    return make_item(
        'Simple Sword', Position.WEAPONS,
        effects={'MELEE_DAMAGE_BONUS': 5},
        weapon_type='SLASH', damage_type='SLASH',
    )


@pytest.fixture()
def greatsword() -> Item:
    return make_item(
        'Great Sword', Position.WEAPONS,
        effects={'STRENGTH': 12},
        weapon_type='TWO_HAND', damage_type='SLASH',
    )


@pytest.fixture()
def template(helmet, ring) -> Template:
    return make_template(head=helmet, ring1=ring)


@pytest.fixture()
def empty_template() -> Template:
    return make_template()
