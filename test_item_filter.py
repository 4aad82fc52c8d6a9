"""Tests for item browser filtering, sorting and paging."""

import pytest

from models import Position, Realm
from item_filter import (
    ItemFilterService, ItemFilterCriteria, StatFilter,
    get_classes_for_realm, sort_items, paginate, find_weapon_group,
)
from conftest import make_item


@pytest.fixture()
def catalog():
    return [
        make_item('Albion Plate Helm', Position.HELMETS, Realm.ALBION,
                  effects={'STRENGTH': 10}, armor_type='PLATE', level=50),
        make_item('Hibernian Scale Helm', Position.HELMETS, Realm.HIBERNIA,
                  effects={'CONSTITUTION': 8}, armor_type='SCALE', level=45),
        make_item('Ring of Might', Position.RINGS, None,
                  effects={'STRENGTH': 5, 'DEXTERITY': 3}, level=51),
        make_item('Slashing Sword', Position.WEAPONS, Realm.ALBION,
                  weapon_type='SLASH', damage_type='SLASH', level=48),
        make_item('Great Maul', Position.WEAPONS, Realm.ALBION,
                  weapon_type='TWO_HAND', damage_type='CRUSH', level=47),
        make_item('Thane Hammer', Position.WEAPONS, Realm.MIDGARD,
                  weapon_type='HAMMER', damage_type='CRUSH',
                  class_restrictions=['Thane'], level=46),
    ]


def _names(items):
    return [it.name for it in items]


class TestFilters:

    def test_empty_criteria_keeps_everything(self, catalog):
        assert ItemFilterService.filter(catalog, ItemFilterCriteria()) == catalog

    def test_realm(self, catalog):
        albion = ItemFilterService.filter_by_realm(catalog, 'Albion')
        assert _names(albion) == ['Albion Plate Helm', 'Ring of Might', 'Slashing Sword', 'Great Maul']

    def test_realm_any_means_realmless_only(self, catalog):
        assert _names(ItemFilterService.filter_by_realm(catalog, 'Any')) == ['Ring of Might']

    def test_realm_any_combined_with_other_filters(self, catalog):
        criteria = ItemFilterCriteria(realm='Any', slot='RINGS', character_class='Cleric',
                                      search_term='might')
        assert _names(ItemFilterService.filter(catalog, criteria)) == ['Ring of Might']

        criteria = ItemFilterCriteria(realm='Any', slot='HELMETS')
        assert ItemFilterService.filter(catalog, criteria) == []

        criteria = ItemFilterCriteria(realm='Any', character_class='Armsman',
                                      stat_filters=[StatFilter('STRENGTH', 1)])
        assert _names(ItemFilterService.filter(catalog, criteria)) == ['Ring of Might']

    def test_slot_by_position(self, catalog):
        helms = ItemFilterService.filter_by_slot(catalog, 'HELMETS')
        assert _names(helms) == ['Albion Plate Helm', 'Hibernian Scale Helm']

    def test_slot_by_weapon_group(self, catalog):
        assert _names(ItemFilterService.filter_by_slot(catalog, 'WT_SLASH')) == ['Slashing Sword']
        assert _names(ItemFilterService.filter_by_slot(catalog, 'WT_CRUSH')) == ['Great Maul', 'Thane Hammer']
        assert _names(ItemFilterService.filter_by_slot(catalog, 'WT_TWO_HAND')) == ['Great Maul']
        assert ItemFilterService.filter_by_slot(catalog, 'WT_NOPE') == []

    def test_class(self, catalog):
        assert _names(ItemFilterService.filter_by_class(catalog, 'Cleric')) == ['Ring of Might']
        assert _names(ItemFilterService.filter_by_class(catalog, 'Armsman')) == [
            'Albion Plate Helm', 'Ring of Might', 'Slashing Sword', 'Great Maul',
        ]
        assert 'Thane Hammer' in _names(ItemFilterService.filter_by_class(catalog, 'Thane'))

    def test_stats(self, catalog):
        strong = ItemFilterService.filter_by_stats(catalog, [StatFilter('STRENGTH', 5)])
        assert _names(strong) == ['Albion Plate Helm', 'Ring of Might']
        both = ItemFilterService.filter_by_stats(
            catalog, [StatFilter('STRENGTH', 5), StatFilter('DEXTERITY', 1)])
        assert _names(both) == ['Ring of Might']

    def test_search_is_case_insensitive(self, catalog):
        assert len(ItemFilterService.filter_by_search(catalog, 'HELM')) == 2

    def test_combined_with_owned(self, catalog):
        owned = {catalog[0].id, catalog[2].id}
        criteria = ItemFilterCriteria(realm='Albion', slot='HELMETS', owned_only=True, owned_ids=owned)
        assert _names(ItemFilterService.filter(catalog, criteria)) == ['Albion Plate Helm']

        criteria.owned_ids = set()
        assert ItemFilterService.filter(catalog, criteria) == []


def test_find_weapon_group():
    assert find_weapon_group('FLEXIBLE')['label'] == 'Flexible'
    assert find_weapon_group('SHIELD_SMALL')['label'] == 'Shield'
    assert find_weapon_group('MISSING') is None


def test_classes_for_realm():
    midgard = get_classes_for_realm('Midgard')
    assert midgard == sorted(midgard)
    assert 'Thane' in midgard and 'Armsman' not in midgard

    everyone = get_classes_for_realm()
    assert len(everyone) == 43
    assert everyone[0] == 'Armsman'
    assert everyone.index('Wizard') < everyone.index('Animist') < everyone.index('Berserker')
    assert get_classes_for_realm('Any') == everyone


class TestSortAndPage:

    def test_sort_by_level(self, catalog):
        levels = [it.level for it in sort_items(catalog, 'level')]
        assert levels == [51, 50, 48, 47, 46, 45]
        levels = [it.level for it in sort_items(catalog, 'level', descending=False)]
        assert levels == [45, 46, 47, 48, 50, 51]

    def test_sort_by_utility_and_name(self, catalog):
        assert _names(sort_items(catalog))[:3] == ['Albion Plate Helm', 'Hibernian Scale Helm', 'Ring of Might']
        assert _names(sort_items(catalog, 'name', descending=False))[0] == 'Albion Plate Helm'

    def test_unknown_column_keeps_order(self, catalog):
        assert sort_items(catalog, 'weight') == catalog

    def test_paginate(self):
        items = [make_item(f'Item {i}') for i in range(45)]
        page, number, total = paginate(items, 1)
        assert len(page) == 20 and number == 1 and total == 3
        page, number, total = paginate(items, 9)
        assert len(page) == 5 and number == 3
        page, number, _ = paginate(items, 0)
        assert number == 1
        assert paginate([], 1) == ([], 1, 1)
