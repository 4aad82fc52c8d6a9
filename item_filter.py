"""
Item Filter

Multi-criteria item filtering for the item browser, plus the sort and
paging helpers the browser uses on the filtered list.

Filters apply in sequence: realm -> slot -> class -> stats -> search -> owned.
An empty criterion never filters anything out.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Set, Tuple

from models import Item, Position
from code_tables import (
    WEAPON_TYPE_GROUPS, CLASS_ARMOR_TYPES, CLASS_WEAPON_TYPES,
    CLASSES_BY_REALM, REALMS, get_slot_display,
)
from stats_calculator import calculate_item_utility


ANY_REALM = 'Any'
WEAPON_GROUP_PREFIX = 'WT_'
ITEMS_PER_PAGE = 20

SORT_COLUMNS = ('name', 'slot', 'level', 'utility')
DEFAULT_SORT_COLUMN = 'utility'


@dataclass
class StatFilter:
    """Require effects[stat] >= min_value."""
    stat: str
    min_value: int = 0


@dataclass
class ItemFilterCriteria:
    realm: str = ''           # '' = all, 'Any' = realm-less items only
    slot: str = ''            # '' = all, position name or 'WT_<type>' weapon group
    character_class: str = ''
    search_term: str = ''
    owned_only: bool = False
    owned_ids: Set[str] = field(default_factory=set)
    stat_filters: List[StatFilter] = field(default_factory=list)


class ItemFilterService:
    """Filter pipeline over a list of Items."""

    @staticmethod
    def filter(items: List[Item], criteria: ItemFilterCriteria) -> List[Item]:
        """Apply every criterion in order."""
        result = ItemFilterService.filter_by_realm(items, criteria.realm)
        result = ItemFilterService.filter_by_slot(result, criteria.slot)
        result = ItemFilterService.filter_by_class(result, criteria.character_class)
        result = ItemFilterService.filter_by_stats(result, criteria.stat_filters)
        result = ItemFilterService.filter_by_search(result, criteria.search_term)
        if criteria.owned_only:
            result = ItemFilterService.filter_by_owned(result, criteria.owned_ids)
        return result

    @staticmethod
    def filter_by_realm(items: List[Item], realm: str) -> List[Item]:
        if not realm:
            return list(items)
        if realm == ANY_REALM:
            return [it for it in items if it.realm is None]
        return [it for it in items if it.realm is None or it.realm.value == realm]

    @staticmethod
    def filter_by_slot(items: List[Item], slot: str) -> List[Item]:
        if not slot:
            return list(items)

        if slot.startswith(WEAPON_GROUP_PREFIX):
            group = find_weapon_group(slot[len(WEAPON_GROUP_PREFIX):])
            if group is not None:
                result = []
                for it in items:
                    if it.position != Position.WEAPONS:
                        continue
                    if group['match_by'] == 'damage':
                        value = it.damage_type or ''
                    else:
                        value = it.weapon_type or ''
                    if value in group['types']:
                        result.append(it)
                return result

        return [it for it in items if it.position.value == slot]

    @staticmethod
    def filter_by_class(items: List[Item], character_class: str) -> List[Item]:
        """
        Keep items the class can use.

        Checks the item's explicit restriction list, then its armor and weapon
        type against the class tables (classes without a table pass).
        """
        if not character_class:
            return list(items)

        allowed_armor = CLASS_ARMOR_TYPES.get(character_class)
        allowed_weapons = CLASS_WEAPON_TYPES.get(character_class)

        result = []
        for it in items:
            if not it.can_be_used_by(character_class):
                continue
            if it.armor_type and allowed_armor and it.armor_type not in allowed_armor:
                continue
            if it.weapon_type and allowed_weapons and it.weapon_type not in allowed_weapons:
                continue
            result.append(it)
        return result

    @staticmethod
    def filter_by_stats(items: List[Item], stat_filters: List[StatFilter]) -> List[Item]:
        result = list(items)
        for sf in stat_filters:
            result = [
                it for it in result
                if sf.stat in it.effects and it.effects[sf.stat] >= sf.min_value
            ]
        return result

    @staticmethod
    def filter_by_search(items: List[Item], search_term: str) -> List[Item]:
        if not search_term:
            return list(items)
        query = search_term.lower()
        return [it for it in items if query in it.name.lower()]

    @staticmethod
    def filter_by_owned(items: List[Item], owned_ids: Set[str]) -> List[Item]:
        return [it for it in items if it.id in owned_ids]


def find_weapon_group(first_type: str) -> Optional[dict]:
    """Weapon group whose first type matches ('SLASH', 'TWO_HAND', ...)."""
    for group in WEAPON_TYPE_GROUPS:
        if group['types'][0] == first_type:
            return group
    return None


def get_classes_for_realm(realm: str = '') -> List[str]:
    """
    Class names for a realm dropdown.

    A known realm gives that realm's classes sorted; anything else gives all
    classes, sorted within each realm, realms in Albion/Hibernia/Midgard order.
    """
    if realm and realm != ANY_REALM and realm in CLASSES_BY_REALM:
        return sorted(CLASSES_BY_REALM[realm])
    result = []
    for r in REALMS:
        result.extend(sorted(CLASSES_BY_REALM.get(r, [])))
    return result


def _sort_key(item: Item, column: str):
    if column == 'name':
        return item.name.lower()
    if column == 'slot':
        return get_slot_display(item)
    if column == 'level':
        return item.level or 50
    return calculate_item_utility(item)


def sort_items(items: List[Item], column: str = DEFAULT_SORT_COLUMN,
               descending: bool = True) -> List[Item]:
    """Sort by name, slot, level or utility. Unknown columns leave the order alone."""
    if column not in SORT_COLUMNS:
        return list(items)
    return sorted(items, key=lambda it: _sort_key(it, column), reverse=descending)


def paginate(items: List[Item], page: int = 1,
             per_page: int = ITEMS_PER_PAGE) -> Tuple[List[Item], int, int]:
    """
    Slice one page out of a list.

    Out-of-range pages are clamped to the last page.

    Returns:
        (page items, effective page, total pages)
    """
    per_page = max(1, per_page)
    total_pages = max(1, math.ceil(len(items) / per_page))
    page = min(max(1, page), total_pages)
    start = (page - 1) * per_page
    return items[start:start + per_page], page, total_pages
