"""
Equipment Manager

Slot assignment rules: weapon categories, picking a compatible slot for an
item, and equip/unequip with the two-handed vs main/off-hand exclusivity.

Templates are never modified in place; every operation returns a new one.
"""

import random
import string
import time
from dataclasses import replace
from typing import Optional

from models import Template, Item, Position, Realm, empty_slots, utc_now_iso
from code_tables import (
    XML_POS_TO_SLOTS, TWO_HANDED_WEAPON_TYPES, SHIELD_WEAPON_TYPES,
    RANGED_WEAPON_TYPES,
)


WEAPON_CATEGORY_TWO_HAND = 'twoHand'
WEAPON_CATEGORY_SHIELD = 'shield'
WEAPON_CATEGORY_RANGED = 'ranged'
WEAPON_CATEGORY_ONE_HAND = 'oneHand'

_ID_ALPHABET = string.digits + string.ascii_lowercase


def random_suffix(length: int) -> str:
    """Random lowercase base-36 string."""
    return ''.join(random.choice(_ID_ALPHABET) for _ in range(length))


def generate_template_id() -> str:
    """'<epoch millis>_<7 random base-36 chars>'."""
    return f"{int(time.time() * 1000)}_{random_suffix(7)}"


def get_weapon_category(item: Item) -> str:
    """Classify a weapon as twoHand, shield, ranged or oneHand."""
    weapon_type = item.weapon_type or ''
    if weapon_type in TWO_HANDED_WEAPON_TYPES:
        return WEAPON_CATEGORY_TWO_HAND
    if weapon_type in SHIELD_WEAPON_TYPES:
        return WEAPON_CATEGORY_SHIELD
    if weapon_type in RANGED_WEAPON_TYPES:
        return WEAPON_CATEGORY_RANGED
    return WEAPON_CATEGORY_ONE_HAND


def find_compatible_slot(item: Item, template: Template) -> Optional[str]:
    """
    Pick the slot an item should go into given what is already equipped.

    Paired slots (rings, bracers) prefer the first empty one. Weapons go to
    their dedicated slot by category; one-handers fill mainHand first.

    Returns:
        Slot ID, or None when the item's position has no slots
    """
    slots = XML_POS_TO_SLOTS.get(item.position)
    if not slots:
        return None

    if len(slots) == 1:
        return slots[0]

    if item.position == Position.WEAPONS:
        category = get_weapon_category(item)
        if category == WEAPON_CATEGORY_TWO_HAND:
            return 'twoHand'
        if category == WEAPON_CATEGORY_RANGED:
            return 'ranged'
        if category == WEAPON_CATEGORY_SHIELD:
            return 'offHand'
        if template.slots.get('mainHand') is None:
            return 'mainHand'
        return 'offHand'

    for slot_id in slots:
        if template.slots.get(slot_id) is None:
            return slot_id
    return slots[0]


def equip_item(template: Template, slot_id: str, item: Optional[Item]) -> Template:
    """
    Put an item (or None) into a slot and return the updated template.

    A weapon in twoHand clears mainHand/offHand; a weapon in mainHand or
    offHand clears twoHand. The ranged slot never conflicts.
    """
    slots = dict(template.slots)
    slots[slot_id] = item

    if item is not None and item.position == Position.WEAPONS:
        if slot_id == 'twoHand':
            slots['mainHand'] = None
            slots['offHand'] = None
        elif slot_id in ('mainHand', 'offHand'):
            slots['twoHand'] = None

    return replace(template, slots=slots, updated_at=utc_now_iso())


def unequip_slot(template: Template, slot_id: str) -> Template:
    return equip_item(template, slot_id, None)


def create_empty_template() -> Template:
    """A fresh Albion Armsman template with every slot empty."""
    now = utc_now_iso()
    return Template(
        id=generate_template_id(),
        name='New Template',
        realm=Realm.ALBION,
        character_class='Armsman',
        level=50,
        slots=empty_slots(),
        created_at=now,
        updated_at=now,
    )
