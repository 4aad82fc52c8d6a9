"""
Data models for the DAoC Template Builder

Defines the core data structures for items, templates, and calculated stats.
Every model converts to and from the camelCase JSON shape used for template
files and share codes.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Dict, List, Any


class Realm(str, Enum):
    """The three playable realms."""
    ALBION = 'Albion'
    HIBERNIA = 'Hibernia'
    MIDGARD = 'Midgard'


class Position(str, Enum):
    """Item position codes, as used by the XML item exports."""
    CHEST = 'CHEST'
    LEGS = 'LEGS'
    HELMETS = 'HELMETS'
    GLOVES = 'GLOVES'
    SHOES = 'SHOES'
    BRACERS = 'BRACERS'
    CLOAK = 'CLOAK'
    BELT = 'BELT'
    NECKLACE = 'NECKLACE'
    JEWEL = 'JEWEL'
    RINGS = 'RINGS'
    BRACELETS = 'BRACELETS'
    WEAPONS = 'WEAPONS'
    MYTHIRIAN = 'MYTHIRIAN'


class EffectCategory(str, Enum):
    """How an effect ID contributes to aggregated stats."""
    STAT = 'stat'
    RESIST = 'resist'
    BONUS = 'bonus'
    CAP = 'cap'
    SKILL = 'skill'
    OTHER = 'other'


# Equipment slots, in canonical order
SLOT_IDS = (
    'head', 'hands', 'chest', 'arms', 'feet', 'legs',
    'mainHand', 'offHand', 'twoHand', 'ranged',
    'necklace', 'cloak', 'gem', 'belt',
    'ring1', 'ring2', 'bracer1', 'bracer2', 'mythirian',
)

PROC_SOURCES = ('proc', 'reactive', 'passive', 'use')

DEFAULT_LEVEL = 51
DEFAULT_QUALITY = 100


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def empty_slots() -> Dict[str, Optional['Item']]:
    return {slot_id: None for slot_id in SLOT_IDS}


@dataclass(frozen=True)
class ItemProc:
    """A proc, charge, reactive or passive effect embedded in an item."""
    name: str
    type: str = ''
    attributes: Dict[str, str] = field(default_factory=dict)
    source: str = 'proc'  # 'proc', 'reactive', 'passive', 'use'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'type': self.type,
            'attributes': dict(self.attributes),
            'source': self.source,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ItemProc':
        return cls(
            name=data['name'],
            type=data.get('type', ''),
            attributes={str(k): str(v) for k, v in (data.get('attributes') or {}).items()},
            source=data.get('source', 'proc'),
        )


@dataclass
class Item:
    """
    Canonical item, whichever feed it was decoded from.

    The id is derived from realm, position and name, so decoding the same
    logical item twice always yields the same id.
    """
    id: str
    name: str
    position: Position
    realm: Optional[Realm] = None  # None = usable by any realm
    level: int = DEFAULT_LEVEL
    quality: int = DEFAULT_QUALITY

    # Armor
    armor_type: Optional[str] = None
    armor_af: Optional[int] = None

    # Weapons
    weapon_type: Optional[str] = None
    damage_type: Optional[str] = None

    # Effect ID -> magnitude (zero magnitudes are never stored)
    effects: Dict[str, int] = field(default_factory=dict)

    # Empty = any class
    class_restrictions: List[str] = field(default_factory=list)

    procs: Optional[List[ItemProc]] = None

    # XML feed only
    origin: Optional[str] = None
    online_url: Optional[str] = None

    @staticmethod
    def make_id(realm: Optional[Realm], position: Position, name: str) -> str:
        """Build the deterministic item id: {realm-or-any}_{position}_{name}."""
        realm_part = realm.value if realm else 'any'
        name_part = re.sub(r'\s+', '_', name)
        return f"{realm_part}_{position.value}_{name_part}".lower()

    def can_be_used_by(self, character_class: str) -> bool:
        """Check the explicit class restriction list (empty = everyone)."""
        if not self.class_restrictions:
            return True
        return character_class in self.class_restrictions

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'position': self.position.value,
            'realm': self.realm.value if self.realm else None,
            'level': self.level,
            'quality': self.quality,
        }
        if self.armor_type is not None:
            data['armorType'] = self.armor_type
        if self.armor_af is not None:
            data['armorAF'] = self.armor_af
        if self.weapon_type is not None:
            data['weaponType'] = self.weapon_type
        if self.damage_type is not None:
            data['damageType'] = self.damage_type
        data['effects'] = dict(self.effects)
        data['classRestrictions'] = list(self.class_restrictions)
        if self.procs is not None:
            data['procs'] = [p.to_dict() for p in self.procs]
        if self.origin is not None:
            data['origin'] = self.origin
        if self.online_url is not None:
            data['onlineUrl'] = self.online_url
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Item':
        realm = data.get('realm')
        procs = data.get('procs')
        return cls(
            id=data['id'],
            name=data['name'],
            position=Position(data['position']),
            realm=Realm(realm) if realm else None,
            level=int(data.get('level', DEFAULT_LEVEL)),
            quality=int(data.get('quality', DEFAULT_QUALITY)),
            armor_type=data.get('armorType'),
            armor_af=data.get('armorAF'),
            weapon_type=data.get('weaponType'),
            damage_type=data.get('damageType'),
            effects={str(k): int(v) for k, v in (data.get('effects') or {}).items()},
            class_restrictions=list(data.get('classRestrictions') or []),
            procs=[ItemProc.from_dict(p) for p in procs] if procs is not None else None,
            origin=data.get('origin'),
            online_url=data.get('onlineUrl'),
        )


@dataclass
class Template:
    """
    A named character build: realm, class, level and the 19 equipment slots.

    Equip/unequip never mutate a Template in place; the equipment manager
    returns a new one.
    """
    id: str
    name: str
    realm: Realm = Realm.ALBION
    character_class: str = 'Armsman'
    level: int = 50
    slots: Dict[str, Optional[Item]] = field(default_factory=empty_slots)
    created_at: str = field(default_factory=utc_now_iso)
    updated_at: str = field(default_factory=utc_now_iso)
    notes: Optional[str] = None

    def equipped_items(self) -> List[Item]:
        """Items in slot order, skipping empty slots."""
        return [self.slots[s] for s in SLOT_IDS if self.slots.get(s) is not None]

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'name': self.name,
            'realm': self.realm.value if isinstance(self.realm, Realm) else self.realm,
            'characterClass': self.character_class,
            'level': self.level,
            'slots': {
                slot_id: (item.to_dict() if item is not None else None)
                for slot_id, item in self.slots.items()
            },
            'createdAt': self.created_at,
            'updatedAt': self.updated_at,
        }
        if self.notes is not None:
            data['notes'] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Template':
        slots = empty_slots()
        for slot_id, item_data in (data.get('slots') or {}).items():
            slots[slot_id] = Item.from_dict(item_data) if item_data else None

        now = utc_now_iso()
        return cls(
            id=data['id'],
            name=data.get('name', ''),
            realm=Realm(data.get('realm', Realm.ALBION.value)),
            character_class=data.get('characterClass', 'Armsman'),
            level=int(data.get('level', 50)),
            slots=slots,
            created_at=data.get('createdAt', now),
            updated_at=data.get('updatedAt', now),
            notes=data.get('notes'),
        )


@dataclass
class StatValue:
    """A primary stat after cap resolution."""
    value: int = 0
    cap: int = 0
    base_cap: int = 0
    cap_bonus: int = 0
    raw: int = 0
    overcap: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'value': self.value,
            'cap': self.cap,
            'baseCap': self.base_cap,
            'capBonus': self.cap_bonus,
            'raw': self.raw,
            'overcap': self.overcap,
        }


@dataclass
class ResistValue:
    """A resist after cap resolution."""
    value: int = 0
    cap: int = 0
    raw: int = 0
    overcap: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'value': self.value,
            'cap': self.cap,
            'raw': self.raw,
            'overcap': self.overcap,
        }


@dataclass
class CalculatedStats:
    """
    Aggregated, capped character statistics for a template.

    Keys are effect IDs (STRENGTH, RES_CRUSH, MELEE_DAMAGE_BONUS, ...).
    """
    stats: Dict[str, StatValue] = field(default_factory=dict)
    resists: Dict[str, ResistValue] = field(default_factory=dict)
    bonuses: Dict[str, int] = field(default_factory=dict)
    caps: Dict[str, int] = field(default_factory=dict)
    skills: Dict[str, int] = field(default_factory=dict)
    utility: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'stats': {k: v.to_dict() for k, v in self.stats.items()},
            'resists': {k: v.to_dict() for k, v in self.resists.items()},
            'bonuses': dict(self.bonuses),
            'caps': dict(self.caps),
            'skills': dict(self.skills),
            'utility': self.utility,
        }
