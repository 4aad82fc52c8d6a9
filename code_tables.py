"""
Code Tables

Static lookup tables shared by every other module: realm and position codes,
armor/weapon/damage type codes, bonus type -> effect ID codes, effect display
names, caps, class allowances and Zenkraft slot names.

All lookups are partial and never raise. Unknown bonus codes resolve to an
UNKNOWN_<code> placeholder so no data is lost; unknown position codes resolve
to None and the owning item is skipped by the decoders.
"""

import re
from typing import Dict, List, Optional, Tuple

from models import Realm, Position, SLOT_IDS


# =============================================================================
# REALMS & CLASSES
# =============================================================================

REALMS = ('Albion', 'Hibernia', 'Midgard')

# NDJSON realm field
REALM_CODES = {
    '0': None,
    '1': Realm.ALBION,
    '2': Realm.MIDGARD,
    '3': Realm.HIBERNIA,
}

CLASSES_BY_REALM: Dict[str, List[str]] = {
    'Albion': [
        'Armsman', 'Cabalist', 'Cleric', 'Friar', 'Heretic',
        'Infiltrator', 'Mercenary', 'Minstrel', 'Necromancer',
        'Paladin', 'Reaver', 'Scout', 'Sorcerer', 'Theurgist', 'Wizard',
    ],
    'Hibernia': [
        'Animist', 'Bainshee', 'Bard', 'Blademaster', 'Champion',
        'Druid', 'Eldritch', 'Enchanter', 'Hero', 'Mentalist',
        'Nightshade', 'Ranger', 'Valewalker', 'Warden',
    ],
    'Midgard': [
        'Berserker', 'Bonedancer', 'Healer', 'Hunter', 'Runemaster',
        'Savage', 'Shadowblade', 'Shaman', 'Skald', 'Spiritmaster',
        'Thane', 'Valkyrie', 'Warlock', 'Warrior',
    ],
}

CLASS_TO_REALM = {
    cls: realm for realm, classes in CLASSES_BY_REALM.items() for cls in classes
}


# =============================================================================
# POSITION & SLOT CODES
# =============================================================================

# NDJSON item_type -> Position (everything else is a misc item and skipped)
ITEM_TYPE_TO_POSITION = {
    '10': Position.WEAPONS,
    '11': Position.WEAPONS,
    '12': Position.WEAPONS,
    '13': Position.WEAPONS,
    '21': Position.HELMETS,
    '22': Position.GLOVES,
    '23': Position.SHOES,
    '24': Position.JEWEL,
    '25': Position.CHEST,
    '26': Position.CLOAK,
    '27': Position.LEGS,
    '28': Position.BRACERS,
    '29': Position.NECKLACE,
    '32': Position.BELT,
    '33': Position.BRACELETS,
    '35': Position.RINGS,
    '37': Position.MYTHIRIAN,
}

# Off-hand weapons (Albion *_LEFT types)
LEFT_HAND_ITEM_TYPE = '11'

ARMOR_SLOTS = ('head', 'chest', 'arms', 'hands', 'legs', 'feet')
JEWELRY_SLOTS = (
    'necklace', 'cloak', 'belt', 'ring1', 'ring2',
    'bracer1', 'bracer2', 'gem', 'mythirian',
)
WEAPON_SLOTS = ('mainHand', 'offHand', 'twoHand', 'ranged')

# Canonical 19-slot order (also the Zenkraft export order)
ALL_SLOT_IDS = SLOT_IDS

SLOT_NAMES = {
    'head': 'Head', 'chest': 'Chest', 'arms': 'Arms', 'hands': 'Hands',
    'legs': 'Legs', 'feet': 'Feet',
    'necklace': 'Neck', 'cloak': 'Cloak', 'belt': 'Belt',
    'ring1': 'Ring L', 'ring2': 'Ring R',
    'bracer1': 'Wrist L', 'bracer2': 'Wrist R',
    'gem': 'Jewel', 'mythirian': 'Mythirian',
    'mainHand': 'Right Hand', 'offHand': 'Left Hand',
    'twoHand': 'Two-Handed', 'ranged': 'Ranged',
}

# Position -> eligible slots (first entry is the fallback)
XML_POS_TO_SLOTS: Dict[Position, Tuple[str, ...]] = {
    Position.CHEST: ('chest',),
    Position.LEGS: ('legs',),
    Position.HELMETS: ('head',),
    Position.GLOVES: ('hands',),
    Position.SHOES: ('feet',),
    Position.BRACERS: ('arms',),
    Position.CLOAK: ('cloak',),
    Position.BELT: ('belt',),
    Position.NECKLACE: ('necklace',),
    Position.JEWEL: ('gem',),
    Position.RINGS: ('ring1', 'ring2'),
    Position.BRACELETS: ('bracer1', 'bracer2'),
    Position.WEAPONS: ('mainHand', 'offHand', 'twoHand', 'ranged'),
    Position.MYTHIRIAN: ('mythirian',),
}

SLOT_TO_POSITION = {
    slot: pos for pos, slots in XML_POS_TO_SLOTS.items() for slot in slots
}

# Zenkraft slot names, in export order
ZENKCRAFT_SLOT_NAMES: Tuple[Tuple[str, str], ...] = (
    ('head', 'Helmet'),
    ('hands', 'Hands'),
    ('chest', 'Torso'),
    ('arms', 'Arms'),
    ('feet', 'Feet'),
    ('legs', 'Legs'),
    ('mainHand', 'Right Hand'),
    ('offHand', 'Left Hand'),
    ('twoHand', 'Two Handed'),
    ('ranged', 'Ranged'),
    ('necklace', 'Neck'),
    ('cloak', 'Cloak'),
    ('gem', 'Jewelry'),
    ('belt', 'Waist'),
    ('ring1', 'L. Ring'),
    ('ring2', 'R. Ring'),
    ('bracer1', 'L. Wrist'),
    ('bracer2', 'R. Wrist'),
    ('mythirian', 'Mythical'),
)

ZENKCRAFT_NAME_TO_SLOT = {zc_name: slot for slot, zc_name in ZENKCRAFT_SLOT_NAMES}


# =============================================================================
# ARMOR / WEAPON / DAMAGE TYPE CODES
# =============================================================================

ARMOR_TYPES = (
    'CLOTH', 'LEATHER', 'STUDDED', 'REINFORCED',
    'CHAIN', 'SCALE', 'PLATE', 'MAGICAL',
)

# NDJSON object_type -> armor type (37/38 are the Hibernian tiers)
ARMOR_TYPE_CODES = {
    '32': 'CLOTH',
    '33': 'LEATHER',
    '34': 'STUDDED',
    '35': 'CHAIN',
    '36': 'PLATE',
    '37': 'REINFORCED',
    '38': 'SCALE',
}

DAMAGE_TYPE_CODES = {
    '0': None,
    '1': 'CRUSH',
    '2': 'SLASH',
    '3': 'THRUST',
}

# NDJSON object_type -> base weapon type, before hand/shield adjustment
WEAPON_TYPE_CODES = {
    # Albion 1H
    '2': 'CRUSH', '3': 'SLASH', '4': 'THRUST',
    # Albion 2H
    '6': 'TWO_HAND', '7': 'POLEARM',
    # All realms
    '8': 'STAFF', '24': 'FLEXIBLE',
    # Ranged
    '5': 'SHORTBOW', '9': 'LONGBOW', '10': 'CROSSBOW',
    '15': 'SHORTBOW', '16': 'THROWN', '18': 'SHORTBOW',
    # Midgard 1H
    '11': 'SWORD', '12': 'HAMMER', '13': 'AXE', '17': 'LEFT_AXE',
    # Midgard 2H
    '14': 'SPEAR',
    # Midgard special
    '25': 'CLAWS', '27': 'FIST_WRAPS', '28': 'MAULER_STAFF',
    # Hibernia 1H
    '19': 'BLADES', '20': 'BLUNT', '21': 'PIERCING',
    # Hibernia 2H
    '22': 'LARGE_WEAPON', '23': 'CELTIC_SPEAR', '26': 'SCYTHE',
    # Shield (size resolved separately)
    '42': 'SHIELD',
    '45': 'INSTRUMENT',
}

ALBION_LEFT_HAND = {
    'CRUSH': 'CRUSH_LEFT',
    'SLASH': 'SLASH_LEFT',
    'THRUST': 'THRUST_LEFT',
}

SHIELD_SIZE_CODES = {
    '2': 'SHIELD_MEDIUM',
    '3': 'SHIELD_LARGE',
}

# Albion: TWO_HAND, POLEARM, STAFF | Hibernia: LARGE_WEAPON, SCYTHE | Midgard: *_2H
TWO_HANDED_WEAPON_TYPES = (
    'TWO_HAND', 'POLEARM', 'STAFF', 'LARGE_WEAPONRY',
    'LARGE_WEAPON', 'SCYTHE',
    'SWORD_2H', 'AXE_2H', 'HAMMER_2H',
)
SHIELD_WEAPON_TYPES = ('SHIELD_SMALL', 'SHIELD_MEDIUM', 'SHIELD_LARGE')
RANGED_WEAPON_TYPES = ('LONGBOW', 'CROSSBOW', 'SHORTBOW')

# Filter groups; match_by 'damage' checks damage_type, 'weapon' checks weapon_type
WEAPON_TYPE_GROUPS = (
    {'label': 'Slash', 'types': ('SLASH',), 'match_by': 'damage'},
    {'label': 'Crush', 'types': ('CRUSH',), 'match_by': 'damage'},
    {'label': 'Thrust', 'types': ('THRUST', 'TRUST'), 'match_by': 'damage'},
    {'label': 'Two-Handed', 'types': TWO_HANDED_WEAPON_TYPES, 'match_by': 'weapon'},
    {'label': 'Flexible', 'types': ('FLEXIBLE',), 'match_by': 'weapon'},
    {'label': 'Shield', 'types': SHIELD_WEAPON_TYPES, 'match_by': 'weapon'},
    {'label': 'Ranged', 'types': RANGED_WEAPON_TYPES, 'match_by': 'weapon'},
)


# =============================================================================
# CLASS ALLOWANCES
# =============================================================================

# Albion: CLOTH < LEATHER < STUDDED < CHAIN < PLATE
# Hibernia: CLOTH < LEATHER < REINFORCED < SCALE
# Midgard: CLOTH < LEATHER < STUDDED < CHAIN
CLASS_ARMOR_TYPES: Dict[str, Tuple[str, ...]] = {
    # Albion
    'Armsman': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN', 'PLATE'),
    'Paladin': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN', 'PLATE'),
    'Cleric': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Reaver': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Mercenary': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Minstrel': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Scout': ('CLOTH', 'LEATHER', 'STUDDED'),
    'Friar': ('CLOTH', 'LEATHER'),
    'Infiltrator': ('CLOTH', 'LEATHER'),
    'Heretic': ('CLOTH', 'LEATHER'),
    'Cabalist': ('CLOTH',),
    'Necromancer': ('CLOTH',),
    'Sorcerer': ('CLOTH',),
    'Theurgist': ('CLOTH',),
    'Wizard': ('CLOTH',),
    # Hibernia
    'Hero': ('CLOTH', 'LEATHER', 'REINFORCED', 'SCALE'),
    'Champion': ('CLOTH', 'LEATHER', 'REINFORCED', 'SCALE'),
    'Warden': ('CLOTH', 'LEATHER', 'REINFORCED', 'SCALE'),
    'Druid': ('CLOTH', 'LEATHER', 'REINFORCED', 'SCALE'),
    'Blademaster': ('CLOTH', 'LEATHER', 'REINFORCED'),
    'Bard': ('CLOTH', 'LEATHER', 'REINFORCED'),
    'Ranger': ('CLOTH', 'LEATHER', 'REINFORCED'),
    'Nightshade': ('CLOTH', 'LEATHER'),
    'Animist': ('CLOTH',),
    'Bainshee': ('CLOTH',),
    'Eldritch': ('CLOTH',),
    'Enchanter': ('CLOTH',),
    'Mentalist': ('CLOTH',),
    'Valewalker': ('CLOTH',),
    # Midgard
    'Warrior': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Thane': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Skald': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Valkyrie': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Healer': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Shaman': ('CLOTH', 'LEATHER', 'STUDDED', 'CHAIN'),
    'Berserker': ('CLOTH', 'LEATHER', 'STUDDED'),
    'Savage': ('CLOTH', 'LEATHER', 'STUDDED'),
    'Hunter': ('CLOTH', 'LEATHER', 'STUDDED'),
    'Shadowblade': ('CLOTH', 'LEATHER'),
    'Bonedancer': ('CLOTH',),
    'Runemaster': ('CLOTH',),
    'Spiritmaster': ('CLOTH',),
    'Warlock': ('CLOTH',),
}

# Hibernian piercers show up as PIERCE in XML exports and PIERCING in the NDJSON dump
CLASS_WEAPON_TYPES: Dict[str, Tuple[str, ...]] = {
    # Albion
    'Armsman': ('SLASH', 'CRUSH', 'THRUST', 'TWO_HAND', 'POLEARM', 'CROSSBOW',
                'SHIELD_SMALL', 'SHIELD_MEDIUM', 'SHIELD_LARGE'),
    'Paladin': ('SLASH', 'CRUSH', 'THRUST', 'TWO_HAND',
                'SHIELD_SMALL', 'SHIELD_MEDIUM', 'SHIELD_LARGE'),
    'Cleric': ('CRUSH', 'STAFF', 'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Reaver': ('SLASH', 'CRUSH', 'THRUST', 'FLEXIBLE', 'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Mercenary': ('SLASH', 'CRUSH', 'THRUST', 'SLASH_LEFT', 'CRUSH_LEFT', 'THRUST_LEFT',
                  'SHIELD_SMALL'),
    'Minstrel': ('SLASH', 'THRUST', 'SHIELD_SMALL'),
    'Scout': ('SLASH', 'THRUST', 'LONGBOW', 'SHIELD_SMALL'),
    'Friar': ('CRUSH', 'STAFF'),
    'Infiltrator': ('SLASH', 'THRUST', 'SLASH_LEFT', 'THRUST_LEFT', 'CROSSBOW'),
    'Heretic': ('CRUSH', 'FLEXIBLE', 'SHIELD_SMALL'),
    'Cabalist': ('STAFF',),
    'Necromancer': ('STAFF',),
    'Sorcerer': ('STAFF',),
    'Theurgist': ('STAFF',),
    'Wizard': ('STAFF',),
    # Hibernia (BLADES=slash, BLUNT=crush, PIERCE=thrust, LARGE_WEAPON=2H)
    'Hero': ('BLADES', 'BLUNT', 'PIERCE', 'PIERCING', 'LARGE_WEAPON', 'SHORTBOW',
             'SHIELD_SMALL', 'SHIELD_MEDIUM', 'SHIELD_LARGE'),
    'Champion': ('BLADES', 'BLUNT', 'PIERCE', 'PIERCING', 'LARGE_WEAPON',
                 'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Warden': ('BLADES', 'BLUNT', 'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Druid': ('BLADES', 'BLUNT', 'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Blademaster': ('BLADES', 'BLUNT', 'PIERCE', 'PIERCING', 'SHIELD_SMALL'),
    'Bard': ('BLADES', 'BLUNT', 'SHIELD_SMALL'),
    'Ranger': ('BLADES', 'PIERCE', 'PIERCING', 'SHORTBOW', 'SHIELD_SMALL'),
    'Nightshade': ('BLADES', 'PIERCE', 'PIERCING'),
    'Animist': ('STAFF',),
    'Bainshee': ('STAFF',),
    'Eldritch': ('STAFF',),
    'Enchanter': ('STAFF',),
    'Mentalist': ('STAFF',),
    'Valewalker': ('SCYTHE', 'STAFF'),
    # Midgard (SWORD=slash, HAMMER=crush, AXE=slash, CLAWS=thrust)
    'Warrior': ('SWORD', 'AXE', 'HAMMER', 'SWORD_2H', 'AXE_2H', 'HAMMER_2H',
                'SHIELD_SMALL', 'SHIELD_MEDIUM', 'SHIELD_LARGE'),
    'Thane': ('SWORD', 'AXE', 'HAMMER', 'SWORD_2H', 'AXE_2H', 'HAMMER_2H',
              'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Skald': ('SWORD', 'AXE', 'HAMMER', 'SWORD_2H', 'AXE_2H', 'HAMMER_2H'),
    'Valkyrie': ('SWORD', 'AXE', 'HAMMER', 'SWORD_2H', 'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Healer': ('HAMMER', 'SWORD', 'SHIELD_SMALL', 'SHIELD_MEDIUM'),
    'Shaman': ('HAMMER', 'STAFF', 'SHIELD_SMALL'),
    'Berserker': ('SWORD', 'AXE', 'HAMMER', 'CLAWS', 'SWORD_2H', 'AXE_2H', 'HAMMER_2H'),
    'Savage': ('SWORD', 'AXE', 'HAMMER', 'CLAWS'),
    'Hunter': ('SWORD', 'CLAWS', 'SHORTBOW', 'SHIELD_SMALL'),
    'Shadowblade': ('SWORD', 'AXE', 'CLAWS'),
    'Bonedancer': ('STAFF',),
    'Runemaster': ('STAFF',),
    'Spiritmaster': ('STAFF',),
    'Warlock': ('STAFF',),
}


# =============================================================================
# EFFECT IDS BY CATEGORY
# =============================================================================

STAT_EFFECTS = (
    'STRENGTH', 'CONSTITUTION', 'DEXTERITY', 'QUICKNESS',
    'INTELLIGENCE', 'PIETY', 'EMPATHY', 'CHARISMA',
    'ACUITY', 'HITPOINTS', 'POWER',
)

RESIST_EFFECTS = (
    'RES_CRUSH', 'RES_SLASH', 'RES_THRUST',
    'RES_HEAT', 'RES_COLD', 'RES_SPIRIT',
    'RES_BODY', 'RES_MATTER', 'RES_ENERGY',
)

BONUS_EFFECTS = (
    'ALL_MELEE_BONUS', 'ALL_MAGIC_BONUS', 'ALL_ARCHERY_BONUS',
    'ALL_DUAL_WIELD_BONUS', 'MELEE_DAMAGE_BONUS', 'SPELL_DAMAGE_BONUS',
    'STYLE_DAMAGE_BONUS', 'MELEE_SPEED_BONUS', 'CASTING_SPEED_BONUS',
    'SPELL_RANGE_BONUS', 'HEALING_BONUS', 'POWER_PERCENTAGE_BONUS',
    'AF_BONUS', 'FATIGUE', 'SPELL_DURATION_BONUS',
    'REDUCE_MAGIC_RESISTS', 'ARCANE_SIPHON', 'ALL_MAGIC_FOCUS',
)

CAP_EFFECTS = (
    'CAP_STRENGTH', 'CAP_DEXTERITY', 'CAP_CONSTITUTION',
    'CAP_QUICKNESS', 'CAP_HITPOINTS', 'CAP_ACUITY',
    'CAP_POWER', 'CAP_PIETY', 'CAP_INTELLIGENCE',
    'CAP_EMPATHY', 'CAP_CHARISMA',
)

SKILL_EFFECTS = (
    'PARRY', 'SHIELD', 'STEALTH', 'ENVENOM',
    'CRITICAL_STRIKE', 'DUAL_WIELD', 'STAFF',
)


# =============================================================================
# CAPS
# =============================================================================

BASE_STAT_CAPS = {
    'strength': 75,
    'constitution': 75,
    'dexterity': 75,
    'quickness': 75,
    'intelligence': 75,
    'piety': 75,
    'empathy': 75,
    'charisma': 75,
    'acuity': 75,
    'hitpoints': 200,
    'power': 26,
}

# Maximum cap increase from CAP_* effects
MAX_CAP_BONUS = {
    'strength': 26,
    'constitution': 26,
    'dexterity': 26,
    'quickness': 26,
    'intelligence': 26,
    'piety': 26,
    'empathy': 26,
    'charisma': 26,
    'acuity': 26,
    'hitpoints': 200,
    'power': 50,
}

DEFAULT_BASE_CAP = 75
DEFAULT_MAX_CAP_BONUS = 26

RESIST_CAP = 26
SKILL_CAP = 11
AF_CAP = 50
FATIGUE_CAP = 25

# 25%: power pool, debuff, healing, duration, buff
# 10%: cast speed, range, spell/style/melee damage, melee speed, resist pierce
BONUS_CAPS = {
    'POWER_PERCENTAGE_BONUS': 25,
    'REDUCE_MAGIC_RESISTS': 25,
    'HEALING_BONUS': 25,
    'SPELL_DURATION_BONUS': 25,
    'BUFF_EFFECTIVENESS': 25,
    'CASTING_SPEED_BONUS': 10,
    'SPELL_RANGE_BONUS': 10,
    'SPELL_DAMAGE_BONUS': 10,
    'STYLE_DAMAGE_BONUS': 10,
    'MELEE_DAMAGE_BONUS': 10,
    'MELEE_SPEED_BONUS': 10,
    'RESIST_PIERCE': 10,
    'AF_BONUS': AF_CAP,
    'FATIGUE': FATIGUE_CAP,
    'ALL_MELEE_BONUS': 11,
    'ALL_MAGIC_BONUS': 11,
    'ALL_ARCHERY_BONUS': 11,
    'ALL_DUAL_WIELD_BONUS': 11,
    'ALL_MAGIC_FOCUS': 50,
    'ARCANE_SIPHON': 25,
}


# =============================================================================
# BONUS TYPE CODES (NDJSON bonus_types)
# =============================================================================

BONUS_TYPE_CODES = {
    # Stats
    1: 'STRENGTH', 2: 'DEXTERITY', 3: 'CONSTITUTION', 4: 'QUICKNESS',
    5: 'INTELLIGENCE', 6: 'PIETY', 7: 'EMPATHY', 8: 'CHARISMA',
    10: 'HITPOINTS', 156: 'ACUITY',

    # Resists
    11: 'RES_BODY', 12: 'RES_COLD', 13: 'RES_CRUSH', 14: 'RES_ENERGY',
    15: 'RES_HEAT', 16: 'RES_MATTER', 17: 'RES_SLASH', 18: 'RES_SPIRIT',
    19: 'RES_THRUST',

    # Skills - Albion
    20: 'TWO_HANDED', 21: 'BODY_MAGIC', 23: 'CRITICAL_STRIKE',
    24: 'CROSSBOWS', 25: 'CRUSH', 26: 'DEATH_SERVANT',
    27: 'DEATHSIGHT', 28: 'DUAL_WIELD', 29: 'EARTH_MAGIC',
    30: 'ENHANCEMENT', 31: 'ENVENOM', 32: 'FIRE_MAGIC',
    33: 'FLEXIBLE', 34: 'COLD_MAGIC', 35: 'INSTRUMENTS',
    37: 'MATTER_MAGIC', 38: 'MIND_MAGIC', 39: 'PAINWORKING',
    40: 'PARRY', 41: 'POLEARMS', 42: 'REJUVENATION',
    43: 'SHIELD', 44: 'SLASH', 45: 'SMITE',
    46: 'SOULRENDING', 47: 'SPIRIT_MAGIC', 48: 'STAFF',
    49: 'STEALTH', 50: 'THRUST', 51: 'WIND_MAGIC',

    # Skills - Midgard
    52: 'SWORD', 53: 'HAMMER', 54: 'AXE', 55: 'LEFT_AXE',
    56: 'SPEAR', 57: 'MENDING', 58: 'AUGMENTATION',
    60: 'DARKNESS', 61: 'SUPPRESSION', 62: 'RUNECARVING',
    63: 'STORMCALLING', 64: 'BEASTCRAFT',
    69: 'BATTLESONGS',
    91: 'THROWN_WEAPONS', 92: 'HAND2HAND',
    109: 'MAULER_STAFF', 110: 'FIST_WRAPS', 111: 'POWER_STRIKES',

    # Skills - Hibernia
    65: 'LIGHT', 66: 'VOID', 67: 'MANA',
    70: 'ENCHANTMENTS', 72: 'BLADES', 73: 'BLUNT',
    74: 'PIERCING', 75: 'LARGE_WEAPONRY', 76: 'MENTALISM',
    77: 'REGROWTH', 78: 'NURTURE', 79: 'NATURE',
    80: 'MUSIC', 81: 'CELTIC_DUAL', 82: 'CELTIC_SPEAR',
    84: 'VALOR', 85: 'SUBTERRANEAN', 86: 'BONE_ARMY',
    87: 'VERDANT_PATH', 88: 'CREEPING_PATH', 89: 'ARBOREAL_PATH',
    90: 'SCYTHE', 94: 'PACIFICATION',
    98: 'SUMMONING', 99: 'DEMENTIA',
    100: 'SHADOW_MASTERY', 101: 'VAMPIIRIC_EMBRACE',
    102: 'ETHEREAL_SHRIEK', 103: 'PHANTASMAL_WAIL',
    106: 'CURSING', 107: 'HEXING',
    113: 'AURA_MANIPULATION', 114: 'SPECTRAL_GUARD',
    115: 'ALL_ARCHERY_BONUS',

    # Focus skills
    120: 'DARKNESS_FOCUS', 121: 'SUPPRESSION_FOCUS', 122: 'RUNECARVING_FOCUS',
    123: 'SPIRIT_FOCUS', 124: 'FIRE_FOCUS', 125: 'AIR_FOCUS',
    126: 'COLD_FOCUS', 127: 'EARTH_FOCUS', 128: 'LIGHT_FOCUS',
    129: 'BODY_FOCUS', 130: 'MATTER_FOCUS', 132: 'MIND_FOCUS',
    133: 'VOID_FOCUS', 134: 'MANA_FOCUS', 135: 'ENCHANTMENT_FOCUS',
    136: 'MENTALISM_FOCUS', 137: 'SUMMONING_FOCUS',
    138: 'BONE_ARMY_FOCUS', 139: 'PAINWORKING_FOCUS',
    140: 'DEATHSIGHT_FOCUS', 141: 'DEATH_SERVANT_FOCUS',
    142: 'VERDANT_PATH_FOCUS', 143: 'CREEPING_PATH_FOCUS',
    144: 'ARBOREAL_FOCUS',
    157: 'ETHEREAL_SHRIEK_FOCUS', 158: 'PHANTASMAL_WAIL_FOCUS',
    159: 'SPECTRAL_GUARD_FOCUS', 160: 'CURSING_FOCUS',
    161: 'HEXING_FOCUS', 162: 'WITCHCRAFT_FOCUS',

    # ToA bonuses
    146: 'ILLNESS_REDUCTION', 147: 'MAX_CONCENTRATION',
    148: 'AF_BONUS', 150: 'HEALTH_REGEN', 151: 'POWER_REGEN',
    152: 'ENDURANCE_REGEN', 153: 'SPELL_RANGE_BONUS',
    155: 'MELEE_SPEED_BONUS',
    163: 'ALL_MAGIC_BONUS', 164: 'ALL_MELEE_BONUS',
    165: 'ALL_MAGIC_FOCUS', 167: 'ALL_DUAL_WIELD_BONUS',
    168: 'ALL_ARCHERY_BONUS',
    169: 'EVADE_BONUS', 170: 'BLOCK_BONUS', 171: 'PARRY_BONUS',
    173: 'MELEE_DAMAGE_BONUS',
    176: 'MESMERIZE_DURATION_REDUCTION', 177: 'STUN_DURATION_REDUCTION',
    178: 'SPEED_DECREASE_DURATION_REDUCTION',
    180: 'DEFENSIVE_BONUS', 182: 'NEGATIVE_REDUCTION',
    183: 'PIERCE_ABLATIVE', 184: 'REACTIONARY_STYLE_DAMAGE_BONUS',
    185: 'SPELL_POWER_COST_REDUCTION', 186: 'STYLE_COST_REDUCTION',
    187: 'TO_HIT_BONUS', 188: 'ARCHERY_CASTING_SPEED_BONUS',
    190: 'BUFF_BONUS', 191: 'CASTING_SPEED_BONUS',
    193: 'DEBUFF_BONUS', 194: 'FATIGUE', 195: 'HEALING_BONUS',
    196: 'POWER_PERCENTAGE_BONUS', 197: 'REDUCE_MAGIC_RESISTS',
    198: 'SPELL_DAMAGE_BONUS', 199: 'SPELL_DURATION_BONUS',
    200: 'STYLE_DAMAGE_BONUS',

    # Stat caps
    201: 'CAP_STRENGTH', 202: 'CAP_DEXTERITY', 203: 'CAP_CONSTITUTION',
    204: 'CAP_QUICKNESS', 205: 'CAP_INTELLIGENCE', 206: 'CAP_PIETY',
    207: 'CAP_EMPATHY', 208: 'CAP_CHARISMA', 209: 'CAP_ACUITY',
    210: 'CAP_HITPOINTS', 211: 'CAP_POWER',

    # Mythical / special
    218: 'SPELL_LEVEL_INCREASE',
    221: 'OVERCAP_RES_BODY', 222: 'OVERCAP_RES_COLD',
    223: 'OVERCAP_RES_CRUSH', 224: 'OVERCAP_RES_ENERGY',
    225: 'OVERCAP_RES_HEAT', 226: 'OVERCAP_RES_MATTER',
    227: 'OVERCAP_RES_SLASH', 228: 'OVERCAP_RES_SPIRIT',
    229: 'OVERCAP_RES_THRUST',
    230: 'DPS', 233: 'SAFE_FALL',
    234: 'MYTHICAL_DISCUMBERING', 235: 'MYTHICAL_COIN',
    248: 'XP_BONUS', 251: 'CONVERSION',
    253: 'REALM_POINT_BONUS', 254: 'ARCANE_SIPHON',
}


# =============================================================================
# EFFECT DISPLAY NAMES
# =============================================================================

# Short labels for tables and tooltips
EFFECT_DISPLAY_NAMES = {
    'STRENGTH': 'Str', 'CONSTITUTION': 'Con', 'DEXTERITY': 'Dex', 'QUICKNESS': 'Qui',
    'INTELLIGENCE': 'Int', 'PIETY': 'Pie', 'EMPATHY': 'Emp', 'CHARISMA': 'Cha',
    'ACUITY': 'Acu', 'HITPOINTS': 'HP', 'POWER': 'Pow',
    'RES_CRUSH': 'Crush', 'RES_SLASH': 'Slash', 'RES_THRUST': 'Thrust',
    'RES_HEAT': 'Heat', 'RES_COLD': 'Cold', 'RES_SPIRIT': 'Spirit',
    'RES_BODY': 'Body', 'RES_MATTER': 'Matter', 'RES_ENERGY': 'Energy',
    'ALL_MELEE_BONUS': 'Melee', 'ALL_MAGIC_BONUS': 'Magic', 'ALL_ARCHERY_BONUS': 'Archery',
    'ALL_DUAL_WIELD_BONUS': 'Dual Wield', 'MELEE_DAMAGE_BONUS': 'Melee Dmg',
    'SPELL_DAMAGE_BONUS': 'Spell Dmg', 'STYLE_DAMAGE_BONUS': 'Style Dmg',
    'MELEE_SPEED_BONUS': 'Melee Spd', 'CASTING_SPEED_BONUS': 'Cast Spd',
    'SPELL_RANGE_BONUS': 'Spell Rng', 'HEALING_BONUS': 'Heal',
    'POWER_PERCENTAGE_BONUS': 'Power%', 'AF_BONUS': 'AF', 'FATIGUE': 'End',
    'SPELL_DURATION_BONUS': 'Duration', 'REDUCE_MAGIC_RESISTS': 'Debuff',
    'ARCANE_SIPHON': 'Arc Siph', 'ALL_MAGIC_FOCUS': 'Focus',
    'CAP_STRENGTH': 'Str Cap', 'CAP_DEXTERITY': 'Dex Cap', 'CAP_CONSTITUTION': 'Con Cap',
    'CAP_QUICKNESS': 'Qui Cap', 'CAP_HITPOINTS': 'HP Cap', 'CAP_ACUITY': 'Acu Cap',
    'CAP_POWER': 'Pow Cap', 'CAP_PIETY': 'Pie Cap', 'CAP_INTELLIGENCE': 'Int Cap',
    'CAP_EMPATHY': 'Emp Cap', 'CAP_CHARISMA': 'Cha Cap',
    'PARRY': 'Parry', 'SHIELD': 'Shield', 'STEALTH': 'Stealth', 'ENVENOM': 'Envenom',
    'CRITICAL_STRIKE': 'Crit', 'DUAL_WIELD': 'DW', 'STAFF': 'Staff',
}

STAT_FULL_NAMES = {
    'STRENGTH': 'Strength',
    'CONSTITUTION': 'Constitution',
    'DEXTERITY': 'Dexterity',
    'QUICKNESS': 'Quickness',
    'INTELLIGENCE': 'Intelligence',
    'PIETY': 'Piety',
    'EMPATHY': 'Empathy',
    'CHARISMA': 'Charisma',
    'ACUITY': 'Acuity',
    'HITPOINTS': 'Hit Points',
    'POWER': 'Power',
}

RESIST_FULL_NAMES = {
    'RES_CRUSH': 'Crush',
    'RES_SLASH': 'Slash',
    'RES_THRUST': 'Thrust',
    'RES_HEAT': 'Heat',
    'RES_COLD': 'Cold',
    'RES_SPIRIT': 'Spirit',
    'RES_BODY': 'Body',
    'RES_MATTER': 'Matter',
    'RES_ENERGY': 'Energy',
}

BONUS_FULL_NAMES = {
    'MELEE_DAMAGE_BONUS': 'Melee Damage',
    'SPELL_DAMAGE_BONUS': 'Spell Damage',
    'STYLE_DAMAGE_BONUS': 'Style Damage',
    'MELEE_SPEED_BONUS': 'Melee Speed',
    'CASTING_SPEED_BONUS': 'Casting Speed',
    'SPELL_RANGE_BONUS': 'Spell Range',
    'HEALING_BONUS': 'Healing Effectiveness',
    'POWER_PERCENTAGE_BONUS': 'Power Pool',
    'AF_BONUS': 'Armor Factor',
    'FATIGUE': 'Fatigue',
    'SPELL_DURATION_BONUS': 'Spell Duration',
    'REDUCE_MAGIC_RESISTS': 'Resist Pierce',
    'ARCANE_SIPHON': 'Arcane Siphon',
    'ALL_MAGIC_FOCUS': 'All Focus',
    'ALL_MELEE_BONUS': 'All Melee',
    'ALL_MAGIC_BONUS': 'All Magic',
    'ALL_ARCHERY_BONUS': 'All Archery',
    'ALL_DUAL_WIELD_BONUS': 'All Dual Wield',
}

EFFECT_FULL_NAMES = {
    **STAT_FULL_NAMES,
    **RESIST_FULL_NAMES,
    **BONUS_FULL_NAMES,
    'BUFF_EFFECTIVENESS': 'Buff Effectiveness',
}

FULL_NAME_TO_EFFECT = {name: effect_id for effect_id, name in EFFECT_FULL_NAMES.items()}

STAT_NAME_TO_ID = {name: effect_id for effect_id, name in STAT_FULL_NAMES.items()}
RESIST_NAME_TO_ID = {name: effect_id for effect_id, name in RESIST_FULL_NAMES.items()}

# Zenkraft spells several bonuses differently from us
ZENKCRAFT_ALIASES = {
    'Healing': 'HEALING_BONUS',
    'Power Percentage': 'POWER_PERCENTAGE_BONUS',
    'AF': 'AF_BONUS',
    'Endurance': 'FATIGUE',
    'Debuff Effectiveness': 'REDUCE_MAGIC_RESISTS',
    'Magic Focus': 'ALL_MAGIC_FOCUS',
}

BONUS_NAME_TO_ID = {
    **{name: effect_id for effect_id, name in BONUS_FULL_NAMES.items()},
    **ZENKCRAFT_ALIASES,
}


# =============================================================================
# SLOT DISPLAY
# =============================================================================

ARMOR_SLOT_DISPLAY = {
    Position.HELMETS: 'Head', Position.CHEST: 'Chest', Position.BRACERS: 'Arms',
    Position.GLOVES: 'Hands', Position.LEGS: 'Legs', Position.SHOES: 'Feet',
}

WEAPON_TYPE_DISPLAY = {
    # Albion 1H
    'SLASH': 'Slash', 'SLASH_LEFT': 'Slash', 'CRUSH': 'Crush', 'CRUSH_LEFT': 'Crush',
    'THRUST': 'Thrust', 'THRUST_LEFT': 'Thrust',
    # Hibernia 1H
    'BLADES': 'Blades', 'BLUNT': 'Blunt', 'PIERCE': 'Pierce', 'PIERCING': 'Pierce',
    # Midgard 1H
    'SWORD': 'Sword', 'AXE': 'Axe', 'HAMMER': 'Hammer', 'CLAWS': 'Claws',
    # 2H
    'TWO_HAND': '2H', 'POLEARM': 'Polearm', 'LARGE_WEAPONRY': 'Large',
    'LARGE_WEAPON': 'Large', 'SCYTHE': 'Scythe',
    'SWORD_2H': 'Sword 2H', 'AXE_2H': 'Axe 2H', 'HAMMER_2H': 'Hammer 2H',
    'STAFF': 'Staff', 'FLEXIBLE': 'Flex',
    # Shield
    'SHIELD_SMALL': 'Shield S', 'SHIELD_MEDIUM': 'Shield M', 'SHIELD_LARGE': 'Shield L',
    # Ranged
    'LONGBOW': 'Longbow', 'CROSSBOW': 'Xbow', 'SHORTBOW': 'Shortbow',
}

JEWELRY_DISPLAY = {
    Position.NECKLACE: 'Neck', Position.CLOAK: 'Cloak', Position.BELT: 'Belt',
    Position.RINGS: 'Ring', Position.BRACELETS: 'Wrist', Position.JEWEL: 'Jewel',
    Position.MYTHIRIAN: 'Myth',
}


# =============================================================================
# LOOKUP HELPERS
# =============================================================================

def resolve_realm(code: Optional[str]) -> Optional[Realm]:
    """Map an NDJSON realm code to a Realm. Unknown codes mean "any realm"."""
    return REALM_CODES.get(str(code) if code is not None else '')


def parse_realm_name(name: Optional[str]) -> Optional[Realm]:
    """Map a realm name ('Albion', ...) to a Realm, or None."""
    if name and name in REALMS:
        return Realm(name)
    return None


def resolve_position(item_type: Optional[str]) -> Optional[Position]:
    """Map an NDJSON item_type to a Position. None means skip the item."""
    return ITEM_TYPE_TO_POSITION.get(str(item_type) if item_type is not None else '')


def parse_position_name(name: Optional[str]) -> Optional[Position]:
    """Map an XML position name ('HELMETS', ...) to a Position, or None."""
    try:
        return Position(name)
    except ValueError:
        return None


def resolve_damage_type(code: Optional[str]) -> Optional[str]:
    return DAMAGE_TYPE_CODES.get(str(code) if code is not None else '')


def resolve_armor_type(object_type: Optional[str]) -> Optional[str]:
    return ARMOR_TYPE_CODES.get(str(object_type) if object_type is not None else '')


def resolve_weapon_type(object_type: Optional[str],
                        item_type: Optional[str] = None,
                        shield_size: Optional[str] = None) -> Optional[str]:
    """
    Resolve a weapon type from its object_type code.

    The same object_type resolves differently depending on context: shields
    take their size from shield_size, and Albion one-handers in an off-hand
    item (item_type 11) get a _LEFT suffix.

    Args:
        object_type: NDJSON object_type code
        item_type: NDJSON item_type code (hand)
        shield_size: NDJSON shield_size code

    Returns:
        Canonical weapon type, or None for unknown codes
    """
    base = WEAPON_TYPE_CODES.get(str(object_type) if object_type is not None else '')
    if base is None:
        return None

    if base == 'SHIELD':
        return SHIELD_SIZE_CODES.get(str(shield_size), 'SHIELD_SMALL')

    if str(item_type) == LEFT_HAND_ITEM_TYPE and base in ALBION_LEFT_HAND:
        return ALBION_LEFT_HAND[base]

    return base


def resolve_bonus_type(code: int) -> str:
    """Map a bonus type code to an effect ID, synthesizing UNKNOWN_<code> if unmapped."""
    return BONUS_TYPE_CODES.get(code, f'UNKNOWN_{code}')


def effect_display_name(effect_id: str) -> str:
    """Title-case an effect ID the way Zenkraft labels skills ('CRITICAL STRIKE')."""
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), effect_id.replace('_', ' '))


def get_slot_display(item) -> str:
    """Short slot label for item tables: 'A - Head', 'W - Slash', 'J - Ring'."""
    if item.position in ARMOR_SLOT_DISPLAY:
        return f"A - {ARMOR_SLOT_DISPLAY[item.position]}"
    if item.position == Position.WEAPONS:
        wt = WEAPON_TYPE_DISPLAY.get(item.weapon_type, item.weapon_type) if item.weapon_type else '?'
        return f"W - {wt}"
    if item.position in JEWELRY_DISPLAY:
        return f"J - {JEWELRY_DISPLAY[item.position]}"
    return str(item.position.value if isinstance(item.position, Position) else item.position)
