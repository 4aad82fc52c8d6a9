"""
Zenkraft Converter

Converts templates to and from the plain-text export of the Zenkraft DAoC
template builder.

Zenkraft names effects differently from the item feeds:
- Stats use full names ("Strength", "Hit Points")
- Resists are bare damage types with a % suffix ("Crush")
- Stat caps are prefixed ("Cap Strength")
- Bonuses have their own labels and a few aliases ("AF", "Endurance")
- Anything else is written as a skill with underscores turned into spaces

This module handles the name mapping and the block layout in both directions.
"""

import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple

from models import Template, Item, CalculatedStats, Realm, DEFAULT_LEVEL, DEFAULT_QUALITY, utc_now_iso
from code_tables import (
    ZENKCRAFT_SLOT_NAMES, ZENKCRAFT_NAME_TO_SLOT, SLOT_TO_POSITION,
    STAT_FULL_NAMES, RESIST_FULL_NAMES, BONUS_FULL_NAMES,
    STAT_NAME_TO_ID, RESIST_NAME_TO_ID, BONUS_NAME_TO_ID,
    BASE_STAT_CAPS, RESIST_CAP, SKILL_CAP,
    effect_display_name, parse_realm_name,
)
from stats_calculator import calculate_item_utility


HEADER = '*****  Zenkraft DAoC Template Builder  *****'
DAOC_VERSION = '01.132'
MAX_EFFECTS_PER_SLOT = 10
BLOCK_SCAN_LINES = 20

DEFAULT_IMPORT_NAME = 'Imported'
DEFAULT_IMPORT_CLASS = 'Armsman'
DEFAULT_IMPORT_REALM = 'Albion'
DEFAULT_IMPORT_LEVEL = 50

STAT_EXPORT_ORDER = (
    'STRENGTH', 'CONSTITUTION', 'DEXTERITY', 'QUICKNESS',
    'INTELLIGENCE', 'EMPATHY', 'PIETY', 'CHARISMA', 'ACUITY',
    'HITPOINTS', 'POWER',
)

RESIST_EXPORT_ORDER = (
    'RES_CRUSH', 'RES_SLASH', 'RES_THRUST', 'RES_HEAT',
    'RES_COLD', 'RES_SPIRIT', 'RES_BODY', 'RES_MATTER', 'RES_ENERGY',
)

# Line patterns
SUMMARY_PATTERN = re.compile(r'Character Summary for (.+?)\s*-\s*(.+)')
SUMMARY_LEVEL_PATTERN = re.compile(r'Level:\s*(\d+)\s+Realm:\s*(.+)')
SLOT_PATTERN = re.compile(r'^Slot\s+\d+:\s*(.+)$')
SLOT_START_PATTERN = re.compile(r'^Slot\s+\d+:')
NAME_PATTERN = re.compile(r'^Name:\s*(.*)')
ITEM_LEVEL_PATTERN = re.compile(r'Level:\s*(\d+)\s+Quality:\s*(\d+)')
EFFECT_PATTERN = re.compile(r'^\d+\)\s*\(([^)]+)\)\s*([^:]+):\s*\+(\d+)')


@dataclass
class ZenkraftParseResult:
    """Character summary and slot contents read from a Zenkraft export."""
    name: str = DEFAULT_IMPORT_NAME
    character_class: str = DEFAULT_IMPORT_CLASS
    realm: str = DEFAULT_IMPORT_REALM
    level: int = DEFAULT_IMPORT_LEVEL
    # Only slots that appeared in the text; None = explicitly empty
    items: Dict[str, Optional[Item]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'characterClass': self.character_class,
            'realm': self.realm,
            'level': self.level,
            'items': {
                slot_id: (item.to_dict() if item is not None else None)
                for slot_id, item in self.items.items()
            },
        }


# =============================================================================
# EFFECT NAME MAPPING
# =============================================================================

def _upper_id(name: str) -> str:
    return re.sub(r'\s+', '_', name.upper())


def resolve_effect_id(effect_type: str, name: str) -> str:
    """
    Map a Zenkraft (type, name) pair to an effect ID.

    Args:
        effect_type: Text inside the parentheses ("Stat", "Resist", ...)
        name: Effect label after the type

    Returns:
        Effect ID; unknown names fall back to the uppercased label
    """
    name = name.strip()

    if effect_type == 'Stat':
        return STAT_NAME_TO_ID.get(name, name.upper())
    if effect_type == 'H.P.':
        return 'HITPOINTS'
    if effect_type == 'Power':
        return 'POWER'
    if effect_type == 'Resist':
        return RESIST_NAME_TO_ID.get(name, f'RES_{name.upper()}')
    if effect_type == 'Skill':
        return _upper_id(name)
    if effect_type == 'Bonus':
        return BONUS_NAME_TO_ID.get(name, _upper_id(name))
    if effect_type in ('Stat Cap', 'H.P. Cap', 'Power Cap'):
        stat_name = re.sub(r'^Cap\s+', '', name, flags=re.IGNORECASE)
        stat_id = STAT_NAME_TO_ID.get(stat_name, _upper_id(stat_name))
        return f'CAP_{stat_id}'
    return _upper_id(name)


def effect_to_zenkraft(effect_id: str) -> Tuple[str, str, str]:
    """Map an effect ID to Zenkraft's (type, name, suffix)."""
    if effect_id in STAT_FULL_NAMES:
        if effect_id == 'HITPOINTS':
            return 'H.P.', 'Hit Points', ''
        return 'Stat', STAT_FULL_NAMES[effect_id], ''

    if effect_id in RESIST_FULL_NAMES:
        return 'Resist', RESIST_FULL_NAMES[effect_id], '%'

    if effect_id.startswith('CAP_'):
        stat_id = effect_id[4:]
        if stat_id == 'HITPOINTS':
            return 'H.P. Cap', 'Cap Hit Points', ''
        if stat_id == 'POWER':
            return 'Power Cap', 'Cap Power', ''
        return 'Stat Cap', f"Cap {STAT_FULL_NAMES.get(stat_id, stat_id)}", ''

    if effect_id in BONUS_FULL_NAMES:
        return 'Bonus', BONUS_FULL_NAMES[effect_id], ''

    return 'Skill', effect_display_name(effect_id), ''


# =============================================================================
# EXPORT
# =============================================================================

def _format_slot_block(index: int, zc_name: str, item: Optional[Item]) -> List[str]:
    lines = [
        f'Slot {index}: {zc_name}',
        f"Name: {item.name if item and item.name else ''}",
        f"Level: {(item.level if item else 0) or DEFAULT_LEVEL}  "
        f"Quality: {(item.quality if item else 0) or DEFAULT_QUALITY}",
        f"Utility: {(calculate_item_utility(item) if item else 0):.1f}",
        ' Source Type: Drop',
        'Imbue Points: 0',
    ]

    effects = [(eid, v) for eid, v in item.effects.items() if v > 0] if item else []
    for n in range(1, MAX_EFFECTS_PER_SLOT + 1):
        if n <= len(effects):
            effect_id, value = effects[n - 1]
            zc_type, zc_name_label, suffix = effect_to_zenkraft(effect_id)
            lines.append(f'{n}) ({zc_type}) {zc_name_label}: +{value}{suffix}')
        else:
            lines.append(f'{n})')
    return lines


def export_zenkraft_template(template: Template, calculated: CalculatedStats) -> str:
    """
    Render a template in Zenkraft's text format.

    Args:
        template: Template to export
        calculated: Stats from calculate_stats(template)

    Returns:
        Export text, newline-separated
    """
    realm = template.realm.value if isinstance(template.realm, Realm) else template.realm

    lines = [
        HEADER,
        f'DAoC Version: {DAOC_VERSION}',
        f'Total Utility: {calculated.utility:.1f}',
        'Total Imbue Points: 0.0/32.0',
        '',
        f'Character Summary for {template.name} - {template.character_class}',
        f'Level: {template.level}  Realm: {realm}',
        '',
        '============ Stats ============',
        'raw / cap',
    ]

    for stat_id in STAT_EXPORT_ORDER:
        data = calculated.stats.get(stat_id)
        display = STAT_FULL_NAMES.get(stat_id, stat_id)
        if data:
            lines.append(f'{data.value} / {data.cap} {display}')
        else:
            lines.append(f"0 / {BASE_STAT_CAPS['strength']} {display}")
    lines.append('')

    active_bonuses = [(b, v) for b, v in calculated.bonuses.items() if v > 0]
    if active_bonuses:
        lines.append('============ Bonuses ============')
        for bonus_id, value in active_bonuses:
            lines.append(f"{value} {BONUS_FULL_NAMES.get(bonus_id, bonus_id.replace('_', ' '))}")
        lines.append('')

    lines.append('============ Resists ============')
    for resist_id in RESIST_EXPORT_ORDER:
        data = calculated.resists.get(resist_id)
        display = RESIST_FULL_NAMES.get(resist_id, resist_id.replace('RES_', '', 1))
        if data:
            lines.append(f'{data.value} / {data.cap} {display}')
        else:
            lines.append(f'0 / {RESIST_CAP} {display}')
    lines.append('')

    active_skills = [(s, v) for s, v in calculated.skills.items() if v > 0]
    if active_skills:
        lines.append('============ Skills ============')
        for skill_id, value in active_skills:
            lines.append(f'{value} / {SKILL_CAP} {effect_display_name(skill_id)}')
        lines.append('')

    for index, (slot_id, zc_name) in enumerate(ZENKCRAFT_SLOT_NAMES, start=1):
        lines.extend(_format_slot_block(index, zc_name, template.slots.get(slot_id)))

    # Trailing bonus block is always empty
    lines.extend(_format_slot_block(len(ZENKCRAFT_SLOT_NAMES) + 1, 'Bonuses', None))

    return '\n'.join(lines)


# =============================================================================
# IMPORT
# =============================================================================

def _parse_summary(lines: List[str], result: ZenkraftParseResult):
    """Character name/class and level/realm, wherever they appear. Last match wins."""
    for line in lines:
        match = SUMMARY_PATTERN.search(line)
        if match:
            result.name = match.group(1).strip()
            result.character_class = match.group(2).strip()
        match = SUMMARY_LEVEL_PATTERN.search(line)
        if match:
            result.level = int(match.group(1))
            result.realm = match.group(2).strip()


def _parse_slot_block(lines: List[str], start: int, slot_id: str,
                      realm: Optional[Realm]) -> Optional[Item]:
    """
    Read the item block following a slot marker.

    The block ends at the next slot marker or after BLOCK_SCAN_LINES lines.
    Returns None when the block has no item name.
    """
    item_name = ''
    item_level = DEFAULT_LEVEL
    item_quality = DEFAULT_QUALITY
    effects: Dict[str, int] = {}

    for raw_line in lines[start + 1:min(start + BLOCK_SCAN_LINES, len(lines))]:
        line = raw_line.strip()
        if SLOT_START_PATTERN.match(line):
            break

        match = NAME_PATTERN.match(line)
        if match:
            item_name = match.group(1).strip()
            continue

        match = ITEM_LEVEL_PATTERN.search(line)
        if match:
            item_level = int(match.group(1))
            item_quality = int(match.group(2))
            continue

        match = EFFECT_PATTERN.match(line)
        if match:
            effect_id = resolve_effect_id(match.group(1).strip(), match.group(2).strip())
            value = int(match.group(3))
            if effect_id and value > 0:
                effects[effect_id] = effects.get(effect_id, 0) + value

    if not item_name:
        return None

    position = SLOT_TO_POSITION[slot_id]
    return Item(
        id=Item.make_id(realm, position, item_name),
        name=item_name,
        position=position,
        realm=realm,
        level=item_level,
        quality=item_quality,
        effects=effects,
        class_restrictions=[],
    )


def parse_zenkraft_template(text: str) -> Optional[ZenkraftParseResult]:
    """
    Parse a Zenkraft text export.

    Returns:
        ZenkraftParseResult, or None when no recognized slot marker is found
    """
    try:
        lines = re.split(r'\r?\n', text)
        result = ZenkraftParseResult()
        _parse_summary(lines, result)
        realm = parse_realm_name(result.realm)

        found_slots = False
        for i, line in enumerate(lines):
            match = SLOT_PATTERN.match(line)
            if not match:
                continue
            slot_id = ZENKCRAFT_NAME_TO_SLOT.get(match.group(1).strip())
            if slot_id is None:
                # e.g. "Slot 20: Bonuses"
                continue
            found_slots = True
            result.items[slot_id] = _parse_slot_block(lines, i, slot_id, realm)

        if not found_slots:
            return None
        return result

    except (ValueError, TypeError, AttributeError) as e:
        print(f"Warning: Failed to parse Zenkraft template: {e}")
        return None


def apply_zenkraft_result(template: Template, result: ZenkraftParseResult) -> Template:
    """
    Merge a parse result into a template.

    Name, class, level and the parsed slots replace the template's; the
    realm is only replaced when the parsed one is a known realm.
    """
    slots = dict(template.slots)
    slots.update(result.items)
    realm = parse_realm_name(result.realm) or template.realm
    return replace(
        template,
        name=result.name,
        character_class=result.character_class,
        level=result.level,
        realm=realm,
        slots=slots,
        updated_at=utc_now_iso(),
    )
