"""
NDJSON Item Parser

Parses the compact item database dump (one JSON object per line) into
canonical Item objects, including embedded procs, reactives, charges and
passives.

Every field arrives as a string code; the lookups live in code_tables.
Misc items (positions we can't equip) and malformed lines are skipped.
"""

import json
import re
from pathlib import Path
from typing import Dict, List, Optional, Any

from models import Item, ItemProc, Position, DEFAULT_LEVEL, DEFAULT_QUALITY
from code_tables import (
    resolve_realm, resolve_position, resolve_damage_type,
    resolve_armor_type, resolve_weapon_type, resolve_bonus_type,
)


SCRIPT_DIR = Path(__file__).parent
DEFAULT_NDJSON_PATH = SCRIPT_DIR / 'items' / 'eden_items.ndjson'

# NDJSON field -> proc source
PROC_FIELDS = (
    ('proc1_json', 'proc'),
    ('proc2_json', 'proc'),
    ('react1_json', 'reactive'),
    ('react2_json', 'reactive'),
    ('use1_json', 'use'),
    ('use2_json', 'use'),
    ('passive_json', 'passive'),
)

CLASS_SEPARATOR = ';;'


def _to_int(value: Any) -> Optional[int]:
    """Leading-integer parse of a code field; None when non-numeric."""
    if value is None:
        return None
    match = re.match(r'\s*([+-]?\d+)', str(value))
    return int(match.group(1)) if match else None


def _code(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def parse_effects(bonus_types: Optional[str], bonus_values: Optional[str]) -> Dict[str, int]:
    """
    Zip the parallel bonus type/value lists into an effects dict.

    Zero and non-numeric values are skipped; repeated effect IDs are summed.
    """
    if not bonus_types or not bonus_values:
        return {}

    types = str(bonus_types).split(',')
    values = str(bonus_values).split(',')

    effects: Dict[str, int] = {}
    for type_code, raw_value in zip(types, values):
        value = _to_int(raw_value)
        if not value:
            continue
        code = _to_int(type_code)
        effect_id = resolve_bonus_type(code) if code is not None else f'UNKNOWN_{type_code.strip()}'
        effects[effect_id] = effects.get(effect_id, 0) + value
    return effects


def parse_class_restrictions(allowed: Optional[str]) -> List[str]:
    """Split a ';;'-separated class list. Empty or bare ';;' means unrestricted."""
    if not allowed or allowed == CLASS_SEPARATOR:
        return []
    return [c.strip() for c in str(allowed).split(CLASS_SEPARATOR) if c]


def parse_proc(raw_json: str, source: str) -> Optional[ItemProc]:
    """
    Parse one embedded proc: {"Name": ..., "Attributes": [[key, value], ...]}.

    Returns None when the JSON is malformed.
    """
    try:
        data = json.loads(raw_json)
        attributes = {}
        for pair in data.get('Attributes') or []:
            key, value = pair
            attributes[str(key)] = str(value)
        return ItemProc(
            name=data['Name'],
            type=attributes.get('Type', ''),
            attributes=attributes,
            source=source,
        )
    except (ValueError, TypeError, KeyError, AttributeError):
        return None


def parse_procs(raw: Dict[str, Any]) -> List[ItemProc]:
    procs = []
    for key, source in PROC_FIELDS:
        raw_json = raw.get(key)
        if not raw_json:
            continue
        proc = parse_proc(raw_json, source)
        if proc is not None:
            procs.append(proc)
    return procs


def parse_ndjson_item(raw: Dict[str, Any]) -> Optional[Item]:
    """
    Convert one decoded NDJSON record into an Item.

    Returns None for misc items (unknown item_type) and nameless records.
    """
    item_type = _code(raw.get('item_type'))
    position = resolve_position(item_type)
    if position is None:
        return None

    name = raw.get('name')
    if not name:
        return None
    name = str(name)

    realm = resolve_realm(_code(raw.get('realm')))
    level = _to_int(raw.get('level')) or DEFAULT_LEVEL
    quality = _to_int(raw.get('quality')) or DEFAULT_QUALITY

    object_type = _code(raw.get('object_type'))
    armor_type = resolve_armor_type(object_type)

    weapon_type = None
    damage_type = None
    if position == Position.WEAPONS:
        weapon_type = resolve_weapon_type(object_type, item_type, _code(raw.get('shield_size')))
        damage_type = resolve_damage_type(_code(raw.get('damage_type')))

    procs = parse_procs(raw)

    return Item(
        id=Item.make_id(realm, position, name),
        name=name,
        position=position,
        realm=realm,
        level=level,
        quality=quality,
        armor_type=armor_type,
        weapon_type=weapon_type,
        damage_type=damage_type,
        effects=parse_effects(raw.get('bonus_types'), raw.get('bonus_values')),
        class_restrictions=parse_class_restrictions(raw.get('allowed_classes')),
        procs=procs if procs else None,
    )


def parse_ndjson(text: str) -> List[Item]:
    """
    Parse an NDJSON item dump.

    Blank lines are ignored, malformed lines are skipped, and the first
    occurrence of each item id wins.

    Args:
        text: Full file contents

    Returns:
        List of Items in file order
    """
    items = []
    seen = set()
    skipped = 0

    for line in text.strip().splitlines():
        if not line.strip():
            continue
        try:
            raw = json.loads(line)
        except (ValueError, RecursionError):
            skipped += 1
            continue
        if not isinstance(raw, dict):
            skipped += 1
            continue

        try:
            item = parse_ndjson_item(raw)
        except (ValueError, TypeError) as e:
            print(f"Warning: Failed to parse NDJSON record: {e}")
            continue

        if item and item.id not in seen:
            seen.add(item.id)
            items.append(item)

    if skipped:
        print(f"Warning: Skipped {skipped} malformed NDJSON lines")

    return items


def load_ndjson_file(path) -> List[Item]:
    """Read and parse an NDJSON item file. Missing/unreadable files yield no items."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return parse_ndjson(f.read())
    except OSError as e:
        print(f"Warning: Error loading items from {path}: {e}")
        return []
