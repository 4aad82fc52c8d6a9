"""
Stats Calculator

Aggregates the effects of every equipped item into capped character stats
and a single utility score.

Two phases:
1. Sum raw effects per category (stat, resist, bonus, cap, skill).
2. Finish each bucket: resolve stat caps (base cap + CAP_* bonus, itself
   capped), clamp resists/bonuses/skills, and accumulate utility.

Utility weights:
    stat    x1 (hit points x0.25)
    resist  x2
    bonus   x3
    skill   x5
    cap     x1 (single-item utility only)
"""

import math
from typing import Dict, Optional

from models import (
    Template, Item, CalculatedStats, StatValue, ResistValue, EffectCategory,
)
from code_tables import (
    STAT_EFFECTS, RESIST_EFFECTS, BONUS_EFFECTS, CAP_EFFECTS, SKILL_EFFECTS,
    BASE_STAT_CAPS, MAX_CAP_BONUS, DEFAULT_BASE_CAP, DEFAULT_MAX_CAP_BONUS,
    RESIST_CAP, SKILL_CAP, BONUS_CAPS,
)


# =============================================================================
# UTILITY WEIGHTS
# =============================================================================

STAT_WEIGHT = 1
HITPOINTS_WEIGHT = 0.25
RESIST_WEIGHT = 2
BONUS_WEIGHT = 3
SKILL_WEIGHT = 5
CAP_WEIGHT = 1

REPORT_SLOT_ORDER = (
    'head', 'chest', 'arms', 'hands', 'legs', 'feet',
    'necklace', 'cloak', 'belt', 'ring1', 'ring2',
    'bracer1', 'bracer2', 'gem', 'mythirian',
    'mainHand', 'offHand', 'twoHand', 'ranged',
)

_CATEGORY_LOOKUP: Dict[str, EffectCategory] = {}
for _effects, _category in (
    (STAT_EFFECTS, EffectCategory.STAT),
    (RESIST_EFFECTS, EffectCategory.RESIST),
    (BONUS_EFFECTS, EffectCategory.BONUS),
    (CAP_EFFECTS, EffectCategory.CAP),
    (SKILL_EFFECTS, EffectCategory.SKILL),
):
    for _effect_id in _effects:
        _CATEGORY_LOOKUP.setdefault(_effect_id, _category)


def get_effect_category(effect_id: str) -> EffectCategory:
    """Classify an effect ID. Anything unlisted is 'other' and never aggregated."""
    return _CATEGORY_LOOKUP.get(effect_id, EffectCategory.OTHER)


def round_utility(value: float) -> float:
    """Round to one decimal, halves away from zero for positive values."""
    return math.floor(value * 10 + 0.5) / 10


def _stat_weight(stat_id: str) -> float:
    return HITPOINTS_WEIGHT if stat_id == 'HITPOINTS' else STAT_WEIGHT


# =============================================================================
# PHASE 1: RAW TOTALS
# =============================================================================

def _sum_effects(template: Optional[Template]) -> Dict[EffectCategory, Dict[str, int]]:
    """Raw per-category totals. Every known effect starts at 0."""
    totals = {
        EffectCategory.STAT: {s: 0 for s in STAT_EFFECTS},
        EffectCategory.RESIST: {r: 0 for r in RESIST_EFFECTS},
        EffectCategory.BONUS: {b: 0 for b in BONUS_EFFECTS},
        EffectCategory.CAP: {c: 0 for c in CAP_EFFECTS},
        EffectCategory.SKILL: {s: 0 for s in SKILL_EFFECTS},
    }

    if template is None or not template.slots:
        return totals

    for item in template.slots.values():
        if item is None or not item.effects:
            continue
        for effect_id, value in item.effects.items():
            category = get_effect_category(effect_id)
            if category == EffectCategory.OTHER:
                continue
            bucket = totals[category]
            bucket[effect_id] = bucket.get(effect_id, 0) + value

    return totals


# =============================================================================
# PHASE 2: CAPS & UTILITY
# =============================================================================

def calculate_stats(template: Optional[Template]) -> CalculatedStats:
    """
    Calculate capped stats and utility for a template.

    Args:
        template: Template to evaluate (None yields all-zero stats)

    Returns:
        CalculatedStats keyed by effect ID
    """
    totals = _sum_effects(template)
    caps = totals[EffectCategory.CAP]

    result = CalculatedStats(
        bonuses=dict(totals[EffectCategory.BONUS]),
        caps=dict(caps),
        skills=dict(totals[EffectCategory.SKILL]),
    )
    utility = 0.0

    for stat_id, raw in totals[EffectCategory.STAT].items():
        stat_key = stat_id.lower()
        base_cap = BASE_STAT_CAPS.get(stat_key, DEFAULT_BASE_CAP)
        max_bonus = MAX_CAP_BONUS.get(stat_key, DEFAULT_MAX_CAP_BONUS)
        cap_bonus = min(caps.get(f'CAP_{stat_id}', 0), max_bonus)
        cap = base_cap + cap_bonus
        value = min(raw, cap)
        result.stats[stat_id] = StatValue(
            value=value,
            cap=cap,
            base_cap=base_cap,
            cap_bonus=cap_bonus,
            raw=raw,
            overcap=max(0, raw - cap),
        )
        utility += value * _stat_weight(stat_id)

    for resist_id, raw in totals[EffectCategory.RESIST].items():
        value = min(raw, RESIST_CAP)
        result.resists[resist_id] = ResistValue(
            value=value,
            cap=RESIST_CAP,
            raw=raw,
            overcap=max(0, raw - RESIST_CAP),
        )
        utility += value * RESIST_WEIGHT

    for bonus_id, raw in totals[EffectCategory.BONUS].items():
        cap = BONUS_CAPS.get(bonus_id)
        if cap is not None:
            result.bonuses[bonus_id] = min(raw, cap)
        utility += result.bonuses[bonus_id] * BONUS_WEIGHT

    for skill_id, raw in totals[EffectCategory.SKILL].items():
        result.skills[skill_id] = min(raw, SKILL_CAP)
        utility += result.skills[skill_id] * SKILL_WEIGHT

    result.utility = round_utility(utility)
    return result


def calculate_item_utility(item: Item) -> float:
    """
    Utility of a single item's raw effects (no caps applied).

    Cap effects count x1 here, unlike template utility.
    """
    utility = 0.0
    for effect_id, value in item.effects.items():
        category = get_effect_category(effect_id)
        if category == EffectCategory.STAT:
            utility += _stat_weight(effect_id) * value
        elif category == EffectCategory.RESIST:
            utility += RESIST_WEIGHT * value
        elif category == EffectCategory.BONUS:
            utility += BONUS_WEIGHT * value
        elif category == EffectCategory.SKILL:
            utility += SKILL_WEIGHT * value
        elif category == EffectCategory.CAP:
            utility += CAP_WEIGHT * value
    return round_utility(utility)


# =============================================================================
# REPORT
# =============================================================================

def _format_number(value) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _slot_label(slot_id: str) -> str:
    """'mainHand' -> 'Main Hand'."""
    spaced = ''.join(f' {c}' if c.isupper() else c for c in slot_id)
    return spaced[:1].upper() + spaced[1:]


def generate_template_report(template: Template, calculated: CalculatedStats) -> str:
    """Plain-text summary of a template's equipment and calculated stats."""
    lines = [
        '=== DAOC TEMPLATE REPORT ===',
        f'Name: {template.name}',
        f'Class: {template.character_class} ({template.realm.value})',
        f'Level: {template.level}',
        '',
        '--- EQUIPMENT ---',
    ]

    for slot_id in REPORT_SLOT_ORDER:
        item = template.slots.get(slot_id)
        lines.append(f"{_slot_label(slot_id)}: {item.name if item and item.name else 'Empty'}")

    lines.append('')
    lines.append('--- STATS ---')
    for stat_id, data in calculated.stats.items():
        if data.raw <= 0:
            continue
        line = f'{stat_id}: {data.value}/{data.cap}'
        if data.cap_bonus > 0:
            line += f' (+{data.cap_bonus} cap)'
        if data.overcap > 0:
            line += f' (+{data.overcap} over)'
        lines.append(line)

    lines.append('')
    lines.append('--- RESISTS ---')
    for resist_id, data in calculated.resists.items():
        if data.raw <= 0:
            continue
        line = f"{resist_id.replace('RES_', '', 1)}: {data.value}/{data.cap}"
        if data.overcap > 0:
            line += f' (+{data.overcap} over)'
        lines.append(line)
    lines.append('')

    active_bonuses = [(b, v) for b, v in calculated.bonuses.items() if v > 0]
    if active_bonuses:
        lines.append('--- BONUSES ---')
        for bonus_id, value in active_bonuses:
            cap = BONUS_CAPS.get(bonus_id)
            lines.append(f'{bonus_id}: {value}/{cap}' if cap is not None else f'{bonus_id}: {value}')
        lines.append('')

    active_skills = [(s, v) for s, v in calculated.skills.items() if v > 0]
    if active_skills:
        lines.append('--- SKILLS ---')
        for skill_id, value in active_skills:
            lines.append(f'{skill_id}: {value}/{SKILL_CAP}')
        lines.append('')

    lines.append(f'--- TOTAL UTILITY: {_format_number(calculated.utility)} ---')
    return '\n'.join(lines)
