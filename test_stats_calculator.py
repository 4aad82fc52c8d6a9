"""Tests for stat aggregation, caps, utility and the text report."""

import pytest

from models import Position, EffectCategory
from stats_calculator import (
    calculate_stats, calculate_item_utility, generate_template_report,
    get_effect_category, round_utility,
)
from conftest import make_item, make_template


class TestCalculateStats:

    def test_basic_template(self, template):
        stats = calculate_stats(template)
        assert stats.stats['STRENGTH'].raw == 10
        assert stats.stats['STRENGTH'].value == 10
        assert stats.stats['HITPOINTS'].value == 20
        assert stats.resists['RES_SLASH'].value == 5
        assert stats.bonuses['ALL_MELEE_BONUS'] == 2
        assert stats.skills['PARRY'] == 1
        # 10 + 20*0.25 + 5*2 + 2*3 + 1*5
        assert stats.utility == 36
        assert stats.utility > 0

    def test_every_known_effect_present(self, empty_template):
        stats = calculate_stats(empty_template)
        assert stats.stats['ACUITY'].value == 0
        assert stats.resists['RES_ENERGY'].raw == 0
        assert stats.bonuses['FATIGUE'] == 0
        assert stats.caps['CAP_POWER'] == 0
        assert stats.skills['STAFF'] == 0
        assert stats.utility == 0

    def test_none_template(self):
        assert calculate_stats(None).utility == 0

    def test_stat_cap_bonus(self):
        item = make_item('Big Str', effects={'STRENGTH': 100, 'CAP_STRENGTH': 20})
        stat = calculate_stats(make_template(head=item)).stats['STRENGTH']
        assert stat.base_cap == 75
        assert stat.cap_bonus == 20
        assert stat.cap == 95
        assert stat.value == 95
        assert stat.overcap == 5

    def test_cap_bonus_is_capped(self):
        item = make_item('Huge Cap', effects={'CAP_STRENGTH': 40, 'STRENGTH': 200})
        stat = calculate_stats(make_template(head=item)).stats['STRENGTH']
        assert stat.cap_bonus == 26
        assert stat.cap == 101

    def test_resist_cap(self):
        helm = make_item('Resist Helm', effects={'RES_CRUSH': 15})
        chest = make_item('Resist Chest', Position.CHEST, effects={'RES_CRUSH': 15})
        resist = calculate_stats(make_template(head=helm, chest=chest)).resists['RES_CRUSH']
        assert resist.raw == 30
        assert resist.value == 26
        assert resist.overcap == 4

    @pytest.mark.parametrize('effect_id, raw, expected', [
        ('MELEE_DAMAGE_BONUS', 20, 10),
        ('HEALING_BONUS', 30, 25),
        ('AF_BONUS', 60, 50),
        ('ALL_MELEE_BONUS', 15, 11),
    ])
    def test_bonus_caps(self, effect_id, raw, expected):
        item = make_item('Bonus Item', effects={effect_id: raw})
        assert calculate_stats(make_template(head=item)).bonuses[effect_id] == expected

    def test_skill_cap(self):
        item = make_item('Parry Helm', effects={'PARRY': 15})
        assert calculate_stats(make_template(head=item)).skills['PARRY'] == 11

    def test_unknown_effects_ignored(self):
        item = make_item('Odd Helm', effects={'UNKNOWN_9999': 50, 'XP_BONUS': 5})
        assert calculate_stats(make_template(head=item)).utility == 0


class TestItemUtility:

    def test_mixed_effects(self):
        item = make_item(effects={'STRENGTH': 10, 'RES_CRUSH': 5, 'MELEE_DAMAGE_BONUS': 3, 'PARRY': 1})
        assert calculate_item_utility(item) == 34

    def test_hitpoints_weight(self):
        assert calculate_item_utility(make_item(effects={'HITPOINTS': 40})) == 10

    def test_caps_count_once(self):
        assert calculate_item_utility(make_item(effects={'CAP_STRENGTH': 5})) == 5

    def test_no_caps_applied(self):
        assert calculate_item_utility(make_item(effects={'RES_HEAT': 40})) == 80


def test_effect_categories():
    assert get_effect_category('STRENGTH') == EffectCategory.STAT
    assert get_effect_category('RES_BODY') == EffectCategory.RESIST
    assert get_effect_category('FATIGUE') == EffectCategory.BONUS
    assert get_effect_category('CAP_HITPOINTS') == EffectCategory.CAP
    assert get_effect_category('STEALTH') == EffectCategory.SKILL
    assert get_effect_category('UNKNOWN_1') == EffectCategory.OTHER


def test_round_utility():
    assert round_utility(10.25) == 10.3
    assert round_utility(10.24) == 10.2
    assert round_utility(0) == 0


def test_report(template):
    report = generate_template_report(template, calculate_stats(template))
    lines = report.split('\n')
    assert lines[0] == '=== DAOC TEMPLATE REPORT ==='
    assert 'Name: Test Template' in lines
    assert 'Class: Armsman (Albion)' in lines
    assert 'Head: Test Helm' in lines
    assert 'Main Hand: Empty' in lines
    assert 'STRENGTH: 10/75' in lines
    assert 'SLASH: 5/26' in lines
    assert 'ALL_MELEE_BONUS: 2/11' in lines
    assert 'PARRY: 1/11' in lines
    assert lines[-1] == '--- TOTAL UTILITY: 36 ---'
    # zero stats are left out
    assert not any(line.startswith('DEXTERITY') for line in lines)


def test_report_without_bonuses(empty_template):
    report = generate_template_report(empty_template, calculate_stats(empty_template))
    assert '--- BONUSES ---' not in report
    assert '--- SKILLS ---' not in report
