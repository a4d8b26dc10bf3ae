"""
Unit tests for the CombatStatsAggregator.

Tests the resolution order (base, skills, weapon), determinism for a fixed
weapon choice and the per-turn bundle produced by resolve_turn.
"""
import pytest

from bruto_engine.core.data import (
    ModifierKind,
    Skill,
    SkillEffect,
    SkillEffectTiming,
    SkillEffectType,
    SkillInstance,
    StatName,
)
from bruto_engine.game.combat_stats_aggregator import CombatStatsAggregator, TurnResolution
from bruto_engine.game.log_manager import LogCategory
from bruto_engine.game.weapon_draw import WeaponDrawEngine


@pytest.fixture
def aggregator():
    return CombatStatsAggregator()


class TestResolve:
    """Test snapshot resolution for a concrete weapon choice."""

    def test_nothing_applied_equals_base(self, aggregator, bruto, base_stats):
        result = aggregator.resolve(bruto, base_stats, [], None)

        assert result == base_stats
        assert result is not base_stats

    def test_weapon_only(self, aggregator, bruto, base_stats, axe):
        result = aggregator.resolve(bruto, base_stats, [], axe)

        assert result.critical_chance == 10 + 1.5
        assert result.evasion == 20 - 2.0
        assert result.accuracy == base_stats.accuracy

    def test_skill_only(self, aggregator, bruto, base_stats, passive_evasion_skill):
        result = aggregator.resolve(bruto, base_stats, [passive_evasion_skill], None)
        assert result.evasion == 26.0

    def test_skill_and_weapon_both_against_original_base(self, aggregator, bruto, base_stats,
                                                         passive_evasion_skill, axe):
        result = aggregator.resolve(bruto, base_stats, [passive_evasion_skill], axe)

        # 20 + 30% of 20 (skill) - 10% of 20 (weapon)
        assert result.evasion == pytest.approx(24.0)
        assert result.critical_chance == pytest.approx(11.5)

    def test_attribute_skills_do_not_touch_combat_stats(self, aggregator, bruto, base_stats,
                                                        stackable_strength_skill):
        result = aggregator.resolve(bruto, base_stats, [SkillInstance(stackable_strength_skill, 3)], None)
        assert result == base_stats

    def test_deterministic_for_fixed_inputs(self, aggregator, bruto, base_stats, passive_evasion_skill, sword):
        results = {aggregator.resolve(bruto, base_stats, [passive_evasion_skill], sword) for _ in range(10)}
        assert len(results) == 1

    def test_inputs_not_mutated(self, aggregator, bruto, base_stats, passive_evasion_skill, axe):
        snapshot = base_stats.to_dict()
        aggregator.resolve(bruto, base_stats, [passive_evasion_skill], axe)
        assert base_stats.to_dict() == snapshot

    def test_resolution_logged(self, bruto, base_stats, sword, log_manager):
        CombatStatsAggregator(log_manager=log_manager).resolve(bruto, base_stats, [], sword)
        assert any("sword" in message.text for message in log_manager.get_messages())

    def test_weapon_modifiers_logged(self, bruto, base_stats, sword, log_manager):
        CombatStatsAggregator(log_manager=log_manager).resolve(bruto, base_stats, [], sword)

        weapon_messages = log_manager.get_messages(categories={LogCategory.WEAPON})

        assert len(weapon_messages) == 1
        assert weapon_messages[0].text == "sword: criticalChance +1, accuracy +4"

    def test_bare_hands_logs_no_weapon_modifiers(self, bruto, base_stats, log_manager):
        CombatStatsAggregator(log_manager=log_manager).resolve(bruto, base_stats, [], None)
        assert log_manager.get_messages(categories={LogCategory.WEAPON}) == []


class TestResolveTurn:
    """Test the draw-then-resolve bundle."""

    def test_bare_hands_when_nothing_equipped(self, aggregator, bruto, base_stats, scripted_rng):
        rng = scripted_rng()
        result = aggregator.resolve_turn(bruto, base_stats, [], [], WeaponDrawEngine(rng))

        assert isinstance(result, TurnResolution)
        assert result.active_weapon is None
        assert result.stats == base_stats
        assert result.total_damage == bruto.strength
        assert result.hit_speed_multiplier == 1.0
        assert result.reach == 1
        assert rng.sample_calls == 0

    def test_drawn_weapon_applied(self, aggregator, bruto, base_stats, sword, axe, scripted_rng):
        draw_engine = WeaponDrawEngine(scripted_rng(samples=[10.0, 50.0]))

        result = aggregator.resolve_turn(bruto, base_stats, [], [sword, axe], draw_engine)

        assert result.active_weapon == sword
        assert result.stats.critical_chance == 11.0
        assert result.stats.accuracy == 84.0
        assert result.total_damage == 10 + 10
        assert result.reach == 2

    def test_no_weapon_drawn_falls_back_to_bare_hands(self, aggregator, bruto, base_stats, axe, scripted_rng):
        draw_engine = WeaponDrawEngine(scripted_rng(samples=[99.0]))

        result = aggregator.resolve_turn(bruto, base_stats, [], [axe], draw_engine)

        assert result.active_weapon is None
        assert result.stats == base_stats

    def test_attribute_skills_feed_damage(self, aggregator, bruto, base_stats, stackable_strength_skill,
                                          axe, scripted_rng):
        draw_engine = WeaponDrawEngine(scripted_rng(samples=[1.0]))

        result = aggregator.resolve_turn(
            bruto, base_stats, [SkillInstance(stackable_strength_skill, 2)], [axe], draw_engine
        )

        assert result.total_damage == 12 + 28
        assert result.hit_speed_multiplier == pytest.approx(0.7)
        assert result.contributions.stat_deltas == {}

    def test_conditional_effects_with_predicate(self, aggregator, bruto, base_stats, scripted_rng):
        skill = Skill(id="focus", name="Focus", effects=(SkillEffect(
            type=SkillEffectType.STAT_BOOST,
            timing=SkillEffectTiming.CONDITIONAL,
            stat=StatName.ACCURACY,
            value=10,
            modifier=ModifierKind.PERCENTAGE,
            condition="opponent is stunned",
        ),))
        draw_engine = WeaponDrawEngine(scripted_rng())

        without = aggregator.resolve_turn(bruto, base_stats, [skill], [], draw_engine)
        with_condition = aggregator.resolve_turn(
            bruto, base_stats, [skill], [], draw_engine, condition=lambda s, e: True
        )

        assert without.stats.accuracy == 80.0
        assert with_condition.stats.accuracy == 88.0
