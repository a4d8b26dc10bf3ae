"""
Unit tests for the WeaponResolver.

Tests modifier application against base stats, multi-weapon combination,
and the derived damage, hit speed and reach values.
"""
import pytest

from bruto_engine.core.data import Bruto, CombatStats, StatName, WeaponModifiers
from bruto_engine.game.weapon_resolver import WeaponResolver


class TestApplyWeapon:
    """Test single weapon modifier application."""

    def test_bare_hands_returns_equal_copy(self, base_stats):
        result = WeaponResolver.apply_weapon(base_stats, None)

        assert result == base_stats
        assert result is not base_stats

    def test_weapon_without_modifiers_returns_equal_copy(self, base_stats, weapon_factory):
        result = WeaponResolver.apply_weapon(base_stats, weapon_factory("stick"))

        assert result == base_stats
        assert result is not base_stats

    def test_empty_modifiers_returns_equal_copy(self, base_stats, weapon_factory):
        result = WeaponResolver.apply_weapon(base_stats, weapon_factory("stick", modifiers={}))
        assert result == base_stats

    def test_each_defined_stat_gets_percentage_of_base(self, base_stats, axe):
        result = WeaponResolver.apply_weapon(base_stats, axe)

        # criticalChance: 10 + 10 * 15 / 100 = 11.5
        assert result.critical_chance == 10 + (10 * 15 / 100)
        # evasion: 20 + 20 * -10 / 100 = 18
        assert result.evasion == 20 + (20 * -10 / 100)

    def test_undefined_stats_unchanged(self, base_stats, axe):
        result = WeaponResolver.apply_weapon(base_stats, axe)

        for stat in StatName:
            if stat not in axe.modifiers:
                assert result.get(stat) == base_stats.get(stat)

    def test_matches_formula_for_every_stat(self, base_stats, weapon_factory):
        percents = {stat: (i + 1) * 7 - 20 for i, stat in enumerate(StatName)}
        weapon = weapon_factory("all", modifiers=percents)

        result = WeaponResolver.apply_weapon(base_stats, weapon)

        for stat, percent in percents.items():
            base = base_stats.get(stat)
            assert result.get(stat) == base + (base * percent / 100)

    def test_explicit_zero_has_no_net_effect(self, base_stats, weapon_factory):
        result = WeaponResolver.apply_weapon(base_stats, weapon_factory("z", modifiers={StatName.BLOCK: 0}))
        assert result == base_stats

    def test_base_not_mutated(self, base_stats, axe):
        snapshot = base_stats.to_dict()
        WeaponResolver.apply_weapon(base_stats, axe)
        assert base_stats.to_dict() == snapshot


class TestCombineWeapons:
    """Test multi-weapon modifier combination."""

    def test_combine_sums_per_stat(self, sword, axe):
        combined = WeaponResolver.combine_weapons([sword, axe])

        assert combined.get(StatName.CRITICAL_CHANCE) == 25.0
        assert combined.get(StatName.ACCURACY) == 5.0
        assert combined.get(StatName.EVASION) == -10.0
        assert combined.get(StatName.BLOCK) is None

    def test_combine_is_order_independent(self, base_stats, sword, axe):
        forward = WeaponResolver.apply_modifiers(base_stats, WeaponResolver.combine_weapons([sword, axe]))
        backward = WeaponResolver.apply_modifiers(base_stats, WeaponResolver.combine_weapons([axe, sword]))
        assert forward == backward

    def test_combined_application_does_not_compound(self, base_stats, weapon_factory):
        first = weapon_factory("a", modifiers={StatName.EVASION: 50})
        second = weapon_factory("b", modifiers={StatName.EVASION: 50})

        combined = WeaponResolver.apply_modifiers(base_stats, WeaponResolver.combine_weapons([first, second]))

        # Both percentages are taken against the original 20, not 30
        assert combined.evasion == 20 + 10 + 10
        compounded = WeaponResolver.apply_weapon(WeaponResolver.apply_weapon(base_stats, first), second)
        assert compounded.evasion != combined.evasion

    def test_combined_equals_rebased_sequential_application(self, base_stats, sword, axe):
        combined = WeaponResolver.apply_modifiers(base_stats, WeaponResolver.combine_weapons([sword, axe]))

        after_sword = WeaponResolver.apply_weapon(base_stats, sword)
        rebased = after_sword.with_deltas(WeaponResolver.weapon_deltas(base_stats, axe))

        for stat in StatName:
            assert combined.get(stat) == pytest.approx(rebased.get(stat))

    def test_weapons_without_modifiers_contribute_nothing(self, sword, weapon_factory):
        combined = WeaponResolver.combine_weapons([weapon_factory("stick"), sword])
        assert combined == sword.modifiers

    def test_no_weapons(self):
        assert WeaponResolver.combine_weapons([]) == WeaponModifiers()


class TestWeaponDeltas:
    """Test per-stat weapon deltas."""

    def test_only_defined_stats(self, base_stats, sword):
        deltas = WeaponResolver.weapon_deltas(base_stats, sword)

        assert set(deltas) == {StatName.CRITICAL_CHANCE, StatName.ACCURACY}
        assert deltas[StatName.ACCURACY] == 80 * 5 / 100

    def test_bare_hands(self, base_stats):
        assert WeaponResolver.weapon_deltas(base_stats, None) == {}


class TestDerivedWeaponValues:
    """Test damage, hit speed and reach accessors."""

    def test_total_damage_bare_hands(self):
        assert WeaponResolver.total_damage(Bruto(id="b", name="B", strength=10), None) == 10

    def test_total_damage_with_weapon(self, axe):
        assert WeaponResolver.total_damage(Bruto(id="b", name="B", strength=10), axe) == 38

    def test_hit_speed_multiplier_bare_hands(self):
        assert WeaponResolver.hit_speed_multiplier(None) == 1.0

    def test_hit_speed_multiplier_with_weapon(self, weapon_factory):
        assert WeaponResolver.hit_speed_multiplier(weapon_factory("fast", hit_speed=200)) == 2.0
        assert WeaponResolver.hit_speed_multiplier(weapon_factory("slow", hit_speed=70)) == pytest.approx(0.7)

    def test_reach(self, sword):
        assert WeaponResolver.weapon_reach(None) == 1
        assert WeaponResolver.weapon_reach(sword) == 2

    def test_order_by_reach(self, weapon_factory):
        short = weapon_factory("short", reach=1)
        long_a = weapon_factory("long_a", reach=4)
        long_b = weapon_factory("long_b", reach=4)

        ordered = WeaponResolver.order_by_reach([short, None, long_a, long_b])

        assert ordered == [long_a, long_b, short, None]
