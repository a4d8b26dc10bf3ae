"""
Unit tests for modifier arithmetic.
"""
import pytest

from bruto_engine.core.data import StatName, WeaponModifiers
from bruto_engine.game.modifiers import percentage_of, sum_modifiers


class TestPercentageOf:
    """Test percentage-of-base computation."""

    @pytest.mark.parametrize("base,percent,expected", [
        (50, 20, 10.0),
        (50, -25, -12.5),
        (0, 50, 0.0),
        (80, 0, 0.0),
        (33, 10, 3.3),
        (-10, 50, -5.0),
    ])
    def test_values(self, base, percent, expected):
        assert percentage_of(base, percent) == pytest.approx(expected)

    def test_no_rounding(self):
        assert percentage_of(7, 15) == 7 * 15 / 100


class TestSumModifiers:
    """Test per-stat summing of modifier sets."""

    def test_sums_present_values(self):
        a = WeaponModifiers({StatName.CRITICAL_CHANCE: 10, StatName.EVASION: 5})
        b = WeaponModifiers({StatName.CRITICAL_CHANCE: 5, StatName.BLOCK: 20})

        combined = sum_modifiers(a, b)

        assert combined.get(StatName.CRITICAL_CHANCE) == 15.0
        assert combined.get(StatName.EVASION) == 5.0
        assert combined.get(StatName.BLOCK) == 20.0

    def test_absent_everywhere_stays_absent(self):
        combined = sum_modifiers(WeaponModifiers({StatName.EVASION: 5}), WeaponModifiers())

        assert combined.get(StatName.COMBO) is None
        assert not combined.has(StatName.COMBO)

    def test_net_zero_stays_present(self):
        combined = sum_modifiers(
            WeaponModifiers({StatName.EVASION: 10}),
            WeaponModifiers({StatName.EVASION: -10}),
        )
        assert combined.has(StatName.EVASION)
        assert combined.get(StatName.EVASION) == 0.0

    def test_no_inputs(self):
        assert sum_modifiers().is_empty

    def test_none_inputs_skipped(self):
        combined = sum_modifiers(None, WeaponModifiers({StatName.DISARM: 3}), None)
        assert combined == WeaponModifiers({StatName.DISARM: 3})

    def test_inputs_not_mutated(self):
        a = WeaponModifiers({StatName.EVASION: 10})
        sum_modifiers(a, WeaponModifiers({StatName.EVASION: 5}))
        assert a.get(StatName.EVASION) == 10.0
