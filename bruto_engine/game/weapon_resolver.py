"""
Weapon modifier resolution.

This module applies weapon percentage modifiers to a base stat set and
provides the derived weapon values (damage, hit speed, reach) the turn
resolver reads alongside CombatStats.
"""
from typing import Iterable, Optional

import numpy as np

from ..core.data import Bruto, CombatStats, StatName, Weapon, WeaponModifiers
from .modifiers import percentage_of, sum_modifiers

# Bare hands
DEFAULT_REACH = 1
DEFAULT_HIT_SPEED_MULTIPLIER = 1.0


class WeaponResolver:
    """Applies weapon modifiers and exposes derived weapon values."""

    @staticmethod
    def apply_weapon(base: CombatStats, weapon: Optional[Weapon]) -> CombatStats:
        """Apply a single weapon's modifiers to base stats.

        Args:
            base: Pre-modification combat stats
            weapon: Active weapon, or None for bare hands

        Returns:
            New CombatStats; an equal copy of base when there is nothing to apply
        """
        if weapon is None or weapon.modifiers is None:
            return base.copy()
        return WeaponResolver.apply_modifiers(base, weapon.modifiers)

    @staticmethod
    def apply_modifiers(base: CombatStats, modifiers: WeaponModifiers) -> CombatStats:
        """Apply a modifier set against base stats in one pass.

        Every defined stat gains percentage_of(base.stat, modifier.stat);
        undefined stats pass through unchanged.
        """
        if modifiers.is_empty:
            return base.copy()

        base_values = base.to_numpy()
        percents, present = modifiers.to_numpy()
        deltas = np.where(present, percentage_of(base_values, percents), 0.0)
        return CombatStats.from_numpy(base_values + deltas)

    @staticmethod
    def weapon_deltas(base: CombatStats, weapon: Optional[Weapon]) -> dict[StatName, float]:
        """Per-stat amounts a weapon adds to base, for defined modifiers only."""
        if weapon is None or weapon.modifiers is None:
            return {}
        return {stat: percentage_of(base.get(stat), percent) for stat, percent in weapon.modifiers.items()}

    @staticmethod
    def combine_weapons(weapons: Iterable[Weapon]) -> WeaponModifiers:
        """Sum the modifier sets of simultaneously active weapons.

        Apply the result once with apply_modifiers so every percentage is
        taken against the original base.
        """
        return sum_modifiers(*(weapon.modifiers for weapon in weapons))

    @staticmethod
    def total_damage(bruto: Bruto, weapon: Optional[Weapon]) -> int:
        """Base STR damage plus the weapon's flat damage."""
        weapon_damage = weapon.damage if weapon is not None else 0
        return bruto.strength + weapon_damage

    @staticmethod
    def hit_speed_multiplier(weapon: Optional[Weapon]) -> float:
        """1.0 for bare hands, hit_speed / 100 for a weapon."""
        if weapon is None:
            return DEFAULT_HIT_SPEED_MULTIPLIER
        return weapon.hit_speed / 100

    @staticmethod
    def weapon_reach(weapon: Optional[Weapon]) -> int:
        """Reach used for combat order; longer reach acts first."""
        return weapon.reach if weapon is not None else DEFAULT_REACH

    @staticmethod
    def order_by_reach(weapons: Iterable[Optional[Weapon]]) -> list[Optional[Weapon]]:
        """Order weapons longest reach first, keeping input order on ties."""
        return sorted(weapons, key=WeaponResolver.weapon_reach, reverse=True)
