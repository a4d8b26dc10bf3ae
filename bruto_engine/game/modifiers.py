"""
Modifier arithmetic shared by weapons and skills.

Percentages are always taken against the pre-modification base, so several
modifiers on one stat add up instead of compounding.
"""
from typing import Optional

from ..core.data import StatName, WeaponModifiers


def percentage_of(base: float, percent: float) -> float:
    """Return `percent` percent of `base`, unrounded.

    Example: base=50, percent=20 -> 10.0; base=50, percent=-25 -> -12.5
    """
    return base * percent / 100


def sum_modifiers(*modifier_sets: Optional[WeaponModifiers]) -> WeaponModifiers:
    """Sum modifier sets per stat.

    A stat present in at least one input gets the sum of its present values.
    A stat absent from every input stays absent. None inputs are skipped.
    """
    combined: dict[StatName, float] = {}
    for modifiers in modifier_sets:
        if modifiers is None:
            continue
        for stat, value in modifiers.items():
            combined[stat] = combined.get(stat, 0.0) + value
    return WeaponModifiers(combined)
