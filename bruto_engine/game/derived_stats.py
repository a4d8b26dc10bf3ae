"""Derived chances computed from base attributes."""
from dataclasses import dataclass

from ..core.data import Bruto

DODGE_PER_AGILITY = 0.1
DODGE_CAP = 0.95
EXTRA_TURN_PER_SPEED = 0.05
EXTRA_TURN_CAP = 0.6


@dataclass(frozen=True)
class DerivedStat:
    """A derived stat for display."""
    key: str
    label: str
    value: float  # Percentage, one decimal
    description: str
    unit: str = "%"


def dodge_chance(agility: int) -> float:
    """Agility x 10%, capped at 95%."""
    return round(min(DODGE_CAP, agility * DODGE_PER_AGILITY) * 100, 1)


def extra_turn_chance(speed: int) -> float:
    """Speed x 5%, capped at 60%."""
    return round(min(EXTRA_TURN_CAP, speed * EXTRA_TURN_PER_SPEED) * 100, 1)


def build_derived_stats(bruto: Bruto) -> list[DerivedStat]:
    return [
        DerivedStat(
            key="dodge_chance",
            label="Dodge Chance",
            value=dodge_chance(bruto.agility),
            description="Agility x 0.1, capped at 95%.",
        ),
        DerivedStat(
            key="extra_turn_chance",
            label="Extra Turn Chance",
            value=extra_turn_chance(bruto.speed),
            description="Speed x 0.05, capped at 60%.",
        ),
    ]
