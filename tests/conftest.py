"""
Shared fixtures for the bruto combat engine test suite.

Provides sample combatants, weapons and skills, and a scripted random
source so draw and selection outcomes are reproducible.
"""

import os
import sys
from typing import Iterable

import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from bruto_engine.core.data import (
    Bruto,
    CombatStats,
    ModifierKind,
    Skill,
    SkillEffect,
    SkillEffectTiming,
    SkillEffectType,
    StatName,
    Weapon,
    WeaponModifiers,
    WeaponType,
)
from bruto_engine.core.rng import RandomSource
from bruto_engine.game.log_manager import LogLevel, LogManager


class ScriptedRandomSource(RandomSource):
    """Random source that replays fixed samples and choice indices."""

    def __init__(self, samples: Iterable[float] = (), choices: Iterable[int] = ()):
        self.samples = list(samples)
        self.choices = list(choices)
        self.sample_calls = 0
        self.choice_calls: list[int] = []

    def sample(self) -> float:
        self.sample_calls += 1
        return self.samples.pop(0)

    def choice_index(self, n: int) -> int:
        self.choice_calls.append(n)
        return self.choices.pop(0)


@pytest.fixture
def scripted_rng():
    """Factory for scripted random sources."""
    return ScriptedRandomSource


@pytest.fixture
def log_manager():
    """Log manager with debug output visible."""
    return LogManager(default_level=LogLevel.DEBUG)


@pytest.fixture
def bruto():
    """A mid-level combatant."""
    return Bruto(id="b1", name="Tester", level=5, hp=80, max_hp=80,
                 strength=10, speed=4, agility=6, resistance=3)


@pytest.fixture
def base_stats():
    """Base combat stats with a distinct value per stat."""
    return CombatStats(
        critical_chance=10.0,
        evasion=20.0,
        dexterity=30.0,
        accuracy=80.0,
        block=5.0,
        disarm=4.0,
        combo=12.0,
        deflect=6.0,
        reversal=8.0,
    )


def make_weapon(weapon_id: str = "w", draw_chance: float = 100.0, modifiers=None, **kwargs) -> Weapon:
    """Build a weapon with sensible defaults."""
    if isinstance(modifiers, dict):
        modifiers = WeaponModifiers(modifiers)
    return Weapon(id=weapon_id, name=weapon_id.title(), draw_chance=draw_chance, modifiers=modifiers, **kwargs)


@pytest.fixture
def weapon_factory():
    return make_weapon


@pytest.fixture
def sword():
    return make_weapon(
        "sword",
        draw_chance=25,
        modifiers={StatName.CRITICAL_CHANCE: 10, StatName.ACCURACY: 5},
        types=frozenset({WeaponType.SHARP}),
        damage=10,
        reach=2,
    )


@pytest.fixture
def axe():
    return make_weapon(
        "axe",
        draw_chance=20,
        modifiers={StatName.CRITICAL_CHANCE: 15, StatName.EVASION: -10},
        types=frozenset({WeaponType.SHARP, WeaponType.HEAVY}),
        damage=28,
        hit_speed=70,
        reach=2,
    )


@pytest.fixture
def passive_evasion_skill():
    """+30% evasion, passive."""
    return Skill(
        id="reflexes",
        name="Reflexes",
        effects=(SkillEffect(
            type=SkillEffectType.EVASION_MODIFIER,
            timing=SkillEffectTiming.PASSIVE,
            stat=StatName.EVASION,
            value=30,
            modifier=ModifierKind.PERCENTAGE,
        ),),
    )


@pytest.fixture
def stackable_strength_skill():
    """Flat +1 STR per stack, up to 3 stacks."""
    return Skill(
        id="strength_training",
        name="Strength Training",
        stackable=True,
        max_stacks=3,
        effects=(SkillEffect(
            type=SkillEffectType.STAT_BOOST,
            timing=SkillEffectTiming.PASSIVE,
            stat="str",
            value=1,
            modifier=ModifierKind.FLAT,
        ),),
    )
