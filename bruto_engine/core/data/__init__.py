"""Core data structures and definitions.

This package contains fundamental data types and engine definitions:
- data_structures.py: Bruto, CombatStats, WeaponModifiers, Weapon, Skill and friends
- game_enums.py: Centralized enums for stat names, weapon types, skill timings
"""

from .data_structures import (
    Bruto,
    CombatStats,
    Skill,
    SkillEffect,
    SkillInstance,
    ValidationMixin,
    Weapon,
    WeaponModifiers,
    STAT_ORDER,
)
from .game_enums import (
    AttributeName,
    EffectTarget,
    ModifierKind,
    SkillCategory,
    SkillEffectTiming,
    SkillEffectType,
    StatName,
    WeaponType,
    RESOLVE_TIMINGS,
    STAT_DISPLAY_NAMES,
    ATTRIBUTE_DISPLAY_NAMES,
    lookup_stat_key,
)

__all__ = [
    "Bruto",
    "CombatStats",
    "Skill",
    "SkillEffect",
    "SkillInstance",
    "ValidationMixin",
    "Weapon",
    "WeaponModifiers",
    "STAT_ORDER",
    "AttributeName",
    "EffectTarget",
    "ModifierKind",
    "SkillCategory",
    "SkillEffectTiming",
    "SkillEffectType",
    "StatName",
    "WeaponType",
    "RESOLVE_TIMINGS",
    "STAT_DISPLAY_NAMES",
    "ATTRIBUTE_DISPLAY_NAMES",
    "lookup_stat_key",
]
