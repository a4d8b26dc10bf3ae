"""Centralized engine enums and constants.

This module contains the closed enumerations shared by the weapon, skill and
stat resolution modules, providing a single source of truth for stat names
and the string keys used by the reference data files.
"""

from enum import Enum
from typing import Optional, Union


class StatName(Enum):
    """The nine combat stats resolved per turn.

    Values match the keys used in weapon modifier data.
    """
    CRITICAL_CHANCE = "criticalChance"
    EVASION = "evasion"
    DEXTERITY = "dexterity"
    ACCURACY = "accuracy"
    BLOCK = "block"
    DISARM = "disarm"
    COMBO = "combo"
    DEFLECT = "deflect"
    REVERSAL = "reversal"


class AttributeName(Enum):
    """Base attributes carried by a Bruto.

    HP is a skill target too; raising it also raises max_hp.
    """
    STRENGTH = "strength"
    SPEED = "speed"
    AGILITY = "agility"
    RESISTANCE = "resistance"
    HP = "hp"


class WeaponType(Enum):
    """Weapon type tags."""
    SHARP = "sharp"
    BLUNT = "blunt"
    HEAVY = "heavy"
    LONG = "long"
    THROWN = "thrown"
    FAST = "fast"
    SHIELD = "shield"


class SkillCategory(Enum):
    """Skill category tags."""
    STAT_BUFF = "stat_buff"
    ACTIVE_ABILITY = "active_ability"
    PASSIVE_EFFECT = "passive_effect"
    WEAPON_MASTERY = "weapon_mastery"
    DEFENSIVE = "defensive"
    SPECIAL = "special"


class SkillEffectType(Enum):
    """Kinds of rule a skill effect describes."""
    STAT_BOOST = "stat_boost"
    DAMAGE_MODIFIER = "damage_modifier"
    ARMOR_BONUS = "armor_bonus"
    EVASION_MODIFIER = "evasion_modifier"
    CRITICAL_BONUS = "critical_bonus"
    MULTI_HIT_BONUS = "multi_hit_bonus"
    SPECIAL_ABILITY = "special_ability"
    LEVEL_UP_BONUS = "level_up_bonus"
    RESISTANCE_CHANGE = "resistance_change"


class SkillEffectTiming(Enum):
    """When a skill effect applies."""
    IMMEDIATE = "immediate"              # Once, at acquisition
    PASSIVE = "passive"                  # Every resolution call
    ON_COMBAT_START = "on_combat_start"  # Once per encounter, caller decides
    CONDITIONAL = "conditional"          # Caller-evaluated condition


class ModifierKind(Enum):
    """How a skill effect value is combined with the base value."""
    FLAT = "flat"
    PERCENTAGE = "percentage"
    BOTH = "both"


class EffectTarget(Enum):
    """Who a conditional effect applies to."""
    SELF = "self"
    OPPONENT = "opponent"


# Any stat a skill effect may reference
StatKey = Union[StatName, AttributeName]

# Timings folded into the per-turn snapshot
RESOLVE_TIMINGS = frozenset({SkillEffectTiming.PASSIVE, SkillEffectTiming.ON_COMBAT_START})

STAT_DISPLAY_NAMES = {
    StatName.CRITICAL_CHANCE: "Critical Chance",
    StatName.EVASION: "Evasion",
    StatName.DEXTERITY: "Dexterity",
    StatName.ACCURACY: "Accuracy",
    StatName.BLOCK: "Block",
    StatName.DISARM: "Disarm",
    StatName.COMBO: "Combo",
    StatName.DEFLECT: "Deflect",
    StatName.REVERSAL: "Reversal",
}

ATTRIBUTE_DISPLAY_NAMES = {
    AttributeName.STRENGTH: "STR",
    AttributeName.SPEED: "Speed",
    AttributeName.AGILITY: "Agility",
    AttributeName.RESISTANCE: "Resistance",
    AttributeName.HP: "HP",
}

# Field names on CombatStats, in declaration order
STAT_FIELDS = {
    StatName.CRITICAL_CHANCE: "critical_chance",
    StatName.EVASION: "evasion",
    StatName.DEXTERITY: "dexterity",
    StatName.ACCURACY: "accuracy",
    StatName.BLOCK: "block",
    StatName.DISARM: "disarm",
    StatName.COMBO: "combo",
    StatName.DEFLECT: "deflect",
    StatName.REVERSAL: "reversal",
}

# Shorthand used by skill data ("str" in the catalog means strength)
_ATTRIBUTE_ALIASES = {
    "str": AttributeName.STRENGTH,
    "strength": AttributeName.STRENGTH,
    "speed": AttributeName.SPEED,
    "agility": AttributeName.AGILITY,
    "resistance": AttributeName.RESISTANCE,
    "hp": AttributeName.HP,
}


def lookup_stat_key(raw: Union[str, StatName, AttributeName]) -> Optional[StatKey]:
    """Map a raw stat reference to a stat enum.

    Accepts enum members, camelCase combat stat names, snake_case field names
    and attribute names (including the "str" shorthand).

    Returns:
        The matching StatName or AttributeName, or None if unrecognized
    """
    if isinstance(raw, (StatName, AttributeName)):
        return raw
    if not isinstance(raw, str):
        return None

    for stat in StatName:
        if raw == stat.value or raw == STAT_FIELDS[stat]:
            return stat
    return _ATTRIBUTE_ALIASES.get(raw.lower())
