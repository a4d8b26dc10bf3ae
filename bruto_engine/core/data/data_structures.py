"""Unified data structures for combat stat resolution.

This module provides the value types passed between the engine layers.

Data Flow:
1. Bruto + Weapon + Skill (reference data) -> resolution services
2. Resolution services -> CombatStats (per-turn snapshot)

Reference data (Weapon, Skill, SkillEffect) and snapshots (CombatStats) are
immutable. Runtime state owned by the caller, such as stack counts, travels
in SkillInstance rather than on the shared definitions.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Iterator, Mapping, Optional, Union

import numpy as np
from numpy.typing import NDArray

from ..errors import InvalidStackingError, OutOfRangeError, UnknownStatError
from .game_enums import (
    AttributeName,
    EffectTarget,
    ModifierKind,
    SkillCategory,
    SkillEffectTiming,
    SkillEffectType,
    StatKey,
    StatName,
    STAT_FIELDS,
    WeaponType,
    lookup_stat_key,
)

# Canonical stat order for array conversions
STAT_ORDER: tuple[StatName, ...] = tuple(StatName)


class ValidationMixin:
    """Mixin providing validation utilities for reference data."""

    def _entry_id(self) -> Optional[str]:
        return getattr(self, "id", None)

    def validate_range(
        self,
        field_name: str,
        minimum: float,
        maximum: Optional[float] = None,
    ) -> None:
        """Raise OutOfRangeError unless the field is within [minimum, maximum]."""
        value = getattr(self, field_name)
        if value < minimum or (maximum is not None and value > maximum):
            raise OutOfRangeError(field_name, value, minimum, maximum, self._entry_id())


@dataclass(frozen=True)
class Bruto(ValidationMixin):
    """A combatant as read from persistence. Never mutated by the engine."""
    id: str
    name: str
    level: int = 1
    xp: int = 0
    hp: int = 60
    max_hp: int = 60
    strength: int = 2
    speed: int = 2
    agility: int = 2
    resistance: int = 2

    def get_attribute(self, attribute: AttributeName) -> int:
        return getattr(self, attribute.value)

    def validate(self) -> None:
        """Raise OutOfRangeError if any counter or attribute is negative."""
        for name in ("level", "xp", "max_hp") + tuple(a.value for a in AttributeName):
            self.validate_range(name, 0)

    def with_attributes(self, **values: int) -> "Bruto":
        """Return a copy with the given attributes replaced."""
        return replace(self, **values)


@dataclass(frozen=True)
class CombatStats:
    """Dense record of the nine combat stats for one turn.

    Values are exact floats; display rounding is left to consumers.
    """
    critical_chance: float = 0.0
    evasion: float = 0.0
    dexterity: float = 0.0
    accuracy: float = 0.0
    block: float = 0.0
    disarm: float = 0.0
    combo: float = 0.0
    deflect: float = 0.0
    reversal: float = 0.0

    def get(self, stat: StatName) -> float:
        """Get the value of a stat."""
        return getattr(self, STAT_FIELDS[stat])

    def copy(self) -> "CombatStats":
        """Return an equal but distinct snapshot."""
        return replace(self)

    def with_deltas(self, deltas: Mapping[StatName, float]) -> "CombatStats":
        """Return a new snapshot with each delta added to its stat."""
        updates = {STAT_FIELDS[stat]: self.get(stat) + delta for stat, delta in deltas.items()}
        return replace(self, **updates)

    def to_dict(self) -> dict[StatName, float]:
        return {stat: self.get(stat) for stat in STAT_ORDER}

    def to_numpy(self) -> NDArray[np.float64]:
        """Convert to a float64 array in STAT_ORDER."""
        return np.array([self.get(stat) for stat in STAT_ORDER], dtype=np.float64)

    @classmethod
    def from_numpy(cls, arr: NDArray[np.float64]) -> "CombatStats":
        """Create CombatStats from an array in STAT_ORDER."""
        if arr.shape != (len(STAT_ORDER),):
            raise ValueError(f"Array must have shape ({len(STAT_ORDER)},) for CombatStats conversion")
        return cls(**{STAT_FIELDS[stat]: float(arr[i]) for i, stat in enumerate(STAT_ORDER)})

    @classmethod
    def from_mapping(cls, values: Mapping[Union[str, StatName], float]) -> "CombatStats":
        """Create CombatStats from stat names; missing stats default to 0.

        Raises:
            UnknownStatError: If a key is not one of the nine combat stats
        """
        kwargs = {}
        for key, value in values.items():
            stat = lookup_stat_key(key)
            if not isinstance(stat, StatName):
                raise UnknownStatError(key)
            kwargs[STAT_FIELDS[stat]] = float(value)
        return cls(**kwargs)

    def __iter__(self) -> Iterator[float]:
        for f in fields(self):
            yield getattr(self, f.name)


class WeaponModifiers:
    """Sparse mapping from combat stat to a signed percentage.

    A stat that is absent has no effect and reads back as None, which is
    distinct from an explicit 0.
    """

    def __init__(self, values: Optional[Mapping[StatName, float]] = None):
        self._values: dict[StatName, float] = {}
        for stat, value in (values or {}).items():
            if not isinstance(stat, StatName):
                raise UnknownStatError(stat)
            self._values[stat] = float(value)

    @classmethod
    def from_dict(cls, raw: Mapping[str, float], entry_id: Optional[str] = None) -> "WeaponModifiers":
        """Create modifiers from camelCase stat keys as used in weapon data."""
        values = {}
        for key, value in raw.items():
            stat = lookup_stat_key(key)
            if not isinstance(stat, StatName):
                raise UnknownStatError(key, entry_id)
            values[stat] = value
        return cls(values)

    def get(self, stat: StatName) -> Optional[float]:
        """Get the percentage for a stat, or None if the stat is not modified."""
        return self._values.get(stat)

    def has(self, stat: StatName) -> bool:
        return stat in self._values

    def stats(self) -> list[StatName]:
        """Modified stats in canonical order."""
        return [stat for stat in STAT_ORDER if stat in self._values]

    def items(self) -> list[tuple[StatName, float]]:
        return [(stat, self._values[stat]) for stat in self.stats()]

    @property
    def is_empty(self) -> bool:
        return not self._values

    def to_dict(self) -> dict[str, float]:
        """Convert to camelCase keys (the data file format)."""
        return {stat.value: value for stat, value in self.items()}

    def to_numpy(self) -> tuple[NDArray[np.float64], NDArray[np.bool_]]:
        """Convert to (percentages, present-mask) arrays in STAT_ORDER.

        Absent stats hold 0.0 in the percentage array and False in the mask.
        """
        percents = np.array([self._values.get(stat, 0.0) for stat in STAT_ORDER], dtype=np.float64)
        mask = np.array([stat in self._values for stat in STAT_ORDER], dtype=np.bool_)
        return percents, mask

    def __contains__(self, stat: object) -> bool:
        return stat in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[StatName]:
        return iter(self.stats())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeaponModifiers):
            return False
        return self._values == other._values

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{stat.value}={value:+g}" for stat, value in self.items())
        return f"WeaponModifiers({inner})"


@dataclass(frozen=True)
class Weapon(ValidationMixin):
    """Static weapon definition."""
    id: str
    name: str
    types: frozenset[WeaponType] = frozenset()
    damage: int = 0
    hit_speed: float = 100.0    # Percentage, 100 = baseline
    draw_chance: float = 100.0  # 0-100 chance of being drawn on a turn
    reach: int = 1
    modifiers: Optional[WeaponModifiers] = None
    display_names: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    def has_type(self, weapon_type: WeaponType) -> bool:
        return weapon_type in self.types

    def validate(self) -> None:
        """Check bounded fields.

        Raises:
            OutOfRangeError: If draw chance is outside [0, 100], reach is
                below 1, or hit speed is negative
        """
        self.validate_range("draw_chance", 0, 100)
        self.validate_range("reach", 1)
        self.validate_range("hit_speed", 0)


@dataclass(frozen=True)
class SkillEffect:
    """One timed, typed numeric rule within a skill.

    `stat` may be a combat stat, a base attribute, or None for effects the
    turn resolver applies to its own formulas (damage, armor, ...). Raw
    strings are accepted and resolved when the effect is used.
    """
    type: SkillEffectType
    timing: SkillEffectTiming
    value: float = 0.0
    stat: Optional[Union[StatName, AttributeName, str]] = None
    modifier: ModifierKind = ModifierKind.FLAT
    condition: Optional[str] = None
    target: EffectTarget = EffectTarget.SELF
    description: Optional[str] = None

    def resolve_stat(self, entry_id: Optional[str] = None) -> Optional[StatKey]:
        """Resolve the stat reference.

        Raises:
            UnknownStatError: If a stat is set but not recognized
        """
        if self.stat is None:
            return None
        stat = lookup_stat_key(self.stat)
        if stat is None:
            raise UnknownStatError(self.stat, entry_id)
        return stat


@dataclass(frozen=True)
class Skill(ValidationMixin):
    """Static skill definition shared by every combatant that owns it."""
    id: str
    name: str
    description: str = ""
    categories: frozenset[SkillCategory] = frozenset()
    effects: tuple[SkillEffect, ...] = ()
    stackable: bool = False
    max_stacks: Optional[int] = None
    mutually_exclusive_with: tuple[str, ...] = ()
    odds: float = 0.0
    implemented: bool = True

    def validate(self) -> None:
        """Check stacking flags, odds bounds and effect stat names.

        Raises:
            InvalidStackingError: If max_stacks is set on a non-stackable
                skill or is below 1
            OutOfRangeError: If odds are outside [0, 100]
            UnknownStatError: If an effect references an unknown stat
        """
        if self.max_stacks is not None:
            if not self.stackable:
                raise InvalidStackingError("max_stacks is set but skill is not stackable", self.id)
            if self.max_stacks < 1:
                raise InvalidStackingError(f"max_stacks must be >= 1, got {self.max_stacks}", self.id)
        self.validate_range("odds", 0, 100)
        for effect in self.effects:
            effect.resolve_stat(self.id)

    def effective_stacks(self, stacks: int) -> int:
        """Number of stacks that contribute, given the owned stack count."""
        if stacks < 0:
            raise InvalidStackingError(f"stack count must be >= 0, got {stacks}", self.id)
        if not self.stackable:
            return min(stacks, 1)
        if self.max_stacks is None:
            return stacks
        return min(stacks, self.max_stacks)


@dataclass(frozen=True)
class SkillInstance:
    """A skill owned by a combatant, with its caller-tracked stack count."""
    skill: Skill
    stacks: int = 1

    @property
    def multiplier(self) -> int:
        return self.skill.effective_stacks(self.stacks)
