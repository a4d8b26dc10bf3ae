"""
Skill effect aggregation.

Folds the effects of a combatant's active, implemented skills into stat
deltas. The aggregator is stateless: stack counts and the decision of when
immediate or combat-start effects fire belong to the caller and arrive with
each call.

Effect flow per call:
1. Drop skills with implemented=False
2. Partition effects by timing
3. Compute each included effect's contribution against the pre-modification
   base, multiplied by the skill's effective stack count
4. Route it: combat stat -> stat_deltas, attribute -> attribute_deltas,
   no stat -> named_deltas (for the turn resolver's own formulas)
"""
import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, Optional, Union

from ..core.data import (
    AttributeName,
    Bruto,
    CombatStats,
    ModifierKind,
    Skill,
    SkillEffect,
    SkillEffectTiming,
    SkillEffectType,
    SkillInstance,
    StatName,
    RESOLVE_TIMINGS,
)
from .log_manager import LogManager
from .modifiers import percentage_of

# Each resistance point acquired immediately also grants this much HP
HP_PER_RESISTANCE = 6

SkillEntry = Union[Skill, SkillInstance]
ConditionPredicate = Callable[[Skill, SkillEffect], bool]


@dataclass(frozen=True)
class ActiveEffect:
    """An effect of an owned skill together with its stack multiplier."""
    skill: Skill
    effect: SkillEffect
    multiplier: int


@dataclass
class SkillContributions:
    """Deltas produced by folding skill effects."""
    stat_deltas: dict[StatName, float] = field(default_factory=dict)
    attribute_deltas: dict[AttributeName, float] = field(default_factory=dict)
    named_deltas: dict[SkillEffectType, float] = field(default_factory=dict)

    def stat_delta(self, stat: StatName) -> float:
        return self.stat_deltas.get(stat, 0.0)

    def attribute_delta(self, attribute: AttributeName) -> float:
        return self.attribute_deltas.get(attribute, 0.0)

    def named_delta(self, effect_type: SkillEffectType) -> float:
        return self.named_deltas.get(effect_type, 0.0)

    @property
    def is_empty(self) -> bool:
        return not (self.stat_deltas or self.attribute_deltas or self.named_deltas)


def effect_contribution(effect: SkillEffect, base_value: float) -> float:
    """Contribution of one stack of an effect against a base value."""
    if effect.modifier == ModifierKind.FLAT:
        return effect.value
    if effect.modifier == ModifierKind.PERCENTAGE:
        return percentage_of(base_value, effect.value)
    return effect.value + percentage_of(base_value, effect.value)


class SkillEffectAggregator:
    """Folds skill effects into stat, attribute and named deltas."""

    def __init__(self, log_manager: Optional[LogManager] = None):
        self.log_manager = log_manager

    def _log(self, message: str) -> None:
        if self.log_manager is not None:
            self.log_manager.skill(message)

    @staticmethod
    def _as_instance(entry: SkillEntry) -> SkillInstance:
        if isinstance(entry, SkillInstance):
            return entry
        return SkillInstance(entry)

    def active_instances(self, skills: Iterable[SkillEntry]) -> list[SkillInstance]:
        """Validate skills and drop the unimplemented ones.

        Raises:
            DataIntegrityError: If a skill definition is malformed
        """
        active = []
        for entry in skills:
            instance = self._as_instance(entry)
            instance.skill.validate()
            if not instance.skill.implemented:
                self._log(f"{instance.skill.id}: not implemented, skipped")
                continue
            active.append(instance)
        return active

    def partition_by_timing(self, skills: Iterable[SkillEntry]) -> dict[SkillEffectTiming, list[ActiveEffect]]:
        """Group the effects of active skills by timing, in declaration order."""
        partitions: dict[SkillEffectTiming, list[ActiveEffect]] = {timing: [] for timing in SkillEffectTiming}
        for instance in self.active_instances(skills):
            multiplier = instance.multiplier
            for effect in instance.skill.effects:
                partitions[effect.timing].append(ActiveEffect(instance.skill, effect, multiplier))
        return partitions

    def conditional_effects(self, skills: Iterable[SkillEntry]) -> list[ActiveEffect]:
        """Conditional effects, for the caller's own condition evaluator."""
        return self.partition_by_timing(skills)[SkillEffectTiming.CONDITIONAL]

    def collect(
        self,
        bruto: Bruto,
        base_stats: CombatStats,
        skills: Iterable[SkillEntry],
        timings: Iterable[SkillEffectTiming] = RESOLVE_TIMINGS,
        condition: Optional[ConditionPredicate] = None,
    ) -> SkillContributions:
        """Fold the selected timings' effects into contributions.

        Args:
            bruto: Source of base attribute values for attribute effects
            base_stats: Pre-modification combat stats for percentage effects
            skills: Owned skills, bare or with stack counts
            timings: Which timings to include (passive and on-combat-start
                by default)
            condition: Predicate deciding which conditional effects apply.
                Conditional effects are never included without one.

        Returns:
            SkillContributions with deltas summed per stat
        """
        timings = set(timings)
        if condition is not None:
            timings.add(SkillEffectTiming.CONDITIONAL)
        partitions = self.partition_by_timing(skills)
        contributions = SkillContributions()

        for timing in SkillEffectTiming:
            if timing not in timings:
                continue
            for active in partitions[timing]:
                if timing == SkillEffectTiming.CONDITIONAL:
                    if condition is None or not condition(active.skill, active.effect):
                        continue
                self._fold(active, bruto, base_stats, contributions)

        return contributions

    def _fold(
        self,
        active: ActiveEffect,
        bruto: Bruto,
        base_stats: CombatStats,
        contributions: SkillContributions,
    ) -> None:
        effect = active.effect
        stat = effect.resolve_stat(active.skill.id)

        if stat is None:
            amount = effect.value * active.multiplier
            contributions.named_deltas[effect.type] = contributions.named_delta(effect.type) + amount
            self._log(f"{active.skill.id}: {effect.type.value} {amount:+g}")
            return

        if isinstance(stat, StatName):
            amount = effect_contribution(effect, base_stats.get(stat)) * active.multiplier
            contributions.stat_deltas[stat] = contributions.stat_delta(stat) + amount
        else:
            amount = effect_contribution(effect, bruto.get_attribute(stat)) * active.multiplier
            contributions.attribute_deltas[stat] = contributions.attribute_delta(stat) + amount
        self._log(f"{active.skill.id}: {stat.value} {amount:+g} (x{active.multiplier})")

    @staticmethod
    def apply_to_stats(base_stats: CombatStats, contributions: SkillContributions) -> CombatStats:
        """Add combat stat deltas to a snapshot."""
        return base_stats.with_deltas(contributions.stat_deltas)

    @staticmethod
    def apply_attribute_deltas(bruto: Bruto, contributions: SkillContributions) -> Bruto:
        """Return a Bruto with attribute deltas folded in.

        Results are floored to whole points and never drop below 0. An HP
        delta moves max_hp by the same amount as hp.
        """
        updates = {
            attribute.value: max(0, math.floor(bruto.get_attribute(attribute) + delta))
            for attribute, delta in contributions.attribute_deltas.items()
        }
        if AttributeName.HP.value in updates:
            hp_gain = updates[AttributeName.HP.value] - bruto.hp
            updates["max_hp"] = max(0, bruto.max_hp + hp_gain)
        return bruto.with_attributes(**updates)

    def apply_immediate(self, bruto: Bruto, skill: SkillEntry) -> Bruto:
        """Apply a skill's immediate attribute effects, as at acquisition.

        Resistance gained this way also raises hp and max_hp by
        HP_PER_RESISTANCE per point. Immediate effects on combat stats are
        available through collect(timings={IMMEDIATE}). Calling this twice
        applies the effects twice; tracking acquisition is the caller's job.
        """
        contributions = self.collect(
            bruto,
            CombatStats(),
            [skill],
            timings={SkillEffectTiming.IMMEDIATE},
        )
        if not contributions.attribute_deltas:
            return bruto.with_attributes()

        updated = self.apply_attribute_deltas(bruto, contributions)
        resistance_gain = updated.resistance - bruto.resistance
        if resistance_gain:
            hp_gain = resistance_gain * HP_PER_RESISTANCE
            updated = updated.with_attributes(hp=updated.hp + hp_gain, max_hp=updated.max_hp + hp_gain)
        return updated
