"""
Combat stats aggregation.

Composes the per-turn CombatStats snapshot in a fixed order:

    base stats -> passive + on-combat-start skill contributions
               -> active weapon modifiers

Weapon selection is a separate, earlier step so that resolve() is
deterministic for a given weapon choice. resolve_turn() bundles both steps
for callers that want one call per turn.
"""
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.data import Bruto, CombatStats, Weapon
from .log_manager import LogManager
from .skill_effects import ConditionPredicate, SkillContributions, SkillEffectAggregator, SkillEntry
from .weapon_draw import WeaponDrawEngine
from .weapon_resolver import WeaponResolver


@dataclass(frozen=True)
class TurnResolution:
    """Everything the turn resolver needs for one combatant's turn."""
    stats: CombatStats
    active_weapon: Optional[Weapon]
    contributions: SkillContributions
    total_damage: int
    hit_speed_multiplier: float
    reach: int


class CombatStatsAggregator:
    """Builds CombatStats snapshots from base stats, skills and a weapon."""

    def __init__(
        self,
        skill_aggregator: Optional[SkillEffectAggregator] = None,
        log_manager: Optional[LogManager] = None,
    ):
        self.skill_aggregator = skill_aggregator or SkillEffectAggregator(log_manager)
        self.log_manager = log_manager

    def _log(self, message: str) -> None:
        if self.log_manager is not None:
            self.log_manager.resolve(message)

    def resolve(
        self,
        bruto: Bruto,
        base_stats: CombatStats,
        active_skills: Iterable[SkillEntry],
        active_weapon: Optional[Weapon],
        condition: Optional[ConditionPredicate] = None,
    ) -> CombatStats:
        """Resolve the snapshot for a concrete weapon choice.

        Args:
            bruto: The combatant
            base_stats: Pre-modification combat stats
            active_skills: Owned skills in declaration order
            active_weapon: Weapon chosen for this turn, or None for bare hands
            condition: Optional predicate admitting conditional effects

        Returns:
            A new CombatStats snapshot

        Raises:
            DataIntegrityError: If a skill definition is malformed
        """
        stats, _ = self._resolve(bruto, base_stats, active_skills, active_weapon, condition)
        return stats

    def _resolve(
        self,
        bruto: Bruto,
        base_stats: CombatStats,
        active_skills: Iterable[SkillEntry],
        active_weapon: Optional[Weapon],
        condition: Optional[ConditionPredicate],
    ) -> tuple[CombatStats, SkillContributions]:
        contributions = self.skill_aggregator.collect(bruto, base_stats, active_skills, condition=condition)
        with_skills = SkillEffectAggregator.apply_to_stats(base_stats, contributions)

        # Weapon percentages are taken against the original base, not the
        # skill-adjusted values, then added on top
        weapon_deltas = WeaponResolver.weapon_deltas(base_stats, active_weapon)
        stats = with_skills.with_deltas(weapon_deltas)
        if weapon_deltas and self.log_manager is not None:
            applied = ", ".join(f"{stat.value} {delta:+g}" for stat, delta in weapon_deltas.items())
            self.log_manager.weapon(f"{active_weapon.id}: {applied}")

        weapon_id = active_weapon.id if active_weapon is not None else "bare hands"
        self._log(f"{bruto.name}: resolved with {weapon_id}, {len(contributions.stat_deltas)} skill-modified stats")
        return stats, contributions

    def resolve_turn(
        self,
        bruto: Bruto,
        base_stats: CombatStats,
        active_skills: Sequence[SkillEntry],
        equipped_weapons: Sequence[Weapon],
        draw_engine: WeaponDrawEngine,
        condition: Optional[ConditionPredicate] = None,
    ) -> TurnResolution:
        """Draw a weapon, then resolve the snapshot and derived values."""
        active_weapon = draw_engine.select_active(equipped_weapons)
        stats, contributions = self._resolve(bruto, base_stats, active_skills, active_weapon, condition)
        effective_bruto = SkillEffectAggregator.apply_attribute_deltas(bruto, contributions)

        return TurnResolution(
            stats=stats,
            active_weapon=active_weapon,
            contributions=contributions,
            total_damage=WeaponResolver.total_damage(effective_bruto, active_weapon),
            hit_speed_multiplier=WeaponResolver.hit_speed_multiplier(active_weapon),
            reach=WeaponResolver.weapon_reach(active_weapon),
        )
