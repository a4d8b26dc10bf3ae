"""
Engine assembly.

Wires the log manager, random source, catalogs and resolution services
together from an EngineConfig, the way a turn loop would hold them for the
lifetime of the process.
"""
from typing import Iterable, Optional

from ..core.config import EngineConfig
from ..core.data import Bruto, CombatStats
from ..core.rng import RandomSource, SeededRandomSource
from .catalog import SkillCatalog, WeaponCatalog
from .combat_stats_aggregator import CombatStatsAggregator, TurnResolution
from .log_manager import LogLevel, LogManager
from .skill_effects import ConditionPredicate
from .weapon_draw import WeaponDrawEngine


class CombatEngine:
    """Holds the static catalogs and services used for every turn."""

    def __init__(
        self,
        weapons: WeaponCatalog,
        skills: SkillCatalog,
        random_source: RandomSource,
        log_manager: Optional[LogManager] = None,
    ):
        self.weapons = weapons
        self.skills = skills
        self.random_source = random_source
        self.log_manager = log_manager
        self.draw_engine = WeaponDrawEngine(random_source, log_manager)
        self.aggregator = CombatStatsAggregator(log_manager=log_manager)

    @classmethod
    def from_config(cls, config: Optional[EngineConfig] = None) -> "CombatEngine":
        """Build an engine, loading catalogs from the configured paths."""
        config = config or EngineConfig()
        try:
            level = LogLevel[config.log_level.upper()]
        except KeyError:
            raise ValueError(f"Invalid log level: {config.log_level}")

        log_manager = LogManager(max_messages=config.log_max_messages, default_level=level)
        random_source = SeededRandomSource(config.seed)
        weapons = WeaponCatalog.from_yaml(config.weapons_path, log_manager)
        skills = SkillCatalog.from_yaml(config.skills_path, log_manager)

        log_manager.system(f"Combat engine ready (seed={random_source.seed})")
        return cls(weapons, skills, random_source, log_manager)

    def resolve_turn(
        self,
        bruto: Bruto,
        base_stats: CombatStats,
        owned_skill_ids: Iterable[str],
        equipped_weapon_ids: Iterable[str],
        condition: Optional[ConditionPredicate] = None,
    ) -> TurnResolution:
        """Resolve one turn for a combatant described by catalog ids.

        Repeated skill ids count as stacks.
        """
        skills = self.skills.instances_from_owned(owned_skill_ids)
        equipped = self.weapons.resolve_equipped(equipped_weapon_ids)
        return self.aggregator.resolve_turn(bruto, base_stats, skills, equipped, self.draw_engine, condition)
