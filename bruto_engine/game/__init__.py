"""Resolution services.

This package contains the stat pipeline and its supporting services:
- modifiers.py: percentage and modifier-set arithmetic
- weapon_resolver.py: weapon modifier application and derived weapon values
- weapon_draw.py: per-turn weapon draw and selection
- skill_effects.py: skill effect timing, stacking and folding
- combat_stats_aggregator.py: per-turn snapshot composition
- derived_stats.py: dodge and extra turn chances
- catalog.py: YAML weapon and skill catalogs
- combat_engine.py: service assembly from configuration
- log_manager.py: categorized resolution log
"""

from .catalog import SkillCatalog, WeaponCatalog
from .combat_engine import CombatEngine
from .combat_stats_aggregator import CombatStatsAggregator, TurnResolution
from .derived_stats import DerivedStat, build_derived_stats, dodge_chance, extra_turn_chance
from .log_manager import LogCategory, LogLevel, LogManager, LogMessage
from .modifiers import percentage_of, sum_modifiers
from .skill_effects import ActiveEffect, SkillContributions, SkillEffectAggregator, effect_contribution
from .weapon_draw import WeaponDrawEngine
from .weapon_resolver import WeaponResolver

__all__ = [
    "SkillCatalog",
    "WeaponCatalog",
    "CombatEngine",
    "CombatStatsAggregator",
    "TurnResolution",
    "DerivedStat",
    "build_derived_stats",
    "dodge_chance",
    "extra_turn_chance",
    "LogCategory",
    "LogLevel",
    "LogManager",
    "LogMessage",
    "percentage_of",
    "sum_modifiers",
    "ActiveEffect",
    "SkillContributions",
    "SkillEffectAggregator",
    "effect_contribution",
    "WeaponDrawEngine",
    "WeaponResolver",
]
