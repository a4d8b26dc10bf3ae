#!/usr/bin/env python3

import sys

from bruto_engine.core.config import EngineConfig
from bruto_engine.core.data import AttributeName, Bruto, CombatStats, ATTRIBUTE_DISPLAY_NAMES, STAT_DISPLAY_NAMES
from bruto_engine.game import CombatEngine, build_derived_stats


def main():
    config = EngineConfig.from_yaml(sys.argv[1] if len(sys.argv) > 1 else None)
    if config.seed is None:
        config.seed = 42

    engine = CombatEngine.from_config(config)

    bruto = Bruto(id="demo", name="Demo Bruto", strength=10, speed=4, agility=6, resistance=3)
    base_stats = CombatStats(
        critical_chance=5, evasion=10, dexterity=8, accuracy=80,
        block=5, disarm=2, combo=10, deflect=3, reversal=4,
    )
    owned_skills = ["reflejos_felinos", "piel_dura", "piel_dura", "golpe_critico"]
    equipped = ["sword", "axe", "staff"]

    print(", ".join(f"{ATTRIBUTE_DISPLAY_NAMES[a]} {bruto.get_attribute(a)}" for a in AttributeName))

    try:
        for turn in range(1, 4):
            result = engine.resolve_turn(bruto, base_stats, owned_skills, equipped)
            weapon = result.active_weapon.name if result.active_weapon else "Bare hands"
            print(f"Turn {turn}: {weapon} (damage {result.total_damage}, "
                  f"speed x{result.hit_speed_multiplier:.2f}, reach {result.reach})")
            for stat, value in result.stats.to_dict().items():
                print(f"  {STAT_DISPLAY_NAMES[stat]:<16} {value:8.2f}")
        for derived in build_derived_stats(bruto):
            print(f"{derived.label}: {derived.value}{derived.unit}")
    finally:
        for message in engine.log_manager.get_messages(count=5):
            print(message.format())


if __name__ == "__main__":
    main()
