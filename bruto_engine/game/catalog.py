"""Static weapon and skill catalogs.

Reference data is loaded from YAML files once per process and converted to
the immutable Weapon and Skill definitions. Every entry is validated while
loading so malformed data fails at startup rather than mid-combat.
"""

import os
from collections import Counter
from typing import Any, Iterable, Optional

import yaml

from ..core.data import (
    EffectTarget,
    ModifierKind,
    Skill,
    SkillCategory,
    SkillEffect,
    SkillEffectTiming,
    SkillEffectType,
    SkillInstance,
    Weapon,
    WeaponModifiers,
    WeaponType,
)
from ..core.errors import DataIntegrityError
from .log_manager import LogManager

_DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "assets", "data")
DEFAULT_WEAPONS_PATH = os.path.join(_DATA_DIR, "weapons.yaml")
DEFAULT_SKILLS_PATH = os.path.join(_DATA_DIR, "skills.yaml")


def _load_entries(path: str, root_key: str) -> list[dict[str, Any]]:
    """Read the list stored under root_key in a YAML file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Catalog file not found: {path}")
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse YAML catalog {path}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get(root_key), list):
        raise ValueError(f"Catalog {path} must contain a '{root_key}' list")
    return data[root_key]


def _parse_enum(enum_cls, raw: Any, entry_id: str):
    try:
        return enum_cls(raw)
    except ValueError:
        raise DataIntegrityError(f"invalid {enum_cls.__name__} value: {raw!r}", entry_id)


def _require(data: dict[str, Any], key: str, entry_id: Optional[str]) -> Any:
    if key not in data:
        raise DataIntegrityError(f"missing required field '{key}'", entry_id)
    return data[key]


def parse_weapon(data: dict[str, Any]) -> Weapon:
    """Build and validate a Weapon from its YAML mapping."""
    weapon_id = str(_require(data, "id", None))
    raw_modifiers = data.get("modifiers")

    weapon = Weapon(
        id=weapon_id,
        name=str(_require(data, "name", weapon_id)),
        types=frozenset(_parse_enum(WeaponType, t, weapon_id) for t in data.get("types", [])),
        damage=int(data.get("damage", 0)),
        hit_speed=float(data.get("hit_speed", 100)),
        draw_chance=float(_require(data, "draw_chance", weapon_id)),
        reach=int(data.get("reach", 1)),
        modifiers=WeaponModifiers.from_dict(raw_modifiers, weapon_id) if raw_modifiers is not None else None,
        display_names=dict(data.get("display_names", {})),
    )
    weapon.validate()
    return weapon


def parse_skill_effect(data: dict[str, Any], skill_id: str) -> SkillEffect:
    """Build a SkillEffect; the stat name is checked by Skill.validate()."""
    return SkillEffect(
        type=_parse_enum(SkillEffectType, _require(data, "type", skill_id), skill_id),
        timing=_parse_enum(SkillEffectTiming, _require(data, "timing", skill_id), skill_id),
        value=float(data.get("value", 0)),
        stat=data.get("stat"),
        modifier=_parse_enum(ModifierKind, data.get("modifier", "flat"), skill_id),
        condition=data.get("condition"),
        target=_parse_enum(EffectTarget, data.get("target", "self"), skill_id),
        description=data.get("description"),
    )


def parse_skill(data: dict[str, Any]) -> Skill:
    """Build and validate a Skill from its YAML mapping."""
    skill_id = str(_require(data, "id", None))
    max_stacks = data.get("max_stacks")

    skill = Skill(
        id=skill_id,
        name=str(_require(data, "name", skill_id)),
        description=data.get("description", ""),
        categories=frozenset(_parse_enum(SkillCategory, c, skill_id) for c in data.get("categories", [])),
        effects=tuple(parse_skill_effect(effect, skill_id) for effect in data.get("effects", [])),
        stackable=bool(data.get("stackable", False)),
        max_stacks=int(max_stacks) if max_stacks is not None else None,
        mutually_exclusive_with=tuple(data.get("mutually_exclusive_with", [])),
        odds=float(data.get("odds", 0)),
        implemented=bool(data.get("implemented", True)),
    )
    skill.validate()
    return skill


class WeaponCatalog:
    """Lookup over the static weapon definitions."""

    def __init__(self, weapons: Iterable[Weapon] = ()):
        self._weapons: dict[str, Weapon] = {}
        for weapon in weapons:
            if weapon.id in self._weapons:
                raise DataIntegrityError("duplicate weapon id", weapon.id)
            self._weapons[weapon.id] = weapon

    @classmethod
    def from_yaml(cls, path: Optional[str] = None, log_manager: Optional[LogManager] = None) -> "WeaponCatalog":
        """Load the catalog from YAML (the packaged catalog by default)."""
        path = path or DEFAULT_WEAPONS_PATH
        catalog = cls(parse_weapon(entry) for entry in _load_entries(path, "weapons"))
        if log_manager is not None:
            log_manager.catalog(f"Weapon catalog loaded: {len(catalog)} weapons from {path}")
        return catalog

    def get(self, weapon_id: str) -> Optional[Weapon]:
        return self._weapons.get(weapon_id)

    def require(self, weapon_id: str) -> Weapon:
        """Get a weapon by id.

        Raises:
            KeyError: If the id is not in the catalog
        """
        if weapon_id not in self._weapons:
            raise KeyError(f"No weapon found with id: {weapon_id}")
        return self._weapons[weapon_id]

    def resolve_equipped(self, weapon_ids: Iterable[str]) -> list[Weapon]:
        """Turn a combatant's equipped weapon ids into definitions, in order."""
        return [self.require(weapon_id) for weapon_id in weapon_ids]

    def all(self) -> list[Weapon]:
        return list(self._weapons.values())

    def by_type(self, weapon_type: WeaponType) -> list[Weapon]:
        return [weapon for weapon in self._weapons.values() if weapon.has_type(weapon_type)]

    def __len__(self) -> int:
        return len(self._weapons)

    def __contains__(self, weapon_id: object) -> bool:
        return weapon_id in self._weapons


class SkillCatalog:
    """Lookup over the static skill definitions."""

    def __init__(self, skills: Iterable[Skill] = ()):
        self._skills: dict[str, Skill] = {}
        for skill in skills:
            if skill.id in self._skills:
                raise DataIntegrityError("duplicate skill id", skill.id)
            self._skills[skill.id] = skill

    @classmethod
    def from_yaml(cls, path: Optional[str] = None, log_manager: Optional[LogManager] = None) -> "SkillCatalog":
        """Load the catalog from YAML (the packaged catalog by default)."""
        path = path or DEFAULT_SKILLS_PATH
        catalog = cls(parse_skill(entry) for entry in _load_entries(path, "skills"))
        if log_manager is not None:
            log_manager.catalog(f"Skill catalog loaded: {len(catalog)} skills from {path}")
        return catalog

    def get(self, skill_id: str) -> Optional[Skill]:
        return self._skills.get(skill_id)

    def require(self, skill_id: str) -> Skill:
        """Get a skill by id.

        Raises:
            KeyError: If the id is not in the catalog
        """
        if skill_id not in self._skills:
            raise KeyError(f"No skill found with id: {skill_id}")
        return self._skills[skill_id]

    def get_by_name(self, name: str) -> Optional[Skill]:
        """Case-insensitive lookup by display name."""
        normalized = name.lower()
        for skill in self._skills.values():
            if skill.name.lower() == normalized:
                return skill
        return None

    def all(self) -> list[Skill]:
        return list(self._skills.values())

    def by_category(self, category: SkillCategory) -> list[Skill]:
        return [skill for skill in self._skills.values() if category in skill.categories]

    def implemented(self) -> list[Skill]:
        return [skill for skill in self._skills.values() if skill.implemented]

    def instances_from_owned(self, owned_ids: Iterable[str]) -> list[SkillInstance]:
        """Convert a combatant's owned skill ids into instances.

        Repeated ids count as stacks. Order follows first ownership.
        """
        counts = Counter(owned_ids)
        return [SkillInstance(self.require(skill_id), stacks) for skill_id, stacks in counts.items()]

    def __len__(self) -> int:
        return len(self._skills)

    def __contains__(self, skill_id: object) -> bool:
        return skill_id in self._skills
