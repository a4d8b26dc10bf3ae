"""
Weapon draw engine.

Decides per turn which equipped weapon, if any, is wielded. Each weapon
rolls its own draw trial; one survivor is then picked uniformly.
"""
from typing import Optional, Sequence

from ..core.data import Weapon
from ..core.rng import RandomSource
from .log_manager import LogManager


class WeaponDrawEngine:
    """Runs draw trials against an injected random source."""

    def __init__(self, random_source: RandomSource, log_manager: Optional[LogManager] = None):
        self.random_source = random_source
        self.log_manager = log_manager

    def _log(self, message: str) -> None:
        if self.log_manager is not None:
            self.log_manager.draw(message)

    def should_draw(self, weapon: Optional[Weapon]) -> bool:
        """Roll whether a weapon is drawn this turn.

        Bare hands (None) are always available and consume no sample.
        Otherwise succeeds iff a sample in [0, 100) is <= draw_chance.
        """
        if weapon is None:
            return True

        roll = self.random_source.sample()
        drawn = roll <= weapon.draw_chance
        self._log(f"{weapon.id}: rolled {roll:.2f} vs {weapon.draw_chance:g} -> {'drawn' if drawn else 'kept'}")
        return drawn

    def select_active(self, equipped: Sequence[Weapon]) -> Optional[Weapon]:
        """Select the weapon wielded this turn.

        Returns:
            One of the weapons that passed its own draw trial, chosen
            uniformly, or None when nothing is equipped or nothing passed.
            None means bare hands; no placeholder weapon is returned.
        """
        if not equipped:
            return None

        available = [weapon for weapon in equipped if self.should_draw(weapon)]

        if not available:
            self._log("No weapon drawn, bare hands")
            return None
        if len(available) == 1:
            return available[0]

        selected = available[self.random_source.choice_index(len(available))]
        self._log(f"Selected {selected.id} from {len(available)} drawn weapons")
        return selected
