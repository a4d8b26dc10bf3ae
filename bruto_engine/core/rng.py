"""Randomness capability injected into the weapon draw engine.

The engine never calls a global random function. Callers hand it a
RandomSource; production code uses SeededRandomSource, tests substitute
their own implementation to script outcomes.
"""

import hashlib
import threading
from abc import ABC, abstractmethod
from typing import Optional, Union

import numpy as np


class RandomSource(ABC):
    """Source of uniform samples used for draw trials and selection."""

    @abstractmethod
    def sample(self) -> float:
        """Return a uniform float in [0, 100)."""
        pass

    @abstractmethod
    def choice_index(self, n: int) -> int:
        """Return a uniform integer in [0, n)."""
        pass


class SeededRandomSource(RandomSource):
    """Seedable random source backed by a numpy Generator.

    Access is serialized with a lock so one instance can be shared between
    threads. For parallel callers that also need reproducibility, give each
    caller its own stream via spawn().
    """

    def __init__(self, seed: Optional[Union[int, np.random.SeedSequence]] = None):
        self._lock = threading.Lock()
        self._set_seed(seed)

    def _set_seed(self, seed: Optional[Union[int, np.random.SeedSequence]]) -> None:
        if isinstance(seed, np.random.SeedSequence):
            self._seed_sequence = seed
        else:
            self._seed_sequence = np.random.SeedSequence(seed)
        self._generator = np.random.default_rng(self._seed_sequence)

    @property
    def seed(self) -> int:
        """Entropy of the underlying seed sequence (for battle replays)."""
        return int(self._seed_sequence.entropy)

    def reseed(self, seed: int) -> None:
        """Reset the stream with a new seed."""
        with self._lock:
            self._set_seed(seed)

    def sample(self) -> float:
        with self._lock:
            return float(self._generator.random()) * 100.0

    def choice_index(self, n: int) -> int:
        if n <= 0:
            raise ValueError("n must be >= 1")
        with self._lock:
            return int(self._generator.integers(n))

    def spawn(self, count: int = 1) -> list["SeededRandomSource"]:
        """Create independent child streams derived from this source's seed."""
        with self._lock:
            children = self._seed_sequence.spawn(count)
        return [SeededRandomSource(child) for child in children]


def create_battle_rng(battle_id: Optional[str] = None) -> SeededRandomSource:
    """Create a random source seeded from a battle id, or from OS entropy."""
    if battle_id is None:
        return SeededRandomSource()
    # Digest of the whole id, stable across processes unlike hash()
    digest = hashlib.sha256(battle_id.encode("utf-8")).digest()
    seed = int.from_bytes(digest[:8], "little") % (2 ** 63)
    return SeededRandomSource(seed)
