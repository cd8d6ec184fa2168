# sim/rng.py
from __future__ import annotations

from dataclasses import dataclass
from zlib import crc32

import numpy as np

_MASK32 = 0xFFFFFFFF


def _fold(part: object) -> int:
    """Map one key part to a u32 word: ints mask, everything else hashes its text."""
    if isinstance(part, (int, np.integer)) and not isinstance(part, bool):
        return int(part) & _MASK32
    text = getattr(part, "value", part)  # Algorithm.ASTAR folds like "astar"
    return crc32(str(text).encode("utf-8")) & _MASK32


@dataclass(frozen=True)
class RNGKey:
    """Stream name plus optional parts (algorithm id, request counter, ...)."""

    stream: str
    words: tuple[int, ...]

    @classmethod
    def from_parts(cls, stream: str, *parts: object) -> RNGKey:
        return cls(stream, (_fold(stream), *map(_fold, parts)))


class RNGRegistry:
    """
    Deterministic numpy Generators keyed by name.

    Every generator is seeded from ``[seed, scenario, worker, *key.words]`` alone,
    so asking for streams in a different order never changes their draws.
    """

    def __init__(self, master_seed: int, *, scenario: str | int = 0, worker: int = 0):
        self.master_seed = int(master_seed) & _MASK32
        self.scenario = scenario
        self.worker = int(worker) & _MASK32
        self._prefix = (self.master_seed, _fold(str(scenario)), self.worker)
        self._generators: dict[RNGKey, np.random.Generator] = {}

    def for_worker(self, worker: int) -> RNGRegistry:
        """Sibling registry for another worker shard of the same scenario."""
        return RNGRegistry(self.master_seed, scenario=self.scenario, worker=worker)

    def generator(self, key: RNGKey) -> np.random.Generator:
        """Shared generator for ``key``; successive draws advance it."""
        gen = self._generators.get(key)
        if gen is None:
            gen = self._generators[key] = self.fresh(key)
        return gen

    def fresh(self, key: RNGKey) -> np.random.Generator:
        """Uncached generator at the start of ``key``'s stream."""
        ss = np.random.SeedSequence(entropy=[*self._prefix, *key.words])
        return np.random.Generator(np.random.PCG64(ss))

    def substream(self, name: str, *parts: object) -> np.random.Generator:
        # e.g. reg.substream("impact_jitter", Algorithm.DIJKSTRA)
        return self.generator(RNGKey.from_parts(name, *parts))

    def stream(self, name: str) -> np.random.Generator:
        return self.substream(name)
