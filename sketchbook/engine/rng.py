"""Seeded random source threaded explicitly through every generator.

Two renders with the same seed and parameters must produce identical
output, so nothing in the engine touches a module-level generator. Each
render builds one ``SeededRandom`` and passes it down.
"""

from __future__ import annotations

import math
from collections.abc import MutableSequence, Sequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")

# p5.js noise() defaults
NOISE_OCTAVES = 4
NOISE_FALLOFF = 0.5

# SeedSequence only takes non-negative entropy; seeds are taken modulo 2**64
_SEED_MASK = 0xFFFFFFFFFFFFFFFF

_GRADIENTS_3D = (
    (1, 1, 0), (-1, 1, 0), (1, -1, 0), (-1, -1, 0),
    (1, 0, 1), (-1, 0, 1), (1, 0, -1), (-1, 0, -1),
    (0, 1, 1), (0, -1, 1), (0, 1, -1), (0, -1, -1),
)


def _fade(t: float) -> float:
    """Perlin's quintic fade curve."""
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


class SeededRandom:
    """Uniform draws plus smooth gradient noise, reproducible from one integer seed.

    Any integer is a valid seed, negative ones included. ``seed=None`` draws
    entropy from the OS and is not reproducible.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        sequence = np.random.SeedSequence(None if seed is None else seed & _SEED_MASK)
        uniform_seq, noise_seq = sequence.spawn(2)
        self._gen = np.random.Generator(np.random.PCG64(uniform_seq))
        # Noise gets its own stream so sampling noise never shifts uniform draws.
        noise_gen = np.random.Generator(np.random.PCG64(noise_seq))
        perm = noise_gen.permutation(256).tolist()
        self._perm: list[int] = perm + perm

    @property
    def seed(self) -> int | None:
        return self._seed

    # --- uniform draws ---

    def random(self) -> float:
        """Uniform float in [0, 1)."""
        return float(self._gen.random())

    def uniform(self, low: float, high: float) -> float:
        """Uniform float between ``low`` and ``high`` (bounds may be given in either order)."""
        return low + self.random() * (high - low)

    def randint(self, n: int) -> int:
        """Integer in [0, n)."""
        return int(math.floor(self.random() * n))

    def angle(self) -> float:
        return self.random() * math.tau

    def choice(self, items: Sequence[T]) -> T:
        if not items:
            raise ValueError("choice() from an empty sequence")
        return items[self.randint(len(items))]

    # --- sequence helpers ---

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Fisher-Yates shuffle in place. Returns the same sequence."""
        for i in range(len(items) - 1, 0, -1):
            j = int(math.floor(self.random() * (i + 1)))
            items[i], items[j] = items[j], items[i]
        return items

    def shuffled(self, items: Sequence[T]) -> list[T]:
        copy = list(items)
        self.shuffle(copy)
        return copy

    def pick(self, items: Sequence[T], count: int) -> list[T]:
        """Pick ``count`` distinct elements without replacement."""
        return self.shuffled(items)[: min(count, len(items))]

    def weighted_choice(self, items: Sequence[T], weights: Sequence[float]) -> T:
        if len(items) != len(weights):
            raise ValueError("items and weights must have the same length")
        if not items:
            raise ValueError("weighted_choice() from an empty sequence")
        remaining = self.random() * sum(weights)
        for item, weight in zip(items, weights):
            remaining -= weight
            if remaining <= 0:
                return item
        return items[-1]

    # --- gradient noise ---

    def noise(self, x: float, y: float = 0.0, z: float = 0.0) -> float:
        """Fractal gradient noise in [0, 1], smooth in all three coordinates."""
        total = 0.0
        amplitude = 0.5
        frequency = 1.0
        for _ in range(NOISE_OCTAVES):
            n = self._perlin(x * frequency, y * frequency, z * frequency)
            total += amplitude * (n + 1.0) * 0.5
            amplitude *= NOISE_FALLOFF
            frequency *= 2.0
        return min(1.0, max(0.0, total))

    def _grad(self, h: int, x: float, y: float, z: float) -> float:
        gx, gy, gz = _GRADIENTS_3D[h % 12]
        return gx * x + gy * y + gz * z

    def _perlin(self, x: float, y: float, z: float) -> float:
        perm = self._perm
        xi = math.floor(x)
        yi = math.floor(y)
        zi = math.floor(z)
        xf, yf, zf = x - xi, y - yi, z - zi
        xi &= 255
        yi &= 255
        zi &= 255
        u, v, w = _fade(xf), _fade(yf), _fade(zf)

        a = perm[xi] + yi
        aa = perm[a] + zi
        ab = perm[a + 1] + zi
        b = perm[xi + 1] + yi
        ba = perm[b] + zi
        bb = perm[b + 1] + zi

        x1 = _lerp(self._grad(perm[aa], xf, yf, zf), self._grad(perm[ba], xf - 1, yf, zf), u)
        x2 = _lerp(self._grad(perm[ab], xf, yf - 1, zf), self._grad(perm[bb], xf - 1, yf - 1, zf), u)
        y1 = _lerp(x1, x2, v)
        x3 = _lerp(
            self._grad(perm[aa + 1], xf, yf, zf - 1), self._grad(perm[ba + 1], xf - 1, yf, zf - 1), u
        )
        x4 = _lerp(
            self._grad(perm[ab + 1], xf, yf - 1, zf - 1),
            self._grad(perm[bb + 1], xf - 1, yf - 1, zf - 1),
            u,
        )
        y2 = _lerp(x3, x4, v)
        return _lerp(y1, y2, w)
