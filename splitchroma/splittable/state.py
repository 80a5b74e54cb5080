# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Splittable random state (SplitMix64).

Implements the SplittableRandom algorithm of Steele, Lea & Flood,
"Fast Splittable Pseudorandom Number Generators" (OOPSLA 2014).

A state is a pair (seed, gamma). Drawing a value adds gamma to seed and
mixes the result; splitting draws two values to build an independent
child (new seed, new odd gamma). Everything is a pure function of the
state value, so any position in the split tree can be recomputed on any
thread with bit-identical results.

The frontier walk used for indexing:

    root(seed) ─ advance ─> f1 ─ advance ─> f2 ─ advance ─> ...
                   │                │
                   └─ child c1      └─ child c2

state_at(seed, k) is c_k: the child split off by the k-th advance.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np
from numpy.typing import NDArray


MASK64 = (1 << 64) - 1

# Odd integer closest to 2^64 / golden ratio
GOLDEN_GAMMA = 0x9E3779B97F4A7C15

# 2^-53, scales the top 53 bits of a draw onto [0, 1)
_DOUBLE_UNIT = 1.0 / (1 << 53)


def mix64(z: int) -> int:
    """Stafford variant 13 finalizer (the SplitMix64 output mix)."""
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
    return z ^ (z >> 31)


def mix_gamma(z: int) -> int:
    """
    Derive a child gamma.

    Always odd; gammas with too few bit transitions are flipped to
    avoid weak increments.
    """
    z = ((z ^ (z >> 33)) * 0xFF51AFD7ED558CCD) & MASK64
    z = ((z ^ (z >> 33)) * 0xC4CEB9FE1A85EC53) & MASK64
    z = (z ^ (z >> 33)) | 1
    transitions = bin(z ^ (z >> 1)).count("1")
    return z ^ 0xAAAAAAAAAAAAAAAA if transitions < 24 else z


def check_seed(seed: int) -> int:
    """Validate a 64-bit unsigned seed, returning it unchanged."""
    if isinstance(seed, bool) or not isinstance(seed, (int, np.integer)):
        raise ValueError(f"Seed must be an integer, got {seed!r}")
    seed = int(seed)
    if not 0 <= seed <= MASK64:
        raise ValueError(f"Seed must be in [0, 2^64), got {seed}")
    return seed


@dataclass(frozen=True, slots=True)
class SplitState:
    """
    A position in the infinite tree of independent random streams.

    Attributes:
        seed: 64-bit state word
        gamma: Odd 64-bit increment, fixed for the lifetime of a stream
    """
    seed: int
    gamma: int = GOLDEN_GAMMA

    def __post_init__(self) -> None:
        """Validate the state words."""
        if not 0 <= self.seed <= MASK64:
            raise ValueError(f"State seed must be 64-bit unsigned, got {self.seed}")
        if not 0 < self.gamma <= MASK64 or self.gamma % 2 == 0:
            raise ValueError(f"Gamma must be an odd 64-bit integer, got {self.gamma}")

    def next_uint64(self) -> tuple[int, SplitState]:
        """Draw one 64-bit value; return it with the advanced state."""
        s = (self.seed + self.gamma) & MASK64
        return mix64(s), SplitState(s, self.gamma)

    def stream(self) -> Iterator[int]:
        """Unbounded stream of 64-bit draws from this state."""
        s = self.seed
        while True:
            s = (s + self.gamma) & MASK64
            yield mix64(s)

    def uniforms(self, n: int) -> NDArray[np.float64]:
        """
        The first n draws of this state as doubles in [0, 1).

        Uses the top 53 bits of each draw, as SplittableRandom.nextDouble.
        """
        draws = [
            (mix64((self.seed + i * self.gamma) & MASK64) >> 11) * _DOUBLE_UNIT
            for i in range(1, n + 1)
        ]
        return np.array(draws, dtype=np.float64)

    def to_dict(self) -> dict:
        """Serialize to dictionary (hex words)."""
        return {"seed": f"{self.seed:#018x}", "gamma": f"{self.gamma:#018x}"}

    @classmethod
    def from_dict(cls, data: dict) -> SplitState:
        """Deserialize from dictionary."""
        return cls(seed=int(data["seed"], 16), gamma=int(data["gamma"], 16))


def root(seed: int) -> SplitState:
    """Root state of the tree for a user seed."""
    return SplitState(check_seed(seed), GOLDEN_GAMMA)


def split(state: SplitState) -> tuple[SplitState, SplitState]:
    """
    Split a state into (parent_after, child).

    The child is built from the parent's next two draws: one mixed into
    the child's seed and one mixed into the child's gamma. The parent
    continues past those two draws, so the two results never share a
    stream.
    """
    s1 = (state.seed + state.gamma) & MASK64
    s2 = (s1 + state.gamma) & MASK64
    child = SplitState(mix64(s1), mix_gamma(s2))
    return SplitState(s2, state.gamma), child


def advance(state: SplitState) -> tuple[SplitState, SplitState]:
    """
    Advance the frontier by one split.

    Returns:
        (next_state, child_state): next_state becomes the new frontier,
        child_state is consumed by exactly one sampling operation.
    """
    return split(state)


def jump(state: SplitState, k: int) -> SplitState:
    """
    Frontier after k advances, without materializing the k - 1 before it.

    Each advance moves the parent two draws along its own stream, so the
    k-th frontier is simply seed + 2kγ.
    """
    if k < 0:
        raise ValueError(f"Jump distance must be >= 0, got {k}")
    return SplitState((state.seed + 2 * k * state.gamma) & MASK64, state.gamma)


def state_at(seed: int, k: int) -> SplitState:
    """
    The state reached by k advances from root(seed).

    k = 0 is the root itself; for k >= 1 this is the child split off by
    the k-th advance. Pure and thread-safe: every call rebuilds its own
    root, and the result is identical to k sequential advances.
    """
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)):
        raise ValueError(f"Index must be an integer, got {k!r}")
    k = int(k)
    if k < 0:
        raise ValueError(f"Index must be >= 0, got {k}")
    state = root(seed)
    if k == 0:
        return state
    _, child = advance(jump(state, k - 1))
    return child


def replay(seed: int, k: int) -> SplitState:
    """
    state_at by literal replay of k advances.

    O(k); kept as the reference definition that state_at must agree with.
    """
    frontier = root(seed)
    current = frontier
    for _ in range(k):
        frontier, current = advance(frontier)
    return current
