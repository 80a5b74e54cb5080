# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Random-access color generation.

Index i of a seed's sequence is sampled from state_at(seed, i + 1), the
child split off by the (i + 1)-th frontier advance. This is the same
state the i-th sequential draw of a freshly seeded Session returns, so
both access paths agree.

Nothing here touches a Session; every call rebuilds its own root, so
these functions are safe to call from any number of threads.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional

import numpy as np

from splitchroma.schema import Color, ColorSpace, Palette, SRGB
from splitchroma.schema.errors import check_count
from splitchroma.splittable.state import SplitState, state_at
from splitchroma.sample.sampler import PaletteConfig, sample_color, sample_palette


def draw_state(seed: int, index: int) -> SplitState:
    """
    State sampled for a 0-based sequence index.

    Raises:
        ValueError: If index is negative or seed is not a 64-bit unsigned int
    """
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise ValueError(f"Index must be an integer, got {index!r}")
    index = int(index)
    if index < 0:
        raise ValueError(f"Index must be >= 0, got {index}")
    return state_at(seed, index + 1)


def color_at(
    seed: int,
    index: int,
    space: ColorSpace = SRGB,
) -> Color:
    """
    Color at a position of the sequence for `seed`.

    Example:
        >>> color_at(42, 7) == color_at(42, 7)
        True
    """
    return sample_color(draw_state(seed, index), space)


def colors_at(
    seed: int,
    indices: Iterable[int],
    space: ColorSpace = SRGB,
    *,
    workers: Optional[int] = None,
) -> list[Color]:
    """
    Colors at several positions, in the order the indices are given.

    Equivalent to [color_at(seed, k, space) for k in indices]. Duplicate
    indices are allowed; an empty iterable gives an empty list.

    Args:
        seed: Sequence seed
        indices: Positions to fetch
        space: Target color space
        workers: If given, compute on a thread pool of this size; the
            result is identical either way.
    """
    indices = list(indices)
    if workers is None or len(indices) < 2:
        return [color_at(seed, k, space) for k in indices]

    workers = check_count(workers, "worker count")
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(lambda k: color_at(seed, k, space), indices))


def palette_at(
    seed: int,
    index: int,
    n: int,
    space: ColorSpace = SRGB,
    min_distance: Optional[float] = None,
    config: Optional[PaletteConfig] = None,
) -> Palette:
    """
    Palette sampled from one position of the sequence for `seed`.

    Matches the palette a Session returns from next_palette() when that
    call is its index-th draw.

    Raises:
        InvalidCountError: If n is not a positive integer
    """
    n = check_count(n, "palette size")
    return sample_palette(
        draw_state(seed, index), n, space, min_distance=min_distance, config=config
    )
