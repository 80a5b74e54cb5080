# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Color and palette sampling from a split state.

Colors are drawn uniformly in CIE LCh (not in RGB) and then brought into
the target gamut by chroma reduction. Palettes are built by rejection
sampling: candidates closer than a minimum ΔE00 to an accepted color are
discarded, within a fixed attempt budget.

Every function here is pure in its state argument: the same state,
space and parameters always give the same result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from splitchroma.schema import Color, ColorSpace, Palette, SRGB
from splitchroma.schema.errors import check_count
from splitchroma.splittable.state import SplitState, advance
from splitchroma.sample.colorspace import clamp_lch, rgb_to_lab
from splitchroma.sample.distance import delta_e_ciede2000


logger = logging.getLogger(__name__)

# Sampling box in CIE LCh. Chroma deliberately exceeds every target
# gamut; clamping brings candidates back in.
LIGHTNESS_MAX = 100.0
CHROMA_MAX = 150.0
HUE_MAX = 360.0

DEFAULT_MIN_DISTANCE = 30.0
DEFAULT_MAX_ATTEMPTS = 10_000

# Palette candidates generated and clamped per batch
PALETTE_BLOCK = 64


@dataclass(frozen=True)
class PaletteConfig:
    """Configuration for palette rejection sampling."""

    # Minimum pairwise ΔE00 between accepted colors (0-100 scale)
    # 10 = clearly different shades
    # 30 = distinct colors at a glance
    min_distance: float = DEFAULT_MIN_DISTANCE

    # Candidates drawn before giving up and returning a short palette
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        """Validate thresholds."""
        if not np.isfinite(self.min_distance) or self.min_distance < 0.0:
            raise ValueError(f"min_distance must be a finite value >= 0, got {self.min_distance}")
        if isinstance(self.max_attempts, bool) or not isinstance(self.max_attempts, (int, np.integer)):
            raise ValueError(f"max_attempts must be an integer, got {self.max_attempts!r}")
        object.__setattr__(self, "max_attempts", int(self.max_attempts))
        if self.max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")


def sample_lch(state: SplitState) -> NDArray[np.float64]:
    """
    Draw (L, C, H) from the first three uniforms of a state.

    Returns:
        (3,) array with L in [0, 100), C in [0, 150), H in [0, 360)
    """
    u = state.uniforms(3)
    return u * np.array([LIGHTNESS_MAX, CHROMA_MAX, HUE_MAX], dtype=np.float64)


def sample_color(state: SplitState, space: ColorSpace = SRGB) -> Color:
    """
    Sample one color in the gamut of `space`.

    Args:
        state: Split state supplying the random draws
        space: Target color space

    Returns:
        Color inside the space's gamut; lightness and hue are those
        drawn, chroma is reduced only as far as the gamut requires.
    """
    return Color.from_rgb(clamp_lch(sample_lch(state), space))


def _sample_children(
    state: SplitState,
    count: int,
    space: ColorSpace,
) -> tuple[SplitState, list[Color], NDArray[np.float64]]:
    """
    Sample the next `count` children of a frontier in one batch.

    Returns:
        (frontier after the last child, colors, (count, 3) Lab of the colors)
    """
    frontier = state
    draws = np.empty((count, 3), dtype=np.float64)
    for i in range(count):
        frontier, child = advance(frontier)
        draws[i] = sample_lch(child)

    colors = [Color.from_rgb(rgb) for rgb in clamp_lch(draws, space)]
    labs = rgb_to_lab(np.array([c.as_tuple() for c in colors]), space)
    return frontier, colors, labs


def sample_colors(state: SplitState, n: int, space: ColorSpace = SRGB) -> list[Color]:
    """
    Sample n colors from n successive children of `state`.

    Raises:
        InvalidCountError: If n is not a positive integer
    """
    n = check_count(n, "color count")
    _, colors, _ = _sample_children(state, n, space)
    return colors


def sample_palette(
    state: SplitState,
    n: int,
    space: ColorSpace = SRGB,
    min_distance: Optional[float] = None,
    config: Optional[PaletteConfig] = None,
) -> Palette:
    """
    Sample up to n colors that are pairwise at least `min_distance` apart.

    Each attempt advances a private frontier once and samples the child.
    The first candidate is always accepted; later candidates are accepted
    only if their ΔE00 to every accepted color is >= min_distance.

    Candidates are generated and clamped PALETTE_BLOCK at a time, but
    accepted strictly in draw order, and ``attempts`` counts only the
    candidates examined up to the last decision.

    Running out of attempts is not an error: the palette comes back
    shorter than requested with ``complete`` False. Callers that need
    exactly n colors should retry with a larger budget or a smaller
    distance.

    Args:
        state: Split state supplying the random draws
        n: Number of colors wanted
        space: Target color space
        min_distance: Overrides config.min_distance when given
        config: Sampling settings (uses defaults if None)

    Returns:
        Palette with len(palette) <= n

    Raises:
        InvalidCountError: If n is not a positive integer
    """
    n = check_count(n, "palette size")
    cfg = config or PaletteConfig()
    if min_distance is not None:
        cfg = PaletteConfig(min_distance=min_distance, max_attempts=cfg.max_attempts)

    accepted: list[Color] = []
    accepted_labs = np.empty((n, 3), dtype=np.float64)
    frontier = state
    attempts = 0

    while len(accepted) < n and attempts < cfg.max_attempts:
        size = min(PALETTE_BLOCK, cfg.max_attempts - attempts)
        frontier, candidates, labs = _sample_children(frontier, size, space)

        # Smallest ΔE00 from each candidate to anything accepted so far
        k = len(accepted)
        if k > 0:
            nearest = np.min(
                delta_e_ciede2000(labs[:, np.newaxis, :], accepted_labs[np.newaxis, :k, :]),
                axis=1,
            )
        else:
            nearest = np.full(size, np.inf)

        for i in range(size):
            attempts += 1
            if nearest[i] < cfg.min_distance:
                continue

            accepted_labs[len(accepted)] = labs[i]
            accepted.append(candidates[i])
            if len(accepted) == n:
                break
            if i + 1 < size:
                later = delta_e_ciede2000(labs[i + 1:], labs[i])
                nearest[i + 1:] = np.minimum(nearest[i + 1:], later)

    if len(accepted) < n:
        logger.debug(
            "Palette budget exhausted: %d of %d colors at ΔE00 >= %.2f after %d attempts",
            len(accepted), n, cfg.min_distance, attempts,
        )

    return Palette(
        colors=tuple(accepted),
        requested=n,
        min_distance=cfg.min_distance,
        attempts=attempts,
    )
