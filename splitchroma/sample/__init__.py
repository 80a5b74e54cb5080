# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Color sampling for Splitchroma.

Color-space math, perceptual distance, and the two ways to reach a
seed's color sequence: by index (pure) or through a Session (sequential).
"""

from splitchroma.sample.colorspace import clamp_to_gamut, gamut_map, in_gamut
from splitchroma.sample.distance import color_distance, delta_e_ciede2000
from splitchroma.sample.indexed import color_at, colors_at, draw_state, palette_at
from splitchroma.sample.sampler import (
    PaletteConfig,
    sample_color,
    sample_colors,
    sample_palette,
)
from splitchroma.sample.sequential import next_color, next_colors, next_palette

__all__ = [
    # Gamut
    "in_gamut",
    "clamp_to_gamut",
    "gamut_map",
    # Distance
    "delta_e_ciede2000",
    "color_distance",
    # Sampling
    "PaletteConfig",
    "sample_color",
    "sample_colors",
    "sample_palette",
    # Indexed
    "draw_state",
    "color_at",
    "colors_at",
    "palette_at",
    # Sequential
    "next_color",
    "next_colors",
    "next_palette",
]
