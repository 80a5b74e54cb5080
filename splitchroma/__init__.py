# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Splitchroma -- Reproducible, random-access color generation.

Any position of a seed's color sequence is a pure function of
(seed, index), so colors can be fetched in any order, on any thread,
with bit-identical results.

Quick start::

    from splitchroma import color_at, reseed, next_color, DISPLAY_P3

    c = color_at(42, 0)            # Pure, random access
    reseed(42)
    assert next_color() == c       # Sequential access agrees
    color_at(42, 5, DISPLAY_P3)    # Any built-in or custom space
"""

from __future__ import annotations

import logging

__version__ = "1.0.0"

from splitchroma.schema import (
    DISPLAY_P3,
    REC2020,
    SRGB,
    Color,
    ColorSpace,
    DegeneratePrimariesError,
    InvalidCountError,
    Palette,
    Primaries,
    TransferFunction,
)
from splitchroma.splittable import (
    DEFAULT_SEED,
    Session,
    SplitState,
    get_session,
    reseed,
    state_at,
)
from splitchroma.sample import (
    PaletteConfig,
    clamp_to_gamut,
    color_at,
    colors_at,
    gamut_map,
    in_gamut,
    next_color,
    next_colors,
    next_palette,
    palette_at,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Sequential API
    "reseed",
    "next_color",
    "next_colors",
    "next_palette",
    # Indexed API
    "color_at",
    "colors_at",
    "palette_at",
    # Gamut
    "gamut_map",
    "in_gamut",
    "clamp_to_gamut",
    # Types (commonly needed)
    "Color",
    "Palette",
    "PaletteConfig",
    "ColorSpace",
    "Primaries",
    "TransferFunction",
    "SRGB",
    "DISPLAY_P3",
    "REC2020",
    "Session",
    "SplitState",
    "state_at",
    "get_session",
    "DEFAULT_SEED",
    # Errors
    "DegeneratePrimariesError",
    "InvalidCountError",
    # Version
    "__version__",
]
