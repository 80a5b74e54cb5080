# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Schema definitions for color spaces, colors and palettes.

All types in this module are immutable (frozen dataclasses).
"""

from splitchroma.schema.color import Color, Palette
from splitchroma.schema.color_space import (
    BUILTIN_SPACES,
    D65_WHITE,
    DISPLAY_P3,
    REC2020,
    SRGB,
    ColorSpace,
    Primaries,
    TransferFunction,
    primaries_to_xyz_matrix,
)
from splitchroma.schema.errors import DegeneratePrimariesError, InvalidCountError

__all__ = [
    # Color spaces
    "Primaries",
    "TransferFunction",
    "ColorSpace",
    "primaries_to_xyz_matrix",
    "SRGB",
    "DISPLAY_P3",
    "REC2020",
    "BUILTIN_SPACES",
    "D65_WHITE",
    # Values
    "Color",
    "Palette",
    # Errors
    "DegeneratePrimariesError",
    "InvalidCountError",
]
