# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Perceptual color difference (CIEDE2000).

Reference:
- Sharma, Wu & Dalal, "The CIEDE2000 Color-Difference Formula:
  Implementation Notes, Supplementary Test Data, and Mathematical
  Observations", Color Research & Application 30(1), 2005.

Reference thresholds (ΔE00, 0-100 scale):
- ΔE ≈ 1: just noticeable difference
- ΔE ≈ 10: clearly different shades
- ΔE ≈ 30: distinct colors at a glance (default palette spacing)
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from splitchroma.schema.color import Color
from splitchroma.schema.color_space import SRGB, ColorSpace
from splitchroma.sample.colorspace import rgb_to_lab

_POW25_7 = 25.0 ** 7


def delta_e_ciede2000(
    lab1: NDArray[np.float64],
    lab2: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    CIEDE2000 color difference with kL = kC = kH = 1.

    Broadcasts over leading axes, so one color can be compared against
    an (N, 3) array in a single call.

    Args:
        lab1: Array of shape (..., 3) with CIE Lab values
        lab2: Array of shape (..., 3) with CIE Lab values

    Returns:
        ΔE00 values with the broadcast leading shape
    """
    lab1 = np.asarray(lab1, dtype=np.float64)
    lab2 = np.asarray(lab2, dtype=np.float64)
    L1, a1, b1 = lab1[..., 0], lab1[..., 1], lab1[..., 2]
    L2, a2, b2 = lab2[..., 0], lab2[..., 1], lab2[..., 2]

    # a' rescaling by chroma
    C1 = np.hypot(a1, b1)
    C2 = np.hypot(a2, b2)
    C_bar7 = ((C1 + C2) / 2.0) ** 7
    G = 0.5 * (1.0 - np.sqrt(C_bar7 / (C_bar7 + _POW25_7)))

    a1p = (1.0 + G) * a1
    a2p = (1.0 + G) * a2
    C1p = np.hypot(a1p, b1)
    C2p = np.hypot(a2p, b2)
    h1p = np.degrees(np.arctan2(b1, a1p)) % 360.0
    h2p = np.degrees(np.arctan2(b2, a2p)) % 360.0

    # Differences
    dLp = L2 - L1
    dCp = C2p - C1p

    chroma_product = C1p * C2p
    achromatic = chroma_product == 0.0
    dh = h2p - h1p
    dhp = np.where(dh > 180.0, dh - 360.0, np.where(dh < -180.0, dh + 360.0, dh))
    dhp = np.where(achromatic, 0.0, dhp)
    dHp = 2.0 * np.sqrt(chroma_product) * np.sin(np.radians(dhp) / 2.0)

    # Means
    Lp_bar = (L1 + L2) / 2.0
    Cp_bar = (C1p + C2p) / 2.0
    h_sum = h1p + h2p
    hp_bar = np.where(
        np.abs(h1p - h2p) <= 180.0,
        h_sum / 2.0,
        np.where(h_sum < 360.0, (h_sum + 360.0) / 2.0, (h_sum - 360.0) / 2.0),
    )
    hp_bar = np.where(achromatic, h_sum, hp_bar)

    # Weighting functions
    T = (
        1.0
        - 0.17 * np.cos(np.radians(hp_bar - 30.0))
        + 0.24 * np.cos(np.radians(2.0 * hp_bar))
        + 0.32 * np.cos(np.radians(3.0 * hp_bar + 6.0))
        - 0.20 * np.cos(np.radians(4.0 * hp_bar - 63.0))
    )
    d_theta = 30.0 * np.exp(-(((hp_bar - 275.0) / 25.0) ** 2))
    Cp_bar7 = Cp_bar ** 7
    R_C = 2.0 * np.sqrt(Cp_bar7 / (Cp_bar7 + _POW25_7))
    S_L = 1.0 + (0.015 * (Lp_bar - 50.0) ** 2) / np.sqrt(20.0 + (Lp_bar - 50.0) ** 2)
    S_C = 1.0 + 0.045 * Cp_bar
    S_H = 1.0 + 0.015 * Cp_bar * T
    R_T = -np.sin(np.radians(2.0 * d_theta)) * R_C

    dL = dLp / S_L
    dC = dCp / S_C
    dH = dHp / S_H
    return np.sqrt(dL ** 2 + dC ** 2 + dH ** 2 + R_T * dC * dH)


def color_distance(c1: Color, c2: Color, space: ColorSpace = SRGB) -> float:
    """ΔE00 between two colors expressed in the same space."""
    return float(delta_e_ciede2000(rgb_to_lab(c1, space), rgb_to_lab(c2, space)))


def pairwise_distances(
    colors: Sequence[Color],
    space: ColorSpace = SRGB,
) -> NDArray[np.float64]:
    """
    Full (N, N) ΔE00 matrix for a set of colors.

    Used to verify palette spacing after the fact.
    """
    if not colors:
        return np.zeros((0, 0), dtype=np.float64)
    labs = rgb_to_lab(np.stack([c.rgb for c in colors]), space)
    return delta_e_ciede2000(labs[:, np.newaxis, :], labs[np.newaxis, :, :])


def min_pairwise_distance(colors: Sequence[Color], space: ColorSpace = SRGB) -> float:
    """Smallest ΔE00 between any two distinct entries (inf for < 2 colors)."""
    if len(colors) < 2:
        return float("inf")
    dists = pairwise_distances(colors, space)
    upper = dists[np.triu_indices(len(colors), k=1)]
    return float(np.min(upper))
