# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Color space conversions and gamut handling.

Conversion chain: encoded RGB → linear RGB → XYZ → CIE Lab → CIE LCh(ab)

Each RGB space converts to XYZ through its own primaries matrix; Lab is
always relative to the D65 white so colors from different spaces share
one perceptual frame.

Gamut policy: out-of-gamut colors keep their lightness and hue and lose
chroma until they fit (bisection in LCh), never per-channel clipping.

All conversions are pure NumPy and vectorised over (..., 3) arrays.
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np
from numpy.typing import NDArray

from splitchroma.schema.color import Color
from splitchroma.schema.color_space import (
    D65_WHITE,
    SRGB,
    ColorSpace,
    TransferFunction,
    primaries_to_xyz_matrix,
)

RGBLike = Union[Color, Sequence[float], NDArray[np.float64]]

# 20 halvings of a 150-unit chroma range is finer than 8-bit output
BISECTION_STEPS = 20

# Float residue accepted as in-gamut when deciding whether to clamp
GAMUT_TOLERANCE = 1e-9

__all__ = [
    "BISECTION_STEPS",
    "GAMUT_TOLERANCE",
    "primaries_to_xyz_matrix",
    "xyz_to_rgb_matrix",
    "encode",
    "decode",
    "linear_rgb_to_xyz",
    "xyz_to_linear_rgb",
    "xyz_to_lab",
    "lab_to_xyz",
    "lab_to_lch",
    "lch_to_lab",
    "rgb_to_lab",
    "rgb_to_lch",
    "lch_to_rgb",
    "in_gamut",
    "clamp_lch",
    "clamp_to_gamut",
    "gamut_map",
    "to_hex",
    "from_hex",
]


def as_rgb(rgb: RGBLike) -> NDArray[np.float64]:
    """Coerce a Color or array-like to a float array of shape (..., 3)."""
    if isinstance(rgb, Color):
        return rgb.rgb
    arr = np.asarray(rgb, dtype=np.float64)
    if arr.shape[-1:] != (3,):
        raise ValueError(f"Expected RGB array of shape (..., 3), got {arr.shape}")
    return arr


def xyz_to_rgb_matrix(space: ColorSpace) -> NDArray[np.float64]:
    """XYZ → linear RGB matrix of a space (inverse of its primaries matrix)."""
    return space.xyz_to_rgb


# =============================================================================
# Transfer curves (encoded ↔ linear)
# =============================================================================

# ITU-R BT.2020 OETF constants (12-bit precision values)
_BT2020_ALPHA = 1.09929682680944
_BT2020_BETA = 0.018053968510807


def encode(linear: NDArray[np.float64], transfer: TransferFunction) -> NDArray[np.float64]:
    """
    Apply a transfer curve to linear light.

    Sign-preserving: negative (out-of-gamut) values are mirrored so the
    curve stays invertible outside [0, 1].
    """
    linear = np.asarray(linear, dtype=np.float64)
    if transfer is TransferFunction.LINEAR:
        return linear.copy()

    sign = np.sign(linear)
    v = np.abs(linear)
    if transfer is TransferFunction.SRGB:
        encoded = np.where(
            v <= 0.0031308,
            v * 12.92,
            1.055 * np.power(v, 1.0 / 2.4) - 0.055,
        )
    else:
        encoded = np.where(
            v < _BT2020_BETA,
            v * 4.5,
            _BT2020_ALPHA * np.power(v, 0.45) - (_BT2020_ALPHA - 1.0),
        )
    return sign * encoded


def decode(encoded: NDArray[np.float64], transfer: TransferFunction) -> NDArray[np.float64]:
    """
    Invert a transfer curve back to linear light.

    sRGB uses a piecewise gamma curve:
    - For values <= 0.04045: linear/12.92
    - For values > 0.04045: ((value + 0.055) / 1.055) ^ 2.4
    """
    encoded = np.asarray(encoded, dtype=np.float64)
    if transfer is TransferFunction.LINEAR:
        return encoded.copy()

    sign = np.sign(encoded)
    v = np.abs(encoded)
    if transfer is TransferFunction.SRGB:
        linear = np.where(
            v <= 0.04045,
            v / 12.92,
            np.power((v + 0.055) / 1.055, 2.4),
        )
    else:
        linear = np.where(
            v < 4.5 * _BT2020_BETA,
            v / 4.5,
            np.power((v + _BT2020_ALPHA - 1.0) / _BT2020_ALPHA, 1.0 / 0.45),
        )
    return sign * linear


# =============================================================================
# Linear RGB ↔ XYZ
# =============================================================================


def linear_rgb_to_xyz(rgb: NDArray[np.float64], space: ColorSpace) -> NDArray[np.float64]:
    """Linear RGB in `space` to CIE XYZ (Y = 1 for the space's white)."""
    rgb = np.asarray(rgb, dtype=np.float64)
    return np.einsum('...j,ij->...i', rgb, space.rgb_to_xyz)


def xyz_to_linear_rgb(xyz: NDArray[np.float64], space: ColorSpace) -> NDArray[np.float64]:
    """CIE XYZ to linear RGB in `space` (unclipped)."""
    xyz = np.asarray(xyz, dtype=np.float64)
    return np.einsum('...j,ij->...i', xyz, space.xyz_to_rgb)


# =============================================================================
# XYZ ↔ CIE Lab ↔ LCh
# =============================================================================

# D65 reference white in XYZ, derived from the same chromaticity as the spaces
_WHITE_XYZ = np.array([
    D65_WHITE[0] / D65_WHITE[1],
    1.0,
    (1.0 - D65_WHITE[0] - D65_WHITE[1]) / D65_WHITE[1],
], dtype=np.float64)

# CIE constants: ε = (6/29)^3, κ = (29/3)^3
_EPSILON = 216.0 / 24389.0
_KAPPA = 24389.0 / 27.0


def xyz_to_lab(xyz: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert XYZ to CIE Lab (D65).

    Returns:
        Array of shape (..., 3) with L in [0, 100] for in-gamut colors
    """
    xyz = np.asarray(xyz, dtype=np.float64)
    t = xyz / _WHITE_XYZ
    f = np.where(t > _EPSILON, np.cbrt(t), (_KAPPA * t + 16.0) / 116.0)

    L = 116.0 * f[..., 1] - 16.0
    a = 500.0 * (f[..., 0] - f[..., 1])
    b = 200.0 * (f[..., 1] - f[..., 2])
    return np.stack([L, a, b], axis=-1)


def lab_to_xyz(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert CIE Lab (D65) to XYZ."""
    lab = np.asarray(lab, dtype=np.float64)
    L = lab[..., 0]

    fy = (L + 16.0) / 116.0
    fx = fy + lab[..., 1] / 500.0
    fz = fy - lab[..., 2] / 200.0

    x = np.where(fx ** 3 > _EPSILON, fx ** 3, (116.0 * fx - 16.0) / _KAPPA)
    y = np.where(L > _KAPPA * _EPSILON, fy ** 3, L / _KAPPA)
    z = np.where(fz ** 3 > _EPSILON, fz ** 3, (116.0 * fz - 16.0) / _KAPPA)
    return np.stack([x, y, z], axis=-1) * _WHITE_XYZ


def lab_to_lch(lab: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert Lab to LCh (cylindrical coordinates).

    Returns:
        Array of shape (..., 3) with (L, C, H); H in degrees [0, 360)
    """
    lab = np.asarray(lab, dtype=np.float64)
    a = lab[..., 1]
    b = lab[..., 2]

    C = np.sqrt(a**2 + b**2)
    H = np.degrees(np.arctan2(b, a)) % 360.0
    return np.stack([lab[..., 0], C, H], axis=-1)


def lch_to_lab(lch: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convert LCh (H in degrees) to Lab."""
    lch = np.asarray(lch, dtype=np.float64)
    H_rad = np.radians(lch[..., 2])
    C = lch[..., 1]
    return np.stack([lch[..., 0], C * np.cos(H_rad), C * np.sin(H_rad)], axis=-1)


# =============================================================================
# Full chains: encoded RGB ↔ Lab / LCh
# =============================================================================


def rgb_to_lab(rgb: RGBLike, space: ColorSpace = SRGB) -> NDArray[np.float64]:
    """Encoded RGB in `space` to CIE Lab."""
    linear = decode(as_rgb(rgb), space.transfer)
    return xyz_to_lab(linear_rgb_to_xyz(linear, space))


def rgb_to_lch(rgb: RGBLike, space: ColorSpace = SRGB) -> NDArray[np.float64]:
    """Encoded RGB in `space` to CIE LCh."""
    return lab_to_lch(rgb_to_lab(rgb, space))


def lch_to_rgb(lch: NDArray[np.float64], space: ColorSpace = SRGB) -> NDArray[np.float64]:
    """
    CIE LCh to encoded RGB in `space`.

    Not clipped: channels outside [0, 1] mean the color is out of gamut.
    """
    linear = xyz_to_linear_rgb(lab_to_xyz(lch_to_lab(lch)), space)
    return encode(linear, space.transfer)


# =============================================================================
# Gamut
# =============================================================================


def _inside(rgb: NDArray[np.float64], tol: float) -> NDArray[np.bool_]:
    """Per-color in-cube mask over the last axis."""
    return np.all((rgb >= -tol) & (rgb <= 1.0 + tol), axis=-1)


def in_gamut(rgb: RGBLike, space: ColorSpace = SRGB, tol: float = 0.0) -> bool:
    """
    True iff every channel lies in [0, 1].

    The test is made in the space's own encoded RGB cube; `space` names
    which cube the values belong to. Batches are in gamut only if every
    color is.

    Args:
        rgb: Color, or array of shape (..., 3)
        space: Space the values are expressed in
        tol: Slack allowed outside the cube
    """
    return bool(np.all(_inside(as_rgb(rgb), tol)))


def clamp_lch(
    lch: NDArray[np.float64],
    space: ColorSpace = SRGB,
    steps: int = BISECTION_STEPS,
) -> NDArray[np.float64]:
    """
    Bring LCh colors into the gamut of `space` by reducing chroma only.

    Binary-searches the largest chroma C' <= C at fixed L and H whose RGB
    is inside the cube. Colors that already fit are converted unchanged.

    Args:
        lch: Array of shape (3,) or (N, 3)
        space: Destination space
        steps: Bisection steps

    Returns:
        Encoded RGB of the same shape, clipped onto [0, 1] to remove
        float residue.
    """
    lch = np.asarray(lch, dtype=np.float64)
    rgb = lch_to_rgb(lch, space)
    fits = _inside(rgb, GAMUT_TOLERANCE)
    if np.all(fits):
        return np.clip(rgb, 0.0, 1.0)

    L = lch[..., 0]
    H = lch[..., 2]
    lo = np.zeros_like(L)
    hi = lch[..., 1].copy()

    for _ in range(steps):
        mid = (lo + hi) / 2.0
        ok = _inside(lch_to_rgb(np.stack([L, mid, H], axis=-1), space), 0.0)
        lo = np.where(ok, mid, lo)
        hi = np.where(ok, hi, mid)

    clamped = lch_to_rgb(np.stack([L, lo, H], axis=-1), space)
    result = np.where(fits[..., np.newaxis], rgb, clamped)
    return np.clip(result, 0.0, 1.0)


def clamp_to_gamut(rgb: RGBLike, space: ColorSpace = SRGB) -> NDArray[np.float64]:
    """
    Clamp encoded RGB to the gamut of `space`, preserving lightness and hue.

    In-gamut input is returned as-is. Anything else is converted to LCh
    and desaturated by clamp_lch().

    Args:
        rgb: Color, or array of shape (..., 3); values may lie outside [0, 1]
        space: Space the values are expressed in

    Returns:
        Array of the same shape with every channel in [0, 1]

    Raises:
        ValueError: If any channel is NaN or infinite
    """
    rgb = as_rgb(rgb)
    if not np.all(np.isfinite(rgb)):
        raise ValueError("Cannot clamp non-finite RGB values")

    fits = _inside(rgb, GAMUT_TOLERANCE)
    if np.all(fits):
        return np.clip(rgb, 0.0, 1.0)

    clamped = clamp_lch(rgb_to_lch(rgb, space), space)
    return np.where(fits[..., np.newaxis], np.clip(rgb, 0.0, 1.0), clamped)


def gamut_map(
    rgb: RGBLike,
    from_space: ColorSpace,
    to_space: ColorSpace,
) -> NDArray[np.float64]:
    """
    Re-express a color from one space in another.

    Decodes in the source space, goes through XYZ with each space's
    matrix, encodes in the destination, then clamp_to_gamut().

    Args:
        rgb: Encoded RGB in `from_space`
        from_space: Source space
        to_space: Destination space

    Returns:
        Encoded RGB in `to_space`, inside its gamut
    """
    linear = decode(as_rgb(rgb), from_space.transfer)
    xyz = linear_rgb_to_xyz(linear, from_space)
    target = encode(xyz_to_linear_rgb(xyz, to_space), to_space.transfer)
    return clamp_to_gamut(target, to_space)


# =============================================================================
# Hex
# =============================================================================


def to_hex(rgb: RGBLike) -> str:
    """
    Convert encoded RGB [0, 1] to a hex color string.

    Returns:
        Hex color string like "#3941C8"
    """
    arr = np.clip(as_rgb(rgb).reshape(3), 0.0, 1.0)
    r, g, b = (arr * 255).round().astype(int)
    return f"#{r:02X}{g:02X}{b:02X}"


def from_hex(hex_color: str) -> NDArray[np.float64]:
    """
    Convert a hex color string to encoded RGB [0, 1].

    Args:
        hex_color: Hex string like "#3941C8" or "3941C8"
    """
    hex_color = hex_color.lstrip("#")
    if len(hex_color) != 6:
        raise ValueError(f"Expected 6 hex digits, got {hex_color!r}")

    r = int(hex_color[0:2], 16)
    g = int(hex_color[2:4], 16)
    b = int(hex_color[4:6], 16)
    return np.array([r, g, b], dtype=np.float64) / 255.0
