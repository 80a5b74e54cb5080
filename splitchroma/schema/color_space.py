# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
RGB color space definitions.

A color space is fully described by the CIE xy chromaticities of its
three primaries, its white point, and the transfer curve used to encode
linear light. Everything else (the RGB→XYZ matrix and its inverse) is
derived once at construction.

Built-in spaces (all D65):
- sRGB / Rec.709
- Display P3 (DCI-P3 primaries, D65 white, sRGB transfer curve)
- Rec.2020 (ITU-R BT.2020)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import NDArray

from splitchroma.schema.errors import DegeneratePrimariesError


# CIE 1931 xy of the D65 white point
D65_WHITE = (0.3127, 0.3290)

# Anything above this is numerically singular for our purposes
_MAX_CONDITION = 1e12


class TransferFunction(Enum):
    """Encoding curve between linear light and stored RGB values."""

    SRGB = "srgb"
    BT2020 = "bt2020"
    LINEAR = "linear"


@dataclass(frozen=True, slots=True)
class Primaries:
    """
    CIE xy chromaticity coordinates for RGB primaries and white point.

    Attributes:
        rx, ry: Red primary
        gx, gy: Green primary
        bx, by: Blue primary
        wx, wy: White point (D65 unless given)
    """
    rx: float
    ry: float
    gx: float
    gy: float
    bx: float
    by: float
    wx: float = D65_WHITE[0]
    wy: float = D65_WHITE[1]

    def as_tuples(self) -> tuple[tuple[float, float], ...]:
        """Return ((rx, ry), (gx, gy), (bx, by), (wx, wy))."""
        return (
            (self.rx, self.ry),
            (self.gx, self.gy),
            (self.bx, self.by),
            (self.wx, self.wy),
        )

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "red": [self.rx, self.ry],
            "green": [self.gx, self.gy],
            "blue": [self.bx, self.by],
            "white": [self.wx, self.wy],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Primaries:
        """Deserialize from dictionary."""
        white = data.get("white", D65_WHITE)
        return cls(
            rx=data["red"][0], ry=data["red"][1],
            gx=data["green"][0], gy=data["green"][1],
            bx=data["blue"][0], by=data["blue"][1],
            wx=white[0], wy=white[1],
        )


def _xy_to_xyz(x: float, y: float) -> NDArray[np.float64]:
    """XYZ of a chromaticity with luminance Y = 1."""
    if not np.isfinite(x) or not np.isfinite(y) or y == 0.0:
        raise DegeneratePrimariesError(
            f"Chromaticity ({x}, {y}) has no finite XYZ (y must be non-zero)"
        )
    return np.array([x / y, 1.0, (1.0 - x - y) / y], dtype=np.float64)


def primaries_to_xyz_matrix(
    space: ColorSpace | Primaries,
) -> NDArray[np.float64]:
    """
    Derive the linear RGB → XYZ matrix of a color space.

    1. Each primary's XYZ (up to scale) comes from its (x, y) with Y = 1.
    2. Solve M · S = W so the weighted primaries reproduce the white
       point's XYZ exactly.
    3. Scale each column of M by its weight.

    Args:
        space: A ColorSpace or bare Primaries

    Returns:
        (3, 3) matrix whose columns are the XYZ of R, G and B at full
        intensity.

    Raises:
        DegeneratePrimariesError: If the primaries are collinear or
            coincide. A white point outside the primaries' triangle is
            accepted and yields a negative column weight.
    """
    p = space.primaries if isinstance(space, ColorSpace) else space

    columns = np.stack(
        [_xy_to_xyz(p.rx, p.ry), _xy_to_xyz(p.gx, p.gy), _xy_to_xyz(p.bx, p.by)],
        axis=1,
    )
    white = _xy_to_xyz(p.wx, p.wy)

    condition = np.linalg.cond(columns)
    if not np.isfinite(condition) or condition > _MAX_CONDITION:
        raise DegeneratePrimariesError(
            f"Primaries {p.as_tuples()[:3]} are collinear or coincide"
        )

    try:
        weights = np.linalg.solve(columns, white)
    except np.linalg.LinAlgError as exc:
        raise DegeneratePrimariesError(f"Singular primaries matrix: {exc}") from exc

    if not np.all(np.isfinite(weights)):
        raise DegeneratePrimariesError(
            f"White point ({p.wx}, {p.wy}) is not reproducible from the primaries"
        )

    return columns * weights[np.newaxis, :]


@dataclass(frozen=True, slots=True)
class ColorSpace:
    """
    An RGB color space.

    Built-ins are the module constants SRGB, DISPLAY_P3 and REC2020.
    Use ColorSpace.custom() for anything else; degenerate primaries
    fail at construction.

    Attributes:
        name: Display name
        primaries: Chromaticities of R, G, B and white
        transfer: Encoding curve for stored RGB values
    """
    name: str
    primaries: Primaries
    transfer: TransferFunction = TransferFunction.SRGB
    rgb_to_xyz: NDArray[np.float64] = field(
        init=False, repr=False, compare=False, hash=False
    )
    xyz_to_rgb: NDArray[np.float64] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        """Derive and freeze the conversion matrices."""
        if not self.name:
            raise ValueError("Color space name cannot be empty")
        matrix = primaries_to_xyz_matrix(self.primaries)
        inverse = np.linalg.inv(matrix)
        matrix.setflags(write=False)
        inverse.setflags(write=False)
        object.__setattr__(self, "rgb_to_xyz", matrix)
        object.__setattr__(self, "xyz_to_rgb", inverse)

    @classmethod
    def custom(
        cls,
        name: str,
        primaries: Primaries,
        transfer: TransferFunction = TransferFunction.SRGB,
    ) -> ColorSpace:
        """Build a user-defined color space."""
        return cls(name=name, primaries=primaries, transfer=transfer)

    @classmethod
    def from_name(cls, name: str) -> ColorSpace:
        """
        Resolve a built-in space by name.

        Accepts "srgb", "p3", "displayp3", "display-p3", "rec2020" and
        "bt2020" in any case.
        """
        key = name.strip().lower().replace("_", "").replace(".", "")
        try:
            return _BUILTIN_NAMES[key]
        except KeyError:
            raise ValueError(
                f"Unknown color space: {name!r}. Use 'srgb', 'p3', or 'rec2020'"
            ) from None

    @property
    def is_builtin(self) -> bool:
        return self in BUILTIN_SPACES

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "name": self.name,
            "primaries": self.primaries.to_dict(),
            "transfer": self.transfer.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ColorSpace:
        """Deserialize from dictionary."""
        return cls(
            name=data["name"],
            primaries=Primaries.from_dict(data["primaries"]),
            transfer=TransferFunction(data.get("transfer", "srgb")),
        )


# =============================================================================
# Built-in spaces
# =============================================================================

SRGB = ColorSpace(
    name="sRGB",
    primaries=Primaries(0.640, 0.330, 0.300, 0.600, 0.150, 0.060),
    transfer=TransferFunction.SRGB,
)

DISPLAY_P3 = ColorSpace(
    name="Display P3",
    primaries=Primaries(0.680, 0.320, 0.265, 0.690, 0.150, 0.060),
    transfer=TransferFunction.SRGB,
)

REC2020 = ColorSpace(
    name="Rec.2020",
    primaries=Primaries(0.708, 0.292, 0.170, 0.797, 0.131, 0.046),
    transfer=TransferFunction.BT2020,
)

BUILTIN_SPACES = (SRGB, DISPLAY_P3, REC2020)

_BUILTIN_NAMES = {
    "srgb": SRGB,
    "rec709": SRGB,
    "p3": DISPLAY_P3,
    "displayp3": DISPLAY_P3,
    "display-p3": DISPLAY_P3,
    "display p3": DISPLAY_P3,
    "rec2020": REC2020,
    "bt2020": REC2020,
}
