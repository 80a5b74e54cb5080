# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Color and palette value types.

Design principles:
- Immutable: frozen dataclasses, no identity beyond value
- Space-agnostic: a Color is an encoded RGB triple in [0, 1]; which
  color space it belongs to is known by the caller that produced it
- Honest palettes: a Palette records how many colors were asked for,
  so a short result is visible rather than hidden
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

import numpy as np
from numpy.typing import NDArray


# Float residue tolerated when snapping computed channels onto [0, 1]
_SNAP_TOLERANCE = 1e-9


@dataclass(frozen=True, slots=True)
class Color:
    """
    An encoded RGB color with channels in [0, 1].

    Attributes:
        r: Red channel
        g: Green channel
        b: Blue channel
    """
    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        """Validate channels are within the unit cube."""
        for channel, value in (("Red", self.r), ("Green", self.g), ("Blue", self.b)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{channel} channel must be 0-1, got {value}")

    @classmethod
    def from_rgb(cls, rgb: Sequence[float] | NDArray[np.float64]) -> Color:
        """
        Build a Color from a computed (3,) array.

        Values within 1e-9 of the cube are snapped onto it; anything
        further out is rejected by validation.
        """
        arr = np.asarray(rgb, dtype=np.float64).reshape(3)
        snapped = np.where(
            (arr < 0.0) & (arr > -_SNAP_TOLERANCE), 0.0,
            np.where((arr > 1.0) & (arr < 1.0 + _SNAP_TOLERANCE), 1.0, arr),
        )
        return cls(float(snapped[0]), float(snapped[1]), float(snapped[2]))

    @classmethod
    def from_hex(cls, hex_color: str) -> Color:
        """Parse "#RRGGBB" or "RRGGBB"."""
        from splitchroma.sample.colorspace import from_hex
        return cls.from_rgb(from_hex(hex_color))

    @property
    def rgb(self) -> NDArray[np.float64]:
        """Channels as a (3,) float array."""
        return np.array([self.r, self.g, self.b], dtype=np.float64)

    @property
    def hex(self) -> str:
        """8-bit hex string like "#3941C8"."""
        from splitchroma.sample.colorspace import to_hex
        return to_hex(self.rgb)

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def to_dict(self, include_hex: bool = False) -> dict:
        """
        Serialize to dictionary.

        Args:
            include_hex: If True, include the 8-bit hex value
        """
        d = {"r": self.r, "g": self.g, "b": self.b}
        if include_hex:
            d["hex"] = self.hex
        return d

    @classmethod
    def from_dict(cls, data: dict) -> Color:
        """Deserialize from dictionary."""
        return cls(r=data["r"], g=data["g"], b=data["b"])


@dataclass(frozen=True, slots=True)
class Palette:
    """
    An ordered set of mutually distinct colors.

    Every pair of colors is at least ``min_distance`` apart (CIEDE2000),
    unless sampling ran out of attempts first, in which case the palette
    is shorter than requested and ``complete`` is False.

    Attributes:
        colors: Accepted colors in acceptance order
        requested: Number of colors asked for
        min_distance: Pairwise ΔE00 threshold used for acceptance
        attempts: Candidates drawn before sampling stopped
    """
    colors: tuple[Color, ...]
    requested: int
    min_distance: float
    attempts: int = 0

    def __post_init__(self) -> None:
        """Validate palette bookkeeping."""
        if self.requested <= 0:
            raise ValueError(f"Requested size must be positive, got {self.requested}")
        if len(self.colors) > self.requested:
            raise ValueError(
                f"Palette holds {len(self.colors)} colors but only "
                f"{self.requested} were requested"
            )
        if self.min_distance < 0.0:
            raise ValueError(f"Minimum distance must be >= 0, got {self.min_distance}")

    @property
    def complete(self) -> bool:
        """True if every requested color was found."""
        return len(self.colors) == self.requested

    @property
    def shortfall(self) -> int:
        """Number of requested colors that could not be placed."""
        return self.requested - len(self.colors)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)

    def __getitem__(self, index: int) -> Color:
        return self.colors[index]

    @property
    def hex(self) -> list[str]:
        return [c.hex for c in self.colors]

    def to_dict(self) -> dict:
        """Serialize to dictionary."""
        return {
            "colors": [c.to_dict() for c in self.colors],
            "requested": self.requested,
            "min_distance": self.min_distance,
            "attempts": self.attempts,
            "complete": self.complete,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize to a JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> Palette:
        """Deserialize from dictionary."""
        return cls(
            colors=tuple(Color.from_dict(c) for c in data["colors"]),
            requested=data["requested"],
            min_distance=data["min_distance"],
            attempts=data.get("attempts", 0),
        )

    @classmethod
    def from_json(cls, json_str: str) -> Palette:
        """Deserialize from a JSON string."""
        return cls.from_dict(json.loads(json_str))
