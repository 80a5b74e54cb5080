# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""Error types raised at the package boundary."""

import numpy as np


class DegeneratePrimariesError(ValueError):
    """Primaries and white point do not span a usable RGB→XYZ basis."""


class InvalidCountError(ValueError):
    """A color or palette count was zero, negative, or not an integer."""


def check_count(n: int, what: str = "count") -> int:
    """Validate a requested count, returning it as a plain int."""
    if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
        raise InvalidCountError(f"{what} must be an integer, got {n!r}")
    if n <= 0:
        raise InvalidCountError(f"{what} must be positive, got {n}")
    return int(n)
