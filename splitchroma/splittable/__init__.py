# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Splittable random state and the sequential session built on it.

Indexed access (state_at) is pure and thread-safe. The Session is a
single-owner convenience cursor for scripts.
"""

from splitchroma.splittable.session import (
    DEFAULT_SEED,
    Session,
    get_session,
    next_draw,
    reseed,
)
from splitchroma.splittable.state import (
    GOLDEN_GAMMA,
    SplitState,
    advance,
    jump,
    root,
    split,
    state_at,
)

__all__ = [
    "SplitState",
    "GOLDEN_GAMMA",
    "root",
    "split",
    "advance",
    "jump",
    "state_at",
    "Session",
    "DEFAULT_SEED",
    "get_session",
    "reseed",
    "next_draw",
]
