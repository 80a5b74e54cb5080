# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Sequential session cursor.

A Session remembers a seed and how many draws have been taken since it
was (re)seeded, so scripts can ask for "the next color" without
tracking indices. It is only a cursor over the stateless core: after n
draws, the last state handed out equals state_at(seed, n).

A Session is single-owner. Parallel code should use the indexed
functions instead of sharing one.
"""

from __future__ import annotations

import logging
from typing import Optional

from splitchroma.schema.errors import check_count
from splitchroma.splittable.state import SplitState, advance, check_seed, root


logger = logging.getLogger(__name__)

# "xenofem!" as big-endian ASCII bytes
DEFAULT_SEED = 0x78656E6F66656D21


class Session:
    """
    Mutable cursor over the frontier walk of one seed.

    Attributes:
        seed: Seed the session was last (re)built from
        root: Root state for that seed
        frontier: Most recent frontier state
        invocation: Draws taken since the last reseed
    """

    __slots__ = ("seed", "root", "frontier", "invocation")

    def __init__(self, seed: int = DEFAULT_SEED) -> None:
        self.reseed(seed)

    def reseed(self, seed: int) -> int:
        """Discard the frontier and restart from root(seed)."""
        self.seed = check_seed(seed)
        self.root = root(self.seed)
        self.frontier = self.root
        self.invocation = 0
        logger.debug("Session reseeded with %#018x", self.seed)
        return self.seed

    def next_draw(self) -> SplitState:
        """Advance the frontier once and return the child for sampling."""
        self.frontier, child = advance(self.frontier)
        self.invocation += 1
        return child

    def next_draws(self, n: int) -> list[SplitState]:
        """Take n successive draws."""
        n = check_count(n, "draw count")
        return [self.next_draw() for _ in range(n)]

    @property
    def next_index(self) -> int:
        """Index (0-based) that the next draw will correspond to."""
        return self.invocation

    def __repr__(self) -> str:
        return f"Session(seed={self.seed:#018x}, invocation={self.invocation})"


_GLOBAL_SESSION: Optional[Session] = None


def get_session() -> Session:
    """Process-wide session, created with DEFAULT_SEED on first use."""
    global _GLOBAL_SESSION
    if _GLOBAL_SESSION is None:
        _GLOBAL_SESSION = Session(DEFAULT_SEED)
    return _GLOBAL_SESSION


def reseed(seed: int) -> int:
    """Reseed the process-wide session."""
    return get_session().reseed(seed)


def next_draw() -> SplitState:
    """Take the next draw from the process-wide session."""
    return get_session().next_draw()


def resolve_session(session: Optional[Session]) -> Session:
    """Use the given session, or the process-wide one."""
    return get_session() if session is None else session
