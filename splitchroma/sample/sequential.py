# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""
Session-backed color generation ("give me the next color").

Each color costs one session draw, so after reseed(s) the colors handed
out are exactly colors_at(s, range(count)). A palette costs one draw
and equals palette_at(s, i, ...) for the index i of that draw.

Pass an explicit Session to keep independent cursors; otherwise the
process-wide session is used.
"""

from __future__ import annotations

from typing import Optional

from splitchroma.schema import Color, ColorSpace, Palette, SRGB
from splitchroma.schema.errors import check_count
from splitchroma.splittable.session import Session, resolve_session
from splitchroma.sample.sampler import PaletteConfig, sample_color, sample_palette


def next_color(space: ColorSpace = SRGB, *, session: Optional[Session] = None) -> Color:
    """Next color of the session's sequence."""
    return sample_color(resolve_session(session).next_draw(), space)


def next_colors(
    n: int,
    space: ColorSpace = SRGB,
    *,
    session: Optional[Session] = None,
) -> list[Color]:
    """
    Next n colors of the session's sequence.

    Raises:
        InvalidCountError: If n is not a positive integer; no draw is
            consumed in that case.
    """
    n = check_count(n, "color count")
    cursor = resolve_session(session)
    return [sample_color(state, space) for state in cursor.next_draws(n)]


def next_palette(
    n: int,
    space: ColorSpace = SRGB,
    min_distance: Optional[float] = None,
    config: Optional[PaletteConfig] = None,
    *,
    session: Optional[Session] = None,
) -> Palette:
    """
    Next palette of n mutually distinct colors.

    See sample_palette() for the acceptance rule and shortfall policy.

    Raises:
        InvalidCountError: If n is not a positive integer; no draw is
            consumed in that case.
    """
    n = check_count(n, "palette size")
    state = resolve_session(session).next_draw()
    return sample_palette(state, n, space, min_distance=min_distance, config=config)
