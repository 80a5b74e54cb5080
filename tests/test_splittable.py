# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""Tests for the splittable random state (SplitMix64)."""

from concurrent.futures import ThreadPoolExecutor
from itertools import islice

import numpy as np
import pytest

from splitchroma.splittable.state import (
    GOLDEN_GAMMA,
    MASK64,
    SplitState,
    advance,
    jump,
    mix_gamma,
    replay,
    root,
    split,
    state_at,
)


class TestReferenceVector:
    """SplitMix64 from seed 0 must match the published reference stream."""

    def test_first_draws_seed_zero(self):
        draws = list(islice(root(0).stream(), 2))
        assert draws == [0xE220A8397B1DCDAF, 0x6E789E6AA1B965F4]

    def test_next_uint64_matches_stream(self):
        state = root(0)
        first, state = state.next_uint64()
        second, _ = state.next_uint64()
        assert [first, second] == list(islice(root(0).stream(), 2))


class TestRoot:

    def test_deterministic(self):
        assert root(42) == root(42)

    def test_golden_gamma(self):
        assert root(7).gamma == GOLDEN_GAMMA

    def test_max_seed(self):
        assert root(MASK64).seed == MASK64

    @pytest.mark.parametrize("bad", [-1, 1 << 64, 1.5, "42", True, None])
    def test_invalid_seed(self, bad):
        with pytest.raises(ValueError, match="Seed"):
            root(bad)

    def test_numpy_integer_seed(self):
        assert root(np.uint64(42)) == root(42)


class TestSplitState:

    def test_even_gamma_rejected(self):
        with pytest.raises(ValueError, match="Gamma"):
            SplitState(1, 2)

    def test_oversized_seed_rejected(self):
        with pytest.raises(ValueError, match="64-bit"):
            SplitState(1 << 64)

    def test_hashable(self):
        assert len({root(1), root(1), root(2)}) == 2

    def test_uniforms_range(self):
        u = root(123).uniforms(1000)
        assert u.shape == (1000,)
        assert np.all(u >= 0.0) and np.all(u < 1.0)

    def test_uniforms_match_stream(self):
        state = root(99)
        expected = [(v >> 11) / float(1 << 53) for v in islice(state.stream(), 5)]
        np.testing.assert_array_equal(state.uniforms(5), expected)

    def test_uniforms_reproducible(self):
        np.testing.assert_array_equal(root(5).uniforms(10), root(5).uniforms(10))

    def test_dict_roundtrip(self):
        _, child = split(root(11))
        assert SplitState.from_dict(child.to_dict()) == child


class TestSplit:

    def test_deterministic(self):
        assert split(root(42)) == split(root(42))

    def test_child_differs_from_parent(self):
        parent, child = split(root(42))
        assert child != parent
        assert child.gamma % 2 == 1

    def test_parent_skips_two_draws(self):
        parent, _ = split(root(42))
        assert parent == jump(root(42), 1)

    def test_advance_is_split(self):
        assert advance(root(3)) == split(root(3))

    def test_children_distinct(self):
        frontier = root(0)
        children = set()
        for _ in range(500):
            frontier, child = advance(frontier)
            children.add(child)
        assert len(children) == 500

    def test_mix_gamma_always_odd(self):
        for z in (0, 1, 12345, MASK64, GOLDEN_GAMMA):
            assert mix_gamma(z) % 2 == 1


class TestIndexedAccess:

    def test_state_at_zero_is_root(self):
        assert state_at(42, 0) == root(42)

    @pytest.mark.parametrize("k", [0, 1, 2, 17, 250])
    def test_matches_literal_replay(self, k):
        assert state_at(42, k) == replay(42, k)

    def test_jump_matches_repeated_advance(self):
        frontier = root(9)
        for _ in range(37):
            frontier, _ = advance(frontier)
        assert jump(root(9), 37) == frontier

    def test_jump_negative(self):
        with pytest.raises(ValueError):
            jump(root(1), -1)

    def test_negative_index(self):
        with pytest.raises(ValueError, match="Index"):
            state_at(42, -1)

    def test_non_integer_index(self):
        with pytest.raises(ValueError, match="Index"):
            state_at(42, 1.0)

    def test_large_index_is_cheap(self):
        """Jumping far ahead does not replay every step."""
        assert state_at(42, 10**15) == state_at(42, 10**15)

    def test_concurrent_calls_agree(self):
        indices = list(range(64)) * 4
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda k: state_at(1337, k), indices))
        assert results == [state_at(1337, k) for k in indices]
