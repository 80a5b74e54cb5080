# Copyright (c) 2026 Splitchroma
# SPDX-License-Identifier: MIT

"""Tests for schema types (Color, Palette, ColorSpace, Primaries)."""

import json

import numpy as np
import pytest

from splitchroma.schema import (
    DISPLAY_P3,
    REC2020,
    SRGB,
    Color,
    ColorSpace,
    DegeneratePrimariesError,
    InvalidCountError,
    Palette,
    Primaries,
    TransferFunction,
)
from splitchroma.schema.errors import check_count


ADOBE_RGB = Primaries(0.640, 0.330, 0.210, 0.710, 0.150, 0.060)


class TestColor:

    def test_valid_color(self):
        c = Color(0.2, 0.4, 0.6)
        np.testing.assert_array_equal(c.rgb, [0.2, 0.4, 0.6])

    def test_channel_above_one_raises(self):
        with pytest.raises(ValueError, match="Red"):
            Color(1.5, 0.0, 0.0)

    def test_negative_channel_raises(self):
        with pytest.raises(ValueError, match="Blue"):
            Color(0.0, 0.0, -0.1)

    def test_nan_channel_raises(self):
        with pytest.raises(ValueError, match="Green"):
            Color(0.0, float("nan"), 0.0)

    def test_immutable(self):
        c = Color(0.1, 0.2, 0.3)
        with pytest.raises(AttributeError):
            c.r = 0.5

    def test_from_rgb_snaps_residue(self):
        c = Color.from_rgb([1.0 + 1e-12, -1e-12, 0.5])
        assert c.as_tuple() == (1.0, 0.0, 0.5)

    def test_from_rgb_rejects_real_overshoot(self):
        with pytest.raises(ValueError):
            Color.from_rgb([1.01, 0.0, 0.0])

    def test_hex(self):
        assert Color(1.0, 0.0, 0.0).hex == "#FF0000"
        assert Color(0.0, 0.0, 0.0).hex == "#000000"

    def test_from_hex(self):
        c = Color.from_hex("#3941C8")
        assert c.hex == "#3941C8"

    def test_from_hex_bad_length(self):
        with pytest.raises(ValueError, match="6 hex digits"):
            Color.from_hex("#FFF")

    def test_dict_roundtrip(self):
        c = Color(0.25, 0.5, 0.75)
        assert Color.from_dict(c.to_dict()) == c

    def test_dict_with_hex(self):
        d = Color(1.0, 1.0, 1.0).to_dict(include_hex=True)
        assert d["hex"] == "#FFFFFF"


class TestPalette:

    def _palette(self, k, requested):
        colors = tuple(Color(i / 10, 0.5, 0.5) for i in range(k))
        return Palette(colors=colors, requested=requested, min_distance=10.0, attempts=k)

    def test_complete(self):
        p = self._palette(3, 3)
        assert p.complete
        assert p.shortfall == 0

    def test_short_palette_is_observable(self):
        p = self._palette(2, 5)
        assert not p.complete
        assert p.shortfall == 3
        assert len(p) == 2

    def test_sequence_protocol(self):
        p = self._palette(3, 3)
        assert list(p) == list(p.colors)
        assert p[1] == p.colors[1]
        assert len(p.hex) == 3

    def test_more_colors_than_requested_raises(self):
        with pytest.raises(ValueError, match="requested"):
            self._palette(4, 3)

    def test_zero_requested_raises(self):
        with pytest.raises(ValueError, match="Requested"):
            Palette(colors=(), requested=0, min_distance=10.0)

    def test_negative_distance_raises(self):
        with pytest.raises(ValueError, match="Minimum distance"):
            Palette(colors=(), requested=1, min_distance=-1.0)

    def test_json_roundtrip(self):
        p = self._palette(2, 4)
        restored = Palette.from_json(p.to_json())
        assert restored == p

    def test_json_reports_completeness(self):
        data = json.loads(self._palette(2, 4).to_json())
        assert data["complete"] is False
        assert data["requested"] == 4


class TestColorSpace:

    def test_builtins_have_matrices(self):
        for space in (SRGB, DISPLAY_P3, REC2020):
            assert space.rgb_to_xyz.shape == (3, 3)
            np.testing.assert_allclose(
                space.rgb_to_xyz @ space.xyz_to_rgb, np.eye(3), atol=1e-12
            )

    def test_matrices_are_read_only(self):
        with pytest.raises(ValueError):
            SRGB.rgb_to_xyz[0, 0] = 1.0

    def test_rec2020_uses_bt2020_curve(self):
        assert REC2020.transfer is TransferFunction.BT2020
        assert DISPLAY_P3.transfer is TransferFunction.SRGB

    def test_builtins_are_builtin(self):
        assert SRGB.is_builtin
        assert not ColorSpace.custom("Adobe RGB", ADOBE_RGB).is_builtin

    def test_from_name(self):
        assert ColorSpace.from_name("srgb") is SRGB
        assert ColorSpace.from_name("P3") is DISPLAY_P3
        assert ColorSpace.from_name("Display-P3") is DISPLAY_P3
        assert ColorSpace.from_name("Rec.2020") is REC2020
        assert ColorSpace.from_name("bt2020") is REC2020

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="Unknown color space"):
            ColorSpace.from_name("cmyk")

    def test_custom_space(self):
        space = ColorSpace.custom("Adobe RGB", ADOBE_RGB)
        assert space.name == "Adobe RGB"
        assert space.transfer is TransferFunction.SRGB

    def test_equality_ignores_cached_matrices(self):
        a = ColorSpace.custom("Adobe RGB", ADOBE_RGB)
        b = ColorSpace.custom("Adobe RGB", ADOBE_RGB)
        assert a == b
        assert hash(a) == hash(b)

    def test_empty_name_raises(self):
        with pytest.raises(ValueError, match="name"):
            ColorSpace.custom("", ADOBE_RGB)

    def test_dict_roundtrip(self):
        restored = ColorSpace.from_dict(REC2020.to_dict())
        assert restored == REC2020


class TestDegeneratePrimaries:
    """Degenerate custom spaces fail at construction, nowhere else."""

    def test_identical_primaries(self):
        p = Primaries(0.3, 0.6, 0.3, 0.6, 0.15, 0.06)
        with pytest.raises(DegeneratePrimariesError):
            ColorSpace.custom("broken", p)

    def test_collinear_primaries(self):
        p = Primaries(0.1, 0.1, 0.2, 0.2, 0.3, 0.3)
        with pytest.raises(DegeneratePrimariesError):
            ColorSpace.custom("broken", p)

    def test_zero_y_primary(self):
        p = Primaries(0.64, 0.0, 0.30, 0.60, 0.15, 0.06)
        with pytest.raises(DegeneratePrimariesError):
            ColorSpace.custom("broken", p)

    def test_white_outside_triangle_accepted(self):
        """Only a singular system is degenerate; an odd white point is not."""
        p = Primaries(0.64, 0.33, 0.30, 0.60, 0.15, 0.06, wx=0.10, wy=0.80)
        space = ColorSpace.custom("odd white", p)
        expected = np.array([0.10 / 0.80, 1.0, 0.10 / 0.80])
        np.testing.assert_allclose(space.rgb_to_xyz @ np.ones(3), expected, atol=1e-12)

    def test_is_value_error(self):
        assert issubclass(DegeneratePrimariesError, ValueError)

    def test_builtins_unaffected(self):
        with pytest.raises(DegeneratePrimariesError):
            ColorSpace.custom("broken", Primaries(0.3, 0.6, 0.3, 0.6, 0.15, 0.06))
        assert SRGB.rgb_to_xyz.shape == (3, 3)


class TestCheckCount:

    def test_positive(self):
        assert check_count(3) == 3

    def test_numpy_integer(self):
        assert check_count(np.int64(2)) == 2
        assert type(check_count(np.uint8(5))) is int

    @pytest.mark.parametrize("bad", [0, -1, 2.0, True, "3"])
    def test_rejected(self, bad):
        with pytest.raises(InvalidCountError):
            check_count(bad)
