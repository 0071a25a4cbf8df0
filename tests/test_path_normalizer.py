"""Tests for PathNormalizer: absolutize, reduce and normalize."""

import pytest

from svgflat.common import PathCommandError
from svgflat.path_data import PathCommand, is_absolute, is_normalized
from svgflat.path_normalizer import PathNormalizer
from svgflat.svgpath import SvgPathParser

SAMPLE_PATHS = [
    "M0 0 L10 0 L10 10 Z",
    "m5 5 l5 0 h3 v-4 z",
    "M10 80 C40 10 65 10 95 80 S150 150 180 80",
    "M10 80 q42.5 -60 85 0 t85 0 t10 10",
    "M0 0 a5 5 0 0 1 10 0 A5 10 30 1 0 30 0 a0 5 0 0 1 5 5",
    "M1 1 s1 2 3 4 c1 1 2 2 3 3 s1 2 3 4 Z m1 1 l2 2 Z",
    "M0 0 T6 0 Q1 1 2 2 T4 4 L5 5 T6 6",
]


def parse(path_string):
    """Parse the given path string."""
    return SvgPathParser.parse(path_string)


class TestAbsolutize:
    """Tests for PathNormalizer.absolutize."""

    def test_relative_moveto_lineto(self):
        """Relative operands are added to the current point."""
        result = PathNormalizer.absolutize(parse("m5 5 l5 0"))
        assert result == [PathCommand("M", (5, 5)), PathCommand("L", (10, 5))]

    def test_horizontal_vertical(self):
        """h and v only change one coordinate."""
        result = PathNormalizer.absolutize(parse("M1 2 h3 v4 h-1"))
        assert result[1:] == [PathCommand("H", (4,)), PathCommand("V", (6,)), PathCommand("H", (3,))]

    def test_relative_curves(self):
        """All control points of c, s, q, t are relative to the start of the command."""
        result = PathNormalizer.absolutize(parse("M10 10 c1 2 3 4 5 6 s1 1 2 2 q1 0 2 2 t3 3"))
        assert result[1] == PathCommand("C", (11, 12, 13, 14, 15, 16))
        assert result[2] == PathCommand("S", (16, 17, 17, 18))
        assert result[3] == PathCommand("Q", (18, 18, 19, 20))
        assert result[4] == PathCommand("T", (22, 23))

    def test_relative_arc(self):
        """Only the end point of an arc is relative."""
        result = PathNormalizer.absolutize(parse("M10 10 a5 6 30 1 0 10 0"))
        assert result[1] == PathCommand("A", (5, 6, 30, 1, 0, 20, 10))

    def test_close_path_resets_current_point(self):
        """After z the current point is the start of the subpath."""
        result = PathNormalizer.absolutize(parse("M10 10 l5 0 l0 5 z l1 1 m2 2 l1 0"))
        assert result[4] == PathCommand("L", (11, 11))
        assert result[5] == PathCommand("M", (13, 13))
        assert result[6] == PathCommand("L", (14, 13))

    def test_relative_first_moveto(self):
        """A leading m is relative to the origin."""
        assert PathNormalizer.absolutize(parse("m3 4")) == [PathCommand("M", (3, 4))]

    @pytest.mark.parametrize("path_string", SAMPLE_PATHS)
    def test_preserves_order_and_count(self, path_string):
        """Absolutize keeps the command sequence, only letters become uppercase."""
        path_data = parse(path_string)
        result = PathNormalizer.absolutize(path_data)
        assert [seg.cmd for seg in result] == [seg.cmd.upper() for seg in path_data]
        assert is_absolute(result)

    @pytest.mark.parametrize("path_string", SAMPLE_PATHS)
    def test_idempotent(self, path_string):
        """Absolutizing absolute path data changes nothing."""
        absolute = PathNormalizer.absolutize(parse(path_string))
        assert PathNormalizer.absolutize(absolute) == absolute


class TestReduce:
    """Tests for PathNormalizer.reduce."""

    def test_lines_unchanged(self):
        """M, L and Z pass through."""
        result = PathNormalizer.normalize(parse("M0 0 L10 0 L10 10 Z"))
        assert result == [
            PathCommand("M", (0, 0)),
            PathCommand("L", (10, 0)),
            PathCommand("L", (10, 10)),
            PathCommand("Z"),
        ]

    def test_horizontal_vertical_to_lineto(self):
        """H and V become L using the held coordinate."""
        result = PathNormalizer.reduce(parse("M1 2 H5 V7"))
        assert result[1:] == [PathCommand("L", (5, 2)), PathCommand("L", (5, 7))]

    def test_smooth_cubic_reflection(self):
        """S after C reflects the second control point of C about the current point."""
        result = PathNormalizer.reduce(parse("M0 0 C1 1 2 1 3 0 S5 -1 6 0"))
        assert result[2] == PathCommand("C", (4, -1, 5, -1, 6, 0))

    def test_smooth_cubic_chain(self):
        """S after S reflects the control point of the previous S."""
        result = PathNormalizer.reduce(parse("M0 0 C1 1 2 1 3 0 S5 -1 6 0 S8 2 9 0"))
        assert result[3] == PathCommand("C", (7, 1, 8, 2, 9, 0))

    def test_smooth_cubic_without_predecessor(self):
        """S without preceding curve uses the current point as first control point."""
        result = PathNormalizer.reduce(parse("M0 0 S5 5 6 0"))
        assert result[1] == PathCommand("C", (0, 0, 5, 5, 6, 0))

    def test_smooth_cubic_after_line(self):
        """S after L does not reflect, even if a C came earlier."""
        result = PathNormalizer.reduce(parse("M0 0 C1 1 2 1 3 0 L4 0 S5 5 6 0"))
        assert result[3] == PathCommand("C", (4, 0, 5, 5, 6, 0))

    def test_quadratic_degree_elevation(self):
        """Q becomes C with control points at 2/3 towards the quadratic control point."""
        result = PathNormalizer.reduce(parse("M0 0 Q3 3 6 0"))
        assert result[1].cmd == "C"
        assert result[1].values == pytest.approx((2, 2, 4, 2, 6, 0))

    def test_smooth_quadratic_reflection(self):
        """T after Q reflects the quadratic control point."""
        result = PathNormalizer.reduce(parse("M0 0 Q3 3 6 0 T12 0"))
        assert result[2].values == pytest.approx((8, -2, 10, -2, 12, 0))

    def test_smooth_quadratic_without_predecessor(self):
        """T without preceding Q or T is a straight curve."""
        result = PathNormalizer.reduce(parse("M0 0 T6 0"))
        assert result[1].values == pytest.approx((0, 0, 2, 0, 6, 0))

    def test_smooth_quadratic_after_cubic(self):
        """T after C does not reflect."""
        result = PathNormalizer.reduce(parse("M0 0 C1 1 2 1 3 0 T6 0"))
        assert result[2].values == pytest.approx((3, 0, 4, 0, 6, 0))

    def test_zero_radius_arc_is_straight_curve(self):
        """An arc with a zero radius becomes a straight cubic."""
        result = PathNormalizer.reduce(parse("M0 0 A0 5 0 0 1 10 0"))
        assert result == [PathCommand("M", (0, 0)), PathCommand("C", (0, 0, 10, 0, 10, 0))]

    def test_smooth_cubic_after_zero_radius_arc(self):
        """The straight curve of a zero radius arc does not enable the reflection of S."""
        result = PathNormalizer.reduce(parse("M0 0 C1 1 2 1 3 0 A0 0 0 0 1 5 0 S6 1 7 0"))
        assert result[3] == PathCommand("C", (5, 0, 6, 1, 7, 0))

    def test_arc_to_same_point_dropped(self):
        """An arc ending at its start point is left out."""
        assert PathNormalizer.reduce(parse("M5 5 A5 5 0 0 1 5 5")) == [PathCommand("M", (5, 5))]

    def test_arc_to_cubics(self):
        """A half circle becomes two cubics ending at the arc end point."""
        result = PathNormalizer.reduce(parse("M0 0 A5 5 0 0 1 10 0"))
        assert [seg.cmd for seg in result] == ["M", "C", "C"]
        assert result[-1].values[4:] == (10, 0)

    def test_keep_arcs(self):
        """With keep_arcs the arc stays, its radii made positive."""
        result = PathNormalizer.normalize(parse("M0 0 a-5 5 0 0 1 10 0"), keep_arcs=True)
        assert result[1] == PathCommand("A", (5, 5, 0, 0, 1, 10, 0))

    def test_close_path_resets_current_point(self):
        """H after Z uses the y coordinate of the subpath start."""
        result = PathNormalizer.reduce(parse("M1 1 L5 5 Z H3"))
        assert result[3] == PathCommand("L", (3, 1))

    def test_relative_input_rejected(self):
        """reduce() needs absolute path data."""
        with pytest.raises(PathCommandError):
            PathNormalizer.reduce([PathCommand("M", (0, 0)), PathCommand("l", (1, 1))])

    @pytest.mark.parametrize("path_string", SAMPLE_PATHS)
    def test_only_normalized_commands(self, path_string):
        """normalize() gives only M, L, C and Z."""
        assert is_normalized(PathNormalizer.normalize(parse(path_string)))

    @pytest.mark.parametrize("path_string", SAMPLE_PATHS)
    def test_normalize_equals_reduce_of_absolutize(self, path_string):
        """normalize() is reduce(absolutize(x))."""
        path_data = parse(path_string)
        assert PathNormalizer.normalize(path_data) == PathNormalizer.reduce(PathNormalizer.absolutize(path_data))
