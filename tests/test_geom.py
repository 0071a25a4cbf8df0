"""Test module for svgflat.geom

The tests are run using pytest.
These tests ensure that all functions and interfaces in src/svgflat/geom.py
remain working correctly after changes and refactoring.
"""

import math

import pytest

from svgflat.common import PathCommandError
from svgflat.geom import IDENTITY_TRAFO, GeomMath
from svgflat.path_data import PathCommand

###############################################################################
# GeomMath Tests
###############################################################################


class TestGeomMath:
    """Test class for GeomMath functionality."""

    def test_transform_point_identity(self):
        """Test point transformation with identity matrix."""
        affine_trafo = [1, 0, 0, 1, 0, 0]
        point = (10.0, 20.0)

        result = GeomMath.transform_point(affine_trafo, point)

        assert result == (10.0, 20.0)

    def test_transform_point_translation(self):
        """Test point transformation with translation."""
        affine_trafo = [1, 0, 0, 1, 5.0, 10.0]
        point = (10.0, 20.0)

        result = GeomMath.transform_point(affine_trafo, point)

        assert result == (15.0, 30.0)

    def test_transform_point_scale(self):
        """Test point transformation with scaling."""
        affine_trafo = [2, 0, 0, 3, 0, 0]
        point = (10.0, 20.0)

        result = GeomMath.transform_point(affine_trafo, point)

        assert result == (20.0, 60.0)

    def test_transform_point_rotation(self):
        """Test point transformation with a rotation by 90 degree."""
        affine_trafo = [0, -1, 1, 0, 0, 0]

        result = GeomMath.transform_point(affine_trafo, (1.0, 0.0))

        assert result == (0.0, 1.0)

    def test_from_svg_matrix(self):
        """SVG matrix(a, b, c, d, e, f) maps x' = a*x + c*y + e, y' = b*x + d*y + f."""
        affine_trafo = GeomMath.from_svg_matrix(1, 2, 3, 4, 5, 6)

        assert affine_trafo == [1, 3, 2, 4, 5, 6]
        assert GeomMath.transform_point(affine_trafo, (1, 1)) == (1 + 3 + 5, 2 + 4 + 6)

    def test_compose(self):
        """The composed transformation applies the inner one first."""
        scale = [2, 0, 0, 2, 0, 0]
        translate = [1, 0, 0, 1, 3, 4]

        composed = GeomMath.compose(scale, translate)

        assert composed == [2, 0, 0, 2, 6, 8]
        assert GeomMath.transform_point(composed, (1, 1)) == GeomMath.transform_point(
            scale, GeomMath.transform_point(translate, (1, 1))
        )

    @pytest.mark.parametrize("affine_trafo", [[1, 0, 0, 1, 0], [1, 0, 0, 1, 0, 0, 0], []])
    def test_check_affine_trafo_malformed(self, affine_trafo):
        """Transformations need exactly 6 coefficients."""
        with pytest.raises(ValueError):
            GeomMath.check_affine_trafo(affine_trafo)


###############################################################################
# Similarity Tests
###############################################################################


class TestSimilarityParams:
    """Test the decomposition of rotation + uniform scale + translation."""

    def test_identity(self):
        """Identity has scale 1 and no rotation."""
        assert GeomMath.similarity_params(IDENTITY_TRAFO) == (1.0, 0.0)

    def test_rotation_and_scale(self):
        """Rotation by 30 degree with scale 2."""
        (cos_a, sin_a) = (math.cos(math.radians(30)), math.sin(math.radians(30)))
        affine_trafo = [2 * cos_a, -2 * sin_a, 2 * sin_a, 2 * cos_a, 7, -3]

        (scale, rotation) = GeomMath.similarity_params(affine_trafo)

        assert scale == pytest.approx(2.0)
        assert rotation == pytest.approx(30.0)

    @pytest.mark.parametrize(
        "affine_trafo",
        [
            [2, 0, 0, 3, 0, 0],  # non-uniform scale
            [1, 0, 0, -1, 0, 0],  # reflection
            [1, 1, 0, 1, 0, 0],  # shear
            [0, 0, 0, 0, 0, 0],  # degenerate
        ],
    )
    def test_no_similarity(self, affine_trafo):
        """Transformations that do not keep circles circular give None."""
        assert GeomMath.similarity_params(affine_trafo) is None


###############################################################################
# Path Data Transformation Tests
###############################################################################


class TestTransformPathData:
    """Test the transformation of normalized path data."""

    def test_lines_and_curves(self):
        """All points of M, L and C are transformed, Z is kept."""
        path_data = [
            PathCommand("M", (0, 0)),
            PathCommand("L", (1, 0)),
            PathCommand("C", (1, 1, 2, 2, 3, 3)),
            PathCommand("Z"),
        ]

        result = GeomMath.transform_path_data(path_data, [2, 0, 0, 2, 10, 20])

        assert result == [
            PathCommand("M", (10, 20)),
            PathCommand("L", (12, 20)),
            PathCommand("C", (12, 22, 14, 24, 16, 26)),
            PathCommand("Z"),
        ]

    def test_arc_under_similarity(self):
        """Arc radii are scaled and the x-axis-rotation is rotated."""
        path_data = [PathCommand("M", (0, 0)), PathCommand("A", (5, 3, 10, 0, 1, 10, 0))]

        result = GeomMath.transform_path_data(path_data, [0, -2, 2, 0, 0, 0])

        assert result[1].values == pytest.approx((10, 6, 100, 0, 1, 0, 20))

    def test_arc_under_non_uniform_scale(self):
        """Arcs cannot be transformed by a non-uniform scale."""
        path_data = [PathCommand("M", (0, 0)), PathCommand("A", (5, 3, 0, 0, 1, 10, 0))]

        with pytest.raises(ValueError):
            GeomMath.transform_path_data(path_data, [2, 0, 0, 1, 0, 0])

    def test_unnormalized_command_rejected(self):
        """Only normalized commands can be transformed."""
        with pytest.raises(PathCommandError):
            GeomMath.transform_path_data([PathCommand("M", (0, 0)), PathCommand("H", (5,))], IDENTITY_TRAFO)
