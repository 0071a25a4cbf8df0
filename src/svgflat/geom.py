"""Handling affine transformations of points and path data"""

from __future__ import annotations

import math
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from svgflat.common import PathCommandError
from svgflat.path_data import PathCommand, PathData

AffineTrafo = Sequence[Union[int, float]]

IDENTITY_TRAFO: Tuple[float, float, float, float, float, float] = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to geometry handling.

    An affine transformation is given as a list of 6 floats and defined as:
        | x' | = | a00 a01 b0 |   | x |
        | y' | = | a10 a11 b1 | * | y |
        | 1  | = |  0   0  1  |   | 1 |
    with
        affine_trafo = [a00, a01, a10, a11, b0, b1]
    See also shapely - Affine Transformations
    """

    @staticmethod
    def check_affine_trafo(affine_trafo: AffineTrafo) -> None:
        """Raise ValueError if _affine_trafo_ does not consist of 6 coefficients."""
        if len(affine_trafo) != 6:
            raise ValueError(f"Affine transformation needs 6 coefficients, got {len(affine_trafo)}")

    @staticmethod
    def transform_point(
        affine_trafo: AffineTrafo, point: Sequence[Union[int, float]]
    ) -> Tuple[float, float]:
        """
        Perform an affine transformation on the given 2D point.

        Args:
            affine_trafo (Tuple/List[float]): Affine transformation - [a00, a01, a10, a11, b0, b1]
            point (Tuple/List[float]): 2D point - (x, y)

        Returns:
            Tuple[float, float]: the transformed point
        """
        x_new = float(affine_trafo[0] * point[0] + affine_trafo[1] * point[1] + affine_trafo[4])
        y_new = float(affine_trafo[2] * point[0] + affine_trafo[3] * point[1] + affine_trafo[5])
        return (x_new, y_new)

    @staticmethod
    def from_svg_matrix(a: float, b: float, c: float, d: float, e: float, f: float) -> List[float]:
        """Convert the SVG matrix(a, b, c, d, e, f) into [a00, a01, a10, a11, b0, b1]."""
        return [a, c, b, d, e, f]

    @staticmethod
    def compose(outer: AffineTrafo, inner: AffineTrafo) -> List[float]:
        """Return the transformation applying _inner_ first and _outer_ second."""
        (a0, a1, a2, a3, a4, a5) = outer
        (b0, b1, b2, b3, b4, b5) = inner
        return [
            a0 * b0 + a1 * b2,
            a0 * b1 + a1 * b3,
            a2 * b0 + a3 * b2,
            a2 * b1 + a3 * b3,
            a0 * b4 + a1 * b5 + a4,
            a2 * b4 + a3 * b5 + a5,
        ]

    @staticmethod
    def similarity_params(affine_trafo: AffineTrafo) -> Optional[Tuple[float, float]]:
        """Decompose a transformation consisting of rotation, uniform scale and translation.

        Returns:
            Optional[Tuple[float, float]]: (scale, rotation in degree),
                or None if the transformation shears, scales non-uniformly or reflects
        """
        (a00, a01, a10, a11) = affine_trafo[:4]
        if a00 * a11 - a01 * a10 <= 0:
            return None
        if not (math.isclose(a00, a11, abs_tol=1e-12) and math.isclose(a01, -a10, abs_tol=1e-12)):
            return None
        return (math.hypot(a00, a10), math.degrees(math.atan2(a10, a00)))

    @staticmethod
    def transform_path_data(path_data: Iterable[PathCommand], affine_trafo: AffineTrafo) -> PathData:
        """Transform normalized path data (M, L, C, Z and optionally A) by _affine_trafo_.

        Cubic curves are invariant under affine transformations, so their control points
        are simply transformed. Arcs are only allowed for similarity transformations.

        Raises:
            ValueError: if _affine_trafo_ is malformed or cannot transform a contained arc
            PathCommandError: if the path data contains commands other than M, L, C, A, Z
        """
        GeomMath.check_affine_trafo(affine_trafo)
        result: List[PathCommand] = []
        for seg in path_data:
            if seg.cmd in ("M", "L", "C"):
                values: List[float] = []
                for i in range(0, len(seg.values), 2):
                    values.extend(GeomMath.transform_point(affine_trafo, seg.values[i : i + 2]))
                result.append(PathCommand(seg.cmd, tuple(values)))
            elif seg.cmd == "Z":
                result.append(seg)
            elif seg.cmd == "A":
                similarity = GeomMath.similarity_params(affine_trafo)
                if similarity is None:
                    raise ValueError("Arcs can only be transformed by rotation, uniform scale and translation")
                (scale, rotation) = similarity
                (rx, ry, angle, large_arc, sweep, x, y) = seg.values
                (x_new, y_new) = GeomMath.transform_point(affine_trafo, (x, y))
                result.append(
                    PathCommand("A", (rx * scale, ry * scale, angle + rotation, large_arc, sweep, x_new, y_new))
                )
            else:
                raise PathCommandError(f"Unsupported command '{seg.cmd}' in normalized path data")
        return result
