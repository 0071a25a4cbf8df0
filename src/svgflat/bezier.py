"""Bezier curve handling utilities: degree elevation, subdivision and adaptive flattening."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from svgflat.consts import DEFAULT_MAX_DEPTH
from svgflat.path_data import CubicCurve


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve operations.

    Provides degree elevation of quadratic curves, de Casteljau subdivision and
    the adaptive flattening of cubic curves into straight segments.
    """

    @staticmethod
    def quadratic_to_cubic(
        p0: Tuple[float, float], q: Tuple[float, float], p1: Tuple[float, float]
    ) -> Tuple[float, float, float, float]:
        """Degree elevation of the quadratic curve (p0, q, p1).

        Returns:
            Tuple[float, float, float, float]: the two cubic control points (c1x, c1y, c2x, c2y)
                with c1 = p0 + 2/3 (q - p0) and c2 = p1 + 2/3 (q - p1)
        """
        return (
            p0[0] + 2 * (q[0] - p0[0]) / 3,
            p0[1] + 2 * (q[1] - p0[1]) / 3,
            p1[0] + 2 * (q[0] - p1[0]) / 3,
            p1[1] + 2 * (q[1] - p1[1]) / 3,
        )

    @staticmethod
    def evaluate_cubic(
        curve: CubicCurve, t: Union[float, Sequence[float], NDArray[np.float64]]
    ) -> NDArray[np.float64]:
        """Evaluate the curve at parameter(s) _t_ in [0, 1].

        B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3

        Returns:
            NDArray[np.float64]: points of shape (len(t), 2), or (2,) for a scalar t
        """
        t_arr = np.asarray(t, dtype=np.float64)
        t_col = np.atleast_1d(t_arr)[:, np.newaxis]
        u_col = 1.0 - t_col
        pts = curve.points
        result = (
            u_col**3 * pts[0]
            + 3.0 * u_col**2 * t_col * pts[1]
            + 3.0 * u_col * t_col**2 * pts[2]
            + t_col**3 * pts[3]
        )
        return result[0] if t_arr.ndim == 0 else result

    @staticmethod
    def is_flat_enough(curve: CubicCurve, max_error: float) -> bool:
        """Fast upper bound check of the deviation between the curve and its chord.

        max(ux^2, vx^2) + max(uy^2, vy^2) <= 16 * max_error^2
        with u = 3*p1 - 2*p0 - p3 and v = 3*p2 - 2*p3 - p0
        """
        ux = 3 * curve.x1 - 2 * curve.x0 - curve.x3
        uy = 3 * curve.y1 - 2 * curve.y0 - curve.y3
        vx = 3 * curve.x2 - 2 * curve.x3 - curve.x0
        vy = 3 * curve.y2 - 2 * curve.y3 - curve.y0
        return max(ux * ux, vx * vx) + max(uy * uy, vy * vy) <= 16 * max_error * max_error

    @staticmethod
    def subdivide(curve: CubicCurve, t: float = 0.5) -> Tuple[CubicCurve, CubicCurve]:
        """Split the curve at parameter _t_ using de Casteljau's method.

        Returns:
            Tuple[CubicCurve, CubicCurve]: left part [0, t] and right part [t, 1]
        """
        (x0, y0, x1, y1, x2, y2, x3, y3) = curve.values
        u = 1 - t
        # Interpolate from 4 to 3 points
        x4, y4 = u * x0 + t * x1, u * y0 + t * y1
        x5, y5 = u * x1 + t * x2, u * y1 + t * y2
        x6, y6 = u * x2 + t * x3, u * y2 + t * y3
        # Interpolate from 3 to 2 points
        x7, y7 = u * x4 + t * x5, u * y4 + t * y5
        x8, y8 = u * x5 + t * x6, u * y5 + t * y6
        # Interpolate from 2 points to 1 point
        x9, y9 = u * x7 + t * x8, u * y7 + t * y8
        return (
            CubicCurve(x0, y0, x4, y4, x7, y7, x9, y9),
            CubicCurve(x9, y9, x8, y8, x6, y6, x3, y3),
        )

    @classmethod
    def flatten(cls, curve: CubicCurve, max_error: float, max_depth: int = DEFAULT_MAX_DEPTH) -> List[CubicCurve]:
        """Adaptively subdivide a cubic curve into parts that are flat enough.

        A part is accepted if it passes is_flat_enough() or if its parameter span
        dropped to 1/max_depth. Parts with start == end are dropped.
        The end points of the returned parts, chained, form the polyline approximation.

        Args:
            curve: The cubic curve (in final coordinates)
            max_error: Maximum deviation between curve and polyline, must be > 0
            max_depth: Bounds the subdivision, minimum parameter span is 1/max_depth

        Returns:
            List[CubicCurve]: the parts in curve order
        """
        min_span = 1.0 / max_depth
        parts: List[CubicCurve] = []
        # work-list in reverse order, so the leftmost part is processed first
        stack: List[Tuple[CubicCurve, float]] = [(curve, 1.0)]
        while stack:
            (part, span) = stack.pop()
            if span > min_span and not cls.is_flat_enough(part, max_error):
                (left, right) = cls.subdivide(part, 0.5)
                stack.append((right, span / 2))
                stack.append((left, span / 2))
            elif math.hypot(part.x3 - part.x0, part.y3 - part.y0) > 0:
                parts.append(part)
        return parts

    @classmethod
    def flatten_to_points(
        cls, curve: CubicCurve, max_error: float, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> NDArray[np.float64]:
        """Flatten the curve and return the end points of its parts (start point excluded).

        Returns:
            NDArray[np.float64]: points of shape (n, 2)
        """
        parts = cls.flatten(curve, max_error, max_depth)
        if not parts:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([part.end for part in parts], dtype=np.float64)
