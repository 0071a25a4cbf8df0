"""Path polygonization utilities for converting normalized path data to polylines."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from svgflat.arc import ArcSampler
from svgflat.bezier import BezierCurve
from svgflat.common import PathCommandError
from svgflat.consts import DEFAULT_MAX_DEPTH
from svgflat.path_data import CubicCurve, PathCommand


class PathPolygonizer:
    """Utility class for polygonizing paths with curves and arcs into line segments."""

    @staticmethod
    def polygonize_path(
        path_data: Iterable[PathCommand], max_error: float, max_depth: int = DEFAULT_MAX_DEPTH
    ) -> List[Tuple[NDArray[np.float64], bool]]:
        """Convert normalized path data in final coordinates into polylines.

        Every MoveTo starts a new polyline. Cubic curves are flattened adaptively,
        arcs are sampled. A ClosePath appends the start point of the subpath unless
        the current point is already there and marks the polyline as closed; drawing
        after a ClosePath continues in a new polyline starting at that start point.

        Args:
            path_data: Absolute M, L, C, A and Z commands
            max_error: Maximum deviation of the polylines from the true curves
            max_depth: Subdivision limit of the curve flattener

        Returns:
            List of tuples (points of shape (n, 2), closed)

        Raises:
            PathCommandError: If a command has no starting point or is not allowed
        """
        polylines: List[Tuple[List[NDArray[np.float64]], bool]] = []
        current: Optional[NDArray[np.float64]] = None
        close_point: Optional[NDArray[np.float64]] = None
        closed = False

        def start_polyline(point: NDArray[np.float64]) -> None:
            polylines.append(([point.reshape(1, 2)], False))

        def append_points(points: NDArray[np.float64]) -> None:
            nonlocal closed
            if closed:
                # continue after a closepath: new subpath at the start point
                start_polyline(close_point)
                closed = False
            polylines[-1][0].append(points)

        for seg in path_data:
            cmd = seg.cmd
            if cmd != "M" and current is None:
                raise PathCommandError(f"Command '{cmd}' has no starting point")

            if cmd == "M":
                current = np.array(seg.values, dtype=np.float64)
                close_point = current
                closed = False
                start_polyline(current)

            elif cmd == "L":
                current = np.array(seg.values, dtype=np.float64)
                append_points(current.reshape(1, 2))

            elif cmd == "C":
                curve = CubicCurve(current[0], current[1], *seg.values)
                append_points(BezierCurve.flatten_to_points(curve, max_error, max_depth))
                current = np.array(seg.values[4:6], dtype=np.float64)

            elif cmd == "A":
                (rx, ry, rotation, large_arc, sweep, x, y) = seg.values
                end_point = np.array((x, y), dtype=np.float64)
                append_points(
                    ArcSampler.sample_arc(current, rx, ry, rotation, large_arc, sweep, end_point, max_error)
                )
                current = end_point

            elif cmd == "Z":
                if not closed:
                    if current[0] != close_point[0] or current[1] != close_point[1]:
                        polylines[-1][0].append(close_point.reshape(1, 2))
                    polylines[-1] = (polylines[-1][0], True)
                    closed = True
                current = close_point

            else:
                raise PathCommandError(f"Unexpected path command '{cmd}'")

        return [(np.vstack(chunks), is_closed) for (chunks, is_closed) in polylines]
