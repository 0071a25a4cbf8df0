"""Path data of the SVG basic shapes (rect, circle, ellipse, line, polyline, polygon)."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from svgflat.path_data import PathCommand, PathData
from svgflat.path_normalizer import PathNormalizer


class ShapePathData:
    """Collection of static methods building the path data equivalent to a basic shape.

    Curved shapes are described by arcs; pass normalize=True to get M, L, C, Z only.
    """

    @staticmethod
    def rect(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        x: float,
        y: float,
        width: float,
        height: float,
        rx: Optional[float] = None,
        ry: Optional[float] = None,
        normalize: bool = False,
    ) -> PathData:
        """Path data of a (rounded) rectangle.

        A missing corner radius takes the value of the other one, radii are clamped to
        half the width / height. Arcs with a zero radius are left out.
        """
        if rx is None:
            rx = ry if ry is not None else 0.0
        if ry is None:
            ry = rx
        rx = min(rx, width / 2)
        ry = min(ry, height / 2)
        path_data = [
            PathCommand("M", (x + rx, y)),
            PathCommand("H", (x + width - rx,)),
            PathCommand("A", (rx, ry, 0, 0, 1, x + width, y + ry)),
            PathCommand("V", (y + height - ry,)),
            PathCommand("A", (rx, ry, 0, 0, 1, x + width - rx, y + height)),
            PathCommand("H", (x + rx,)),
            PathCommand("A", (rx, ry, 0, 0, 1, x, y + height - ry)),
            PathCommand("V", (y + ry,)),
            PathCommand("A", (rx, ry, 0, 0, 1, x + rx, y)),
            PathCommand("Z"),
        ]
        if rx == 0 or ry == 0:
            path_data = [seg for seg in path_data if seg.cmd != "A"]
        return PathNormalizer.reduce(path_data) if normalize else path_data

    @staticmethod
    def ellipse(cx: float, cy: float, rx: float, ry: float, normalize: bool = False) -> PathData:
        """Path data of an ellipse, four quarter arcs starting at the rightmost point."""
        path_data = [
            PathCommand("M", (cx + rx, cy)),
            PathCommand("A", (rx, ry, 0, 0, 1, cx, cy + ry)),
            PathCommand("A", (rx, ry, 0, 0, 1, cx - rx, cy)),
            PathCommand("A", (rx, ry, 0, 0, 1, cx, cy - ry)),
            PathCommand("A", (rx, ry, 0, 0, 1, cx + rx, cy)),
            PathCommand("Z"),
        ]
        return PathNormalizer.reduce(path_data) if normalize else path_data

    @staticmethod
    def circle(cx: float, cy: float, r: float, normalize: bool = False) -> PathData:
        """Path data of a circle."""
        return ShapePathData.ellipse(cx, cy, r, r, normalize=normalize)

    @staticmethod
    def line(x1: float, y1: float, x2: float, y2: float) -> PathData:
        """Path data of a line."""
        return [PathCommand("M", (x1, y1)), PathCommand("L", (x2, y2))]

    @staticmethod
    def polyline(points: Sequence[Tuple[float, float]]) -> PathData:
        """Path data of an open polyline."""
        return [PathCommand("L" if i else "M", (pt[0], pt[1])) for i, pt in enumerate(points)]

    @staticmethod
    def polygon(points: Sequence[Tuple[float, float]]) -> PathData:
        """Path data of a closed polygon."""
        path_data = ShapePathData.polyline(points)
        if path_data:
            path_data.append(PathCommand("Z"))
        return path_data
