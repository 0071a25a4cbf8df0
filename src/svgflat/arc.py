"""Elliptical arc handling: conversion to cubic Bezier curves and direct sampling into points."""

from __future__ import annotations

import math
from dataclasses import replace
from typing import List, NamedTuple, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from svgflat.common import ArcParameterError
from svgflat.consts import ARC_ANGLE_DIGITS, ARC_FACTOR_EPS, ARC_MAX_SAMPLES, ARC_MAX_SPLITS, ARC_SPLIT_ANGLE
from svgflat.path_data import CubicCurve

Point = Union[Sequence[float], NDArray[np.float64]]


def _rotate(x: float, y: float, angle_rad: float) -> Tuple[float, float]:
    return (
        x * math.cos(angle_rad) - y * math.sin(angle_rad),
        x * math.sin(angle_rad) + y * math.cos(angle_rad),
    )


###############################################################################
# ArcConverter
###############################################################################
class ArcConverter:
    """Conversion of SVG elliptical arcs into cubic Bezier curves.

    The arc is transferred into the local frame of the ellipse, its center and
    start/end angles are solved there, and the angular span is cut into pieces
    of at most 120 degree. Each piece becomes one cubic using the tangent
    formula t = tan(dtheta/4), handle length 4/3 * r * t.
    """

    @staticmethod
    def arc_to_cubics(
        # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
        x0: float,
        y0: float,
        x1: float,
        y1: float,
        rx: float,
        ry: float,
        angle: float,
        large_arc_flag: Union[bool, float],
        sweep_flag: Union[bool, float],
    ) -> List[CubicCurve]:
        """Approximate the arc from (x0, y0) to (x1, y1) by cubic Bezier curves.

        Radii must be > 0. Radii too small to connect both end points are scaled up.

        Args:
            x0, y0: start point of the arc
            x1, y1: end point of the arc
            rx, ry: radii of the ellipse
            angle: x-axis-rotation of the ellipse in degree
            large_arc_flag: select the arc spanning more than 180 degree
            sweep_flag: select the arc drawn in positive-angle direction

        Returns:
            List[CubicCurve]: consecutive curves, first starts at (x0, y0), last ends at (x1, y1).
                Empty if start and end point coincide.
        """
        angle_rad = math.radians(angle)
        (lx0, ly0) = _rotate(x0, y0, -angle_rad)
        (lx1, ly1) = _rotate(x1, y1, -angle_rad)

        x = (lx0 - lx1) / 2
        y = (ly0 - ly1) / 2
        h = (x * x) / (rx * rx) + (y * y) / (ry * ry)
        if h > 1:
            h = math.sqrt(h)
            rx = h * rx
            ry = h * ry

        rx_pow = rx * rx
        ry_pow = ry * ry
        right = rx_pow * y * y + ry_pow * x * x
        if right == 0:
            return []
        left = rx_pow * ry_pow - rx_pow * y * y - ry_pow * x * x
        sign = -1 if bool(large_arc_flag) == bool(sweep_flag) else 1
        k = sign * math.sqrt(abs(left / right))
        cx = k * rx * y / ry + (lx0 + lx1) / 2
        cy = k * -ry * x / rx + (ly0 + ly1) / 2

        f1 = ArcConverter._angle_of(lx0, ly0, cx, cy, ry)
        f2 = ArcConverter._angle_of(lx1, ly1, cx, cy, ry)
        # orient the swept angle according to the sweep direction
        if sweep_flag and f1 > f2:
            f1 = f1 - math.pi * 2
        if not sweep_flag and f2 > f1:
            f2 = f2 - math.pi * 2

        # cut the span into pieces of at most 120 degree
        spans: List[Tuple[float, float]] = []
        f_start = f1
        for _ in range(ARC_MAX_SPLITS):
            if abs(f2 - f_start) <= ARC_SPLIT_ANGLE:
                break
            f_next = f_start + math.copysign(ARC_SPLIT_ANGLE, f2 - f_start)
            spans.append((f_start, f_next))
            f_start = f_next
        spans.append((f_start, f2))

        curves: List[CubicCurve] = []
        start = (lx0, ly0)
        for index, (fa, fb) in enumerate(spans):
            if index == len(spans) - 1:
                end = (lx1, ly1)
            else:
                end = (cx + rx * math.cos(fb), cy + ry * math.sin(fb))
            local_points = ArcConverter._arc_segment(start, end, fa, fb, rx, ry)
            points = [_rotate(px, py, angle_rad) for (px, py) in local_points]
            curves.append(CubicCurve.from_points(points))
            start = end

        # pin the outer end points to the exact input coordinates
        curves[0] = replace(curves[0], x0=x0, y0=y0)
        curves[-1] = replace(curves[-1], x3=x1, y3=y1)
        return curves

    @staticmethod
    def _angle_of(px: float, py: float, cx: float, cy: float, ry: float) -> float:
        """Angle of point (px, py) on the ellipse around (cx, cy), in [0, 2*pi)."""
        sin_value = round((py - cy) / ry, ARC_ANGLE_DIGITS)
        angle = math.asin(min(1.0, max(-1.0, sin_value)))
        if px < cx:
            angle = math.pi - angle
        if angle < 0:
            angle = math.pi * 2 + angle
        return angle

    @staticmethod
    def _arc_segment(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        start: Tuple[float, float],
        end: Tuple[float, float],
        fa: float,
        fb: float,
        rx: float,
        ry: float,
    ) -> List[Tuple[float, float]]:
        """Control points of the cubic approximating the arc piece from angle fa to fb (local frame)."""
        t = math.tan((fb - fa) / 4)
        hx = 4 / 3 * rx * t
        hy = 4 / 3 * ry * t
        (x1, y1) = start
        (x2, y2) = end
        return [
            start,
            (x1 - hx * math.sin(fa), y1 + hy * math.cos(fa)),
            (x2 + hx * math.sin(fb), y2 - hy * math.cos(fb)),
            end,
        ]


###############################################################################
# ArcSampler
###############################################################################
class ArcGeometry(NamedTuple):
    """Center parameterization of an elliptical arc.

    ( x )  =  ( cos phi   -sin phi ) . ( rx cos t )  +  ( cx )
    ( y )  =  ( sin phi    cos phi )   ( ry sin t )     ( cy )
    for t from theta1 to theta1 + delta_theta.
    """

    cx: float
    cy: float
    rx: float
    ry: float
    phi: float
    theta1: float
    delta_theta: float


class ArcSampler:
    """Flattening of SVG elliptical arcs by sampling at equal angular steps.

    Used for arcs whose end points are already given in the final coordinate space.
    See https://www.w3.org/TR/SVG/implnote.html#ArcImplementationNotes
    """

    @staticmethod
    def arc_geometry(
        # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
        current_point: Point,
        rx: float,
        ry: float,
        rotation: float,
        large_arc_flag: Union[bool, float],
        sweep_flag: Union[bool, float],
        end_point: Point,
    ) -> ArcGeometry:
        """Convert the end point parameterization of an arc into its center parameterization.

        Raises:
            ArcParameterError: if the radicand of the center solution is negative beyond tolerance
        """
        (x0, y0) = (float(current_point[0]), float(current_point[1]))
        (x, y) = (float(end_point[0]), float(end_point[1]))
        phi = math.radians(rotation)
        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)

        mpx = (x0 - x) / 2
        mpy = (y0 - y) / 2
        x1_ = cos_phi * mpx + sin_phi * mpy
        y1_ = -sin_phi * mpx + cos_phi * mpy
        x1_2 = x1_ * x1_
        y1_2 = y1_ * y1_

        # ensure radii are large enough
        rx = abs(rx)
        ry = abs(ry)
        lam = x1_2 / (rx * rx) + y1_2 / (ry * ry)
        if lam > 1:
            rx = math.sqrt(lam) * rx
            ry = math.sqrt(lam) * ry
        rx2 = rx * rx
        ry2 = ry * ry

        factor = (rx2 * ry2 - rx2 * y1_2 - ry2 * x1_2) / (rx2 * y1_2 + ry2 * x1_2)
        if abs(factor) < ARC_FACTOR_EPS:
            factor = 0.0
        if not factor >= 0:
            raise ArcParameterError(
                f"Bad arc parameters (radicand {factor}): from ({x0}, {y0}) to ({x}, {y}), "
                f"rx={rx}, ry={ry}, rotation={rotation}, large_arc={large_arc_flag}, sweep={sweep_flag}"
            )
        k = (-1 if bool(large_arc_flag) == bool(sweep_flag) else 1) * math.sqrt(factor)
        cx_ = k * rx * y1_ / ry
        cy_ = k * -ry * x1_ / rx
        cx = cos_phi * cx_ - sin_phi * cy_ + (x0 + x) / 2
        cy = sin_phi * cx_ + cos_phi * cy_ + (y0 + y) / 2

        theta1 = ArcSampler._vector_angle(1, 0, (x1_ - cx_) / rx, (y1_ - cy_) / ry)
        delta = math.fmod(
            ArcSampler._vector_angle((x1_ - cx_) / rx, (y1_ - cy_) / ry, (-x1_ - cx_) / rx, (-y1_ - cy_) / ry),
            math.pi * 2,
        )
        if not sweep_flag and delta > 0:
            delta -= math.pi * 2
        elif sweep_flag and delta < 0:
            delta += math.pi * 2
        return ArcGeometry(cx, cy, rx, ry, phi, theta1, delta)

    @staticmethod
    def sample_arc(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        current_point: Point,
        rx: float,
        ry: float,
        rotation: float,
        large_arc_flag: Union[bool, float],
        sweep_flag: Union[bool, float],
        end_point: Point,
        max_error: float,
    ) -> NDArray[np.float64]:
        """Sample the arc from _current_point_ to _end_point_ into points.

        The number of samples n = ceil(|dtheta| / acos(1 - max_error / rx)) bounds the
        chord deviation of a circle with radius rx, n is limited to ARC_MAX_SAMPLES.
        The start point is not emitted, the last emitted point is _end_point_.

        Returns:
            NDArray[np.float64]: points of shape (n, 2); empty if start equals end point,
                only the end point if a radius is zero
        """
        if current_point[0] == end_point[0] and current_point[1] == end_point[1]:
            return np.empty((0, 2), dtype=np.float64)
        if rx == 0 or ry == 0:
            return np.array([[end_point[0], end_point[1]]], dtype=np.float64)

        geometry = ArcSampler.arc_geometry(current_point, rx, ry, rotation, large_arc_flag, sweep_flag, end_point)
        step_angle = ArcSampler._step_angle(max_error / geometry.rx)
        samples = abs(geometry.delta_theta) / step_angle if step_angle > 0 else math.inf
        num_points = ARC_MAX_SAMPLES if samples >= ARC_MAX_SAMPLES else max(1, math.ceil(samples))

        theta = geometry.theta1 + geometry.delta_theta * np.arange(1, num_points + 1, dtype=np.float64) / num_points
        (cos_phi, sin_phi) = (math.cos(geometry.phi), math.sin(geometry.phi))
        ex = geometry.rx * np.cos(theta)
        ey = geometry.ry * np.sin(theta)
        points = np.empty((num_points, 2), dtype=np.float64)
        points[:, 0] = cos_phi * ex - sin_phi * ey + geometry.cx
        points[:, 1] = sin_phi * ex + cos_phi * ey + geometry.cy
        points[-1] = (end_point[0], end_point[1])
        return points

    @staticmethod
    def _step_angle(relative_error: float) -> float:
        """Angular step acos(1 - relative_error), clamped to pi."""
        cos_value = 1 - relative_error
        if cos_value < 1:
            return math.acos(max(-1.0, cos_value))
        # 1 - relative_error rounded to 1: small-angle expansion of acos
        return math.sqrt(2 * relative_error)

    @staticmethod
    def _vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
        """Signed angle from vector u to vector v."""
        return math.atan2(ux * vy - uy * vx, ux * vx + uy * vy)
