"""Normalization of SVG path data to absolute M, L, C and Z commands."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from svgflat.arc import ArcConverter
from svgflat.bezier import BezierCurve
from svgflat.common import PathCommandError
from svgflat.path_data import PathCommand, PathData

logger = logging.getLogger(__name__)


class PathNormalizer:
    """Collection of static methods rewriting path data into a minimal command set."""

    @staticmethod
    def absolutize(path_data: Iterable[PathCommand]) -> PathData:
        """Take any path data and return path data that consists only of absolute commands.

        Order and number of commands are kept. Relative operands are added to the current
        point; a closepath moves the current point back to the start of the subpath.
        """
        result: List[PathCommand] = []
        (cur_x, cur_y) = (0.0, 0.0)
        (sub_x, sub_y) = (0.0, 0.0)

        for seg in path_data:
            cmd = seg.cmd
            values = list(seg.values)
            if cmd == "Z":
                result.append(seg)
                (cur_x, cur_y) = (sub_x, sub_y)
                continue

            if seg.is_relative:
                if cmd == "h":
                    values[0] += cur_x
                elif cmd == "v":
                    values[0] += cur_y
                elif cmd == "a":
                    values[5] += cur_x
                    values[6] += cur_y
                else:  # m, l, c, s, q, t: (x,y) pairs only
                    for i in range(0, len(values), 2):
                        values[i + 0] += cur_x
                        values[i + 1] += cur_y
                seg = PathCommand(cmd.upper(), tuple(values))
            result.append(seg)

            if seg.cmd == "H":
                cur_x = values[0]
            elif seg.cmd == "V":
                cur_y = values[0]
            else:
                (cur_x, cur_y) = (values[-2], values[-1])
            if seg.cmd == "M":
                (sub_x, sub_y) = (cur_x, cur_y)

        return result

    @staticmethod
    def reduce(path_data: Iterable[PathCommand], keep_arcs: bool = False) -> PathData:
        """Take absolute path data and return path data consisting only of M, L, C and Z commands.

        H and V become L. S, Q and T become C: the first control point of S (the control point
        of T) is the reflection of the previous control point if the previous command was C or S
        (Q or T), otherwise the current point. Arcs become one or more C; an arc with a zero
        radius becomes a straight C, an arc ending at its start point is dropped.

        Args:
            path_data: absolute path data
            keep_arcs: if True, arcs with non-zero radii are kept as absolute A commands
                (radii made positive) for later sampling

        Raises:
            PathCommandError: if a relative command is found
        """
        # pylint: disable=too-many-branches,too-many-statements
        result: List[PathCommand] = []
        last_type: Optional[str] = None
        (last_ctrl_x, last_ctrl_y) = (0.0, 0.0)
        (cur_x, cur_y) = (0.0, 0.0)
        (sub_x, sub_y) = (0.0, 0.0)

        for seg in path_data:
            cmd = seg.cmd
            values = seg.values
            if cmd == "M":
                result.append(seg)
                (cur_x, cur_y) = (sub_x, sub_y) = values

            elif cmd == "L":
                result.append(seg)
                (cur_x, cur_y) = values

            elif cmd == "H":
                result.append(PathCommand("L", (values[0], cur_y)))
                cur_x = values[0]

            elif cmd == "V":
                result.append(PathCommand("L", (cur_x, values[0])))
                cur_y = values[0]

            elif cmd == "C":
                result.append(seg)
                (last_ctrl_x, last_ctrl_y) = values[2:4]
                (cur_x, cur_y) = values[4:6]

            elif cmd == "S":
                (x2, y2, x, y) = values
                if last_type in ("C", "S"):
                    (cx1, cy1) = (cur_x + (cur_x - last_ctrl_x), cur_y + (cur_y - last_ctrl_y))
                else:
                    (cx1, cy1) = (cur_x, cur_y)
                result.append(PathCommand("C", (cx1, cy1, x2, y2, x, y)))
                (last_ctrl_x, last_ctrl_y) = (x2, y2)
                (cur_x, cur_y) = (x, y)

            elif cmd in ("Q", "T"):
                if cmd == "Q":
                    (x1, y1, x, y) = values
                elif last_type in ("Q", "T"):
                    (x, y) = values
                    (x1, y1) = (cur_x + (cur_x - last_ctrl_x), cur_y + (cur_y - last_ctrl_y))
                else:
                    (x, y) = values
                    (x1, y1) = (cur_x, cur_y)
                controls = BezierCurve.quadratic_to_cubic((cur_x, cur_y), (x1, y1), (x, y))
                result.append(PathCommand("C", (*controls, x, y)))
                (last_ctrl_x, last_ctrl_y) = (x1, y1)
                (cur_x, cur_y) = (x, y)

            elif cmd == "A":
                rx = abs(values[0])
                ry = abs(values[1])
                (angle, large_arc, sweep, x, y) = values[2:]
                if rx == 0 or ry == 0:
                    logger.debug("Arc with zero radius to (%g, %g) replaced by a straight curve", x, y)
                    result.append(PathCommand("C", (cur_x, cur_y, x, y, x, y)))
                    (cur_x, cur_y) = (x, y)
                elif cur_x != x or cur_y != y:
                    if keep_arcs:
                        result.append(PathCommand("A", (rx, ry, angle, large_arc, sweep, x, y)))
                    else:
                        curves = ArcConverter.arc_to_cubics(cur_x, cur_y, x, y, rx, ry, angle, large_arc, sweep)
                        result.extend(curve.to_command() for curve in curves)
                    (cur_x, cur_y) = (x, y)

            elif cmd == "Z":
                result.append(seg)
                (cur_x, cur_y) = (sub_x, sub_y)

            else:
                raise PathCommandError(f"Relative command '{cmd}' in absolute path data")

            last_type = cmd

        return result

    @staticmethod
    def normalize(path_data: Iterable[PathCommand], keep_arcs: bool = False) -> PathData:
        """Absolutize and reduce the given path data."""
        return PathNormalizer.reduce(PathNormalizer.absolutize(path_data), keep_arcs=keep_arcs)
