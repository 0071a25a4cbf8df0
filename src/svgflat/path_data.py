"""Value types for SVG path data: single commands, path data sequences and cubic curves."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from svgflat.common import COMMAND_INFO, NORMALIZED_COMMANDS, PathCommandError

###############################################################################
# PathCommand
###############################################################################


@dataclass(frozen=True)
class PathCommand:
    """A single SVG path command with its numeric operands.

    Attributes:
        cmd: Command letter; uppercase = absolute, lowercase = relative ("Z" for both closepath forms)
        values: Operands, their count must match the arity of the command
    """

    cmd: str
    values: Tuple[float, ...] = ()

    def __post_init__(self):
        info = COMMAND_INFO.get(self.cmd.upper())
        if info is None:
            raise PathCommandError(f"Unknown command '{self.cmd}'")
        values = tuple(float(v) for v in self.values)
        if len(values) != info.arity:
            raise PathCommandError(f"Command '{self.cmd}' needs {info.arity} values, got {len(values)}")
        object.__setattr__(self, "values", values)
        if self.cmd == "z":
            object.__setattr__(self, "cmd", "Z")

    @property
    def is_relative(self) -> bool:
        """True if the command uses coordinates relative to the current point."""
        return self.cmd.islower()

    @property
    def absolute_cmd(self) -> str:
        """The uppercase (absolute) command letter."""
        return self.cmd.upper()

    def __str__(self) -> str:
        return f"{self.cmd}({', '.join(f'{v:g}' for v in self.values)})"


# Ordered sequence of commands; if non-empty it starts with a MoveTo
PathData = List[PathCommand]


def is_normalized(path_data: Iterable[PathCommand]) -> bool:
    """Return True if all commands are absolute M, L, C or Z."""
    return all(seg.cmd in NORMALIZED_COMMANDS for seg in path_data)


def is_absolute(path_data: Iterable[PathCommand]) -> bool:
    """Return True if no command uses relative coordinates."""
    return not any(seg.is_relative for seg in path_data)


###############################################################################
# CubicCurve
###############################################################################


@dataclass(frozen=True)
class CubicCurve:
    """Immutable cubic Bezier curve given by start point, two control points and end point."""

    x0: float
    y0: float
    x1: float
    y1: float
    x2: float
    y2: float
    x3: float
    y3: float

    @classmethod
    def from_points(
        cls, points: Union[Sequence[Tuple[float, float]], NDArray[np.float64]]
    ) -> CubicCurve:
        """Create a CubicCurve from 4 (x, y) points."""
        (p0, p1, p2, p3) = points
        return cls(
            float(p0[0]),
            float(p0[1]),
            float(p1[0]),
            float(p1[1]),
            float(p2[0]),
            float(p2[1]),
            float(p3[0]),
            float(p3[1]),
        )

    @property
    def start(self) -> Tuple[float, float]:
        """Start point (x0, y0)."""
        return (self.x0, self.y0)

    @property
    def end(self) -> Tuple[float, float]:
        """End point (x3, y3)."""
        return (self.x3, self.y3)

    @property
    def values(self) -> Tuple[float, float, float, float, float, float, float, float]:
        """All 8 coordinates in order."""
        return (self.x0, self.y0, self.x1, self.y1, self.x2, self.y2, self.x3, self.y3)

    @property
    def points(self) -> NDArray[np.float64]:
        """Control points as array of shape (4, 2)."""
        return np.array(self.values, dtype=np.float64).reshape(4, 2)

    def to_command(self) -> PathCommand:
        """The curve as absolute CubicCurveTo command (start point is implicit)."""
        return PathCommand("C", self.values[2:])
