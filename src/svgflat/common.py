"""Central module containing command types, command metadata and error types for SVG path processing."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal

###############################################################################
# Types
###############################################################################


SvgPathCmds = Literal[  # Type-Definition for SvgPath-Commands; uppercase = absolute, lowercase = relative
    # MoveTo (2) - start a new subpath and move the current point to (x,y)
    "M",
    "m",
    # LineTo (2) - draw a straight line from the current point to (x,y)
    "L",
    "l",
    # Horizontal LineTo (1) - draw a horizontal line to the given x coordinate (y stays unchanged)
    "H",
    "h",
    # Vertical LineTo (1) - draw a vertical line to the given y coordinate (x stays unchanged)
    "V",
    "v",
    # Cubic Bezier To (6) - draw a cubic Bezier curve with two control points and an endpoint (x,y)
    "C",
    "c",
    # Smooth cubic Bezier To (4) - cubic curve to (x,y) using the reflection of the previous control point
    "S",
    "s",
    # Quadratic Bezier To (4) - draw a quadratic Bezier curve with one control point and an endpoint (x,y)
    "Q",
    "q",
    # Smooth quadratic Bezier To (2) - quadratic curve to (x,y) using the reflection of the previous control point
    "T",
    "t",
    # Arc (7) - draw an elliptical arc with parameters (rx ry x-axis-rotation large-arc-flag sweep-flag x y)
    "A",
    "a",
    # ClosePath (0) - close subpath by drawing a line from the current point to start point
    "Z",
]

NormalizedCmds = Literal[  # Commands left after normalization
    "M",
    "L",
    "C",
    "Z",
]


###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for SVG path commands.

    Attributes:
        arity: Number of numeric operands the command carries
        is_curve: Whether this command represents a curve (or arc)
        is_drawing: Whether this command draws (vs. move)
    """

    arity: int
    is_curve: bool
    is_drawing: bool = True


# Command registry with metadata, keyed by the absolute (uppercase) letter
COMMAND_INFO: Dict[str, PathCommandInfo] = {
    "M": PathCommandInfo(2, False, False),  # MoveTo - not drawing
    "L": PathCommandInfo(2, False, True),  # LineTo
    "H": PathCommandInfo(1, False, True),  # Horizontal LineTo
    "V": PathCommandInfo(1, False, True),  # Vertical LineTo
    "C": PathCommandInfo(6, True, True),  # Cubic
    "S": PathCommandInfo(4, True, True),  # Smooth cubic
    "Q": PathCommandInfo(4, True, True),  # Quadratic
    "T": PathCommandInfo(2, True, True),  # Smooth quadratic
    "A": PathCommandInfo(7, True, True),  # Elliptical arc
    "Z": PathCommandInfo(0, False, True),  # ClosePath - no operands
}

NORMALIZED_COMMANDS = frozenset("MLCZ")


def get_arity(cmd: str) -> int:
    """Return the number of operands of the given command letter (either case)."""
    return COMMAND_INFO[cmd.upper()].arity


###############################################################################
# Errors
###############################################################################


class PathCommandError(ValueError):
    """Raised when a path command is malformed or not allowed at its position."""


class ArcParameterError(ValueError):
    """Raised when an elliptical arc cannot be parameterized (mathematically inconsistent geometry)."""
