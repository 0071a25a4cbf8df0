"""Central module containing constants and the flattening configuration"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Maximum deviation between an emitted segment and the true curve/arc (coordinate units)
DEFAULT_MAX_ERROR: float = 0.1
# Maximum subdivision depth of the curve flattener, i.e. minimum parameter span 1/32
DEFAULT_MAX_DEPTH: int = 32

# Largest angular span approximated by a single cubic
ARC_SPLIT_ANGLE: float = math.pi * 120 / 180
# Upper bound of 120 degree splits for a full ellipse sweep (plus rounding slack)
ARC_MAX_SPLITS: int = 4
# Decimal places the sine argument is rounded to before asin()
ARC_ANGLE_DIGITS: int = 9
# Radicand magnitude below which the arc sampler snaps to zero
ARC_FACTOR_EPS: float = 1.0e-4
# Upper bound of the points sampled from a single arc
ARC_MAX_SAMPLES: int = 65536


###############################################################################
# FlattenOptions
###############################################################################


@dataclass(frozen=True)
class FlattenOptions:
    """Options controlling the flattening of path data into polylines.

    Attributes:
        max_error: Flattening tolerance, must be > 0.
        max_depth: Maximum subdivision depth of the curve flattener, must be >= 1.
        sample_arcs: If True, arcs are sampled directly in transformed space whenever
            the transform allows it; otherwise they are always converted to cubics.
    """

    max_error: float = DEFAULT_MAX_ERROR
    max_depth: int = DEFAULT_MAX_DEPTH
    sample_arcs: bool = True

    def __post_init__(self):
        if not self.max_error > 0:
            raise ValueError(f"max_error must be > 0, got {self.max_error}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

    def to_dict(self) -> dict:
        """Convert options to a dictionary for serialization."""
        return {
            "max_error": self.max_error,
            "max_depth": self.max_depth,
            "sample_arcs": self.sample_arcs,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FlattenOptions:
        """Create FlattenOptions from a dictionary."""
        return cls(
            max_error=data.get("max_error", DEFAULT_MAX_ERROR),
            max_depth=data.get("max_depth", DEFAULT_MAX_DEPTH),
            sample_arcs=data.get("sample_arcs", True),
        )
