"""Flattening of SVG path data into polylines within a maximum error."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Hashable, Iterable, List, Mapping, Optional, Tuple

import numpy as np
import shapely.geometry
from numpy.typing import NDArray

from svgflat.consts import FlattenOptions
from svgflat.geom import IDENTITY_TRAFO, AffineTrafo, GeomMath
from svgflat.path_data import PathCommand, PathData
from svgflat.path_normalizer import PathNormalizer
from svgflat.path_polygonizer import PathPolygonizer
from svgflat.svgpath import SvgPathParser

logger = logging.getLogger(__name__)


###############################################################################
# FlattenedPolyline
###############################################################################


@dataclass(frozen=True)
class FlattenedPolyline:
    """One flattened subpath.

    Attributes:
        points: Points of shape (n, 2) in the target coordinate space (read-only copy)
        closed: True if the subpath was closed by a ClosePath (the start point is repeated at the end)
        attributes: Pass-through attributes of the originating shape (read-only)
    """

    points: NDArray[np.float64]
    closed: bool = False
    attributes: Mapping[str, Optional[str]] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        points = np.array(self.points, dtype=np.float64).reshape(-1, 2)
        points.flags.writeable = False
        object.__setattr__(self, "points", points)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def length(self) -> float:
        """Total length of all segments."""
        if len(self.points) < 2:
            return 0.0
        return float(np.sum(np.linalg.norm(np.diff(self.points, axis=0), axis=1)))

    def to_linestring(self) -> shapely.geometry.LineString:
        """Return the polyline as shapely LineString.

        Raises:
            ValueError: if the polyline has less than 2 points
        """
        if len(self.points) < 2:
            raise ValueError(f"A LineString needs at least 2 points, got {len(self.points)}")
        return shapely.geometry.LineString(self.points)


###############################################################################
# SvgFlattener
###############################################################################


class SvgFlattener:
    """Pipeline turning SVG path data into polylines: parse, normalize, transform, flatten."""

    def __init__(self, options: Optional[FlattenOptions] = None):
        """Initialize the flattener.

        Args:
            options: Flattening options, defaults to FlattenOptions()
        """
        self.options = options if options is not None else FlattenOptions()

    def flatten_path_data(
        self,
        path_data: Iterable[PathCommand],
        affine_trafo: Optional[AffineTrafo] = None,
        attributes: Optional[Mapping[str, Optional[str]]] = None,
    ) -> List[FlattenedPolyline]:
        """Flatten path data (absolute or relative) into one polyline per subpath.

        Args:
            path_data: Path data, e.g. from SvgPathParser.parse() or ShapePathData
            affine_trafo: Transformation [a00, a01, a10, a11, b0, b1] into the target space,
                defaults to identity
            attributes: Pass-through attributes attached unmodified to every polyline

        Returns:
            List[FlattenedPolyline]: the polylines in path order
        """
        trafo = IDENTITY_TRAFO if affine_trafo is None else affine_trafo
        GeomMath.check_affine_trafo(trafo)

        keep_arcs = False
        if self.options.sample_arcs:
            keep_arcs = GeomMath.similarity_params(trafo) is not None
            if not keep_arcs:
                logger.debug("Transformation %s is no similarity, arcs are converted to cubics", list(trafo))

        normalized = PathNormalizer.normalize(path_data, keep_arcs=keep_arcs)
        transformed = GeomMath.transform_path_data(normalized, trafo)
        polylines = PathPolygonizer.polygonize_path(transformed, self.options.max_error, self.options.max_depth)

        attrs = MappingProxyType(dict(attributes or {}))
        return [FlattenedPolyline(points, closed, attrs) for (points, closed) in polylines]

    def flatten_path_string(
        self,
        path_string: str,
        affine_trafo: Optional[AffineTrafo] = None,
        attributes: Optional[Mapping[str, Optional[str]]] = None,
    ) -> List[FlattenedPolyline]:
        """Parse the SVG path data string and flatten it, see flatten_path_data()."""
        return self.flatten_path_data(SvgPathParser.parse(path_string), affine_trafo, attributes)


###############################################################################
# PathDataCache
###############################################################################


class PathDataCache:
    """Optional store of parsed and normalized path data keyed by a caller-supplied key.

    The key identifies the source (e.g. an element id or a content hash); the caller is
    responsible for clearing the cache when a source changes. Returned lists are copies.
    """

    def __init__(self):
        self._path_data: Dict[Hashable, Tuple[PathCommand, ...]] = {}
        self._normalized: Dict[Hashable, Tuple[PathCommand, ...]] = {}

    def get_path_data(self, key: Hashable, path_string: str) -> PathData:
        """Return the parsed path data of _path_string_, parsing only on the first request of _key_."""
        if key not in self._path_data:
            self._path_data[key] = tuple(SvgPathParser.parse(path_string))
        return list(self._path_data[key])

    def get_normalized_path_data(self, key: Hashable, path_string: str) -> PathData:
        """Return the normalized (M, L, C, Z) path data of _path_string_."""
        if key not in self._normalized:
            self._normalized[key] = tuple(PathNormalizer.normalize(self.get_path_data(key, path_string)))
        return list(self._normalized[key])

    def clear(self) -> None:
        """Remove all cached entries."""
        self._path_data.clear()
        self._normalized.clear()

    def __len__(self) -> int:
        return len(self._path_data)
