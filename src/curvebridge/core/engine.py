"""Geometry engine scope.

An EngineScope owns engine curves and performs boolean operations on them.
Scopes are independent: curves, identifiers and view state are local to the
scope that created them, so concurrent combines use separate scopes.

Boolean operations run on shapely polygons. Curves are polygonized by
uniform sampling, with every sample tagged by its source segment and
parameter. After the operation, runs of result vertices that are
consecutive samples of the same source cubic are replaced by the exact
sub-curve of that cubic, so curves the operation did not cut come back as
curves. Vertices created at intersections stay straight.
"""

import itertools
import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from functools import reduce

from fontTools.misc.transform import Identity, Transform
from shapely.errors import ShapelyError
from shapely.geometry import GeometryCollection, MultiPolygon, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import unary_union
from shapely.validation import make_valid

from curvebridge.config import GeometryConfig
from curvebridge.core._bezier import Cubic, sample_cubic, sub_cubic
from curvebridge.domain import Anchor, BoundingBox, EngineCurve, Subpath, Vector, is_straight
from curvebridge.exceptions import CombineError, CurveReleasedError, ForeignCurveError

logger = logging.getLogger(__name__)


class BooleanOperation(str, Enum):
    """Binary boolean set operation."""

    UNION = "union"
    INTERSECTION = "intersection"
    DIFFERENCE = "difference"
    XOR = "xor"


_OPERATIONS = {
    BooleanOperation.UNION: lambda a, b: a.union(b),
    BooleanOperation.INTERSECTION: lambda a, b: a.intersection(b),
    BooleanOperation.DIFFERENCE: lambda a, b: a.difference(b),
    BooleanOperation.XOR: lambda a, b: a.symmetric_difference(b),
}


@dataclass(frozen=True, slots=True)
class _SampleTag:
    """Where a polygon vertex came from on a source cubic."""

    segment: int
    index: int
    t: float


@dataclass(frozen=True, slots=True)
class _EdgeLink:
    """A polygon edge lying on one step of a source cubic."""

    segment: int
    t_from: float
    t_to: float
    forward: bool

    def continues(self, previous: "_EdgeLink | None") -> bool:
        return (
            previous is not None
            and previous.segment == self.segment
            and previous.forward == self.forward
            and math.isclose(previous.t_to, self.t_from, abs_tol=1e-9)
        )


class _SampleRegistry:
    """Source cubics and sample tags of one boolean operation."""

    def __init__(self, precision: int) -> None:
        self._precision = precision
        self._tolerance = 10.0 ** -(precision - 3)
        self._cubics: list[Cubic] = []
        self._samples: list[list[tuple[float, float]]] = []
        self._tags: dict[tuple[float, float], list[_SampleTag]] = defaultdict(list)

    def key(self, x: float, y: float) -> tuple[float, float]:
        return (round(x, self._precision), round(y, self._precision))

    def add_cubic(self, cubic: Cubic, samples: list[tuple[float, float]]) -> None:
        segment = len(self._cubics)
        self._cubics.append(cubic)
        self._samples.append(samples)
        steps = len(samples) - 1
        for index, (x, y) in enumerate(samples):
            self._tags[self.key(x, y)].append(_SampleTag(segment, index, index / steps))

    def cubic(self, segment: int) -> Cubic:
        return self._cubics[segment]

    def link(self, start: tuple[float, float], end: tuple[float, float]) -> _EdgeLink | None:
        """Find the cubic step an edge lies on, if any.

        Besides whole steps between two samples, an edge from a cut point to
        a sample covers part of a step; its cut end gets the parameter
        interpolated along the step chord.
        """
        start_tags = self._tags.get(self.key(*start), [])
        end_tags = self._tags.get(self.key(*end), [])

        for a in start_tags:
            for b in end_tags:
                if a.segment == b.segment and abs(a.index - b.index) == 1:
                    return _EdgeLink(a.segment, a.t, b.t, b.index > a.index)

        for b in end_tags:
            t = self._chord_parameter(b, start)
            if t is not None:
                return _EdgeLink(b.segment, t, b.t, b.t > t)
        for a in start_tags:
            t = self._chord_parameter(a, end)
            if t is not None:
                return _EdgeLink(a.segment, a.t, t, t > a.t)
        return None

    def _chord_parameter(self, tag: _SampleTag, point: tuple[float, float]) -> float | None:
        """Parameter of a point on a step chord ending at the tagged sample."""
        samples = self._samples[tag.segment]
        steps = len(samples) - 1
        px, py = point
        for index in (tag.index - 1, tag.index + 1):
            if not 0 <= index <= steps:
                continue
            x0, y0 = samples[index]
            x1, y1 = samples[tag.index]
            dx, dy = x1 - x0, y1 - y0
            length = math.hypot(dx, dy)
            if length == 0.0:
                continue
            along = ((px - x0) * dx + (py - y0) * dy) / (length * length)
            if not 0.0 <= along < 1.0:
                continue
            if abs((px - x0) * dy - (py - y0) * dx) / length > self._tolerance:
                continue
            t_other = index / steps
            return t_other + along * (tag.t - t_other)
        return None


class EngineScope:
    """Owner of engine curves and provider of boolean operations.

    Example:
        with EngineScope() as scope:
            merged = scope.combine(a, b)
            scope.release(a)
            scope.release(b)
    """

    _scope_ids = itertools.count(1)

    def __init__(self, config: GeometryConfig | None = None) -> None:
        """Initialize an empty scope.

        Args:
            config: Geometry configuration (defaults if None)
        """
        self.config = config or GeometryConfig()
        self.scope_id = next(EngineScope._scope_ids)
        self._curve_ids = itertools.count(1)
        self._live: dict[int, EngineCurve] = {}
        self._view_matrix: Transform = Identity
        self._backing_size: tuple[int, int] = (1, 1)

    @property
    def live_count(self) -> int:
        """Number of curves created in this scope and not yet released."""
        return len(self._live)

    @property
    def view_matrix(self) -> Transform:
        return self._view_matrix

    @property
    def backing_size(self) -> tuple[int, int]:
        return self._backing_size

    def sync_view(self, view_matrix: Transform, backing_size: tuple[int, int] = (1, 1)) -> None:
        """Set the engine view to match the host view.

        Args:
            view_matrix: Shared-space to device-pixel matrix
            backing_size: Device-pixel size of the view
        """
        self._view_matrix = view_matrix
        self._backing_size = backing_size
        logger.debug("Engine view synced: matrix=%s size=%s", view_matrix, backing_size)

    def create_curve(self, subpaths: list[Subpath]) -> EngineCurve:
        """Create a curve owned by this scope."""
        curve = EngineCurve(next(self._curve_ids), self.scope_id, subpaths=subpaths)
        self._live[curve.curve_id] = curve
        return curve

    def _create_group(self, children: list[list[Subpath]]) -> EngineCurve:
        group = EngineCurve(next(self._curve_ids), self.scope_id)
        group.children = [
            EngineCurve(next(self._curve_ids), self.scope_id, subpaths=subpaths)
            for subpaths in children
        ]
        self._live[group.curve_id] = group
        return group

    def is_alive(self, curve: EngineCurve) -> bool:
        return curve.scope_id == self.scope_id and curve.curve_id in self._live

    def release(self, curve: EngineCurve) -> None:
        """Release a curve. Releasing twice is a no-op.

        Raises:
            ForeignCurveError: If the curve belongs to another scope
        """
        if curve.scope_id != self.scope_id:
            raise ForeignCurveError(curve.curve_id)
        self._live.pop(curve.curve_id, None)

    def close(self) -> None:
        """Release every curve still alive in this scope."""
        if self._live:
            logger.debug("Closing scope %d with %d live curves", self.scope_id, len(self._live))
        self._live.clear()

    def __enter__(self) -> "EngineScope":
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        self.close()

    def _check_alive(self, curve: EngineCurve) -> None:
        if curve.scope_id != self.scope_id:
            raise ForeignCurveError(curve.curve_id)
        if curve.curve_id not in self._live:
            raise CurveReleasedError(curve.curve_id)

    def view_bounds(self, curve: EngineCurve) -> BoundingBox:
        """Bounds of a curve's anchors and control points in device pixels."""
        self._check_alive(curve)
        points = []
        for subpath in curve.flatten():
            for anchor in subpath.anchors:
                for v in (anchor.point, anchor.control_in, anchor.control_out):
                    points.append(self._view_matrix.transformPoint(v.to_tuple()))
        return BoundingBox.of_points(points)

    def combine(
        self,
        left: EngineCurve,
        right: EngineCurve,
        operation: BooleanOperation = BooleanOperation.UNION,
    ) -> EngineCurve:
        """Apply a boolean operation to two curves.

        The operands are left untouched and alive; the caller owns them.

        Args:
            left: First operand
            right: Second operand
            operation: Boolean operation to apply

        Returns:
            New curve in this scope: a group if the result has several
            disjoint parts, otherwise a single (possibly compound) curve

        Raises:
            CombineError: If the geometry operation fails
            CurveReleasedError: If an operand was already released
            ForeignCurveError: If an operand belongs to another scope
        """
        self._check_alive(left)
        self._check_alive(right)

        registry = _SampleRegistry(self.config.match_precision)
        try:
            a = self._to_geometry(left, registry)
            b = self._to_geometry(right, registry)
            result = _OPERATIONS[BooleanOperation(operation)](a, b)
        except (ShapelyError, ValueError) as e:
            raise CombineError(left.curve_id, right.curve_id, str(e)) from e

        polygons = [p for p in _polygons_of(result) if not p.is_empty]
        parts = [self._polygon_subpaths(p, registry) for p in polygons]
        parts = [subpaths for subpaths in parts if subpaths]

        logger.debug(
            "Combined curves %d and %d (%s): %d parts",
            left.curve_id,
            right.curve_id,
            BooleanOperation(operation).value,
            len(parts),
        )

        if len(parts) > 1:
            return self._create_group(parts)
        return self.create_curve(parts[0] if parts else [])

    def _to_geometry(self, curve: EngineCurve, registry: _SampleRegistry) -> BaseGeometry:
        """Polygonize a curve; subpaths combine with the even-odd rule."""
        rings = []
        for subpath in curve.flatten():
            coords = self._ring_coords(subpath, registry)
            if len(coords) < 3:
                continue
            polygon = Polygon(coords)
            if not polygon.is_valid:
                polygon = unary_union(_polygons_of(make_valid(polygon)))
            rings.append(polygon)
        return reduce(lambda acc, ring: acc.symmetric_difference(ring), rings, Polygon())

    def _ring_coords(self, subpath: Subpath, registry: _SampleRegistry) -> list[tuple[float, float]]:
        coords: list[tuple[float, float]] = []
        for prev, cur in subpath.segments():
            if is_straight(prev, cur):
                coords.append(prev.point.to_tuple())
                continue
            cubic = (
                prev.point.to_tuple(),
                prev.control_out.to_tuple(),
                cur.control_in.to_tuple(),
                cur.point.to_tuple(),
            )
            samples = sample_cubic(cubic, self.config.curve_steps)
            registry.add_cubic(cubic, samples)
            coords.extend(samples[:-1])

        if not subpath.closed and subpath.anchors:
            coords.append(subpath.anchors[-1].point.to_tuple())
        return coords

    def _polygon_subpaths(self, polygon: Polygon, registry: _SampleRegistry) -> list[Subpath]:
        polygon = orient(polygon, sign=1.0)
        min_area = self.config.min_ring_area
        if min_area and polygon.area < min_area:
            return []

        subpaths = [_rebuild_ring(list(polygon.exterior.coords), registry)]
        for interior in polygon.interiors:
            if min_area and Polygon(interior).area < min_area:
                continue
            subpaths.append(_rebuild_ring(list(interior.coords), registry))
        return [s for s in subpaths if len(s) > 0]


def _polygons_of(geometry: BaseGeometry) -> list[Polygon]:
    if isinstance(geometry, Polygon):
        return [geometry]
    if isinstance(geometry, (MultiPolygon, GeometryCollection)):
        polygons: list[Polygon] = []
        for part in geometry.geoms:
            polygons.extend(_polygons_of(part))
        return polygons
    return []


def _rebuild_ring(coords: list[tuple[float, float]], registry: _SampleRegistry) -> Subpath:
    """Turn a closed shapely ring into a closed subpath, restoring curves."""
    if len(coords) > 1 and coords[0] == coords[-1]:
        coords = coords[:-1]
    n = len(coords)
    if n == 0:
        return Subpath(closed=True)

    links = [registry.link(coords[i], coords[(i + 1) % n]) for i in range(n)]

    # Start at a vertex where no curve run passes through, so runs don't wrap.
    start = 0
    for i in range(n):
        link = links[i]
        if link is None or not link.continues(links[i - 1]):
            start = i
            break
    coords = coords[start:] + coords[:start]
    links = links[start:] + links[:start]

    anchors = [Anchor(Vector(*coords[0]))]
    k = 0
    while k < n:
        link = links[k]
        end = k + 1
        if link is not None:
            while end < n and links[end] is not None and links[end].continues(links[end - 1]):
                end += 1

        end_anchor = anchors[0] if end == n else Anchor(Vector(*coords[end]))

        if link is not None:
            cubic = sub_cubic(registry.cubic(link.segment), link.t_from, links[end - 1].t_to)
            start_anchor = anchors[-1]
            start_anchor.handle_out = Vector(*cubic[1]) - start_anchor.point
            end_anchor.handle_in = Vector(*cubic[2]) - end_anchor.point

        if end < n:
            anchors.append(end_anchor)
        k = end

    return Subpath(anchors=anchors, closed=True)
