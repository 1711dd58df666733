"""Geometry-engine curve model.

This module defines the anchor/handle representation used by the geometry
engine:
- Vector: A 2D point or offset
- Anchor: A point on a curve with incoming and outgoing tangent handles
- Subpath: An ordered run of anchors, optionally closed
- EngineCurve: One or more subpaths (compound) or child curves (group)
- BoundingBox: Axis-aligned extent of a set of points
"""

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Vector:
    """A 2D point or offset in shared space.

    Immutable and hashable. Handles are vectors relative to their anchor;
    the zero vector means no curvature on that side.
    """

    x: float
    y: float

    def __add__(self, other: "Vector") -> "Vector":
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector") -> "Vector":
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Vector":
        return Vector(self.x * factor, self.y * factor)

    def is_zero(self) -> bool:
        """Check for the exact zero vector."""
        return self.x == 0 and self.y == 0

    def to_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


ZERO = Vector(0.0, 0.0)


@dataclass(slots=True)
class Anchor:
    """A point on a curve with its tangent handles.

    Attributes:
        point: Anchor position in shared space
        handle_in: Incoming handle, relative to point
        handle_out: Outgoing handle, relative to point
    """

    point: Vector
    handle_in: Vector = ZERO
    handle_out: Vector = ZERO

    @property
    def control_in(self) -> Vector:
        """Absolute position of the incoming control point."""
        return self.point + self.handle_in

    @property
    def control_out(self) -> Vector:
        """Absolute position of the outgoing control point."""
        return self.point + self.handle_out


def is_straight(prev: Anchor, cur: Anchor) -> bool:
    """Check whether the segment prev -> cur is a straight line.

    Only exact zero handles on both sides count as straight.
    """
    return prev.handle_out.is_zero() and cur.handle_in.is_zero()


@dataclass
class Subpath:
    """An ordered sequence of anchors.

    Attributes:
        anchors: Anchors in drawing order
        closed: Whether the last anchor connects back to the first
    """

    anchors: list[Anchor] = field(default_factory=list)
    closed: bool = False

    def __len__(self) -> int:
        return len(self.anchors)

    def segments(self) -> Iterator[tuple[Anchor, Anchor]]:
        """Yield (prev, cur) anchor pairs, including the closing pair if closed."""
        anchors = self.anchors
        for i in range(1, len(anchors)):
            yield anchors[i - 1], anchors[i]
        if self.closed and len(anchors) > 1:
            yield anchors[-1], anchors[0]


@dataclass(eq=False)
class EngineCurve:
    """A curve owned by an engine scope.

    A curve either holds subpaths directly (single or compound curve) or
    child curves (a group, as produced by a boolean operation with several
    disjoint parts). Curves are created and released through their scope;
    they compare by identity.

    Attributes:
        curve_id: Scope-local identifier
        scope_id: Identifier of the owning scope
        subpaths: Subpaths of a single or compound curve
        children: Child curves of a group
    """

    curve_id: int
    scope_id: int
    subpaths: list[Subpath] = field(default_factory=list)
    children: list["EngineCurve"] = field(default_factory=list)

    @property
    def is_group(self) -> bool:
        return bool(self.children)

    @property
    def is_compound(self) -> bool:
        return len(self.subpaths) > 1

    def flatten(self) -> list[Subpath]:
        """Collect the subpaths of this curve and all of its children, in order."""
        collected = list(self.subpaths)
        for child in self.children:
            collected.extend(child.flatten())
        return collected

    def anchor_count(self) -> int:
        return sum(len(s) for s in self.flatten())


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Attributes:
        min_x: Minimum x coordinate
        min_y: Minimum y coordinate
        max_x: Maximum x coordinate
        max_y: Maximum y coordinate
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def of_points(cls, points: Iterable[tuple[float, float]]) -> "BoundingBox":
        """Compute the box of the finite points given.

        Without any finite point the box collapses to the origin instead of
        carrying infinities.

        Args:
            points: (x, y) pairs

        Returns:
            Bounding box of the points
        """
        min_x = min_y = math.inf
        max_x = max_y = -math.inf
        for x, y in points:
            if math.isfinite(x):
                min_x = min(min_x, x)
                max_x = max(max_x, x)
            if math.isfinite(y):
                min_y = min(min_y, y)
                max_y = max(max_y, y)

        if not math.isfinite(min_x):
            min_x = 0.0
        if not math.isfinite(min_y):
            min_y = 0.0
        if not math.isfinite(max_x):
            max_x = min_x
        if not math.isfinite(max_y):
            max_y = min_y

        return cls(min_x, min_y, max_x, max_y)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> tuple[float, float]:
        """Centroid of the box as (x, y)."""
        return (self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2

    def to_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)
