"""Host shapes and primitives.

A HostShape is a path in object-local coordinates together with the affine
placement that maps it into shared space. Primitives are host objects that
are not paths yet (rectangles, polygons, polylines); the normalizer promotes
them to HostShapes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from fontTools.misc.transform import Identity, Transform

from curvebridge.domain.commands import PathCommand


class Origin(str, Enum):
    """Anchor origin keyword along one axis.

    The host names the start/end of each axis differently (left/right,
    top/bottom); all spellings map to these three members.
    """

    START = "start"
    CENTER = "center"
    END = "end"

    @classmethod
    def parse(cls, value: "str | Origin") -> "Origin":
        """Parse an origin keyword, accepting host aliases."""
        if isinstance(value, Origin):
            return value
        key = value.lower()
        if key in ("left", "top"):
            return cls.START
        if key in ("right", "bottom"):
            return cls.END
        return cls(key)

    def offset(self, size: float) -> float:
        """Return the origin offset for an extent of the given size."""
        if self is Origin.CENTER:
            return size / 2
        if self is Origin.END:
            return size
        return 0.0


@dataclass(frozen=True, slots=True)
class ShapeStyle:
    """Visual attributes copied unchanged onto a boolean result.

    Attributes:
        fill: Fill paint, None for no fill
        stroke: Stroke paint, None for no stroke
        stroke_width: Stroke width in local units
        opacity: Opacity in [0, 1]
    """

    fill: str | None = None
    stroke: str | None = None
    stroke_width: float = 1.0
    opacity: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "fill": self.fill,
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
            "opacity": self.opacity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ShapeStyle":
        return cls(
            fill=data.get("fill"),
            stroke=data.get("stroke"),
            stroke_width=float(data.get("strokeWidth", 1.0)),
            opacity=float(data.get("opacity", 1.0)),
        )


@dataclass(frozen=True)
class HostShape:
    """A host path ready for import into the geometry engine.

    Attributes:
        identity: Caller-side identifier of the shape
        commands: Path commands in object-local coordinates
        transform: Object-local to shared-space affine transform
        style: Visual attributes
    """

    identity: str
    commands: tuple[PathCommand, ...]
    transform: Transform = Identity
    style: ShapeStyle = field(default_factory=ShapeStyle)

    def is_empty(self) -> bool:
        """Check if the shape has no commands."""
        return len(self.commands) == 0


@dataclass(frozen=True)
class RectPrimitive:
    """Axis-aligned rectangle of the host model.

    The rectangle's local origin sits at (origin_x, origin_y) within its
    width and height extents.
    """

    width: float
    height: float
    origin_x: Origin = Origin.START
    origin_y: Origin = Origin.START
    identity: str = ""
    transform: Transform = Identity
    style: ShapeStyle = field(default_factory=ShapeStyle)


@dataclass(frozen=True)
class PointListPrimitive:
    """Polygon (closed) or polyline (open) given by its vertices."""

    points: tuple[tuple[float, float], ...]
    closed: bool = True
    identity: str = ""
    transform: Transform = Identity
    style: ShapeStyle = field(default_factory=ShapeStyle)


@dataclass(frozen=True)
class PathPrimitive:
    """Host object that already is a path."""

    commands: tuple[PathCommand, ...]
    identity: str = ""
    transform: Transform = Identity
    style: ShapeStyle = field(default_factory=ShapeStyle)


Primitive = Union[RectPrimitive, PointListPrimitive, PathPrimitive]
