"""Domain models for curvebridge.

This module contains the two path models the package bridges, plus the
shapes and primitives of the host model. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Independent of the geometry engine's implementation details

Key classes:
- MoveTo, LineTo, CubicTo, QuadTo, ClosePath: Host path commands
- HostShape: A host path with its placement and style
- RectPrimitive, PointListPrimitive, PathPrimitive: Host primitives
- Vector, Anchor, Subpath, EngineCurve: Engine curve model
- BoundingBox: Axis-aligned extent
"""

from curvebridge.domain.commands import (
    ClosePath,
    CubicTo,
    LineTo,
    MoveTo,
    PathCommand,
    QuadTo,
    command_from_list,
    command_points,
    command_to_list,
)
from curvebridge.domain.curve import (
    ZERO,
    Anchor,
    BoundingBox,
    EngineCurve,
    Subpath,
    Vector,
    is_straight,
)
from curvebridge.domain.shapes import (
    HostShape,
    Origin,
    PathPrimitive,
    PointListPrimitive,
    Primitive,
    RectPrimitive,
    ShapeStyle,
)

__all__: list[str] = [
    # Commands
    "ClosePath",
    "CubicTo",
    "LineTo",
    "MoveTo",
    "PathCommand",
    "QuadTo",
    "command_from_list",
    "command_points",
    "command_to_list",
    # Shapes
    "HostShape",
    "Origin",
    "PathPrimitive",
    "PointListPrimitive",
    "Primitive",
    "RectPrimitive",
    "ShapeStyle",
    # Engine curves
    "ZERO",
    "Anchor",
    "BoundingBox",
    "EngineCurve",
    "Subpath",
    "Vector",
    "is_straight",
]
