"""Path import: host path commands to engine curves.

Each command is mapped through the shape's shared-space transform and
turned into anchors with tangent handles. Quadratic segments are elevated
to cubics exactly. Curve and line commands without a current point are
degraded to a line to their end point and reported, never fatal.
"""

import logging

from fontTools.misc.transform import Transform

from curvebridge.core._bezier import elevate_quadratic
from curvebridge.core.engine import EngineScope
from curvebridge.core.transform import map_point
from curvebridge.domain import (
    Anchor,
    ClosePath,
    CubicTo,
    EngineCurve,
    HostShape,
    LineTo,
    MoveTo,
    QuadTo,
    Subpath,
    Vector,
)
from curvebridge.exceptions import MalformedPathWarning

logger = logging.getLogger(__name__)


class _CurveBuilder:
    """Accumulates subpaths while walking a command list."""

    def __init__(self) -> None:
        self.subpaths: list[Subpath] = []
        self.current: Subpath | None = None

    @property
    def open_subpath(self) -> Subpath | None:
        """Subpath that has a current point, if any."""
        if self.current is None or not self.current.anchors:
            return None
        return self.current

    def move_to(self, point: Vector) -> None:
        self.current = Subpath(anchors=[Anchor(point)])
        self.subpaths.append(self.current)

    def line_to(self, point: Vector) -> None:
        if self.current is None:
            self.move_to(point)
            return
        self.current.anchors.append(Anchor(point))

    def curve_to(self, subpath: Subpath, cp1: Vector, cp2: Vector, end: Vector) -> None:
        previous = subpath.anchors[-1]
        previous.handle_out = cp1 - previous.point
        subpath.anchors.append(Anchor(end, handle_in=cp2 - end))

    def close(self) -> None:
        if self.current is not None:
            self.current.closed = True


def import_path(
    shape: HostShape,
    shared_transform: Transform,
    scope: EngineScope,
    issues: list[MalformedPathWarning] | None = None,
) -> EngineCurve | None:
    """Convert a host shape into an engine curve.

    Every MoveTo starts a new subpath of the same (compound) curve.

    Args:
        shape: Host shape with commands in object-local coordinates
        shared_transform: Object-local to shared-space transform
        scope: Engine scope that will own the curve
        issues: Optional list collecting malformed-command reports

    Returns:
        New curve owned by the scope, or None if the shape has no commands
    """
    if shape.is_empty():
        return None

    builder = _CurveBuilder()

    def degrade(index: int, command: str, end: Vector) -> None:
        warning = MalformedPathWarning(shape.identity, index, command)
        logger.warning(str(warning))
        if issues is not None:
            issues.append(warning)
        builder.line_to(end)

    for index, command in enumerate(shape.commands):
        if isinstance(command, MoveTo):
            builder.move_to(map_point(shared_transform, command.x, command.y))

        elif isinstance(command, LineTo):
            point = map_point(shared_transform, command.x, command.y)
            if builder.open_subpath is None:
                degrade(index, command.letter, point)
            else:
                builder.line_to(point)

        elif isinstance(command, CubicTo):
            cp1 = map_point(shared_transform, command.cp1x, command.cp1y)
            cp2 = map_point(shared_transform, command.cp2x, command.cp2y)
            end = map_point(shared_transform, command.x, command.y)
            subpath = builder.open_subpath
            if subpath is None:
                degrade(index, command.letter, end)
            else:
                builder.curve_to(subpath, cp1, cp2, end)

        elif isinstance(command, QuadTo):
            control = map_point(shared_transform, command.cpx, command.cpy)
            end = map_point(shared_transform, command.x, command.y)
            subpath = builder.open_subpath
            if subpath is None:
                degrade(index, command.letter, end)
            else:
                cp1, cp2 = elevate_quadratic(subpath.anchors[-1].point, control, end)
                builder.curve_to(subpath, cp1, cp2, end)

        elif isinstance(command, ClosePath):
            builder.close()

    subpaths = [s for s in builder.subpaths if s.anchors]
    if not subpaths:
        logger.debug("Shape '%s' has no anchors to import", shape.identity)
        return None

    return scope.create_curve(subpaths)
