"""Path export: engine curves to host path commands.

The exported path is recentered on its bounding-box centroid. The centroid
is returned as the offset at which the caller places the new shape, so the
shape's local origin sits at its own center and later scaling or rotation
pivots around it.
"""

import logging
from dataclasses import dataclass

from curvebridge.core.engine import EngineScope
from curvebridge.domain import (
    Anchor,
    BoundingBox,
    ClosePath,
    CubicTo,
    EngineCurve,
    LineTo,
    MoveTo,
    PathCommand,
    Subpath,
    command_points,
    is_straight,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportedPath:
    """Host path produced from an engine curve.

    Attributes:
        commands: Path commands centered on the local origin
        offset_x: Shared-space x of the local origin
        offset_y: Shared-space y of the local origin
        bounds: Bounding box of the commands before recentering
    """

    commands: tuple[PathCommand, ...]
    offset_x: float
    offset_y: float
    bounds: BoundingBox

    @property
    def subpath_count(self) -> int:
        return sum(1 for c in self.commands if isinstance(c, MoveTo))


def subpath_commands(subpath: Subpath) -> list[PathCommand]:
    """Emit host commands for one subpath in shared-space coordinates.

    A segment is a LineTo only when both adjoining handles are exactly zero.
    A curved closing segment is written out before the ClosePath; a
    straight one is left to the ClosePath.
    """
    anchors = subpath.anchors
    if not anchors:
        return []

    first = anchors[0]
    commands: list[PathCommand] = [MoveTo(first.point.x, first.point.y)]
    for prev, cur in zip(anchors, anchors[1:]):
        commands.append(_segment(prev, cur))

    if subpath.closed:
        last = anchors[-1]
        if len(anchors) > 1 and last.point != first.point and not is_straight(last, first):
            commands.append(_segment(last, first))
        commands.append(ClosePath())

    return commands


def _segment(prev: Anchor, cur: Anchor) -> PathCommand:
    if is_straight(prev, cur):
        return LineTo(cur.point.x, cur.point.y)
    cp1 = prev.control_out
    cp2 = cur.control_in
    return CubicTo(cp1.x, cp1.y, cp2.x, cp2.y, cur.point.x, cur.point.y)


def export_path(curve: EngineCurve, scope: EngineScope) -> ExportedPath | None:
    """Flatten a curve to host commands recentered on their centroid.

    The exporter takes ownership of the curve and releases it.

    Args:
        curve: Single, compound or grouped curve owned by the scope
        scope: Engine scope owning the curve

    Returns:
        Exported path, or None if the curve has no points
    """
    try:
        commands: list[PathCommand] = []
        for subpath in curve.flatten():
            commands.extend(subpath_commands(subpath))
    finally:
        scope.release(curve)

    if not commands:
        logger.debug("Curve %d has no points to export", curve.curve_id)
        return None

    bounds = BoundingBox.of_points(p for c in commands for p in command_points(c))
    cx, cy = bounds.center
    centered = tuple(c.translated(-cx, -cy) for c in commands)

    return ExportedPath(commands=centered, offset_x=cx, offset_y=cy, bounds=bounds)
