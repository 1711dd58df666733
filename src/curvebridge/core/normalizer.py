"""Shape normalization.

Promotes host primitives to HostShapes (path commands in object-local
coordinates), keeping each primitive's placement and style.
"""

import logging
from collections.abc import Callable, Iterable

from curvebridge.domain import (
    ClosePath,
    HostShape,
    LineTo,
    MoveTo,
    PathCommand,
    PathPrimitive,
    PointListPrimitive,
    RectPrimitive,
)
from curvebridge.exceptions import UnsupportedShapeError

logger = logging.getLogger(__name__)


def rect_commands(rect: RectPrimitive) -> tuple[PathCommand, ...]:
    """Build the closed outline of a rectangle around its origin.

    Examples:
        >>> from curvebridge.domain import Origin
        >>> rect_commands(RectPrimitive(20, 10, Origin.CENTER, Origin.CENTER))[0]
        MoveTo(x=-10.0, y=-5.0)
    """
    w, h = rect.width, rect.height
    ox = rect.origin_x.offset(w)
    oy = rect.origin_y.offset(h)
    return (
        MoveTo(-ox, -oy),
        LineTo(w - ox, -oy),
        LineTo(w - ox, h - oy),
        LineTo(-ox, h - oy),
        ClosePath(),
    )


def point_list_commands(shape: PointListPrimitive) -> tuple[PathCommand, ...]:
    """Build a polygon (closed) or polyline (open) path from vertices."""
    if not shape.points:
        return ()

    (x0, y0), *rest = shape.points
    commands: list[PathCommand] = [MoveTo(float(x0), float(y0))]
    commands.extend(LineTo(float(x), float(y)) for x, y in rest)
    if shape.closed:
        commands.append(ClosePath())
    return tuple(commands)


def _from_rect(rect: RectPrimitive) -> HostShape:
    return HostShape(rect.identity, rect_commands(rect), rect.transform, rect.style)


def _from_point_list(shape: PointListPrimitive) -> HostShape:
    return HostShape(shape.identity, point_list_commands(shape), shape.transform, shape.style)


def _from_path(shape: PathPrimitive) -> HostShape:
    return HostShape(shape.identity, tuple(shape.commands), shape.transform, shape.style)


_CONVERTERS: dict[type, Callable[..., HostShape]] = {
    RectPrimitive: _from_rect,
    PointListPrimitive: _from_point_list,
    PathPrimitive: _from_path,
}


def normalize(primitive: object) -> HostShape:
    """Convert a host primitive to a HostShape.

    HostShapes pass through unchanged.

    Args:
        primitive: RectPrimitive, PointListPrimitive, PathPrimitive or HostShape

    Returns:
        HostShape with the primitive's placement and style

    Raises:
        UnsupportedShapeError: If the primitive kind has no path conversion
    """
    if isinstance(primitive, HostShape):
        return primitive

    converter = _CONVERTERS.get(type(primitive))
    if converter is None:
        kind = getattr(primitive, "kind", None) or type(primitive).__name__
        raise UnsupportedShapeError(str(kind))
    return converter(primitive)


def normalize_all(
    primitives: Iterable[object],
    skip_unsupported: bool = True,
    on_skip: Callable[[object, UnsupportedShapeError], None] | None = None,
) -> list[HostShape]:
    """Normalize a sequence of primitives, in order.

    Args:
        primitives: Host primitives or shapes
        skip_unsupported: If True, unsupported primitives are logged and
            dropped; otherwise the first one aborts with an error
        on_skip: Called with each dropped primitive and its error

    Returns:
        Normalized shapes

    Raises:
        UnsupportedShapeError: If skip_unsupported is False and a primitive
            cannot be converted
    """
    shapes: list[HostShape] = []
    for primitive in primitives:
        try:
            shapes.append(normalize(primitive))
        except UnsupportedShapeError as e:
            if not skip_unsupported:
                raise
            logger.warning("Skipping shape: %s", e)
            if on_skip is not None:
                on_skip(primitive, e)
    return shapes
