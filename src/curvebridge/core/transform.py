"""Transform bridge between host objects and the geometry engine.

Shared space is the host's object space before the view transform: each
host object maps its local coordinates into it through its own placement.
The host view transform (pan, zoom, device-pixel scaling) is applied once,
to the engine view, and never to individual points.

Transforms are fontTools ``Transform`` objects. Their six components follow
the host canvas convention (a, b, c, d, tx, ty):

    x' = a * x + c * y + tx
    y' = b * x + d * y + ty
"""

import math
from collections.abc import Sequence

from fontTools.misc.transform import Offset, Transform

from curvebridge.domain import HostShape, Vector


def as_transform(value: Transform | Sequence[float]) -> Transform:
    """Coerce a six-component sequence to a Transform.

    Raises:
        ValueError: If the sequence does not have six components
    """
    if isinstance(value, Transform):
        return value
    components = tuple(float(v) for v in value)
    if len(components) != 6:
        raise ValueError(f"Affine transform needs 6 components, got {len(components)}")
    return Transform(*components)


def compute_shared_view_matrix(
    view_transform: Transform | Sequence[float],
    device_pixel_scale: float,
) -> Transform:
    """Compute the engine view matrix for a host view transform.

    Every component of the view transform, translation included, is scaled
    by the device-pixel scale so that the engine renders shared-space
    coordinates onto the same device pixels as the host.

    Args:
        view_transform: Host view transform (a, b, c, d, tx, ty)
        device_pixel_scale: Device pixels per host pixel

    Returns:
        Matrix for the engine view

    Examples:
        >>> compute_shared_view_matrix((2, 0, 0, 2, 10, 20), 1.5)
        <Transform [3 0 0 3 15 30]>
    """
    return Transform(*(c * device_pixel_scale for c in as_transform(view_transform)))


def compute_backing_size(width: float, height: float, device_pixel_scale: float) -> tuple[int, int]:
    """Size the engine view's backing store in device pixels.

    Args:
        width: Host view width
        height: Host view height
        device_pixel_scale: Device pixels per host pixel

    Returns:
        (width, height), each at least 1
    """
    return (
        max(1, round(width * device_pixel_scale)),
        max(1, round(height * device_pixel_scale)),
    )


def object_local_to_shared(shape: HostShape) -> Transform:
    """Return the object-local to shared-space transform of a shape.

    This is the shape's own placement; the view transform is deliberately
    not composed in.
    """
    return as_transform(shape.transform)


def map_point(transform: Transform, x: float, y: float) -> Vector:
    """Map a local point through a transform into shared space."""
    tx, ty = transform.transformPoint((x, y))
    return Vector(tx, ty)


def placement_transform(
    left: float,
    top: float,
    scale_x: float = 1.0,
    scale_y: float = 1.0,
    angle: float = 0.0,
    flip_x: bool = False,
    flip_y: bool = False,
) -> Transform:
    """Build a host placement transform.

    Points are scaled (and flipped), then rotated by ``angle`` degrees
    clockwise in y-down host space, then translated to (left, top).
    """
    sx = -scale_x if flip_x else scale_x
    sy = -scale_y if flip_y else scale_y
    return Transform().translate(left, top).rotate(math.radians(angle)).scale(sx, sy)


def translation_transform(dx: float, dy: float) -> Transform:
    """Identity-scaled translation placing a local origin at (dx, dy)."""
    return Offset(dx, dy)
