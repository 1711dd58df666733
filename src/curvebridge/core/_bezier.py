"""Internal Bezier helpers for the importer and the geometry engine.

This is an internal module. Not intended for public use.
"""

from fontTools.misc.bezierTools import cubicPointAtT, splitCubicAtT

from curvebridge.domain import Vector

Point = tuple[float, float]
Cubic = tuple[Point, Point, Point, Point]


def elevate_quadratic(start: Vector, control: Vector, end: Vector) -> tuple[Vector, Vector]:
    """Return the cubic control points of a quadratic Bezier.

    Degree elevation is exact: the cubic traces the same curve.

    Args:
        start: Quadratic start point
        control: Quadratic control point
        end: Quadratic end point

    Returns:
        (cp1, cp2) with cp1 = start + 2/3 (control - start) and
        cp2 = end + 2/3 (control - end)
    """
    cp1 = start + (control - start) * (2 / 3)
    cp2 = end + (control - end) * (2 / 3)
    return cp1, cp2


def sample_cubic(cubic: Cubic, steps: int) -> list[Point]:
    """Sample a cubic at ``steps + 1`` uniform parameters, endpoints included.

    The first and last samples are the exact endpoints of the cubic.
    """
    p0, p1, p2, p3 = cubic
    samples = [p0]
    for i in range(1, steps):
        x, y = cubicPointAtT(p0, p1, p2, p3, i / steps)
        samples.append((x, y))
    samples.append(p3)
    return samples


def sub_cubic(cubic: Cubic, t_start: float, t_end: float) -> Cubic:
    """Return the part of a cubic between two parameters.

    If t_start > t_end the sub-curve is returned reversed, running from
    t_start to t_end.
    """
    reverse = t_start > t_end
    lo, hi = (t_end, t_start) if reverse else (t_start, t_end)

    cuts = [t for t in (lo, hi) if 0.0 < t < 1.0]
    if cuts:
        pieces = splitCubicAtT(*cubic, *cuts)
        piece = pieces[1] if lo > 0.0 else pieces[0]
    else:
        piece = cubic

    a, b, c, d = (tuple(p) for p in piece)
    if reverse:
        return (d, c, b, a)
    return (a, b, c, d)
