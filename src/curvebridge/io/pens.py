"""Converters between fontTools pens and host path commands.

fontTools pens describe outlines as a stream of drawing calls. This module
turns a RecordingPen recording into host commands and draws host commands
onto any pen, which is how SVG path data is read and written.
"""

from typing import Any

from fontTools.pens.basePen import decomposeQuadraticSegment, decomposeSuperBezierSegment

from curvebridge.domain import ClosePath, CubicTo, LineTo, MoveTo, PathCommand, QuadTo


def commands_from_recording(recording: list[tuple[str, tuple[Any, ...]]]) -> list[PathCommand]:
    """Convert a RecordingPen recording to host path commands.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), ..., (xn, yn)))  # Quadratic, implied on-curves
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic, or a super-bezier
    - ('closePath', ()) / ('endPath', ())

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        Host path commands
    """
    commands: list[PathCommand] = []

    for operator, args in recording:
        if operator == "moveTo":
            (x, y), = args
            commands.append(MoveTo(x, y))

        elif operator == "lineTo":
            (x, y), = args
            commands.append(LineTo(x, y))

        elif operator == "curveTo":
            segments = [args] if len(args) == 3 else decomposeSuperBezierSegment(list(args))
            for (x1, y1), (x2, y2), (x3, y3) in segments:
                commands.append(CubicTo(x1, y1, x2, y2, x3, y3))

        elif operator == "qCurveTo":
            points = list(args)
            if points[-1] is None:
                # Closed contour without on-curve points: start on the implied
                # point between the last and first off-curve points.
                points.pop()
                (lx, ly), (fx, fy) = points[-1], points[0]
                start = ((lx + fx) / 2, (ly + fy) / 2)
                commands.append(MoveTo(*start))
                points.append(start)
            for (cx, cy), (x, y) in decomposeQuadraticSegment(points):
                commands.append(QuadTo(cx, cy, x, y))

        elif operator == "closePath":
            commands.append(ClosePath())

    return commands


def draw_commands(commands: list[PathCommand] | tuple[PathCommand, ...], pen: Any) -> None:
    """Draw host path commands onto a fontTools pen.

    Every contour is terminated with closePath or endPath as the pen
    protocol requires. Drawing continued after a ClosePath without a MoveTo
    starts a new contour at the closed subpath's start point.

    Args:
        commands: Host path commands
        pen: Any fontTools pen (SVGPathPen, RecordingPen, BoundsPen, ...)
    """
    open_contour = False
    start: tuple[float, float] | None = None

    for command in commands:
        if isinstance(command, MoveTo):
            if open_contour:
                pen.endPath()
            start = (command.x, command.y)
            pen.moveTo(start)
            open_contour = True
            continue

        if isinstance(command, ClosePath):
            if open_contour:
                pen.closePath()
                open_contour = False
            continue

        if not open_contour:
            if start is None:
                # Nothing drawn yet: the command's end point becomes the start.
                start = (command.x, command.y)
                pen.moveTo(start)
                open_contour = True
                continue
            pen.moveTo(start)
            open_contour = True

        if isinstance(command, LineTo):
            pen.lineTo((command.x, command.y))
        elif isinstance(command, CubicTo):
            pen.curveTo((command.cp1x, command.cp1y), (command.cp2x, command.cp2y), (command.x, command.y))
        elif isinstance(command, QuadTo):
            pen.qCurveTo((command.cpx, command.cpy), (command.x, command.y))

    if open_contour:
        pen.endPath()
