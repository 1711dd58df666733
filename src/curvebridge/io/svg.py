"""SVG path data and SVG document output.

Path data strings are read with fontTools' SVG path parser and written with
its SVGPathPen, both through the pen converters in ``curvebridge.io.pens``.
Standalone SVG documents of a combined shape are written with svgwrite.
"""

import logging
from collections.abc import Sequence
from pathlib import Path

import svgwrite
from fontTools.pens.recordingPen import RecordingPen
from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.svgLib.path import parse_path

from curvebridge.domain import BoundingBox, PathCommand, ShapeStyle, command_points
from curvebridge.exceptions import PathDataError
from curvebridge.io.pens import commands_from_recording, draw_commands

logger = logging.getLogger(__name__)

# Decimal places kept when writing coordinates
PATH_DATA_PRECISION = 4


def _number(value: float) -> str:
    text = f"{value:.{PATH_DATA_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def parse_path_data(data: str) -> list[PathCommand]:
    """Parse an SVG path data string into host path commands.

    Relative commands, H/V shorthands, smooth curves and arcs are
    resolved to absolute MoveTo, LineTo, QuadTo, CubicTo and ClosePath.

    Args:
        data: SVG path data (the ``d`` attribute)

    Returns:
        Host path commands

    Raises:
        PathDataError: If the data cannot be parsed
    """
    pen = RecordingPen()
    try:
        parse_path(data, pen)
    except (ValueError, IndexError, TypeError) as e:
        raise PathDataError(data, str(e) or type(e).__name__) from e
    return commands_from_recording(pen.value)


def format_path_data(commands: Sequence[PathCommand]) -> str:
    """Format host path commands as compact SVG path data.

    Examples:
        >>> from curvebridge.domain import ClosePath, LineTo, MoveTo
        >>> format_path_data([MoveTo(0, 0), LineTo(10, 0), LineTo(10, 5), ClosePath()])
        'M0 0H10V5Z'
    """
    pen = SVGPathPen(None, ntos=_number)
    draw_commands(list(commands), pen)
    return pen.getCommands()


def write_svg_document(
    commands: Sequence[PathCommand],
    output_path: Path,
    offset: tuple[float, float] = (0.0, 0.0),
    style: ShapeStyle | None = None,
    bounds: BoundingBox | None = None,
    margin: float = 10.0,
) -> None:
    """Write an SVG document showing one path placed at an offset.

    Args:
        commands: Path commands in local coordinates
        output_path: Destination .svg file
        offset: Translation placing the local origin
        style: Paint of the path (black fill if None)
        bounds: Shared-space bounds used for the view box (computed from the
            commands if None)
        margin: Padding around the bounds
    """
    style = style or ShapeStyle(fill="#000000")
    if bounds is None:
        dx, dy = offset
        bounds = BoundingBox.of_points(
            (x + dx, y + dy) for c in commands for x, y in command_points(c)
        )

    width = bounds.width + 2 * margin
    height = bounds.height + 2 * margin
    drawing = svgwrite.Drawing(
        str(output_path),
        size=(f"{_number(width)}px", f"{_number(height)}px"),
        viewBox=(
            f"{_number(bounds.min_x - margin)} {_number(bounds.min_y - margin)} "
            f"{_number(width)} {_number(height)}"
        ),
        profile="full",
    )

    attributes = {
        "fill": style.fill or "none",
        "stroke": style.stroke or "none",
        "fill_rule": "evenodd",
        "transform": f"translate({_number(offset[0])} {_number(offset[1])})",
    }
    if style.stroke:
        attributes["stroke_width"] = style.stroke_width
    if style.opacity != 1.0:
        attributes["opacity"] = style.opacity

    drawing.add(drawing.path(d=format_path_data(commands), **attributes))
    drawing.save()
    logger.debug("Wrote SVG document %s", output_path)
