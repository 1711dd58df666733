"""Host path commands.

This module defines the host drawing model's path commands. A path is an
ordered list of commands in object-local coordinates:
- MoveTo: starts a new subpath at an anchor
- LineTo: straight segment to an anchor
- CubicTo: cubic Bezier to an anchor (cp1 belongs to the previous anchor)
- QuadTo: quadratic Bezier to an anchor (input only, elevated on import)
- ClosePath: marks the current subpath closed
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start a new subpath at (x, y)."""

    letter: ClassVar[str] = "M"

    x: float
    y: float

    def coordinates(self) -> tuple[float, ...]:
        return (self.x, self.y)

    def translated(self, dx: float, dy: float) -> "MoveTo":
        return MoveTo(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment from the current point to (x, y)."""

    letter: ClassVar[str] = "L"

    x: float
    y: float

    def coordinates(self) -> tuple[float, ...]:
        return (self.x, self.y)

    def translated(self, dx: float, dy: float) -> "LineTo":
        return LineTo(self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class CubicTo:
    """Cubic Bezier from the current point to (x, y).

    Attributes:
        cp1x, cp1y: First control point (tangent at the previous anchor)
        cp2x, cp2y: Second control point (tangent at this anchor)
        x, y: End anchor
    """

    letter: ClassVar[str] = "C"

    cp1x: float
    cp1y: float
    cp2x: float
    cp2y: float
    x: float
    y: float

    def coordinates(self) -> tuple[float, ...]:
        return (self.cp1x, self.cp1y, self.cp2x, self.cp2y, self.x, self.y)

    def translated(self, dx: float, dy: float) -> "CubicTo":
        return CubicTo(
            self.cp1x + dx,
            self.cp1y + dy,
            self.cp2x + dx,
            self.cp2y + dy,
            self.x + dx,
            self.y + dy,
        )


@dataclass(frozen=True, slots=True)
class QuadTo:
    """Quadratic Bezier from the current point to (x, y) via (cpx, cpy)."""

    letter: ClassVar[str] = "Q"

    cpx: float
    cpy: float
    x: float
    y: float

    def coordinates(self) -> tuple[float, ...]:
        return (self.cpx, self.cpy, self.x, self.y)

    def translated(self, dx: float, dy: float) -> "QuadTo":
        return QuadTo(self.cpx + dx, self.cpy + dy, self.x + dx, self.y + dy)


@dataclass(frozen=True, slots=True)
class ClosePath:
    """Close the current subpath. Carries no coordinates."""

    letter: ClassVar[str] = "Z"

    def coordinates(self) -> tuple[float, ...]:
        return ()

    def translated(self, dx: float, dy: float) -> "ClosePath":  # noqa: ARG002
        return self


PathCommand = Union[MoveTo, LineTo, CubicTo, QuadTo, ClosePath]

_BY_LETTER: dict[str, type] = {
    cls.letter: cls for cls in (MoveTo, LineTo, CubicTo, QuadTo, ClosePath)
}


def command_points(command: PathCommand) -> list[tuple[float, float]]:
    """Return the (x, y) pairs of a command's coordinate list.

    Args:
        command: Any path command

    Returns:
        List of coordinate pairs, empty for ClosePath
    """
    coords = command.coordinates()
    return [(coords[i], coords[i + 1]) for i in range(0, len(coords), 2)]


def command_to_list(command: PathCommand) -> list[Any]:
    """Serialize a command to the host array form, e.g. ``["L", 10.0, 0.0]``."""
    return [command.letter, *command.coordinates()]


def command_from_list(data: list[Any]) -> PathCommand:
    """Deserialize a command from the host array form.

    Args:
        data: Letter followed by its coordinates

    Returns:
        The matching path command

    Raises:
        ValueError: If the letter is unknown or the coordinate count is wrong
    """
    if not data:
        raise ValueError("Empty path command")

    letter = str(data[0]).upper()
    cls = _BY_LETTER.get(letter)
    if cls is None:
        raise ValueError(f"Unknown path command '{data[0]}'")

    try:
        return cls(*(float(v) for v in data[1:]))
    except TypeError as e:
        raise ValueError(f"Wrong number of coordinates for '{letter}': {len(data) - 1}") from e
