"""Unit tests for shape normalization."""

import logging
from dataclasses import dataclass

import pytest
from fontTools.misc.transform import Offset

from curvebridge.core.normalizer import normalize, normalize_all, point_list_commands, rect_commands
from curvebridge.domain import (
    ClosePath,
    CubicTo,
    HostShape,
    LineTo,
    MoveTo,
    Origin,
    PathPrimitive,
    PointListPrimitive,
    RectPrimitive,
    ShapeStyle,
)
from curvebridge.exceptions import UnsupportedShapeError


@dataclass(frozen=True)
class Ellipse:
    """Primitive kind without a path conversion."""

    rx: float
    ry: float
    identity: str = "ellipse"


class TestRectangle:
    """Tests for rectangle normalization."""

    def test_centered_rectangle(self) -> None:
        """Test a 20x10 rectangle with a centered origin."""
        rect = RectPrimitive(20, 10, Origin.CENTER, Origin.CENTER)
        assert rect_commands(rect) == (
            MoveTo(-10, -5),
            LineTo(10, -5),
            LineTo(10, 5),
            LineTo(-10, 5),
            ClosePath(),
        )

    def test_start_origin(self) -> None:
        """Test that the default origin is the top-left corner."""
        commands = rect_commands(RectPrimitive(4, 3))
        assert commands[0] == MoveTo(0, 0)
        assert commands[2] == LineTo(4, 3)

    def test_end_origin(self) -> None:
        """Test an origin at the far corner."""
        commands = rect_commands(RectPrimitive(4, 3, Origin.END, Origin.END))
        assert commands[0] == MoveTo(-4, -3)
        assert commands[2] == LineTo(0, 0)

    def test_keeps_placement_and_style(self) -> None:
        """Test that transform and style survive normalization."""
        style = ShapeStyle(fill="blue")
        rect = RectPrimitive(1, 1, identity="r", transform=Offset(5, 5), style=style)
        shape = normalize(rect)
        assert shape.identity == "r"
        assert shape.transform == Offset(5, 5)
        assert shape.style == style


class TestPointList:
    """Tests for polygon and polyline normalization."""

    def test_polygon_is_closed(self) -> None:
        """Test that a polygon ends with ClosePath."""
        commands = point_list_commands(PointListPrimitive(((0, 0), (10, 0), (5, 8))))
        assert commands == (MoveTo(0, 0), LineTo(10, 0), LineTo(5, 8), ClosePath())

    def test_polyline_is_open(self) -> None:
        """Test that a polyline has no ClosePath."""
        commands = point_list_commands(PointListPrimitive(((0, 0), (10, 0)), closed=False))
        assert commands == (MoveTo(0, 0), LineTo(10, 0))

    def test_empty_point_list(self) -> None:
        """Test that no points give no commands."""
        assert point_list_commands(PointListPrimitive(())) == ()


class TestNormalize:
    """Tests for normalize and normalize_all."""

    def test_path_passes_through(self) -> None:
        """Test that path commands are kept as given."""
        commands = (MoveTo(0, 0), CubicTo(1, 1, 2, 2, 3, 0), ClosePath())
        shape = normalize(PathPrimitive(commands, identity="p"))
        assert shape.commands == commands

    def test_host_shape_passes_through(self) -> None:
        """Test that HostShapes are returned unchanged."""
        shape = HostShape("h", (MoveTo(0, 0),))
        assert normalize(shape) is shape

    def test_unsupported_kind(self) -> None:
        """Test that unknown primitives raise UnsupportedShapeError."""
        with pytest.raises(UnsupportedShapeError) as exc_info:
            normalize(Ellipse(1, 2))
        assert exc_info.value.kind == "Ellipse"

    def test_unsupported_kind_attribute(self) -> None:
        """Test that a declared kind is reported."""

        @dataclass
        class Opaque:
            kind: str = "text"

        with pytest.raises(UnsupportedShapeError, match="'text'"):
            normalize(Opaque())

    def test_normalize_all_skips(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test that unsupported primitives are skipped and logged."""
        items = [RectPrimitive(1, 1, identity="a"), Ellipse(1, 1), RectPrimitive(2, 2, identity="b")]
        with caplog.at_level(logging.WARNING, logger="curvebridge.core.normalizer"):
            shapes = normalize_all(items)
        assert [s.identity for s in shapes] == ["a", "b"]
        assert "Skipping shape" in caplog.text

    def test_normalize_all_reports_skips(self) -> None:
        """Test that each skipped primitive is handed to the callback."""
        skipped = []
        ellipse = Ellipse(1, 1)
        shapes = normalize_all(
            [ellipse, RectPrimitive(1, 1, identity="a")],
            on_skip=lambda item, error: skipped.append((item, type(error))),
        )
        assert [s.identity for s in shapes] == ["a"]
        assert skipped == [(ellipse, UnsupportedShapeError)]

    def test_normalize_all_strict(self) -> None:
        """Test that strict mode aborts on the first unsupported primitive."""
        with pytest.raises(UnsupportedShapeError):
            normalize_all([RectPrimitive(1, 1), Ellipse(1, 1)], skip_unsupported=False)
