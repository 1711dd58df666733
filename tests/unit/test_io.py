"""Unit tests for the scene and path I/O layer.

Tests for SceneReader, SceneWriter, Scene and SVG path conversion.
"""

import json
from pathlib import Path

import pytest
from fontTools.misc.transform import Offset
from fontTools.pens.recordingPen import RecordingPen

from curvebridge.core import CombinedShape
from curvebridge.domain import (
    BoundingBox,
    ClosePath,
    CubicTo,
    LineTo,
    MoveTo,
    Origin,
    PathPrimitive,
    PointListPrimitive,
    QuadTo,
    RectPrimitive,
    ShapeStyle,
)
from curvebridge.exceptions import PathDataError, SceneFormatError, SceneLoadError, SceneSaveError
from curvebridge.io import (
    Scene,
    SceneReader,
    SceneWriter,
    UnsupportedObject,
    commands_from_recording,
    draw_commands,
    format_path_data,
    parse_path_data,
    write_svg_document,
)


@pytest.fixture
def scene_data() -> dict:
    return {
        "viewportTransform": [2, 0, 0, 2, 10, 20],
        "devicePixelRatio": 1.5,
        "width": 400,
        "height": 300,
        "objects": [
            {"id": "bg", "type": "image", "src": "paper.png"},
            {
                "id": "a",
                "type": "rect",
                "width": 20,
                "height": 10,
                "originX": "center",
                "originY": "center",
                "placement": {"left": 50, "top": 60},
                "fill": "#ff0000",
            },
            {"id": "b", "type": "polygon", "points": [[0, 0], [10, 0], {"x": 5, "y": 8}]},
            {"id": "c", "type": "polyline", "points": [[0, 0], [10, 0]]},
            {"id": "d", "type": "path", "path": "M0 0 l10 0 0 10z", "transform": [1, 0, 0, 1, 5, 5]},
            {"id": "e", "type": "path", "path": [["M", 0, 0], ["Q", 5, 5, 10, 0], ["Z"]]},
        ],
    }


@pytest.fixture
def scene_file(tmp_path: Path, scene_data: dict) -> Path:
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene_data), encoding="utf-8")
    return path


def make_result() -> CombinedShape:
    return CombinedShape(
        commands=(MoveTo(-5, -5), LineTo(5, -5), LineTo(5, 5), ClosePath()),
        offset_x=7.5,
        offset_y=7.5,
        style=ShapeStyle(fill="#00ff00"),
        bounds=BoundingBox(2.5, 2.5, 12.5, 12.5),
        source_ids=("a", "b"),
    )


class TestPathData:
    """Tests for SVG path data conversion."""

    def test_parse_absolute(self) -> None:
        """Test absolute commands."""
        commands = parse_path_data("M0 0 L10 0 C10 5 5 10 0 10 Z")
        assert commands == [
            MoveTo(0, 0),
            LineTo(10, 0),
            CubicTo(10, 5, 5, 10, 0, 10),
            LineTo(0, 0),
            ClosePath(),
        ]

    def test_parse_relative_and_shorthand(self) -> None:
        """Test that relative and H/V commands are resolved.

        Closing a subpath away from its start draws the closing line
        explicitly.
        """
        commands = parse_path_data("m5 5 h10 v10 h-10 z")
        assert commands == [
            MoveTo(5, 5),
            LineTo(15, 5),
            LineTo(15, 15),
            LineTo(5, 15),
            LineTo(5, 5),
            ClosePath(),
        ]

    def test_parse_quadratic(self) -> None:
        """Test that quadratic segments stay quadratic."""
        commands = parse_path_data("M0 0 Q5 5 10 0")
        assert commands == [MoveTo(0, 0), QuadTo(5, 5, 10, 0)]

    def test_parse_arc_becomes_cubics(self) -> None:
        """Test that arcs are converted to cubic segments."""
        commands = parse_path_data("M0 0 A10 10 0 0 1 20 0")
        assert isinstance(commands[0], MoveTo)
        assert all(isinstance(c, CubicTo) for c in commands[1:])
        assert commands[-1].x == pytest.approx(20)
        assert commands[-1].y == pytest.approx(0)

    def test_parse_invalid(self) -> None:
        """Test that malformed data raises PathDataError."""
        with pytest.raises(PathDataError):
            parse_path_data("M0 0 L10")

    def test_format(self) -> None:
        """Test compact formatting."""
        data = format_path_data(
            [MoveTo(0, 0), LineTo(10, 0), CubicTo(10, 5, 5, 10, 0.125, 10), ClosePath()]
        )
        assert data.startswith("M0 0")
        assert data.endswith("Z")
        assert "C10 5 5 10 0.125 10" in data

    def test_format_then_parse(self) -> None:
        """Test that formatted data parses back to the same geometry."""
        commands = [MoveTo(1, 2), LineTo(7, 3), CubicTo(8, 4, 9, 9, 2, 8), ClosePath()]
        assert parse_path_data(format_path_data(commands)) == [*commands[:-1], LineTo(1, 2), ClosePath()]


class TestPens:
    """Tests for fontTools pen conversion."""

    def test_recording_roundtrip(self) -> None:
        """Test drawing onto a RecordingPen and reading it back."""
        commands = [MoveTo(0, 0), LineTo(10, 0), QuadTo(10, 10, 0, 10), ClosePath()]
        pen = RecordingPen()
        draw_commands(commands, pen)
        assert commands_from_recording(pen.value) == commands

    def test_open_contour_ended(self) -> None:
        """Test that an open contour is terminated with endPath."""
        pen = RecordingPen()
        draw_commands([MoveTo(0, 0), LineTo(1, 1)], pen)
        assert pen.value[-1] == ("endPath", ())

    def test_continuation_after_close(self) -> None:
        """Test that drawing after ClosePath restarts at the subpath start."""
        pen = RecordingPen()
        draw_commands([MoveTo(3, 3), LineTo(5, 3), ClosePath(), LineTo(3, 9)], pen)
        operators = [op for op, _ in pen.value]
        assert operators == ["moveTo", "lineTo", "closePath", "moveTo", "lineTo", "endPath"]
        assert pen.value[3] == ("moveTo", ((3, 3),))

    def test_multi_point_quadratic(self) -> None:
        """Test that implied on-curve points are decomposed."""
        recording = [("moveTo", ((0, 0),)), ("qCurveTo", ((2, 2), (6, 2), (8, 0))), ("closePath", ())]
        commands = commands_from_recording(recording)
        assert commands == [MoveTo(0, 0), QuadTo(2, 2, 4, 2), QuadTo(6, 2, 8, 0), ClosePath()]

    def test_all_off_curve_quadratic(self) -> None:
        """Test a closed quadratic contour without on-curve points."""
        recording = [("qCurveTo", ((0, 0), (10, 0), (10, 10), (0, 10), None)), ("closePath", ())]
        commands = commands_from_recording(recording)
        assert commands[0] == MoveTo(0, 5)
        assert sum(1 for c in commands if isinstance(c, QuadTo)) == 4
        assert commands[-2] == QuadTo(0, 10, 0, 5)


class TestScene:
    """Tests for Scene interpretation and editing."""

    def test_view_config(self, scene_data: dict) -> None:
        """Test that the host view is read from the scene."""
        view = Scene.from_dict(scene_data).view_config()
        assert view.view_transform == (2, 0, 0, 2, 10, 20)
        assert view.device_pixel_scale == 1.5
        assert (view.width, view.height) == (400, 300)

    def test_primitives(self, scene_data: dict) -> None:
        """Test every object kind."""
        bg, a, b, c, d, e = Scene.from_dict(scene_data).select()
        assert bg == UnsupportedObject("image", "bg")

        assert isinstance(a, RectPrimitive)
        assert (a.origin_x, a.origin_y) == (Origin.CENTER, Origin.CENTER)
        assert tuple(a.transform) == (1, 0, 0, 1, 50, 60)
        assert a.style.fill == "#ff0000"

        assert isinstance(b, PointListPrimitive) and b.closed
        assert b.points[2] == (5, 8)
        assert isinstance(c, PointListPrimitive) and not c.closed

        assert isinstance(d, PathPrimitive)
        assert d.transform == Offset(5, 5)
        assert d.commands[2] == LineTo(10, 10)

        assert isinstance(e, PathPrimitive)
        assert e.commands[1] == QuadTo(5, 5, 10, 0)

    def test_select_in_given_order(self, scene_data: dict) -> None:
        """Test that selection keeps the caller's order."""
        selected = Scene.from_dict(scene_data).select(["d", "a"])
        assert [p.identity for p in selected] == ["d", "a"]

    def test_select_unknown(self, scene_data: dict) -> None:
        """Test that unknown ids raise KeyError."""
        with pytest.raises(KeyError):
            Scene.from_dict(scene_data).select(["zzz"])

    def test_invalid_geometry(self) -> None:
        """Test that broken objects raise SceneFormatError."""
        scene = Scene.from_dict({"objects": [{"id": "r", "type": "rect", "width": 5}]})
        with pytest.raises(SceneFormatError, match="object 'r'"):
            scene.select()

    def test_duplicate_ids(self) -> None:
        """Test that ids must be unique."""
        with pytest.raises(SceneFormatError, match="duplicate"):
            Scene.from_dict({"objects": [{"id": "x"}, {"id": "x"}]})

    def test_missing_id(self) -> None:
        """Test that every object needs an id."""
        with pytest.raises(SceneFormatError, match="no 'id'"):
            Scene.from_dict({"objects": [{"type": "rect"}]})

    def test_replace_at_first_selected_position(self, scene_data: dict) -> None:
        """Test that the result takes the first selected object's slot."""
        scene = Scene.from_dict(scene_data)
        inserted = scene.replace_with_result(["c", "a"], make_result())
        assert scene.ids == ["bg", "b", "c-combined", "d", "e"]
        assert inserted["type"] == "path"
        assert inserted["transform"] == [1, 0, 0, 1, 7.5, 7.5]
        assert inserted["path"][0] == ["M", -5, -5]
        assert inserted["fill"] == "#00ff00"

    def test_replace_first_in_draw_order(self, scene_data: dict) -> None:
        """Test insertion when the first selected object is drawn first."""
        scene = Scene.from_dict(scene_data)
        scene.replace_with_result(["a", "d"], make_result(), new_id="merged")
        assert scene.ids == ["bg", "merged", "b", "c", "e"]

    def test_replaced_object_reads_back(self, scene_data: dict) -> None:
        """Test that the inserted object is a valid path object."""
        scene = Scene.from_dict(scene_data)
        scene.replace_with_result(["a", "b"], make_result(), new_id="m")
        (primitive,) = scene.select(["m"])
        assert isinstance(primitive, PathPrimitive)
        assert primitive.transform == Offset(7.5, 7.5)
        assert primitive.commands == make_result().commands

    def test_new_id_is_unique(self) -> None:
        """Test that a derived id does not collide."""
        scene = Scene.from_dict({"objects": [{"id": "a"}, {"id": "b"}, {"id": "a-combined"}]})
        inserted = scene.replace_with_result(["a", "b"], make_result())
        assert inserted["id"] == "a-combined-2"


class TestSceneReader:
    """Tests for SceneReader class."""

    def test_load(self, scene_file: Path) -> None:
        """Test loading a scene file."""
        reader = SceneReader(scene_file)
        scene = reader.load()
        assert len(scene.objects) == 6
        assert scene.source == str(scene_file)

    def test_context_manager(self, scene_file: Path) -> None:
        """Test loading through the context manager."""
        with SceneReader(scene_file) as reader:
            kinds = [type(p).__name__ for p in reader.iter_objects()]
        assert kinds[0] == "UnsupportedObject"

    def test_scene_before_load(self) -> None:
        """Test accessing the scene before loading raises RuntimeError."""
        reader = SceneReader(Path("scene.json"))
        with pytest.raises(RuntimeError, match="Scene not loaded"):
            _ = reader.scene

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test loading a nonexistent file."""
        with pytest.raises(SceneLoadError, match="file not found"):
            SceneReader(tmp_path / "nope.json").load()

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test loading a file that is not JSON."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SceneLoadError):
            SceneReader(path).load()

    def test_not_a_scene(self, tmp_path: Path) -> None:
        """Test loading JSON that is not a scene."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(SceneFormatError):
            SceneReader(path).load()


class TestSceneWriter:
    """Tests for SceneWriter class."""

    def test_save_and_reload(self, tmp_path: Path, scene_data: dict) -> None:
        """Test that unknown objects and fields survive a save."""
        out = tmp_path / "out.json"
        SceneWriter(out).save(Scene.from_dict(scene_data))
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["objects"][0] == {"id": "bg", "type": "image", "src": "paper.png"}
        assert data["devicePixelRatio"] == 1.5

    def test_save_to_missing_directory(self, tmp_path: Path) -> None:
        """Test that write failures raise SceneSaveError."""
        with pytest.raises(SceneSaveError):
            SceneWriter(tmp_path / "missing" / "out.json").save(Scene())

    def test_combined_path(self) -> None:
        """Test default output naming."""
        assert SceneWriter.get_combined_path(Path("dir/scene.json")) == Path("dir/scene-combined.json")


class TestSvgDocument:
    """Tests for SVG document output."""

    def test_write(self, tmp_path: Path) -> None:
        """Test that the document contains the placed path."""
        out = tmp_path / "result.svg"
        result = make_result()
        write_svg_document(result.commands, out, offset=(7.5, 7.5), style=result.style, bounds=result.bounds)
        text = out.read_text(encoding="utf-8")
        assert "<svg" in text
        assert 'fill="#00ff00"' in text
        assert "translate(7.5 7.5)" in text
        assert format_path_data(result.commands) in text
