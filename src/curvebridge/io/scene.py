"""JSON scene files.

A scene is a host canvas serialized as JSON: a list of objects in draw
order plus the host view state. Objects keep every field they were loaded
with, so objects the combine does not touch are written back unchanged.

Example scene::

    {
      "viewportTransform": [1, 0, 0, 1, 0, 0],
      "devicePixelRatio": 2,
      "width": 800,
      "height": 600,
      "objects": [
        {"id": "a", "type": "rect", "width": 10, "height": 10,
         "placement": {"left": 0, "top": 0}, "fill": "#f00"},
        {"id": "b", "type": "path", "path": "M5 5 h10 v10 h-10 Z"}
      ]
    }
"""

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fontTools.misc.transform import Identity, Transform

from curvebridge.config import ViewConfig
from curvebridge.core.pipeline import CombinedShape
from curvebridge.core.transform import as_transform, placement_transform
from curvebridge.domain import (
    Origin,
    PathPrimitive,
    PointListPrimitive,
    Primitive,
    RectPrimitive,
    ShapeStyle,
    command_from_list,
    command_to_list,
)
from curvebridge.exceptions import PathDataError, SceneFormatError, SceneLoadError, SceneSaveError
from curvebridge.io.svg import format_path_data, parse_path_data

logger = logging.getLogger(__name__)

POINT_LIST_TYPES = {"polygon": True, "polyline": False}


@dataclass(frozen=True)
class UnsupportedObject:
    """Scene object with no path conversion (text, images, ...)."""

    kind: str
    identity: str


@dataclass
class Scene:
    """Objects of a host canvas in draw order, plus its view state.

    Attributes:
        objects: Raw object mappings, each with a unique "id"
        viewport_transform: Host view transform (a, b, c, d, tx, ty)
        device_pixel_ratio: Device pixels per host pixel
        width: View width in host pixels
        height: View height in host pixels
        source: File the scene was loaded from, if any
    """

    objects: list[dict[str, Any]] = field(default_factory=list)
    viewport_transform: tuple[float, ...] = (1.0, 0.0, 0.0, 1.0, 0.0, 0.0)
    device_pixel_ratio: float = 1.0
    width: float = 1.0
    height: float = 1.0
    source: str = "<scene>"

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "<scene>") -> "Scene":
        """Build a scene from its JSON mapping.

        Raises:
            SceneFormatError: If objects are missing ids or ids repeat
        """
        if not isinstance(data, dict):
            raise SceneFormatError(source, "top level must be an object")
        objects = data.get("objects", [])
        if not isinstance(objects, list):
            raise SceneFormatError(source, "'objects' must be a list")

        seen: set[str] = set()
        for position, obj in enumerate(objects):
            if not isinstance(obj, dict) or "id" not in obj:
                raise SceneFormatError(source, f"object {position} has no 'id'")
            identity = str(obj["id"])
            if identity in seen:
                raise SceneFormatError(source, f"duplicate object id '{identity}'")
            seen.add(identity)

        try:
            viewport = tuple(float(v) for v in data.get("viewportTransform", (1, 0, 0, 1, 0, 0)))
            as_transform(viewport)
            return cls(
                objects=[dict(obj) for obj in objects],
                viewport_transform=viewport,
                device_pixel_ratio=float(data.get("devicePixelRatio", 1.0)),
                width=float(data.get("width", 1.0)),
                height=float(data.get("height", 1.0)),
                source=source,
            )
        except (TypeError, ValueError) as e:
            raise SceneFormatError(source, str(e)) from e

    def to_dict(self) -> dict[str, Any]:
        return {
            "viewportTransform": list(self.viewport_transform),
            "devicePixelRatio": self.device_pixel_ratio,
            "width": self.width,
            "height": self.height,
            "objects": self.objects,
        }

    @property
    def ids(self) -> list[str]:
        return [str(obj["id"]) for obj in self.objects]

    def index_of(self, identity: str) -> int:
        """Draw-order index of an object.

        Raises:
            KeyError: If no object has this id
        """
        for index, obj in enumerate(self.objects):
            if str(obj["id"]) == identity:
                return index
        raise KeyError(identity)

    def view_config(self) -> ViewConfig:
        """Host view settings of this scene."""
        return ViewConfig(
            view_transform=tuple(self.viewport_transform),
            device_pixel_scale=self.device_pixel_ratio,
            width=self.width,
            height=self.height,
        )

    def primitive(self, obj: dict[str, Any]) -> Primitive | UnsupportedObject:
        """Interpret one scene object.

        Raises:
            SceneFormatError: If a supported object has invalid geometry
        """
        kind = str(obj.get("type", ""))
        identity = str(obj["id"])
        try:
            if kind == "rect":
                return RectPrimitive(
                    width=float(obj["width"]),
                    height=float(obj["height"]),
                    origin_x=Origin.parse(obj.get("originX", "start")),
                    origin_y=Origin.parse(obj.get("originY", "start")),
                    identity=identity,
                    transform=_object_transform(obj),
                    style=ShapeStyle.from_dict(obj),
                )
            if kind in POINT_LIST_TYPES:
                return PointListPrimitive(
                    points=tuple(_point(p) for p in obj["points"]),
                    closed=POINT_LIST_TYPES[kind],
                    identity=identity,
                    transform=_object_transform(obj),
                    style=ShapeStyle.from_dict(obj),
                )
            if kind == "path":
                return PathPrimitive(
                    commands=tuple(_path_commands(obj["path"])),
                    identity=identity,
                    transform=_object_transform(obj),
                    style=ShapeStyle.from_dict(obj),
                )
        except (KeyError, TypeError, ValueError, PathDataError) as e:
            raise SceneFormatError(self.source, f"object '{identity}': {e}") from e
        return UnsupportedObject(kind or "unknown", identity)

    def select(self, ids: Iterable[str] | None = None) -> list[Primitive | UnsupportedObject]:
        """Interpret the given objects, in the order given.

        Args:
            ids: Object ids (all objects in draw order if None)

        Raises:
            KeyError: If an id is not in the scene
        """
        if ids is None:
            return [self.primitive(obj) for obj in self.objects]
        return [self.primitive(self.objects[self.index_of(i)]) for i in ids]

    def replace_with_result(
        self,
        selected_ids: Iterable[str],
        result: CombinedShape,
        new_id: str | None = None,
    ) -> dict[str, Any]:
        """Replace the selected objects with a boolean result.

        The result takes the draw-order position of the first selected
        object.

        Args:
            selected_ids: Ids of the objects consumed by the combine
            result: Combined shape to insert
            new_id: Id of the new object (derived from the first id if None)

        Returns:
            The inserted object

        Raises:
            KeyError: If an id is not in the scene
        """
        selected = list(dict.fromkeys(selected_ids))
        if not selected:
            raise KeyError("no objects selected")
        indices = [self.index_of(i) for i in selected]
        first = indices[0]
        position = first - sum(1 for i in indices if i < first)

        identity = new_id or self._unused_id(f"{selected[0]}-combined")
        obj: dict[str, Any] = {
            "id": identity,
            "type": "path",
            "path": [command_to_list(c) for c in result.commands],
            "transform": list(result.transform),
            **result.style.to_dict(),
        }

        removed = set(selected)
        self.objects = [o for o in self.objects if str(o["id"]) not in removed]
        self.objects.insert(position, obj)
        logger.debug("Replaced %d objects with '%s' at index %d", len(selected), identity, position)
        return obj

    def _unused_id(self, base: str) -> str:
        ids = set(self.ids)
        candidate = base
        suffix = 2
        while candidate in ids:
            candidate = f"{base}-{suffix}"
            suffix += 1
        return candidate


def _point(value: Any) -> tuple[float, float]:
    if isinstance(value, dict):
        return (float(value["x"]), float(value["y"]))
    x, y = value
    return (float(x), float(y))


def _path_commands(value: Any) -> list:
    """Path as SVG data or as a list of [letter, *coords] arrays."""
    if isinstance(value, str):
        return parse_path_data(value)
    return [command_from_list(list(item)) for item in value]


def _object_transform(obj: dict[str, Any]) -> Transform:
    if "transform" in obj:
        return as_transform(obj["transform"])
    placement = obj.get("placement")
    if placement is None:
        return Identity
    return placement_transform(
        left=float(placement.get("left", 0.0)),
        top=float(placement.get("top", 0.0)),
        scale_x=float(placement.get("scaleX", 1.0)),
        scale_y=float(placement.get("scaleY", 1.0)),
        angle=float(placement.get("angle", 0.0)),
        flip_x=bool(placement.get("flipX", False)),
        flip_y=bool(placement.get("flipY", False)),
    )


class SceneReader:
    """Loads JSON scene files.

    Example:
        with SceneReader(Path("scene.json")) as reader:
            for primitive in reader.scene.select():
                ...
    """

    def __init__(self, scene_path: Path) -> None:
        """Initialize the scene reader.

        Args:
            scene_path: Path to the JSON scene file
        """
        self._scene_path = scene_path
        self._scene: Scene | None = None

    def load(self) -> Scene:
        """Load the scene file.

        Raises:
            SceneLoadError: If the file is missing or is not valid JSON
            SceneFormatError: If the JSON does not describe a scene
        """
        if not self._scene_path.exists():
            raise SceneLoadError(str(self._scene_path), "file not found")

        try:
            with open(self._scene_path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SceneLoadError(str(self._scene_path), str(e)) from e

        self._scene = Scene.from_dict(data, source=str(self._scene_path))
        logger.debug("Loaded scene %s with %d objects", self._scene_path, len(self._scene.objects))
        return self._scene

    @property
    def scene(self) -> Scene:
        """Return the loaded scene.

        Raises:
            RuntimeError: If the scene has not been loaded yet
        """
        if self._scene is None:
            raise RuntimeError("Scene not loaded. Call load() first.")
        return self._scene

    def iter_objects(self) -> Iterator[Primitive | UnsupportedObject]:
        """Iterate over the scene's objects in draw order."""
        yield from self.scene.select()

    def close(self) -> None:
        self._scene = None

    def __enter__(self) -> "SceneReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


class SceneWriter:
    """Writes scenes back to JSON."""

    def __init__(self, output_path: Path, indent: int | None = 2) -> None:
        self._output_path = output_path
        self._indent = indent

    def save(self, scene: Scene) -> None:
        """Save a scene.

        Raises:
            SceneSaveError: If the file cannot be written
        """
        try:
            with open(self._output_path, "w", encoding="utf-8") as f:
                json.dump(scene.to_dict(), f, indent=self._indent)
                f.write("\n")
        except OSError as e:
            raise SceneSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_combined_path(input_path: Path) -> Path:
        """Generate the default output path for a scene.

        Converts: scene.json -> scene-combined.json
        """
        return input_path.parent / f"{input_path.stem}-combined{input_path.suffix}"


def result_path_data(result: CombinedShape) -> str:
    """SVG path data of a combined shape in its local coordinates."""
    return format_path_data(result.commands)
