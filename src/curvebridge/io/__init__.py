"""Scene and path I/O layer for curvebridge.

This module handles reading and writing host data: JSON scene files, SVG
path data and SVG documents. Path data goes through fontTools pens so that
every SVG path feature (relative commands, shorthands, arcs) is resolved
to the host command model.

Key responsibilities:
- Load and save JSON scenes, keeping untouched objects as they were
- Interpret scene objects as primitives
- Replace combined objects with the result at the right draw-order position
- Parse and format SVG path data

Key classes:
- Scene: Objects in draw order plus view state
- SceneReader: Load scenes
- SceneWriter: Save scenes
"""

from curvebridge.io.pens import commands_from_recording, draw_commands
from curvebridge.io.scene import (
    Scene,
    SceneReader,
    SceneWriter,
    UnsupportedObject,
    result_path_data,
)
from curvebridge.io.svg import format_path_data, parse_path_data, write_svg_document

__all__ = [
    "Scene",
    "SceneReader",
    "SceneWriter",
    "UnsupportedObject",
    "commands_from_recording",
    "draw_commands",
    "format_path_data",
    "parse_path_data",
    "result_path_data",
    "write_svg_document",
]
