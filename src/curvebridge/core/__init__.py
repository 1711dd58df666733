"""Core algorithms for curvebridge.

This module contains the components of the boolean combine:

- Transform bridge (shared view matrix, object-local to shared transforms)
- Shape normalization (rectangles and point lists to path commands)
- Path import (host commands to anchor/handle curves)
- Geometry engine scope (curve ownership, boolean operations)
- Boolean combiner (left fold with per-step release)
- Path export (curves to centered host commands plus placement offset)

Key functions:
- compute_shared_view_matrix: Engine view matrix for a host view
- object_local_to_shared: Placement transform of a host shape
- normalize: Convert a primitive to a HostShape
- import_path: Convert a HostShape to an EngineCurve
- union / combine_all: Fold curves with a boolean operation
- export_path: Convert an EngineCurve to centered host commands
- boolean_combine: Run the whole flow

Key classes:
- EngineScope: Owner of engine curves
- BooleanOperation: Supported boolean operations
- ExportedPath, CombinedShape: Results
"""

from curvebridge.core.combiner import combine_all, union
from curvebridge.core.engine import BooleanOperation, EngineScope
from curvebridge.core.exporter import ExportedPath, export_path
from curvebridge.core.importer import import_path
from curvebridge.core.normalizer import normalize, normalize_all
from curvebridge.core.pipeline import CombinedShape, boolean_combine
from curvebridge.core.transform import (
    compute_backing_size,
    compute_shared_view_matrix,
    object_local_to_shared,
    placement_transform,
    translation_transform,
)

__all__ = [
    # Engine
    "BooleanOperation",
    "EngineScope",
    # Results
    "CombinedShape",
    "ExportedPath",
    # Pipeline steps
    "boolean_combine",
    "combine_all",
    "compute_backing_size",
    "compute_shared_view_matrix",
    "export_path",
    "import_path",
    "normalize",
    "normalize_all",
    "object_local_to_shared",
    "placement_transform",
    "translation_transform",
    "union",
]
