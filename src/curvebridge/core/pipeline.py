"""Boolean combine pipeline.

Runs the full flow for a selection of host shapes:

    normalize -> import (per shape) -> combine (fold) -> export

and returns a new host-placeable shape. The engine scope is passed in by
the caller; when it is omitted a private scope is used and torn down
afterwards.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass

from fontTools.misc.transform import Transform

from curvebridge.config import CurveBridgeSettings, get_default_settings
from curvebridge.core.combiner import combine_all
from curvebridge.core.engine import BooleanOperation, EngineScope
from curvebridge.core.exporter import export_path
from curvebridge.core.importer import import_path
from curvebridge.core.normalizer import normalize_all
from curvebridge.core.transform import (
    compute_backing_size,
    compute_shared_view_matrix,
    object_local_to_shared,
    translation_transform,
)
from curvebridge.domain import BoundingBox, EngineCurve, HostShape, PathCommand, ShapeStyle
from curvebridge.exceptions import CombineError, MalformedPathWarning, UnsupportedShapeError
from curvebridge.utils import OperationLogger


@dataclass(frozen=True)
class CombinedShape:
    """Result of a boolean combine, ready to be placed in the host.

    Attributes:
        commands: Path commands centered on the local origin
        offset_x: Shared-space x of the local origin
        offset_y: Shared-space y of the local origin
        style: Style copied from the first source shape
        bounds: Shared-space bounds of the result
        source_ids: Identities of the shapes that were combined
    """

    commands: tuple[PathCommand, ...]
    offset_x: float
    offset_y: float
    style: ShapeStyle
    bounds: BoundingBox
    source_ids: tuple[str, ...]

    @property
    def transform(self) -> Transform:
        """Placement of the result: identity-scaled translation to the offset."""
        return translation_transform(self.offset_x, self.offset_y)

    def to_host_shape(self, identity: str) -> HostShape:
        return HostShape(identity, self.commands, self.transform, self.style)


def boolean_combine(
    shapes: Sequence[object],
    scope: EngineScope | None = None,
    operation: BooleanOperation = BooleanOperation.UNION,
    settings: CurveBridgeSettings | None = None,
    operation_logger: OperationLogger | None = None,
) -> CombinedShape | None:
    """Combine host shapes into one new shape.

    Args:
        shapes: HostShapes or primitives in fold order; the first one
            provides the result's style
        scope: Engine scope to work in (a private one if None)
        operation: Boolean operation to fold with
        settings: Settings (defaults if None)
        operation_logger: Logger collecting statistics (new one if None)

    Returns:
        The combined shape, or None if fewer than two shapes could be
        imported or the result is empty

    Raises:
        CombineError: If the engine fails to combine a pair of curves
    """
    settings = settings or get_default_settings()
    op_logger = operation_logger or OperationLogger()

    if len(shapes) < 2:
        op_logger.log_start(len(shapes), BooleanOperation(operation).value)
        return None

    if scope is None:
        with EngineScope(settings.geometry) as private_scope:
            return boolean_combine(shapes, private_scope, operation, settings, op_logger)

    op_logger.log_start(len(shapes), BooleanOperation(operation).value)
    op_logger.stats.start_time = time.time()

    view = settings.view
    scope.sync_view(
        compute_shared_view_matrix(view.view_transform, view.device_pixel_scale),
        compute_backing_size(view.width, view.height, view.device_pixel_scale),
    )

    def skipped(item: object, error: UnsupportedShapeError) -> None:
        op_logger.log_shape_skipped(getattr(item, "identity", "") or "?", str(error))

    host_shapes: list[HostShape] = []
    curves: list[EngineCurve] = []
    issues: list[MalformedPathWarning] = []
    for shape in normalize_all(shapes, on_skip=skipped):
        curve = import_path(shape, object_local_to_shared(shape), scope, issues)
        if curve is None:
            op_logger.log_shape_skipped(shape.identity, "empty path")
            continue

        host_shapes.append(shape)
        curves.append(curve)
        op_logger.log_shape_imported(shape.identity, len(curve.subpaths), curve.anchor_count())

    op_logger.log_malformed(len(issues))

    if len(curves) < 2:
        for curve in curves:
            scope.release(curve)
        op_logger.log_nothing_to_combine(len(curves))
        return None

    try:
        combined = combine_all(curves, scope, operation)
    except CombineError as e:
        op_logger.log_error(e)
        raise
    op_logger.log_combined(max(0, len(curves) - 1))

    exported = export_path(combined, scope)
    op_logger.stats.end_time = time.time()
    if exported is None:
        op_logger.log_shape_skipped("result", "empty result")
        return None

    op_logger.log_complete(
        exported.subpath_count,
        (exported.offset_x, exported.offset_y),
        op_logger.stats.duration_ms,
    )

    return CombinedShape(
        commands=exported.commands,
        offset_x=exported.offset_x,
        offset_y=exported.offset_y,
        style=host_shapes[0].style,
        bounds=exported.bounds,
        source_ids=tuple(s.identity for s in host_shapes),
    )
