"""Boolean combiner: folds engine curves into one.

The fold owns every curve it is given. Each step combines the accumulator
with the next curve and releases both operands at once, so an N-way
combine keeps a constant number of curves alive.
"""

import logging
from collections.abc import Sequence

from curvebridge.core.engine import BooleanOperation, EngineScope
from curvebridge.domain import EngineCurve
from curvebridge.exceptions import CombineError

logger = logging.getLogger(__name__)


def combine_all(
    curves: Sequence[EngineCurve],
    scope: EngineScope,
    operation: BooleanOperation = BooleanOperation.UNION,
) -> EngineCurve | None:
    """Fold curves left to right with a boolean operation.

    Args:
        curves: Curves owned by the scope, in fold order
        scope: Engine scope providing the operation
        operation: Boolean operation applied at every step

    Returns:
        The combined curve, the sole input for a single curve (no
        operation is performed), or None for no input

    Raises:
        CombineError: If any step fails. The fold aborts and every curve
            it still owns is released; no partial result is returned.
    """
    if not curves:
        return None

    acc = curves[0]
    for position in range(1, len(curves)):
        following = curves[position]
        try:
            merged = scope.combine(acc, following, operation)
        except CombineError as e:
            logger.error(
                "Combine step %d of %d failed: %s", position, len(curves) - 1, e.reason
            )
            scope.release(acc)
            for pending in curves[position:]:
                scope.release(pending)
            raise

        scope.release(acc)
        scope.release(following)
        acc = merged
        logger.debug("Combine step %d done, live curves: %d", position, scope.live_count)

    return acc


def union(curves: Sequence[EngineCurve], scope: EngineScope) -> EngineCurve | None:
    """Unite curves left to right. See combine_all."""
    return combine_all(curves, scope, BooleanOperation.UNION)
