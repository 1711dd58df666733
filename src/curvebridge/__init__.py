"""Curvebridge - Curve-preserving boolean combine for host vector shapes.

Curvebridge converts host drawing shapes (path commands in object-local
coordinates plus an affine placement) into anchor/handle curves, folds them
through a boolean geometry engine, and exports the result as host path
commands recentered on their bounding-box centroid.

Example:
    $ curvebridge scene.json --select a --select b

This will replace objects ``a`` and ``b`` in scene.json with their union,
placed at the first selected object's draw-order position.
"""

__version__ = "0.1.0"
__author__ = "Curvebridge contributors"

__all__ = ["__author__", "__version__"]
