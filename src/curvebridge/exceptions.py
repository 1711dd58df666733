"""Exception hierarchy for Curvebridge."""


class CurveBridgeError(Exception):
    """Base exception for all Curvebridge errors."""

    pass


class SceneError(CurveBridgeError):
    """Errors related to scene loading or saving."""

    pass


class SceneLoadError(SceneError):
    """Error loading a scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load scene '{path}': {reason}")


class SceneSaveError(SceneError):
    """Error saving a scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save scene '{path}': {reason}")


class SceneFormatError(SceneError):
    """Scene object that cannot be interpreted."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid scene format '{path}': {details}")


class ShapeError(CurveBridgeError):
    """Errors related to host shapes."""

    pass


class UnsupportedShapeError(ShapeError):
    """Primitive that cannot be converted to path commands."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unsupported shape type for boolean conversion: '{kind}'")


class PathDataError(ShapeError):
    """SVG path data that cannot be parsed."""

    def __init__(self, data: str, reason: str) -> None:
        self.data = data
        self.reason = reason
        super().__init__(f"Invalid path data '{data[:40]}': {reason}")


class EngineError(CurveBridgeError):
    """Errors raised by the geometry engine scope."""

    pass


class CombineError(EngineError):
    """The engine failed to combine a pair of curves."""

    def __init__(self, left_id: int, right_id: int, reason: str) -> None:
        self.left_id = left_id
        self.right_id = right_id
        self.reason = reason
        super().__init__(f"Boolean combine failed for curves {left_id} and {right_id}: {reason}")


class CurveReleasedError(EngineError):
    """A curve was used after being released."""

    def __init__(self, curve_id: int) -> None:
        self.curve_id = curve_id
        super().__init__(f"Curve {curve_id} has already been released")


class ForeignCurveError(EngineError):
    """A curve owned by another engine scope was passed in."""

    def __init__(self, curve_id: int) -> None:
        self.curve_id = curve_id
        super().__init__(f"Curve {curve_id} does not belong to this engine scope")


class MalformedPathWarning(UserWarning):
    """A path command had no current point and was degraded to a line.

    Not raised; instances are recorded on import reports and logged.
    """

    def __init__(self, shape_id: str, index: int, command: str) -> None:
        self.shape_id = shape_id
        self.index = index
        self.command = command
        super().__init__(
            f"Shape '{shape_id}': '{command}' at command {index} has no current point, "
            "treated as a line"
        )
