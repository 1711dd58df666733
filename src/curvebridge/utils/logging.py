"""Logging utilities for Curvebridge."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

# Handlers installed by the last configure_logging call
_installed_handlers: list[logging.Handler] = []


@dataclass
class OperationStats:
    """Statistics from one boolean combine."""

    shapes_received: int = 0
    shapes_imported: int = 0
    shapes_skipped: int = 0
    combine_steps: int = 0
    malformed_commands: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_ms(self) -> float:
        """Calculate operation duration in milliseconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time) * 1000
        return 0.0


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    while _installed_handlers:
        handler = _installed_handlers.pop()
        root_logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)
        _installed_handlers.append(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("curvebridge")
    logger.debug("Logging initialized", log_file=str(log_file) if log_file else None)

    return logger


class OperationLogger:
    """Logger for tracking one boolean combine and its statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger("curvebridge")
        self._stats = OperationStats()

    def log_start(self, shape_count: int, operation: str) -> None:
        """Log start of a combine."""
        self._logger.debug("Boolean combine started", shapes=shape_count, operation=operation)
        self._stats.shapes_received = shape_count

    def log_shape_imported(self, shape_id: str, subpaths: int, anchors: int) -> None:
        """Log a shape converted to an engine curve."""
        self._logger.debug("Shape imported", shape=shape_id, subpaths=subpaths, anchors=anchors)
        self._stats.shapes_imported += 1

    def log_shape_skipped(self, shape_id: str, reason: str) -> None:
        """Log a shape left out of the combine."""
        self._logger.info("Shape skipped", shape=shape_id, reason=reason)
        self._stats.shapes_skipped += 1

    def log_malformed(self, count: int) -> None:
        """Count malformed commands repaired during import."""
        self._stats.malformed_commands += count

    def log_nothing_to_combine(self, usable: int) -> None:
        """Log a combine left with fewer than two usable curves."""
        self._logger.info("Nothing to combine", usable_shapes=usable)

    def log_combined(self, steps: int) -> None:
        """Log a completed fold."""
        self._logger.debug("Curves combined", steps=steps)
        self._stats.combine_steps += steps

    def log_error(self, error: Exception) -> None:
        """Log a failed combine."""
        self._logger.error(
            "Boolean combine failed",
            error=str(error),
            error_type=type(error).__name__,
        )
        self._stats.errors.append((type(error).__name__, str(error)))

    def log_complete(self, subpaths: int, offset: tuple[float, float], duration_ms: float) -> None:
        """Log a successful combine."""
        self._logger.info(
            "Boolean combine complete",
            subpaths=subpaths,
            offset_x=round(offset[0], 4),
            offset_y=round(offset[1], 4),
            duration_ms=round(duration_ms, 2),
        )

    @property
    def stats(self) -> OperationStats:
        """Get current operation statistics."""
        return self._stats
