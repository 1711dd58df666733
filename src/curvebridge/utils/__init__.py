"""Utility functions for curvebridge.

This module provides utility functions including:

- Logging setup and configuration
- Operation statistics collection
"""

from curvebridge.utils.logging import (
    OperationLogger,
    OperationStats,
    configure_logging,
)

__all__ = [
    "OperationLogger",
    "OperationStats",
    "configure_logging",
]
