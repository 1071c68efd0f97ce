"""
Core utilities shared by every layer of the gpio tool.

Public API:
    - GpioToolError: Base class for fatal command errors
    - UsageError, HostError, DomainError: The three error kinds
    - describe_os_error: strerror text for an OSError

Usage:
    from core import UsageError

    if len(args) != 2:
        raise UsageError("Usage: gpio mode pin mode")
"""

from core.errors import (
    DomainError,
    GpioToolError,
    HostError,
    UsageError,
    describe_os_error,
)

__all__ = [
    "DomainError",
    "GpioToolError",
    "HostError",
    "UsageError",
    "describe_os_error",
]
