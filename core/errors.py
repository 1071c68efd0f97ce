"""
Command Errors

Every failure the gpio tool reports ends the process with a message on
standard error. The three kinds below mirror the three ways a command can
fail; the dispatcher catches GpioToolError at the top and turns it into
an exit status.

    UsageError   - wrong argument count or shape (message is the usage line)
    HostError    - the host refused something (privilege, missing file,
                   missing executable); message carries the OS error text
    DomainError  - a value outside what the hardware accepts
"""

import os
from typing import Optional


class GpioToolError(Exception):
    """Base class for errors that terminate a gpio command."""

    exit_code = 1


class UsageError(GpioToolError):
    """Malformed command line."""


class HostError(GpioToolError):
    """The operating system refused an operation."""

    @classmethod
    def from_os_error(cls, message: str, error: OSError) -> "HostError":
        """Build a HostError whose text ends with the strerror of ``error``."""
        return cls(f"{message}: {describe_os_error(error)}")


class DomainError(GpioToolError):
    """A value is outside the range the hardware or board supports."""


def describe_os_error(error: OSError) -> str:
    """
    Return the C-library style text for an OSError.

    Args:
        error: Exception raised by an os/io call

    Returns:
        strerror text, e.g. "No such file or directory"
    """
    errno_value: Optional[int] = error.errno
    if errno_value is not None:
        return os.strerror(errno_value)
    return str(error)
