"""
Errors
======
Every failure in an auto-merge run is fatal. Components raise one of these,
main.py logs it and exits non-zero.
"""
from typing import Optional


class AutoMergeError(Exception):
    """Base class for all run-aborting failures."""


class ConfigurationError(AutoMergeError):
    """Missing or malformed required input."""


class CommandExecutionError(AutoMergeError):
    """A configured shell command exited non-zero."""

    def __init__(self, command: str, exit_code: int) -> None:
        self.command = command
        self.exit_code = exit_code
        super().__init__(f"command failed ({command}): exit {exit_code}")


class SourceControlError(AutoMergeError):
    """A git operation failed."""


class GatewayError(AutoMergeError):
    """Non-2xx response or transport failure talking to GitHub."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class CIFailure(AutoMergeError):
    """
    CI resolved to a failing state, or did not resolve in time.

    ``state`` is the observed terminal label (``failure`` / ``error``), or
    ``timeout`` when the deadline elapsed; ``timeout`` then holds the
    configured duration in seconds.
    """

    def __init__(self, message: str, state: str, timeout: Optional[float] = None) -> None:
        self.state = state
        self.timeout = timeout
        super().__init__(message)


class MergeDeclinedError(AutoMergeError):
    """GitHub accepted the merge call but reported merged: false."""
