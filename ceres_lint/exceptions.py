"""Package-specific exception types."""

from __future__ import annotations


class CeresLintError(Exception):
    """Base class for errors raised by ceres-lint collaborators."""


class LintInvocationError(CeresLintError):
    """Raised when the external linter cannot be run.

    Args:
        command: Command line that was attempted.
        reason: Short description of the failure.
    """

    def __init__(self, command: str, reason: str):
        self.command = command
        self.reason = reason
        super().__init__(f"could not run `{command}`: {reason}")


class FetchError(CeresLintError):
    """Raised when a URL cannot be fetched.

    Args:
        url: URL that was requested.
    """

    def __init__(self, url: str, reason: str = ""):
        self.url = url
        self.reason = reason
        message = f"could not fetch {url}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
