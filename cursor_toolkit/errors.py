"""
Errors — Exception types raised by the toolkit workflows.

Every failure that should stop a run is a ToolkitError; the CLI layer
prints it and exits non-zero. Anything else is a bug and propagates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ToolkitError(Exception):
    """Base class for all toolkit failures reported to the operator."""


class PreconditionError(ToolkitError):
    """Raised when a required input is missing before any work starts."""

    def __init__(self, reason: str, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class ConflictAbort(ToolkitError):
    """Raised when a destination file exists and nobody can be asked about it."""

    reason = "conflict-noninteractive"

    def __init__(self, path: Path) -> None:
        super().__init__(f"Conflict detected in non-interactive mode at: {path}")
        self.path = path


class ExternalToolError(ToolkitError):
    """Raised when an external command (git, gh, brew, ssh) fails."""

    def __init__(self, step: str, details: Optional[str] = None) -> None:
        message = step if not details else f"{step}\n{details}"
        super().__init__(message)
        self.step = step
        self.details = details


class UserDeclined(ToolkitError):
    """Raised when the operator answers "no" to a required confirmation."""
