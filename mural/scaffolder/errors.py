"""Exceptions raised while parsing attributes and scaffolding files.

Every error is fatal for the current invocation: nothing is retried and no
partial output is cleaned up.  Each exception keeps the offending value so
callers can report exactly what to fix.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class MalformedAttributeError(ScaffoldError):
    """Raised when an attribute token is not of the form ``name:type``."""

    def __init__(self, token: str, reason: str = "expected 'name:type'") -> None:
        self.token = token
        self.reason = reason
        super().__init__(f"Malformed attribute '{token}': {reason}")


class DuplicateAttributeError(ScaffoldError):
    """Raised when two attribute tokens declare the same name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate attribute '{name}'")


class TargetExistsError(ScaffoldError):
    """Raised when a directory or file that would be generated already exists."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        super().__init__(f"Target already exists: {self.path}")


class MissingProjectManifestError(ScaffoldError):
    """Raised when the enclosing project's manifest cannot provide a name."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Cannot read project manifest {self.path}: {reason}")


class InvalidNameError(ScaffoldError):
    """Raised when an app name cannot be used as a single directory name."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid app name '{name}': {reason}")
