"""Exception types raised by release tooling."""

from __future__ import annotations


class ReleaseToolError(Exception):
    """Base class for errors surfaced to the CLI."""


class SigningConfigError(ReleaseToolError):
    """Raised when release signing credentials are missing or incomplete."""


class VersionError(ReleaseToolError):
    """Raised when the app version cannot be resolved from the pubspec."""


class ArtifactCollisionError(ReleaseToolError):
    """Raised when a staged artifact would replace an existing file."""
