"""Exception taxonomy for capture, comparison and reporting."""

from __future__ import annotations

from pathlib import Path


class ViewdiffError(Exception):
    """Base class for all errors raised by viewdiff."""


class ConfigurationLockedError(ViewdiffError):
    """A locked configuration field was mutated after the first capture."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(
            f"Cannot change '{field}': screenshots were already taken with the "
            "current configuration"
        )


class ConfigurationParseError(ViewdiffError, ValueError):
    """A configuration file or setter value could not be parsed."""

    def __init__(self, message: str, path: str | Path | None = None):
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class CaptureError(ViewdiffError):
    """The capture backend failed to render a page."""

    def __init__(self, url: str, width: int, reason: str = ""):
        self.url = url
        self.width = width
        msg = f"Failed to capture {url} at width {width}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class MissingArtifactError(ViewdiffError, FileNotFoundError):
    """A screenshot needed for comparison does not exist."""

    def __init__(self, slug: str, width: int, label: str, path: Path):
        self.slug = slug
        self.width = width
        self.label = label
        self.path = path
        super().__init__(
            f"No screenshot for '{slug}' at width {width} with label '{label}': {path}"
        )


class ComparisonNotRunError(ViewdiffError):
    """A report was requested before any comparison ran."""
