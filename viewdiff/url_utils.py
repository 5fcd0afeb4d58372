"""Shared URL utilities — derive page slugs and fetch addresses."""

from __future__ import annotations

FRONTPAGE_SLUG = "frontpage"


def slug_for_path(path: str) -> str:
    """Return the file-name-safe identifier for a page path.

    The root path maps to ``frontpage``; a single segment is used as-is and
    nested segments are joined with underscores.
    """
    stripped = path.strip().strip("/")
    if not stripped:
        return FRONTPAGE_SLUG
    return stripped.replace("/", "_")


def join_url(base_url: str, path: str) -> str:
    """Append a page path to the base URL with exactly one slash between them."""
    base = base_url.rstrip("/")
    path = path.strip().lstrip("/")
    if not path:
        return f"{base}/"
    return f"{base}/{path}"
