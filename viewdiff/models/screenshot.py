"""Screenshot and comparison data structures."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict

from viewdiff.url_utils import join_url, slug_for_path

DIFFERENCE_LABEL = "DIFFERENCE"


def screenshot_path(directory: str | Path, slug: str, width: int, label: str) -> Path:
    return Path(directory) / f"{slug}_{width}_{label}.png"


def difference_path(directory: str | Path, slug: str, width: int) -> Path:
    return screenshot_path(directory, slug, width, DIFFERENCE_LABEL)


class PageTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    slug: str

    @classmethod
    def from_path(cls, path: str) -> "PageTarget":
        return cls(path=path, slug=slug_for_path(path))

    def address(self, base_url: str) -> str:
        return join_url(base_url, self.path)


class ScreenshotArtifact(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    width: int
    label: str
    file_path: Path

    @classmethod
    def build(cls, output_dir: str | Path, slug: str, width: int, label: str) -> "ScreenshotArtifact":
        return cls(
            slug=slug,
            width=width,
            label=label,
            file_path=screenshot_path(output_dir, slug, width, label),
        )


class ComparisonResult(BaseModel):
    """One page/width pair whose screenshots differ.

    Field order is the key order of the JSON report.
    """

    model_config = ConfigDict(frozen=True)

    url: str  # page slug
    width: int
    difference: float  # percentage of differing pixels, 0-100
    base_file: str
    new_file: str
    difference_file: Optional[str] = None


ResultSet = list[ComparisonResult]
