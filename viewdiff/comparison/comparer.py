"""Comparison engine — diffs two labeled screenshot sets."""

from __future__ import annotations

import logging
from pathlib import Path

from viewdiff.errors import MissingArtifactError
from viewdiff.models.config import ScreenshotConfig
from viewdiff.models.screenshot import (
    ComparisonResult,
    ResultSet,
    difference_path,
    screenshot_path,
)

from .image_codec import decode, encode
from .metrics import DifferenceMetric, PixelExactMetric, render_difference

logger = logging.getLogger(__name__)


class Comparer:
    """Compares the screenshots of two capture labels for every configured page and width."""

    def __init__(self, config: ScreenshotConfig, metric: DifferenceMetric | None = None):
        self.config = config
        self.metric = metric or PixelExactMetric()

    def compare(self, base_label: str, new_label: str) -> ResultSet:
        """Return one result per page/width whose screenshots differ.

        An empty list means no visual changes. Images are re-read from disk
        on every call.
        """
        logger.info("Comparing '%s' against '%s'", base_label, new_label)
        results: ResultSet = []
        for target in self.config.targets():
            for width in self.config.widths:
                result = self._compare_one(target.slug, width, base_label, new_label)
                if result is not None:
                    results.append(result)

        if results:
            logger.warning("Detected %d changed screenshots", len(results))
        else:
            logger.info("No visual differences found")
        return results

    def _load(self, slug: str, width: int, label: str):
        path = screenshot_path(self.config.output_dir, slug, width, label)
        if not path.exists():
            raise MissingArtifactError(slug, width, label, path)
        return path, decode(path)

    def _compare_one(
        self, slug: str, width: int, base_label: str, new_label: str,
    ) -> ComparisonResult | None:
        base_path, base_image = self._load(slug, width, base_label)
        new_path, new_image = self._load(slug, width, new_label)

        measured = self.metric.measure(base_image, new_image)
        logger.debug("%s @ %dpx: %.4f%% different", slug, width, measured.difference)
        if measured.difference <= 0:
            return None

        diff_file = encode(
            render_difference(measured),
            difference_path(self.config.difference_dir, slug, width),
        )
        return ComparisonResult(
            url=slug,
            width=width,
            difference=measured.difference,
            base_file=_absolute(base_path),
            new_file=_absolute(new_path),
            difference_file=_absolute(diff_file),
        )


def _absolute(path: Path) -> str:
    return str(path.resolve())
