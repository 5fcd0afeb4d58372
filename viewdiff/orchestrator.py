"""Pipeline — ties configuration, capture, comparison and reporting together."""

from __future__ import annotations

import logging
from pathlib import Path

from viewdiff.capture.recorder import BackendFactory, ScreenshotRecorder
from viewdiff.comparison.comparer import Comparer
from viewdiff.comparison.metrics import DifferenceMetric
from viewdiff.errors import ComparisonNotRunError
from viewdiff.models.config import ScreenshotConfig
from viewdiff.models.screenshot import ResultSet, ScreenshotArtifact
from viewdiff.reporter.json_report import write_report

logger = logging.getLogger(__name__)


class Pipeline:
    """Records labeled screenshot sets, compares them and saves the result."""

    def __init__(
        self,
        config: ScreenshotConfig,
        backend_factory: BackendFactory | None = None,
        metric: DifferenceMetric | None = None,
    ):
        self.config = config
        self.recorder = ScreenshotRecorder(config, backend_factory)
        self.comparer = Comparer(config, metric)
        self.last_results: ResultSet | None = None

    def record_screenshot(self, label: str) -> list[ScreenshotArtifact]:
        return self.recorder.capture(label)

    def compare(self, base_label: str, new_label: str) -> ResultSet:
        self.last_results = self.comparer.compare(base_label, new_label)
        return self.last_results

    def save_report(self, destination_dir: str | Path, indent: int | None = None) -> Path:
        """Write the results of the most recent comparison."""
        if self.last_results is None:
            raise ComparisonNotRunError("Run compare() before saving a report")
        return write_report(self.last_results, destination_dir, indent=indent)
