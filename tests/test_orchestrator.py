"""Integration tests for the capture/compare/report pipeline."""

import json
from pathlib import Path

import pytest

from viewdiff.errors import ComparisonNotRunError, ConfigurationLockedError
from viewdiff.models.config import ScreenshotConfig
from viewdiff.orchestrator import Pipeline


@pytest.mark.integration
class TestPipeline:
    """Test the full record -> compare -> report flow with a fake browser."""

    def test_unchanged_site(self, screenshot_config, fake_backend, tmp_path: Path):
        pipeline = Pipeline(screenshot_config, backend_factory=fake_backend.factory)
        pipeline.record_screenshot("base")
        pipeline.record_screenshot("new")

        assert pipeline.compare("base", "new") == []
        report = pipeline.save_report(tmp_path)
        assert json.loads(report.read_text()) == []

    def test_changed_site(self, screenshots_dir: Path, make_backend, tmp_path: Path):
        config = ScreenshotConfig(
            base_url="https://example.com",
            urls="/, sport",
            widths="320,640",
            output_dir=str(screenshots_dir),
        )
        before = make_backend()
        after = make_backend(pages={"https://example.com/sport": 4})

        Pipeline(config, backend_factory=before.factory).record_screenshot("base")
        pipeline = Pipeline(config, backend_factory=after.factory)
        pipeline.record_screenshot("new")
        results = pipeline.compare("base", "new")

        assert [(r.url, r.width) for r in results] == [("sport", 320), ("sport", 640)]
        assert all(r.difference == pytest.approx(10.0) for r in results)

        report = pipeline.save_report(tmp_path)
        content = report.read_text()
        assert f'"difference":{results[0].difference},' in content
        assert len(json.loads(content)) == 2

    def test_configuration_locked_after_recording(self, screenshot_config, fake_backend):
        pipeline = Pipeline(screenshot_config, backend_factory=fake_backend.factory)
        pipeline.record_screenshot("base")

        with pytest.raises(ConfigurationLockedError):
            pipeline.config.set_urls("/other")

    def test_save_report_before_compare(self, screenshot_config, tmp_path: Path):
        with pytest.raises(ComparisonNotRunError):
            Pipeline(screenshot_config).save_report(tmp_path)
