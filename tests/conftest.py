"""Pytest configuration and shared fixtures."""

import io
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from PIL import Image
from playwright.async_api import Page

from viewdiff.errors import CaptureError
from viewdiff.models.config import ScreenshotConfig

BASE_URL = "https://example.com"
IMAGE_HEIGHT = 40


# ============================================================================
# Image Helpers
# ============================================================================


def page_image(width: int, dark_rows: int = 0, height: int = IMAGE_HEIGHT) -> Image.Image:
    """White image whose top ``dark_rows`` rows are black."""
    image = Image.new("RGB", (width, height), (255, 255, 255))
    if dark_rows:
        image.paste((0, 0, 0), (0, 0, width, dark_rows))
    return image


def save_image(image: Image.Image, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    image.save(path, format="PNG")
    return path


# ============================================================================
# Fake Capture Backend
# ============================================================================


class FakeBackend:
    """Deterministic stand-in for the browser.

    ``pages`` maps a full address to the number of dark rows drawn at the top
    of the rendered image. Addresses in ``failing`` raise CaptureError.
    """

    def __init__(self, pages: dict[str, int] | None = None, failing: set[str] | None = None):
        self.pages = pages or {}
        self.failing = failing or set()
        self.calls: list[tuple[str, int, float]] = []
        self.entered = 0
        self.exited = 0

    async def __aenter__(self) -> "FakeBackend":
        self.entered += 1
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.exited += 1

    async def render(self, url: str, width: int, wait_seconds: float) -> Image.Image:
        self.calls.append((url, width, wait_seconds))
        if url in self.failing:
            raise CaptureError(url, width, "navigation failed")
        return page_image(width, self.pages.get(url, 0))

    def factory(self, config):
        return self


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def screenshots_dir(tmp_path: Path) -> Path:
    return tmp_path / "screenshots"


@pytest.fixture
def screenshot_config(screenshots_dir: Path) -> ScreenshotConfig:
    """Single page, single width, writing into a temp directory."""
    return ScreenshotConfig(
        base_url=BASE_URL,
        urls=["/"],
        widths=[640],
        output_dir=str(screenshots_dir),
    )


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """The JSON config file format with comma-separated values."""
    path = tmp_path / "test_configuration.json"
    path.write_text(
        '{"urls":"page1, page2","resolutions":"13,42","filepath_for_images":"some/path",'
        '"use_phantomjs":true,"difference_path":"some/difference/image/path",'
        '  "wait_for_asynchron_pages":5}'
    )
    return path


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_page() -> AsyncMock:
    """Create a mock Playwright page that returns a small PNG screenshot."""
    buffer = io.BytesIO()
    page_image(320, 4).save(buffer, format="PNG")

    page = AsyncMock(spec=Page)
    page.set_viewport_size = AsyncMock()
    page.goto = AsyncMock()
    page.wait_for_timeout = AsyncMock()
    page.screenshot = AsyncMock(return_value=buffer.getvalue())
    return page


# ============================================================================
# Helper Fixtures
# ============================================================================


@pytest.fixture
def make_page_image():
    """Fixture that provides the page_image helper."""
    return page_image


@pytest.fixture
def make_backend():
    """Fixture that provides the FakeBackend class."""
    return FakeBackend
