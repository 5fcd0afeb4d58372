"""Capture backends — render a URL at a given width into an image."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from PIL import Image
from playwright.async_api import Browser, BrowserContext, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from viewdiff.comparison.image_codec import decode_bytes
from viewdiff.errors import CaptureError
from viewdiff.utils.browser import create_capture_context, launch_browser

logger = logging.getLogger(__name__)

DEFAULT_VIEWPORT_HEIGHT = 800
DEFAULT_NAVIGATION_TIMEOUT_MS = 30000


class CaptureBackend(Protocol):
    """One rendering session, opened with ``async with``."""

    async def __aenter__(self) -> "CaptureBackend": ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def render(self, url: str, width: int, wait_seconds: float) -> Image.Image: ...


class PlaywrightBackend:
    """Renders full-page screenshots with a single Chromium page.

    The page is reused across captures and its viewport is resized to each
    requested width, so renders must not run concurrently.
    """

    def __init__(
        self,
        headless: bool = True,
        viewport_height: int = DEFAULT_VIEWPORT_HEIGHT,
        user_agent: Optional[str] = None,
        navigation_timeout_ms: int = DEFAULT_NAVIGATION_TIMEOUT_MS,
    ):
        self.headless = headless
        self.viewport_height = viewport_height
        self.user_agent = user_agent
        self.navigation_timeout_ms = navigation_timeout_ms
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None
        self._page: Page | None = None

    async def __aenter__(self) -> "PlaywrightBackend":
        logger.debug("Launching Chromium (headless=%s)", self.headless)
        self._playwright = await async_playwright().start()
        try:
            self._browser = await launch_browser(self._playwright, headless=self.headless)
            self._context = await create_capture_context(
                self._browser,
                viewport={"width": 1280, "height": self.viewport_height},
                user_agent=self.user_agent,
            )
            self._page = await self._context.new_page()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._context is not None:
            await self._context.close()
            self._context = None
        if self._browser is not None:
            await self._browser.close()
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None
        self._page = None

    async def render(self, url: str, width: int, wait_seconds: float) -> Image.Image:
        if self._page is None:
            raise RuntimeError("PlaywrightBackend must be entered before rendering")
        page = self._page
        try:
            await page.set_viewport_size({"width": width, "height": self.viewport_height})
            await page.goto(url, wait_until="load", timeout=self.navigation_timeout_ms)
            if wait_seconds > 0:
                # Let asynchronously loaded content settle.
                await page.wait_for_timeout(wait_seconds * 1000)
            data = await page.screenshot(full_page=True)
        except PlaywrightError as e:
            raise CaptureError(url, width, str(e)) from e
        return decode_bytes(data)
