"""Browser helpers — launch Chromium and create contexts that render consistently."""

from __future__ import annotations

from typing import Optional

from playwright.async_api import Browser, BrowserContext, Playwright

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

# Freeze CSS animations and transitions so repeated captures match.
_STABLE_RENDER_CSS = """
*, *::before, *::after {
    animation-duration: 0s !important;
    animation-delay: 0s !important;
    transition-duration: 0s !important;
    transition-delay: 0s !important;
    caret-color: transparent !important;
}
"""

_STABLE_RENDER_SCRIPT = f"""
window.addEventListener('DOMContentLoaded', () => {{
    const style = document.createElement('style');
    style.textContent = `{_STABLE_RENDER_CSS}`;
    document.head.appendChild(style);
}});
"""


async def launch_browser(playwright: Playwright, headless: bool = True) -> Browser:
    """Launch Chromium for screenshot capture."""
    return await playwright.chromium.launch(
        headless=headless,
        args=[
            "--hide-scrollbars",
            "--font-render-hinting=none",
        ],
    )


async def create_capture_context(
    browser: Browser,
    viewport: dict,
    user_agent: Optional[str] = None,
) -> BrowserContext:
    """Create a browser context with a fixed locale, timezone and motion setting.

    Args:
        viewport: Initial viewport; the capture page resizes it per width.
    """
    context = await browser.new_context(
        viewport=viewport,
        user_agent=user_agent or DEFAULT_USER_AGENT,
        locale="en-US",
        timezone_id="America/New_York",
        reduced_motion="reduce",
        extra_http_headers={
            "Accept-Language": "en-US,en;q=0.9",
        },
    )
    await context.add_init_script(_STABLE_RENDER_SCRIPT)
    return context
