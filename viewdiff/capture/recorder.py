"""Screenshot recorder — captures every configured page at every configured width."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable

from viewdiff.comparison.image_codec import encode
from viewdiff.errors import CaptureError
from viewdiff.models.config import ScreenshotConfig
from viewdiff.models.screenshot import ScreenshotArtifact

from .backend import CaptureBackend, PlaywrightBackend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[ScreenshotConfig], CaptureBackend]


def default_backend(config: ScreenshotConfig) -> CaptureBackend:
    return PlaywrightBackend(headless=config.use_headless_engine)


def validate_label(label: str) -> str:
    if not label or not label.strip():
        raise ValueError("Capture label must not be empty")
    if "/" in label or "\\" in label:
        raise ValueError(f"Capture label must not contain path separators: {label!r}")
    return label


class ScreenshotRecorder:
    """Drives a capture backend over all page/width targets of a configuration."""

    def __init__(
        self,
        config: ScreenshotConfig,
        backend_factory: BackendFactory | None = None,
    ):
        self.config = config
        self.backend_factory = backend_factory or default_backend

    def capture(self, label: str) -> list[ScreenshotArtifact]:
        """Capture all targets under ``label`` and return the written artifacts.

        The first failed render stops the run with a CaptureError; files
        written before it are left in place.
        """
        return asyncio.run(self._capture(validate_label(label)))

    async def _capture(self, label: str) -> list[ScreenshotArtifact]:
        start = time.time()
        targets = self.config.targets()
        widths = list(self.config.widths)
        wait = self.config.async_wait_seconds
        logger.info("Capturing '%s': %d pages x %d widths from %s",
                    label, len(targets), len(widths), self.config.base_url)

        artifacts: list[ScreenshotArtifact] = []
        async with self.backend_factory(self.config) as backend:
            for target in targets:
                address = target.address(self.config.base_url)
                for width in widths:
                    logger.debug("Rendering %s at %dpx", address, width)
                    try:
                        image = await backend.render(address, width, wait)
                    except CaptureError:
                        raise
                    except Exception as e:
                        raise CaptureError(address, width, str(e)) from e

                    artifact = ScreenshotArtifact.build(
                        self.config.output_dir, target.slug, width, label,
                    )
                    encode(image, artifact.file_path)
                    self.config.lock()
                    artifacts.append(artifact)
                    logger.info("Saved %s", artifact.file_path)

        logger.info("Captured %d screenshots in %.1fs", len(artifacts), time.time() - start)
        return artifacts
