"""Configuration store for screenshot capture and comparison."""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError, field_validator

from viewdiff.errors import ConfigurationLockedError, ConfigurationParseError
from viewdiff.models.screenshot import PageTarget

DEFAULT_URLS = ("/",)
DEFAULT_WIDTHS = (640, 800, 1180)
DEFAULT_OUTPUT_DIR = "./screenshots"

# Fields that define the rendering conditions of a capture set.
LOCKED_FIELDS = frozenset({"urls", "widths", "use_headless_engine", "async_wait_seconds"})

# Keys of the JSON config file, in the order load() applies them.
CONFIG_KEYS = (
    "urls",
    "resolutions",
    "filepath_for_images",
    "use_phantomjs",
    "difference_path",
    "wait_for_asynchron_pages",
)


class LockState(str, Enum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"


class ConfigurationLock:
    """Two-state lock: UNLOCKED -> LOCKED, never back."""

    def __init__(self) -> None:
        self.state = LockState.UNLOCKED

    @property
    def locked(self) -> bool:
        return self.state is LockState.LOCKED

    def lock(self) -> None:
        self.state = LockState.LOCKED

    def guard(self, field: str) -> None:
        """Raise if ``field`` may no longer change."""
        if self.locked:
            raise ConfigurationLockedError(field)


def _split(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class ScreenshotConfig(BaseModel):
    """URLs, widths and capture options for one site.

    Rendering options are locked by the first successful capture so that a
    later capture set is taken under the same conditions as the baseline.
    """

    model_config = ConfigDict(validate_assignment=True, populate_by_name=True)

    base_url: str = Field(frozen=True)
    urls: tuple[str, ...] = DEFAULT_URLS
    widths: tuple[int, ...] = DEFAULT_WIDTHS
    output_dir: str = DEFAULT_OUTPUT_DIR
    # None follows output_dir; see the difference_dir property.
    difference_dir_override: Optional[str] = Field(default=None, alias="difference_dir")
    use_headless_engine: bool = False
    async_wait_seconds: float = Field(default=0, ge=0)

    _lock: ConfigurationLock = PrivateAttr(default_factory=ConfigurationLock)

    @field_validator("urls", mode="before")
    @classmethod
    def parse_urls(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(_split(v))
        if isinstance(v, (list, tuple)):
            return tuple(str(u).strip() for u in v if str(u).strip())
        return v

    @field_validator("urls")
    @classmethod
    def require_urls(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("at least one URL is required")
        return v

    @field_validator("widths", mode="before")
    @classmethod
    def parse_widths(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(_split(v))
        if isinstance(v, int):
            return (v,)
        if isinstance(v, list):
            return tuple(v)
        return v

    @field_validator("widths")
    @classmethod
    def require_positive_widths(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v:
            raise ValueError("at least one width is required")
        for width in v:
            if width <= 0:
                raise ValueError(f"width must be positive, got {width}")
        return v

    @field_validator("difference_dir_override", mode="before")
    @classmethod
    def empty_difference_dir(cls, v: Any) -> Any:
        if v is None or str(v) == "":
            return None
        return str(v)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in LOCKED_FIELDS:
            self._lock.guard(name)
        super().__setattr__(name, value)

    @property
    def difference_dir(self) -> str:
        return self.difference_dir_override or self.output_dir

    # -- lock --------------------------------------------------------------

    @property
    def locked(self) -> bool:
        return self._lock.locked

    def lock(self) -> None:
        self._lock.lock()

    # -- setters -----------------------------------------------------------

    def _assign(self, field: str, value: Any) -> None:
        try:
            setattr(self, field, value)
        except ValidationError as e:
            raise ConfigurationParseError(f"Invalid value for '{field}': {value!r}") from e

    def set_urls(self, urls: str | list[str]) -> None:
        self._assign("urls", urls)

    def set_widths(self, widths: str | int | list[int]) -> None:
        self._assign("widths", widths)

    def set_use_headless_engine(self, enabled: bool) -> None:
        self._assign("use_headless_engine", enabled)

    def set_async_wait(self, seconds: float) -> None:
        self._assign("async_wait_seconds", seconds)

    def set_output_dir(self, path: str | Path) -> None:
        self._assign("output_dir", str(path))

    def set_difference_dir(self, path: str | Path | None) -> None:
        """Set the diff image directory; None or "" follows output_dir."""
        self._assign("difference_dir_override", path)

    # -- derived -----------------------------------------------------------

    def targets(self) -> list[PageTarget]:
        return [PageTarget.from_path(url) for url in self.urls]

    def as_tuple(self) -> tuple[list[str], list[int], str, bool, str, float]:
        return (
            list(self.urls),
            list(self.widths),
            self.output_dir,
            self.use_headless_engine,
            self.difference_dir,
            self.async_wait_seconds,
        )

    # -- files -------------------------------------------------------------

    def load(self, path: str | Path) -> tuple[list[str], list[int], str, bool, str, float]:
        """Apply settings from a JSON config file.

        Returns ``(urls, widths, output_dir, use_headless_engine,
        difference_dir, async_wait_seconds)``.
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationParseError("Config file not found", path)
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationParseError(f"Invalid JSON: {e}", path) from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationParseError(f"Cannot read config file: {e}", path) from e
        if not isinstance(data, dict):
            raise ConfigurationParseError("Config must be a JSON object", path)
        missing = [key for key in CONFIG_KEYS if key not in data]
        if missing:
            raise ConfigurationParseError(f"Missing keys: {', '.join(missing)}", path)

        # Validate everything before touching this store.
        try:
            parsed = ScreenshotConfig(
                base_url=self.base_url,
                urls=data["urls"],
                widths=data["resolutions"],
                output_dir=data["filepath_for_images"],
                use_headless_engine=data["use_phantomjs"],
                difference_dir=data["difference_path"],
                async_wait_seconds=data["wait_for_asynchron_pages"],
            )
        except ValidationError as e:
            raise ConfigurationParseError(f"Invalid configuration: {e}", path) from e

        self.set_urls(parsed.urls)
        self.set_widths(parsed.widths)
        self.set_output_dir(parsed.output_dir)
        self.set_use_headless_engine(parsed.use_headless_engine)
        self.set_difference_dir(parsed.difference_dir_override)
        self.set_async_wait(parsed.async_wait_seconds)
        return self.as_tuple()

    def save(self, path: str | Path) -> None:
        """Write the settings as a JSON config file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            "urls": ", ".join(self.urls),
            "resolutions": ",".join(str(w) for w in self.widths),
            "filepath_for_images": self.output_dir,
            "use_phantomjs": self.use_headless_engine,
            "difference_path": self.difference_dir_override,
            "wait_for_asynchron_pages": self.async_wait_seconds,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
