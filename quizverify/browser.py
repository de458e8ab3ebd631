"""
Browser session lifecycle.

QuizBrowser owns exactly one Chromium instance and one page for a whole scenario
run. Use it as a context manager so the engine is released on every exit path:

    with QuizBrowser(config) as browser:
        browser.navigate("quiz_app.html")
        print(browser.backend.title())
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urlparse

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from .backends.playwright_backend import PlaywrightBackend
from .config import RunnerConfig
from .errors import SessionInitError

if TYPE_CHECKING:
    from playwright.sync_api import Browser, Page, Playwright

logger = logging.getLogger(__name__)


def resolve_target(target: str) -> str:
    """
    Turn a navigation target into a URL.

    URLs with a scheme pass through unchanged; anything else is treated as a local
    file path and converted to an absolute file:// URI.
    """
    parsed = urlparse(target)
    if parsed.scheme and len(parsed.scheme) > 1:
        return target
    return Path(target).resolve().as_uri()


class QuizBrowser:
    def __init__(self, config: RunnerConfig | None = None) -> None:
        self.config = config or RunnerConfig()
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._page: Page | None = None
        self._backend: PlaywrightBackend | None = None
        self._closed = False
        self.teardown_count = 0

    @property
    def page(self) -> Page | None:
        return self._page

    @property
    def backend(self) -> PlaywrightBackend:
        if self._backend is None:
            raise RuntimeError("Browser not started. Call browser.start() first.")
        return self._backend

    def start(self) -> QuizBrowser:
        """Launch the engine and open the single page used for the run."""
        if self._page is not None:
            raise RuntimeError("Browser session already started")
        if self._closed:
            raise RuntimeError("Browser session already closed")
        try:
            self._playwright = sync_playwright().start()
            self._browser = self._playwright.chromium.launch(headless=self.config.headless)
            self._page = self._browser.new_page(
                viewport={
                    "width": self.config.viewport_width,
                    "height": self.config.viewport_height,
                }
            )
            self._page.set_default_timeout(self.config.action_timeout_ms)
        except PlaywrightError as e:
            self.close()
            raise SessionInitError(f"Could not start browser: {e}") from e
        self._backend = PlaywrightBackend(self._page, action_timeout_ms=self.config.action_timeout_ms)
        logger.info(
            f"Browser started (headless={self.config.headless}, "
            f"viewport={self.config.viewport_width}x{self.config.viewport_height})"
        )
        return self

    open = start

    def navigate(self, target: str) -> str:
        """
        Load target and block until the top-level load event.

        This does not wait for the application to finish rendering; callers wait on
        application state separately.

        Returns:
            The URL that was loaded
        """
        url = resolve_target(target)
        logger.info(f"Navigating to {url}")
        self.backend.goto(url)
        return url

    def close(self) -> None:
        """Release all engine resources. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._release()
        self.teardown_count += 1
        logger.info("Browser closed.")

    def _release(self) -> None:
        errors: list[str] = []
        if self._browser is not None:
            try:
                self._browser.close()
            except PlaywrightError as e:
                errors.append(str(e))
        if self._playwright is not None:
            try:
                self._playwright.stop()
            except PlaywrightError as e:
                errors.append(str(e))
        self._browser = None
        self._playwright = None
        self._page = None
        self._backend = None
        if errors:
            logger.warning(f"Errors while releasing browser: {'; '.join(errors)}")

    def __enter__(self) -> QuizBrowser:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
