"""
Playwright implementation of the BrowserBackend protocol.

Wraps a sync Playwright Page. Every call builds a fresh `page.locator(...)` so
nothing resolved in one checkpoint leaks into the next.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from playwright.sync_api import Error as PlaywrightError

from ..errors import BrowserActionError

if TYPE_CHECKING:
    from playwright.sync_api import Locator as PlaywrightLocator
    from playwright.sync_api import Page

logger = logging.getLogger(__name__)


class PlaywrightBackend:
    """
    Browser capability set backed by a Playwright Page.

    Args:
        page: Sync Playwright page owned by the session
        action_timeout_ms: Upper bound for a single engine call (click, read, select)
    """

    def __init__(self, page: Page, action_timeout_ms: int = 10_000) -> None:
        self.page = page
        self.action_timeout_ms = action_timeout_ms

    def _nth(self, selector: str, index: int) -> PlaywrightLocator:
        return self.page.locator(selector).nth(index)

    def goto(self, url: str) -> None:
        try:
            self.page.goto(url, wait_until="load")
        except PlaywrightError as e:
            raise BrowserActionError(f"Navigation to {url} failed: {e}") from e

    def title(self) -> str:
        try:
            return self.page.title()
        except PlaywrightError as e:
            raise BrowserActionError(f"Could not read page title: {e}") from e

    def current_url(self) -> str:
        return self.page.url

    def count(self, selector: str) -> int:
        try:
            return self.page.locator(selector).count()
        except PlaywrightError as e:
            raise BrowserActionError(f"Could not resolve {selector}: {e}") from e

    def inner_text(self, selector: str, index: int = 0) -> str:
        try:
            return self._nth(selector, index).inner_text(timeout=self.action_timeout_ms)
        except PlaywrightError as e:
            raise BrowserActionError(f"Could not read text of {selector}[{index}]: {e}") from e

    def is_visible(self, selector: str, index: int = 0) -> bool:
        try:
            return self._nth(selector, index).is_visible()
        except PlaywrightError as e:
            raise BrowserActionError(f"Could not check visibility of {selector}[{index}]: {e}") from e

    def click(self, selector: str, index: int = 0) -> None:
        logger.debug(f"click {selector}[{index}]")
        try:
            self._nth(selector, index).click(timeout=self.action_timeout_ms)
        except PlaywrightError as e:
            raise BrowserActionError(f"Click on {selector}[{index}] failed: {e}") from e

    def select_option(self, selector: str, value: str) -> None:
        logger.debug(f"select {selector} = {value!r}")
        try:
            self.page.locator(selector).select_option(value=value, timeout=self.action_timeout_ms)
        except PlaywrightError as e:
            raise BrowserActionError(f"Selecting {value!r} in {selector} failed: {e}") from e

    def screenshot_png(self) -> bytes:
        return self.page.screenshot(type="png", full_page=False)
