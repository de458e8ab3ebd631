"""
Wait conditions over the current document.

Each condition resolves its locator fresh on every evaluation and returns a
(satisfied, value) pair for `wait_until`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from .locators import Locator

if TYPE_CHECKING:
    from .backends.protocol import BrowserBackend


class WaitCondition(Protocol):
    def evaluate(self, backend: BrowserBackend) -> tuple[bool, Any]: ...

    def describe(self) -> str: ...


@dataclass(frozen=True)
class VisibleAt:
    """The located element exists and is rendered. Value: its text."""

    locator: Locator

    def evaluate(self, backend: BrowserBackend) -> tuple[bool, Any]:
        if backend.count(self.locator.selector) <= self.locator.index:
            return False, None
        if not backend.is_visible(self.locator.selector, self.locator.index):
            return False, None
        return True, backend.inner_text(self.locator.selector, self.locator.index)

    def describe(self) -> str:
        return f"visibility of {self.locator}"


@dataclass(frozen=True)
class TextEquals:
    """The located element's rendered text equals expected exactly. Value: the text."""

    locator: Locator
    expected: str

    def evaluate(self, backend: BrowserBackend) -> tuple[bool, Any]:
        if backend.count(self.locator.selector) <= self.locator.index:
            return False, None
        text = backend.inner_text(self.locator.selector, self.locator.index)
        return text == self.expected, text

    def describe(self) -> str:
        return f"text of {self.locator} to be {self.expected!r}"


@dataclass(frozen=True)
class Present:
    """At least one element matches, visible or not. Value: the match count."""

    locator: Locator

    def evaluate(self, backend: BrowserBackend) -> tuple[bool, Any]:
        n = backend.count(self.locator.selector)
        return n > 0, n

    def describe(self) -> str:
        return f"presence of {self.locator}"
