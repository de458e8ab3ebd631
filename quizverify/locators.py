"""
Element locators.

A Locator only describes how to find elements. It is resolved by the backend on
every use, because the quiz re-renders its document between checkpoints and any
element handle held across steps would be stale.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Locator:
    selector: str
    index: int = 0

    @classmethod
    def by_id(cls, element_id: str) -> Locator:
        return cls(selector=f"#{element_id}")

    @classmethod
    def by_css(cls, selector: str) -> Locator:
        return cls(selector=selector)

    def nth(self, index: int) -> Locator:
        """Positional access into a multi-element match (0-based)."""
        if index < 0:
            raise ValueError("index must be >= 0")
        return Locator(selector=self.selector, index=index)

    def __str__(self) -> str:
        if self.index:
            return f"{self.selector}[{self.index}]"
        return self.selector
