"""
Browser backend protocol.

Defines the narrow capability set the scenario consumes from a browser engine.
All calls are synchronous: each one blocks until the engine responds or errors.
Implementations translate engine-specific failures into BrowserActionError.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class BrowserBackend(Protocol):
    def goto(self, url: str) -> None:
        """Load a resource and block until the top-level `load` event fires."""
        ...

    def title(self) -> str: ...

    def current_url(self) -> str: ...

    def count(self, selector: str) -> int:
        """Number of elements currently matching selector (0 if none)."""
        ...

    def inner_text(self, selector: str, index: int = 0) -> str:
        """Rendered text of the index-th match."""
        ...

    def is_visible(self, selector: str, index: int = 0) -> bool:
        """True if the index-th match exists and is rendered. Never raises for a missing element."""
        ...

    def click(self, selector: str, index: int = 0) -> None: ...

    def select_option(self, selector: str, value: str) -> None:
        """Select an <option> by its value attribute."""
        ...

    def screenshot_png(self) -> bytes: ...
