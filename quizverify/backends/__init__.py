"""
Browser backend abstractions.

The scenario only talks to a BrowserBackend; PlaywrightBackend is the engine
binding used for real runs, and tests substitute in-memory fakes.
"""

from .playwright_backend import PlaywrightBackend
from .protocol import BrowserBackend

__all__ = [
    "BrowserBackend",
    "PlaywrightBackend",
]
