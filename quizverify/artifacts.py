"""
Best-effort screenshot capture.

Capturing is diagnostic only: a failed screenshot is logged and recorded, and the
scenario carries on as if nothing happened.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from .errors import ArtifactCaptureError

if TYPE_CHECKING:
    from .backends.protocol import BrowserBackend

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def artifact_file_name(label: str) -> str:
    """Deterministic file name for a label: unsafe characters become '_'."""
    name = _UNSAFE_CHARS.sub("_", label).strip("._")
    return f"{name or 'artifact'}.png"


class ArtifactRecorder(Protocol):
    def capture(self, label: str) -> Path | None: ...


class NullRecorder:
    def __init__(self) -> None:
        self.captured: list[Path] = []
        self.errors: list[ArtifactCaptureError] = []

    def capture(self, label: str) -> Path | None:
        return None


class ScreenshotRecorder:
    """
    Writes viewport screenshots to `<output_dir>/<label>.png`.

    The output directory is created up front and again before each write. Any
    failure, from the engine or from the filesystem, is kept in `errors` and never
    raised.
    """

    def __init__(self, backend: BrowserBackend, output_dir: str | Path = "screenshots") -> None:
        self.backend = backend
        self.output_dir = Path(output_dir)
        self.captured: list[Path] = []
        self.errors: list[ArtifactCaptureError] = []
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            # capture() retries the mkdir and records the failure there.
            logger.warning(f"Could not create {self.output_dir}: {e}")

    def capture(self, label: str) -> Path | None:
        path = self.output_dir / artifact_file_name(label)
        try:
            image_bytes = self.backend.screenshot_png()
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(image_bytes)
        except Exception as e:
            err = ArtifactCaptureError(label, str(e))
            self.errors.append(err)
            logger.warning(str(err))
            return None
        self.captured.append(path)
        logger.info(f"Screenshot captured: {path.name}")
        return path
