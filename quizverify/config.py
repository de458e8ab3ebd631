from __future__ import annotations

import os
from dataclasses import dataclass, fields

ENV_PREFIX = "QUIZVERIFY_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class RunnerConfig:
    """Options for one scenario run."""

    entry: str = "quiz_app.html"
    """Entry resource: a local file path (resolved to a file:// URI) or a URL."""
    headless: bool = True
    viewport_width: int = 1920
    viewport_height: int = 1080
    timeout_s: float = 10.0
    """Default wait budget for a condition."""
    poll_s: float = 0.1
    """Interval between condition evaluations."""
    action_timeout_ms: int = 10_000
    """Upper bound for a single engine call (click, select, read)."""
    screenshots: bool = True
    screenshots_dir: str = "screenshots"

    def __post_init__(self) -> None:
        if self.timeout_s < 0:
            raise ValueError("timeout_s must be >= 0")
        if self.poll_s <= 0:
            raise ValueError("poll_s must be > 0")
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise ValueError("viewport dimensions must be positive")

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides) -> RunnerConfig:
        """
        Build a config from QUIZVERIFY_* environment variables.

        Example: QUIZVERIFY_TIMEOUT_S=5 QUIZVERIFY_HEADLESS=false.
        Explicit keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.type in ("bool", bool):
                values[f.name] = _parse_bool(ENV_PREFIX + f.name.upper(), raw)
            elif f.type in ("int", int):
                values[f.name] = int(raw)
            elif f.type in ("float", float):
                values[f.name] = float(raw)
            else:
                values[f.name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
