"""
Checkpoint assertions.

Comparisons are exact: no whitespace normalization, no case folding, no partial
matching. The expected values are literal strings rendered by the quiz.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import AssertionFailure
from .models import AssertOutcome

logger = logging.getLogger(__name__)


def assert_equals(actual: Any, expected: Any, message: str) -> None:
    if actual != expected:
        raise AssertionFailure(message, actual=actual, expected=expected)


def assert_true(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionFailure(message, actual=condition, expected=True)


class CheckpointVerifier:
    """
    Records every assertion outcome and raises on the first mismatch.

    `flush()` hands the outcomes collected since the last flush to the runner,
    which attaches them to the checkpoint result.
    """

    def __init__(self) -> None:
        self._outcomes: list[AssertOutcome] = []

    def equals(self, actual: Any, expected: Any, message: str) -> None:
        passed = actual == expected
        self._record(message, passed, actual, expected)
        assert_equals(actual, expected, message)

    def true(self, condition: bool, message: str) -> None:
        self._record(message, bool(condition), condition, True)
        assert_true(condition, message)

    def _record(self, label: str, passed: bool, actual: Any, expected: Any) -> None:
        self._outcomes.append(
            AssertOutcome(label=label, passed=passed, actual=actual, expected=expected)
        )
        if passed:
            logger.debug(f"assert ok: {label}")
        else:
            logger.error(f"assert failed: {label} expected={expected!r} actual={actual!r}")

    def flush(self) -> list[AssertOutcome]:
        outcomes = self._outcomes
        self._outcomes = []
        return outcomes
