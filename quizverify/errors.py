from __future__ import annotations

from typing import Any


class QuizVerifyError(RuntimeError):
    reason_code = "quizverify_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SessionInitError(QuizVerifyError):
    """The browser engine could not be started. Fatal for the whole run."""

    reason_code = "session_init_failed"


class BrowserActionError(QuizVerifyError):
    """An engine call (navigate, click, select, read) failed."""

    reason_code = "browser_action_failed"


class ConditionTimeoutError(QuizVerifyError):
    """An expected document state did not materialize within its wait budget."""

    reason_code = "condition_timeout"

    def __init__(
        self,
        condition: str,
        elapsed_ms: int,
        *,
        timeout_ms: int | None = None,
        last_error: str | None = None,
    ) -> None:
        budget = f" (timeout {timeout_ms}ms)" if timeout_ms is not None else ""
        message = f"Timed out waiting for {condition} after {elapsed_ms}ms{budget}"
        if last_error:
            message += f"; last error: {last_error}"
        super().__init__(message)
        self.condition = condition
        self.elapsed_ms = elapsed_ms
        self.timeout_ms = timeout_ms
        self.last_error = last_error


class AssertionFailure(QuizVerifyError):
    """An observed value diverged from its expected literal."""

    reason_code = "assertion_failed"

    def __init__(self, message: str, actual: Any, expected: Any) -> None:
        super().__init__(f"{message} expected [{expected!r}] but found [{actual!r}]")
        self.message = message
        self.actual = actual
        self.expected = expected


class ArtifactCaptureError(QuizVerifyError):
    """A screenshot could not be taken or written. Recorded, never propagated."""

    reason_code = "artifact_capture_failed"

    def __init__(self, label: str, message: str) -> None:
        super().__init__(f"Failed to capture artifact {label!r}: {message}")
        self.label = label
