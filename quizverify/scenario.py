"""
Scenario state machine.

A scenario is an ordered chain of checkpoints. Each checkpoint moves the runner
from one named state to the next; the chain is validated when the runner is
built, so a checkpoint can only ever run from the state its predecessor left.
Any verification failure moves the runner to the absorbing FAILED state and the
rest of the chain is reported as skipped.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import (
    ArtifactCaptureError,
    AssertionFailure,
    ConditionTimeoutError,
    QuizVerifyError,
)
from .models import CheckpointResult, FailureInfo, ScenarioResult

if TYPE_CHECKING:
    from .artifacts import ArtifactRecorder
    from .backends.protocol import BrowserBackend
    from .config import RunnerConfig
    from .verification import CheckpointVerifier
    from .wait import ConditionWaiter

logger = logging.getLogger(__name__)


class Phase(str, Enum):
    NOT_STARTED = "not_started"
    LANDING = "landing"
    CONFIGURED = "configured"
    QUESTION = "question"
    RESULTS = "results"
    FINISHED = "finished"
    FAILED = "failed"


@dataclass(frozen=True)
class RunnerState:
    phase: Phase
    question: int | None = None

    def __post_init__(self) -> None:
        if (self.phase is Phase.QUESTION) != (self.question is not None):
            raise ValueError("question number is required for, and only for, QUESTION states")
        if self.question is not None and self.question < 1:
            raise ValueError("question numbers start at 1")

    @classmethod
    def at_question(cls, i: int) -> RunnerState:
        return cls(Phase.QUESTION, i)

    @property
    def is_terminal(self) -> bool:
        return self.phase in (Phase.FINISHED, Phase.FAILED)

    def __str__(self) -> str:
        if self.phase is Phase.QUESTION:
            return f"question({self.question})"
        return self.phase.value


NOT_STARTED = RunnerState(Phase.NOT_STARTED)
LANDING = RunnerState(Phase.LANDING)
CONFIGURED = RunnerState(Phase.CONFIGURED)
RESULTS = RunnerState(Phase.RESULTS)
FINISHED = RunnerState(Phase.FINISHED)
FAILED = RunnerState(Phase.FAILED)


@dataclass
class StepContext:
    """Everything a checkpoint may touch. Owned by the runner for the whole run."""

    backend: BrowserBackend
    waiter: ConditionWaiter
    verifier: CheckpointVerifier
    recorder: ArtifactRecorder
    config: RunnerConfig
    artifact_errors: list[ArtifactCaptureError] = field(default_factory=list)

    def capture(self, label: str) -> Path | None:
        """
        Capture an artifact through the recorder without ever interrupting the step.

        Whatever the recorder raises is logged at WARNING and kept in artifact_errors,
        so the actions after a capture always run.
        """
        try:
            return self.recorder.capture(label)
        except Exception as e:
            err = e if isinstance(e, ArtifactCaptureError) else ArtifactCaptureError(label, str(e))
            self.artifact_errors.append(err)
            logger.warning(str(err))
            return None


@dataclass(frozen=True)
class Checkpoint:
    index: int
    label: str
    source: RunnerState
    target: RunnerState
    body: Callable[[StepContext], None] = field(compare=False)
    via: tuple[RunnerState, ...] = ()
    """Intermediate states passed through on success, recorded in the runner history."""


def validate_chain(checkpoints: Sequence[Checkpoint]) -> None:
    """Raise ValueError unless checkpoints form a gap-free NOT_STARTED -> FINISHED chain."""
    if not checkpoints:
        raise ValueError("a scenario needs at least one checkpoint")
    expected_source = NOT_STARTED
    for position, cp in enumerate(checkpoints, start=1):
        if cp.index != position:
            raise ValueError(f"checkpoint {cp.label!r} has index {cp.index}, expected {position}")
        if cp.source != expected_source:
            raise ValueError(
                f"checkpoint {cp.index} starts at {cp.source}, but the previous one ends at {expected_source}"
            )
        if cp.target.phase is Phase.FAILED or cp.target.phase is Phase.NOT_STARTED:
            raise ValueError(f"checkpoint {cp.index} cannot target {cp.target}")
        if any(s.is_terminal or s == NOT_STARTED for s in cp.via):
            raise ValueError(f"checkpoint {cp.index} passes through an invalid state")
        expected_source = cp.target
    if expected_source != FINISHED:
        raise ValueError(f"scenario ends at {expected_source}, not {FINISHED}")


def _failure_info(err: QuizVerifyError, checkpoint: int) -> FailureInfo:
    info = FailureInfo(kind=type(err).__name__, message=str(err), checkpoint=checkpoint)
    if isinstance(err, AssertionFailure):
        info.expected = err.expected
        info.actual = err.actual
    elif isinstance(err, ConditionTimeoutError):
        info.condition = err.condition
        info.elapsed_ms = err.elapsed_ms
    return info


class ScenarioRunner:
    def __init__(self, checkpoints: Sequence[Checkpoint]) -> None:
        validate_chain(checkpoints)
        self.checkpoints = tuple(checkpoints)
        self.state = NOT_STARTED
        self.history: list[RunnerState] = [NOT_STARTED]

    def _transition(self, new_state: RunnerState) -> None:
        logger.debug(f"state {self.state} -> {new_state}")
        self.state = new_state
        self.history.append(new_state)

    def run(self, ctx: StepContext) -> ScenarioResult:
        """
        Execute every checkpoint in order, stopping at the first failure.

        A runner executes once; call it again and it raises RuntimeError.
        """
        if self.state != NOT_STARTED:
            raise RuntimeError(f"scenario already ran (state={self.state})")

        started = time.monotonic()
        results: list[CheckpointResult] = []
        failure: FailureInfo | None = None

        for cp in self.checkpoints:
            if self.state == FAILED:
                results.append(
                    CheckpointResult(
                        index=cp.index,
                        label=cp.label,
                        source=str(cp.source),
                        target=str(cp.target),
                        status="skipped",
                    )
                )
                continue
            if self.state != cp.source:
                raise RuntimeError(f"checkpoint {cp.index} requires {cp.source}, runner is at {self.state}")

            logger.info(f"[{cp.index}/{len(self.checkpoints)}] {cp.label}: {cp.source} -> {cp.target}")
            cp_started = time.monotonic()
            error: QuizVerifyError | None = None
            try:
                cp.body(ctx)
            except QuizVerifyError as e:
                error = e

            duration_ms = int((time.monotonic() - cp_started) * 1000)
            assertions = ctx.verifier.flush()
            if error is None:
                results.append(
                    CheckpointResult(
                        index=cp.index,
                        label=cp.label,
                        source=str(cp.source),
                        target=str(cp.target),
                        status="passed",
                        duration_ms=duration_ms,
                        assertions=assertions,
                    )
                )
                for state in cp.via:
                    self._transition(state)
                self._transition(cp.target)
            else:
                logger.error(f"Checkpoint {cp.index} ({cp.label}) failed: {error}")
                failure = _failure_info(error, cp.index)
                results.append(
                    CheckpointResult(
                        index=cp.index,
                        label=cp.label,
                        source=str(cp.source),
                        target=str(cp.target),
                        status="failed",
                        duration_ms=duration_ms,
                        assertions=assertions,
                        error=str(error),
                    )
                )
                self._transition(FAILED)

        return ScenarioResult(
            status="passed" if self.state == FINISHED else "failed",
            final_state=str(self.state),
            checkpoints=results,
            failure=failure,
            artifacts=[str(p) for p in getattr(ctx.recorder, "captured", [])],
            artifact_errors=[str(e) for e in [*getattr(ctx.recorder, "errors", []), *ctx.artifact_errors]],
            duration_ms=int((time.monotonic() - started) * 1000),
        )
