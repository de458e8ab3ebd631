"""
quizverify - end-to-end verification of the Dynamic Quiz App.

Drives a real browser through landing, configuration, every question, and the
results page, waiting on rendered state with bounded polling and asserting exact
literals at each checkpoint.
"""

from .artifacts import ArtifactRecorder, NullRecorder, ScreenshotRecorder
from .browser import QuizBrowser, resolve_target
from .conditions import Present, TextEquals, VisibleAt, WaitCondition
from .config import RunnerConfig
from .errors import (
    ArtifactCaptureError,
    AssertionFailure,
    BrowserActionError,
    ConditionTimeoutError,
    QuizVerifyError,
    SessionInitError,
)
from .locators import Locator
from .models import (
    AssertOutcome,
    CheckpointResult,
    FailureInfo,
    QuestionExpectation,
    QuizFixture,
    ScenarioResult,
)
from .quiz import build_context, build_quiz_checkpoints, run_quiz_scenario
from .scenario import Checkpoint, Phase, RunnerState, ScenarioRunner, StepContext
from .verification import CheckpointVerifier, assert_equals, assert_true
from .wait import ConditionWaiter, WaitResult, wait_until

__version__ = "0.1.0"

__all__ = [
    "ArtifactCaptureError",
    "ArtifactRecorder",
    "AssertOutcome",
    "AssertionFailure",
    "BrowserActionError",
    "Checkpoint",
    "CheckpointResult",
    "CheckpointVerifier",
    "ConditionTimeoutError",
    "ConditionWaiter",
    "FailureInfo",
    "Locator",
    "NullRecorder",
    "Phase",
    "Present",
    "QuestionExpectation",
    "QuizBrowser",
    "QuizFixture",
    "QuizVerifyError",
    "RunnerConfig",
    "RunnerState",
    "ScenarioResult",
    "ScenarioRunner",
    "ScreenshotRecorder",
    "SessionInitError",
    "StepContext",
    "TextEquals",
    "VisibleAt",
    "WaitCondition",
    "WaitResult",
    "assert_equals",
    "assert_true",
    "build_context",
    "build_quiz_checkpoints",
    "resolve_target",
    "run_quiz_scenario",
    "wait_until",
]
